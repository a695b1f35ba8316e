class DeploymentError(Exception):
    """Base class for failures of the deployment pipeline."""


class ArtifactNotFoundError(DeploymentError):
    """Raised when a contract name does not resolve to a compiled contract."""


class SubmissionError(DeploymentError):
    """Raised when the client rejects the deployment transaction."""


class ConfirmationError(DeploymentError):
    """Raised when the deployment reverts or cannot be confirmed."""


class DeploymentAborted(DeploymentError):
    """Raised when the operator declines to continue."""


class DeploymentConfigError(ValueError):
    pass
