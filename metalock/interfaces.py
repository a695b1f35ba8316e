from abc import ABC, abstractmethod
from typing import Any


class DeploymentHandle(ABC):
    """A pending or confirmed on-chain contract creation."""

    @abstractmethod
    def wait_for_deployment(self) -> None:
        """Blocks until the deployment transaction is confirmed."""
        raise NotImplementedError

    @abstractmethod
    def get_address(self) -> str:
        """Returns the address of the confirmed contract."""
        raise NotImplementedError


class ContractFactory(ABC):
    """Constructs and submits deployment transactions for one compiled contract."""

    @abstractmethod
    def deploy(self, *constructor_args: Any) -> DeploymentHandle:
        raise NotImplementedError


class ContractDeployer(ABC):
    """Gives access to contract factories on the configured network."""

    @abstractmethod
    def get_contract_factory(self, name: str) -> ContractFactory:
        raise NotImplementedError
