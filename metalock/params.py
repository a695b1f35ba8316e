import typing
from collections import OrderedDict
from pathlib import Path
from typing import Any, List, Optional

from eth_abi import is_encodable

from metalock.constants import ARTIFACTS_DIR, CONTRACT_NAME, DEPLOYER_VARIABLE
from metalock.errors import DeploymentConfigError
from metalock.utils import _load_json, _load_yaml

CONTRACT_CONSTRUCTOR_PARAMETER_KEY = "constructor"


def _resolve_param(value: Any, deployer_address: Optional[str]) -> Any:
    """Resolves a single parameter value or a list of parameter values."""
    if isinstance(value, list):
        return [_resolve_param(v, deployer_address) for v in value]

    if value == DEPLOYER_VARIABLE:
        if deployer_address is None:
            raise DeploymentConfigError(f"No deployer account available to resolve {value}.")
        return deployer_address

    if isinstance(value, str) and value.startswith("$"):
        raise DeploymentConfigError(f"Variable {value} is not resolvable")

    return value  # literally a value


def _validate_constructor_abi_inputs(
    contract_name: str,
    abi_inputs: List[Any],
    constructor_args: typing.Sequence[Any],
) -> None:
    """Validates constructor arguments against the constructor ABI."""
    if len(constructor_args) != len(abi_inputs):
        raise ConstructorParameters.Invalid(
            f"Constructor parameters length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(constructor_args)}."
        )

    for position, (abi_input, value) in enumerate(zip(abi_inputs, constructor_args)):
        if not is_encodable(abi_input.type, value):
            raise ConstructorParameters.Invalid(
                f"Constructor param '{abi_input.name}' at position {position} has a value "
                f"'{value}' whose type does not match expected ABI type '{abi_input.type}'"
            )


class ConstructorParameters:
    """Represents the constructor parameters of the deployed contract."""

    class Invalid(DeploymentConfigError):
        """Raised when the constructor parameters are invalid"""

    def __init__(self, parameters: Optional[OrderedDict] = None):
        self.parameters = parameters or OrderedDict()

    @classmethod
    def from_config(cls, config: typing.Dict) -> "ConstructorParameters":
        contracts = config.get("contracts")
        if not contracts:
            raise DeploymentConfigError("Parameters file missing 'contracts' field.")
        if len(contracts) != 1:
            raise DeploymentConfigError(f"Expected a single {CONTRACT_NAME} entry in 'contracts'.")

        contract_info = contracts[0]
        if isinstance(contract_info, str):
            contract_name, contract_data = contract_info, dict()
        elif isinstance(contract_info, dict) and len(contract_info) == 1:
            contract_name = list(contract_info.keys())[0]  # only one entry
            contract_data = contract_info[contract_name] or dict()
        else:
            raise DeploymentConfigError("Malformed parameters YAML.")

        if contract_name != CONTRACT_NAME:
            raise DeploymentConfigError(
                f"Unexpected contract '{contract_name}'; only {CONTRACT_NAME} is deployed."
            )

        parameters = contract_data.get(CONTRACT_CONSTRUCTOR_PARAMETER_KEY) or dict()
        if not isinstance(parameters, dict):
            # this can happen if the yml file is malformed
            raise DeploymentConfigError(
                f"Malformed constructor parameter config for {contract_name}."
            )

        return cls(parameters=OrderedDict(parameters))

    def resolve(self, deployer_address: Optional[str] = None) -> OrderedDict:
        resolved_parameters = OrderedDict()
        for name, value in self.parameters.items():
            resolved_parameters[name] = _resolve_param(value, deployer_address)
        return resolved_parameters


class DeploymentParameters:
    """The contents of a deployment parameters YAML file."""

    def __init__(
        self,
        name: Optional[str] = None,
        chain_id: Optional[int] = None,
        constructor_parameters: Optional[ConstructorParameters] = None,
        registry_filepath: Optional[Path] = None,
        path: Optional[Path] = None,
    ):
        self.name = name
        self.chain_id = chain_id
        self.constructor_parameters = constructor_parameters or ConstructorParameters()
        self.registry_filepath = registry_filepath
        self.path = path

    @classmethod
    def from_config(
        cls, config: typing.Dict, path: Optional[Path] = None
    ) -> "DeploymentParameters":
        if not isinstance(config, dict):
            raise DeploymentConfigError("Malformed parameters YAML.")

        deployment = config.get("deployment")
        if not deployment:
            raise DeploymentConfigError("deployment is not set in params file.")

        chain_id = deployment.get("chain_id")
        if not chain_id:
            raise DeploymentConfigError("chain_id is not set in params file.")

        return cls(
            name=deployment.get("name"),
            chain_id=int(chain_id),
            constructor_parameters=ConstructorParameters.from_config(config),
            registry_filepath=get_artifact_filepath(config),
            path=path,
        )

    @classmethod
    def from_yaml(cls, filepath: Path) -> "DeploymentParameters":
        config = _load_yaml(filepath)
        return cls.from_config(config=config, path=filepath)

    def constructor_args(self, deployer_address: Optional[str] = None) -> List[Any]:
        return list(self.constructor_parameters.resolve(deployer_address).values())

    def validate(self, chain_id: int, live_deployment: bool) -> None:
        """
        Checks that the parameters target the connected chain and that the
        deployment has not already been published for it.
        """
        if self.chain_id is None:
            return

        if self.chain_id != chain_id and live_deployment:
            raise DeploymentConfigError(
                f"chain_id in params file ({self.chain_id}) does not match "
                f"chain_id of current network ({chain_id})."
            )

        if not self.registry_filepath or not self.registry_filepath.exists():
            return

        registry_chain_ids = map(int, _load_json(self.registry_filepath).keys())
        if self.chain_id in registry_chain_ids:
            raise DeploymentConfigError(
                f"Deployment is already published for chain_id {self.chain_id}."
            )


def get_artifact_filepath(config: typing.Dict) -> Optional[Path]:
    """Returns the filepath of the registry file, if one is configured."""
    artifact_config = config.get("artifacts")
    if not artifact_config:
        return None
    artifact_dir = Path(artifact_config.get("dir", ARTIFACTS_DIR))
    filename = artifact_config.get("filename")
    if not filename:
        raise DeploymentConfigError("artifact filename is not set in params file.")
    return artifact_dir / filename
