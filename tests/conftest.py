import os

import pytest
from ape.contracts import ContractContainer
from eth_utils import to_checksum_address
from ethpm_types import ContractType

from metalock.constants import CONTRACT_NAME
from metalock.errors import ArtifactNotFoundError, ConfirmationError
from metalock.interfaces import ContractDeployer, ContractFactory, DeploymentHandle

MOCK_ADDRESS = "0xABC...123"
OWNER_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


class FakeDeployment(DeploymentHandle):
    def __init__(self, address, confirmation_error=None):
        self.address = address
        self.confirmation_error = confirmation_error
        self.confirmed = False

    def wait_for_deployment(self):
        if self.confirmation_error:
            raise self.confirmation_error
        self.confirmed = True

    def get_address(self):
        if not self.confirmed:
            raise ConfirmationError("deployment is not confirmed yet")
        return self.address


class FakeFactory(ContractFactory):
    def __init__(self, address=None, submission_error=None, confirmation_error=None):
        self.address = address
        self.submission_error = submission_error
        self.confirmation_error = confirmation_error
        self.deployments = list()
        self.calls = list()

    def deploy(self, *constructor_args):
        self.calls.append(constructor_args)
        if self.submission_error:
            raise self.submission_error
        # a fresh address per deployment, unless pinned
        address = self.address or to_checksum_address(os.urandom(20))
        deployment = FakeDeployment(address, confirmation_error=self.confirmation_error)
        self.deployments.append(deployment)
        return deployment


class FakeDeployer(ContractDeployer):
    def __init__(self, factories):
        self.factories = factories

    def get_contract_factory(self, name):
        try:
            return self.factories[name]
        except KeyError:
            raise ArtifactNotFoundError(f"No compiled contract found with name '{name}'.")


@pytest.fixture
def factory():
    return FakeFactory(address=MOCK_ADDRESS)


@pytest.fixture
def deployer(factory):
    return FakeDeployer({CONTRACT_NAME: factory})


# Init code returning a single STOP byte as runtime code
DEPLOYABLE_BYTECODE = "0x600060005360016000f3"
# Init code that reverts unconditionally
REVERTING_BYTECODE = "0x60006000fd"


def bytecode_container(bytecode, name=CONTRACT_NAME):
    contract_type = ContractType.model_validate(
        {
            "contractName": name,
            "abi": [],
            "deploymentBytecode": {"bytecode": bytecode},
            "runtimeBytecode": {"bytecode": "0x00"},
        }
    )
    return ContractContainer(contract_type)


@pytest.fixture
def use_container(monkeypatch):
    """Serves the given container for CONTRACT_NAME instead of the compiled project."""

    def _use_container(container):
        def get_contract_container(name):
            if name != CONTRACT_NAME:
                raise ArtifactNotFoundError(f"No compiled contract found with name '{name}'.")
            return container

        monkeypatch.setattr("metalock.deployer.get_contract_container", get_contract_container)
        return container

    return _use_container
