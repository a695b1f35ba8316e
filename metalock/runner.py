import traceback
from typing import Any, Callable, Optional, Sequence

import click

from metalock.constants import CONTRACT_NAME, DEPLOYED_MESSAGE, EXIT_FAILURE, EXIT_SUCCESS
from metalock.interfaces import ContractDeployer, DeploymentHandle


def run(
    deployer: ContractDeployer,
    contract_name: str = CONTRACT_NAME,
    constructor_args: Sequence[Any] = (),
) -> DeploymentHandle:
    """
    Deploys a single contract and reports its address.

    The address is only written once the deployment has been confirmed.
    """
    factory = deployer.get_contract_factory(contract_name)
    deployment = factory.deploy(*constructor_args)
    deployment.wait_for_deployment()

    address = deployment.get_address()
    click.echo(f"{DEPLOYED_MESSAGE} {address}")
    return deployment


def execute(operation: Callable[[], Any]) -> int:
    """Runs an operation and maps its outcome to a process exit code."""
    try:
        operation()
    except Exception:
        click.echo(traceback.format_exc(), err=True, nl=False)
        return EXIT_FAILURE

    return EXIT_SUCCESS


def main(
    deployer: ContractDeployer,
    contract_name: str = CONTRACT_NAME,
    constructor_args: Sequence[Any] = (),
    finalize: Optional[Callable[[DeploymentHandle], Any]] = None,
) -> int:
    """Runs the deployment and maps its outcome to a process exit code."""

    def deploy():
        deployment = run(
            deployer=deployer,
            contract_name=contract_name,
            constructor_args=constructor_args,
        )
        if finalize is not None:
            finalize(deployment)

    return execute(deploy)
