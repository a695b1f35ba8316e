from typing import Any, Sequence

import click
from ape.utils import ZERO_ADDRESS

from metalock.errors import DeploymentAborted


def _abort() -> None:
    click.echo("Aborting deployment!", err=True)
    raise DeploymentAborted("Deployment declined by the operator.")


def _confirm_deployment(contract_name: str) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    answer = click.prompt(f"Deploy {contract_name} Y/N?", err=True)
    if answer.lower().strip() == "n":
        _abort()


def _confirm_zero_address() -> None:
    answer = click.prompt(
        "Zero Address detected for constructor argument; Continue? Y/N?", err=True
    )
    if answer.lower().strip() == "n":
        _abort()


def _confirm_arguments(contract_name: str, constructor_args: Sequence[Any]) -> None:
    """Asks the user to confirm the constructor arguments for a single contract."""
    if len(constructor_args) == 0:
        click.echo(f"\n(i) No constructor arguments for {contract_name}", err=True)
        _confirm_deployment(contract_name)
        return

    click.echo(f"\nConstructor arguments for {contract_name}", err=True)
    for position, value in enumerate(constructor_args):
        click.echo(f"\t[{position}]={value}", err=True)
    _confirm_deployment(contract_name)
    if ZERO_ADDRESS in constructor_args:
        _confirm_zero_address()
