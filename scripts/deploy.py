#!/usr/bin/python3
from functools import partial

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from metalock.constants import CONTRACT_NAME
from metalock.deployer import ApeContractDeployer
from metalock.networks import is_local_network
from metalock.options import (
    autosign_option,
    params_file_option,
    required_confirmations_option,
    verify_option,
)
from metalock.params import DeploymentParameters
from metalock.runner import execute, run
from metalock.utils import check_etherscan_plugin


def deploy(account, params_filepath, verify, autosign, required_confirmations):
    deployer = ApeContractDeployer(
        account=account,
        autosign=autosign,
        required_confirmations=required_confirmations,
    )

    live_deployment = not is_local_network(deployer.provider)
    verify = verify and live_deployment
    if params_filepath:
        parameters = DeploymentParameters.from_yaml(filepath=params_filepath)
    else:
        parameters = DeploymentParameters()
    parameters.validate(chain_id=deployer.provider.chain_id, live_deployment=live_deployment)
    if verify:
        check_etherscan_plugin()
    constructor_args = parameters.constructor_args(deployer_address=deployer.address)

    deployer.print_deployment_info()
    click.echo(f"Config: {parameters.path}", err=True)
    click.echo(f"Registry: {parameters.registry_filepath}", err=True)
    click.echo(f"Verify: {verify}", err=True)

    deployment = run(deployer, contract_name=CONTRACT_NAME, constructor_args=constructor_args)
    deployer.finalize(deployment, registry_filepath=parameters.registry_filepath, verify=verify)
    return deployment


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@account_option()
@params_file_option
@verify_option
@autosign_option
@required_confirmations_option
@click.pass_context
def cli(ctx, network, account, params_filepath, verify, autosign, required_confirmations):
    """Deploy the MetaLockDAO contract and print its address."""
    exit_code = execute(
        partial(
            deploy,
            account=account,
            params_filepath=params_filepath,
            verify=verify,
            autosign=autosign,
            required_confirmations=required_confirmations,
        )
    )
    ctx.exit(exit_code)


if __name__ == "__main__":
    cli()
