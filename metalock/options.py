from pathlib import Path

import click

from metalock.types import MinInt

params_file_option = click.option(
    "--params-file",
    "-p",
    "params_filepath",
    help="Deployment parameters YAML (constructor arguments, chain ID, registry output).",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=False,
)

verify_option = click.option(
    "--verify/--no-verify",
    help="Publish the contract source to the network explorer.",
    default=False,
)

autosign_option = click.option(
    "--autosign",
    help="Sign and submit without asking for confirmation.",
    is_flag=True,
    default=False,
)

required_confirmations_option = click.option(
    "--required-confirmations",
    "-c",
    help="Confirmations to wait for; defaults to the network's setting.",
    type=MinInt(0),
    required=False,
)
