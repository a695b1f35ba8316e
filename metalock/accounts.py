import os

from ape.api import AccountAPI
from ape_accounts import import_account_from_private_key

from metalock.constants import (
    CI_ACCOUNT_ALIAS,
    DEPLOYER_PASSPHRASE_ENVVAR,
    DEPLOYER_PRIVATE_KEY_ENVVAR,
)
from metalock.errors import DeploymentConfigError


def import_deployer_account(alias: str = CI_ACCOUNT_ALIAS) -> AccountAPI:
    """Imports the deployer key from the environment into ape's keystore."""
    try:
        passphrase = os.environ[DEPLOYER_PASSPHRASE_ENVVAR]
        private_key = os.environ[DEPLOYER_PRIVATE_KEY_ENVVAR]
    except KeyError:
        raise DeploymentConfigError(
            "There are missing environment variables. "
            f"Please set {DEPLOYER_PASSPHRASE_ENVVAR} and {DEPLOYER_PRIVATE_KEY_ENVVAR}."
        )
    return import_account_from_private_key(alias, passphrase, private_key)
