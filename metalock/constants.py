from pathlib import Path

import metalock

#
# Filesystem
#

METALOCK_DIR = Path(metalock.__file__).parent
CONSTRUCTOR_PARAMS_DIR = METALOCK_DIR / "constructor_params"
ARTIFACTS_DIR = METALOCK_DIR / "artifacts"

#
# Contracts
#

CONTRACT_NAME = "MetaLockDAO"
DEPLOYED_MESSAGE = "MetaLock DAO deployed to:"

DEPLOYER_VARIABLE = "$deployer"

#
# Networks
#

LOCAL_NETWORKS = ["local"]

#
# Process
#

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

#
# CI account import
#

CI_ACCOUNT_ALIAS = "AUTOMATION"
DEPLOYER_PASSPHRASE_ENVVAR = "DEPLOYER_PASSPHRASE"
DEPLOYER_PRIVATE_KEY_ENVVAR = "DEPLOYER_PRIVATE_KEY"
