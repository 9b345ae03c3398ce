from pathlib import Path

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"
ARTIFACTS_DIR = DEPLOYMENT_DIR / "artifacts"

DEFAULT_PARAMS_FILEPATH = CONSTRUCTOR_PARAMS_DIR / "erc20_test.yml"

#
# Contracts
#

ERC20_TEST = "ERC20Test"
YOUR_CONTRACT = "YourContract"

TOKEN_SYMBOL = "CQ"
TOKEN_DECIMALS = 18

#
# Deploy tags
#

ERC20_TEST_TAG = "ERC20LYC202330550952"
YOUR_CONTRACT_TAG = "YourContract"

#
# Accounts
#

DEPLOYER_PRIVATE_KEY_ENVVAR = "DEPLOYER_PRIVATE_KEY"
DEPLOYER_PASSPHRASE_ENVVAR = "DEPLOYER_PASSPHRASE"
DEPLOYER_ACCOUNT_ALIAS = "deployer"
