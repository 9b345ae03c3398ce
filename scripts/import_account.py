#!/usr/bin/env python3

import os

from ape_accounts import import_account_from_private_key

from deployment.constants import (
    DEPLOYER_ACCOUNT_ALIAS,
    DEPLOYER_PASSPHRASE_ENVVAR,
    DEPLOYER_PRIVATE_KEY_ENVVAR,
)


def main():
    try:
        passphrase = os.environ[DEPLOYER_PASSPHRASE_ENVVAR]
        private_key = os.environ[DEPLOYER_PRIVATE_KEY_ENVVAR]
    except KeyError:
        raise Exception(
            "There are missing environment variables. "
            f"Please set {DEPLOYER_PASSPHRASE_ENVVAR} and {DEPLOYER_PRIVATE_KEY_ENVVAR}."
        )
    account = import_account_from_private_key(DEPLOYER_ACCOUNT_ALIAS, passphrase, private_key)
    print(f"Account imported: {account.address}")


if __name__ == "__main__":
    main()
