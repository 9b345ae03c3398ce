import secrets

import pytest
from ape_accounts import import_account_from_private_key

from deployment.constants import ERC20_TEST, YOUR_CONTRACT
from deployment.params import Deployer

LOCAL_CHAIN_ID = 1337


# Fixtures
@pytest.fixture
def creator(accounts):
    return accounts[0]


@pytest.fixture
def account1(accounts):
    return accounts[1]


@pytest.fixture
def account2(accounts):
    return accounts[2]


@pytest.fixture
def registry_filepath(tmp_path):
    return tmp_path / "artifacts" / "erc20-test.json"


@pytest.fixture
def params_config(registry_filepath):
    return {
        "deployment": {"name": "erc20-test", "chain_id": LOCAL_CHAIN_ID},
        "artifacts": {
            "dir": str(registry_filepath.parent),
            "filename": registry_filepath.name,
        },
        "contracts": [
            {YOUR_CONTRACT: {"constructor": {"_owner": "$deployer"}}},
            ERC20_TEST,
        ],
    }


@pytest.fixture
def make_deployer(params_config, tmp_path):
    def _make_deployer(account, config=None):
        return Deployer(
            config=config or params_config,
            path=tmp_path / "params.yml",
            verify=False,
            account=account,
            autosign=True,
        )

    return _make_deployer


@pytest.fixture
def deployer(make_deployer, creator):
    return make_deployer(creator)


@pytest.fixture
def keyfile_account():
    alias = f"erc20-test-{secrets.token_hex(4)}"
    account = import_account_from_private_key(alias, "erc20-test", "0x" + secrets.token_hex(32))
    yield account
    account.keyfile_path.unlink()
