import pytest
from ape_etherscan.utils import API_KEY_ENV_KEY_MAP

from deployment.utils import (
    check_etherscan_plugin,
    get_default_registry_filepath,
    get_deployer_account,
)


def test_local_deployer_is_first_test_account(accounts):
    assert get_deployer_account().address == accounts.test_accounts[0].address


def test_deployer_loaded_by_alias(keyfile_account):
    account = get_deployer_account(account_alias=keyfile_account.alias)
    assert account.address == keyfile_account.address


def test_default_registry_filepath():
    filepath = get_default_registry_filepath()
    assert filepath.name == "erc20-test.json"
    assert filepath.parent.name == "artifacts"


def test_explorer_key_checked_per_ecosystem(networks, monkeypatch):
    monkeypatch.setattr("deployment.utils.is_local_network", lambda: False)
    ecosystem_name = networks.provider.network.ecosystem.name
    monkeypatch.setitem(API_KEY_ENV_KEY_MAP, ecosystem_name, "ERC20_TEST_EXPLORER_KEY")

    monkeypatch.delenv("ERC20_TEST_EXPLORER_KEY", raising=False)
    monkeypatch.delenv("ETHERSCAN_API_KEY", raising=False)
    with pytest.raises(ValueError, match="ERC20_TEST_EXPLORER_KEY is not set"):
        check_etherscan_plugin()

    monkeypatch.setenv("ERC20_TEST_EXPLORER_KEY", "key")
    check_etherscan_plugin()


def test_explorer_key_unknown_ecosystem(networks, monkeypatch):
    monkeypatch.setattr("deployment.utils.is_local_network", lambda: False)
    ecosystem_name = networks.provider.network.ecosystem.name
    monkeypatch.delitem(API_KEY_ENV_KEY_MAP, ecosystem_name, raising=False)
    with pytest.raises(ValueError, match="No explorer API key variable"):
        check_etherscan_plugin()


def test_explorer_key_not_needed_locally(monkeypatch):
    monkeypatch.delenv("ETHERSCAN_API_KEY", raising=False)
    check_etherscan_plugin()
