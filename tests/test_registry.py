import json

import pytest

from deployment.registry import RegistryEntry, get_contract, read_registry, write_registry

ABI = [
    {"type": "function", "name": "symbol", "inputs": [], "outputs": []},
    {"type": "constructor", "inputs": []},
    {"type": "function", "name": "name", "inputs": [], "outputs": []},
]


def _entry(chain_id, name, address, block_number=1):
    return RegistryEntry(
        chain_id=chain_id,
        name=name,
        address=address,
        abi=list(ABI),
        tx_hash="0x" + "ab" * 32,
        block_number=block_number,
        deployer="0x" + "11" * 20,
    )


def test_write_and_read_registry(tmp_path):
    filepath = tmp_path / "nested" / "registry.json"
    entries = [
        _entry(1337, "YourContract", "0x" + "02" * 20),
        _entry(1337, "ERC20Test", "0x" + "01" * 20),
        _entry(11155111, "ERC20Test", "0x" + "03" * 20),
    ]
    assert write_registry(entries=entries, filepath=filepath) == filepath

    data = json.loads(filepath.read_text())
    assert list(data) == ["11155111", "1337"]
    assert list(data["1337"]) == ["ERC20Test", "YourContract"]
    abi_order = [(d["type"], d.get("name", "")) for d in data["1337"]["ERC20Test"]["abi"]]
    assert abi_order == [("constructor", ""), ("function", "name"), ("function", "symbol")]

    def key(entry):
        return entry.chain_id, entry.name, entry.address, entry.block_number

    assert sorted(map(key, read_registry(filepath))) == sorted(map(key, entries))


def test_write_registry_merges_per_contract(tmp_path):
    filepath = tmp_path / "registry.json"
    write_registry(entries=[_entry(1337, "YourContract", "0x" + "02" * 20)], filepath=filepath)
    write_registry(entries=[_entry(1337, "ERC20Test", "0x" + "01" * 20)], filepath=filepath)

    entries = {entry.name: entry for entry in read_registry(filepath)}
    assert set(entries) == {"YourContract", "ERC20Test"}

    # redeployment replaces the previous entry
    write_registry(entries=[_entry(1337, "ERC20Test", "0x" + "04" * 20, 7)], filepath=filepath)
    entries = {entry.name: entry for entry in read_registry(filepath)}
    assert entries["ERC20Test"].address == "0x" + "04" * 20
    assert entries["ERC20Test"].block_number == 7
    assert entries["YourContract"].address == "0x" + "02" * 20


def test_write_registry_without_entries(tmp_path):
    filepath = tmp_path / "registry.json"
    write_registry(entries=[], filepath=filepath)
    assert not filepath.exists()


def test_get_contract_missing(tmp_path):
    filepath = tmp_path / "registry.json"
    with pytest.raises(ValueError, match="No registry found"):
        get_contract(filepath=filepath, chain_id=1337, contract_name="YourContract")

    write_registry(entries=[_entry(1337, "ERC20Test", "0x" + "01" * 20)], filepath=filepath)
    with pytest.raises(ValueError, match="'YourContract' not found"):
        get_contract(filepath=filepath, chain_id=1337, contract_name="YourContract")
    with pytest.raises(ValueError, match="'ERC20Test' not found"):
        get_contract(filepath=filepath, chain_id=1, contract_name="ERC20Test")
