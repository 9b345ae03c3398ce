import json
from collections import defaultdict
from pathlib import Path
from typing import List, NamedTuple

from ape import networks
from ape.contracts import ContractInstance
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from eth_typing import ABI

from deployment.utils import _load_json, get_contract_container

ChainId = int
ContractName = str


STANDARD_REGISTRY_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}


class RegistryEntry(NamedTuple):
    """Represents a single deployed contract in the registry."""

    chain_id: ChainId
    name: ContractName
    address: ChecksumAddress
    abi: ABI
    tx_hash: str
    block_number: int
    deployer: str


def _get_abi(contract_instance: ContractInstance) -> ABI:
    """Returns the ABI of a contract instance."""
    return [entry.model_dump(mode="json") for entry in contract_instance.contract_type.abi]


def _get_entry(contract_instance: ContractInstance) -> RegistryEntry:
    receipt = contract_instance.receipt
    return RegistryEntry(
        name=contract_instance.contract_type.name,
        address=to_checksum_address(contract_instance.address),
        abi=_get_abi(contract_instance),
        chain_id=networks.provider.chain_id,
        tx_hash=str(receipt.txn_hash),
        block_number=receipt.block_number,
        deployer=receipt.transaction.sender,
    )


def read_registry(filepath: Path) -> List[RegistryEntry]:
    data = _load_json(filepath)
    registry_entries = list()
    for chain_id, entries in data.items():
        for contract_name, artifacts in entries.items():
            registry_entry = RegistryEntry(
                chain_id=int(chain_id),
                name=contract_name,
                address=artifacts["address"],
                abi=artifacts["abi"],
                tx_hash=artifacts["tx_hash"],
                block_number=artifacts["block_number"],
                deployer=artifacts["deployer"],
            )
            registry_entries.append(registry_entry)
    return registry_entries


def write_registry(entries: List[RegistryEntry], filepath: Path, silent: bool = False) -> Path:
    """
    Writes registry entries to a file.

    Entries are merged into an existing registry per chain and per contract
    name; an entry for a contract that is already registered on the same
    chain replaces the previous one (a redeployment).
    """
    if not entries:
        if not silent:
            print("No entries provided.")
        return filepath

    data = defaultdict(dict)
    if filepath.exists():
        if not silent:
            print(f"Updating existing registry at {filepath}.")
        for existing_entry in read_registry(filepath):
            data[existing_entry.chain_id][existing_entry.name] = existing_entry
    elif not silent:
        print(f"Creating new registry at {filepath}.")

    for entry in entries:
        previous = data[entry.chain_id].get(entry.name)
        if previous and previous.address != entry.address and not silent:
            print(f"Replacing {entry.name} at {previous.address} on chain {entry.chain_id}.")
        data[entry.chain_id][entry.name] = entry

    # common order, regardless of deployment order
    output = dict()
    for chain_id in sorted(data, key=str):
        chain_entries = dict()
        for name in sorted(data[chain_id]):
            entry = data[chain_id][name]
            entry_abi = sorted(entry.abi, key=lambda d: (d["type"], d.get("name", "")))
            chain_entries[name] = {
                "address": entry.address,
                "abi": entry_abi,
                "tx_hash": entry.tx_hash,
                "block_number": int(entry.block_number),
                "deployer": entry.deployer,
            }
        output[str(chain_id)] = chain_entries

    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w") as file:
        json.dump(output, file, **STANDARD_REGISTRY_JSON_FORMAT)

    return filepath


def registry_from_ape_deployments(
    deployments: List[ContractInstance],
    output_filepath: Path,
) -> Path:
    """Records ape deployments made on the connected chain in a registry file."""
    entries = [_get_entry(contract_instance=instance) for instance in deployments]
    output_filepath = write_registry(entries=entries, filepath=output_filepath)
    print(f"(i) Registry written to {output_filepath}!")
    return output_filepath


def get_contract(
    filepath: Path, chain_id: ChainId, contract_name: ContractName
) -> ContractInstance:
    """Returns the registered instance of a single contract."""
    if not filepath.exists():
        raise ValueError(f"No registry found at {filepath}")

    for registry_entry in read_registry(filepath=filepath):
        if registry_entry.chain_id == chain_id and registry_entry.name == contract_name:
            contract_container = get_contract_container(contract_name)
            return contract_container.at(registry_entry.address)

    raise ValueError(
        f"Contract '{contract_name}' not found in registry, '{filepath}', for chain {chain_id}"
    )
