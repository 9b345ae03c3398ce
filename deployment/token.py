from pathlib import Path
from typing import NamedTuple, Optional

import click
from ape import project
from ape.api import ReceiptAPI
from ape.contracts import ContractInstance
from eth_typing import ChecksumAddress

from deployment.constants import ERC20_TEST
from deployment.params import Transactor
from deployment.registry import ChainId, get_contract
from deployment.utils import get_default_registry_filepath


class TokenMetadata(NamedTuple):
    name: str
    symbol: str
    decimals: int
    address: ChecksumAddress


def read_token_metadata(token: ContractInstance) -> TokenMetadata:
    """Reads the identifying fields of a deployed ERC20 token."""
    return TokenMetadata(
        name=token.name(),
        symbol=token.symbol(),
        decimals=token.decimals(),
        address=token.address,
    )


def print_token_metadata(metadata: TokenMetadata) -> None:
    print(
        f"{ERC20_TEST} deployment verification:",
        f"- Token name: {metadata.name}",
        f"- Token symbol: {metadata.symbol}",
        f"- Decimals: {metadata.decimals}",
        f"- Contract address: {metadata.address}",
        sep="\n",
    )


def get_token(
    chain_id: ChainId,
    registry_filepath: Optional[Path] = None,
    address: Optional[ChecksumAddress] = None,
) -> ContractInstance:
    """
    Loads the token at an explicit address, or the one recorded in the registry.
    The registry defaults to the artifact named by the default params file and
    is only read when no address is given.
    """
    if address:
        return project.ERC20Test.at(address)
    registry_filepath = registry_filepath or get_default_registry_filepath()
    if not registry_filepath.exists():
        raise click.BadParameter(
            f"No registry found at {registry_filepath}; pass --token-address instead.",
            param_hint="--registry-filepath",
        )
    return get_contract(filepath=registry_filepath, chain_id=chain_id, contract_name=ERC20_TEST)


def check_transfer_from(
    token: ContractInstance, owner: ChecksumAddress, spender: ChecksumAddress, amount: int
) -> None:
    """Checks the owner's balance and the spender's allowance ahead of a transferFrom."""
    balance = token.balanceOf(owner)
    print(f"Balance of {owner}: {balance}")
    if balance < amount:
        raise ValueError(
            f"Insufficient balance in from address. Balance: {balance}, required: {amount}"
        )

    allowance = token.allowance(owner, spender)
    print(f"Allowance of {spender}: {allowance}")
    if allowance < amount:
        raise ValueError(f"Insufficient allowance. Current: {allowance}, required: {amount}")


def transfer_from(
    transactor: Transactor,
    token: ContractInstance,
    owner: ChecksumAddress,
    recipient: ChecksumAddress,
    amount: int,
) -> ReceiptAPI:
    """Moves tokens out of `owner` using the transactor's allowance."""
    spender = transactor.get_account().address
    check_transfer_from(token=token, owner=owner, spender=spender, amount=amount)
    receipt = transactor.transact(token.transferFrom, owner, recipient, amount)
    print(f"transferFrom successful. TxHash: {receipt.txn_hash}")
    return receipt
