#!/usr/bin/python3

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, account_option, network_option

from deployment.options import (
    amount_option,
    autosign_option,
    registry_filepath_option,
    token_address_option,
)
from deployment.params import Transactor
from deployment.token import get_token, read_token_metadata, transfer_from
from deployment.types import AccountAddress


def _load_token(registry_filepath, token_address):
    token = get_token(
        chain_id=networks.provider.chain_id,
        registry_filepath=registry_filepath,
        address=token_address,
    )
    click.echo(f"Using {token.contract_type.name} at {token.address}.")
    return token


def _echo_receipt(receipt) -> None:
    click.secho(
        f"Transaction {receipt.txn_hash} included in block {receipt.block_number} "
        f"(gas used: {receipt.gas_used}).",
        fg="green",
    )


@click.group()
def cli():
    """ERC20Test Token Management CLI"""


@cli.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@registry_filepath_option
@token_address_option
def info(network, registry_filepath, token_address):
    """Show the token's name, symbol, decimals, supply and owner."""
    token = _load_token(registry_filepath, token_address)
    metadata = read_token_metadata(token)
    click.echo(f"Name: {metadata.name}")
    click.echo(f"Symbol: {metadata.symbol}")
    click.echo(f"Decimals: {metadata.decimals}")
    click.echo(f"Address: {metadata.address}")
    click.echo(f"Total supply: {token.totalSupply()}")
    click.echo(f"Owner: {token.owner()}")


@cli.command(cls=ConnectedProviderCommand)
@account_option()
@network_option(required=True)
@registry_filepath_option
@token_address_option
@autosign_option
@click.option("--to", help="Recipient of the minted tokens.", type=AccountAddress(), required=True)
@amount_option
def mint(account, network, registry_filepath, token_address, autosign, to, amount):
    """Mint new tokens (owner only)."""
    token = _load_token(registry_filepath, token_address)
    transactor = Transactor(account=account, autosign=autosign)
    click.echo(f"Minting {amount} tokens to {to}.")
    _echo_receipt(transactor.transact(token.mint, to, amount))


@cli.command(cls=ConnectedProviderCommand)
@account_option()
@network_option(required=True)
@registry_filepath_option
@token_address_option
@autosign_option
@click.option("--to", help="Recipient of the tokens.", type=AccountAddress(), required=True)
@amount_option
def transfer(account, network, registry_filepath, token_address, autosign, to, amount):
    """Transfer tokens to another address."""
    token = _load_token(registry_filepath, token_address)
    transactor = Transactor(account=account, autosign=autosign)
    click.echo(f"Transferring {amount} tokens to {to}.")
    _echo_receipt(transactor.transact(token.transfer, to, amount))


@cli.command(cls=ConnectedProviderCommand)
@account_option()
@network_option(required=True)
@registry_filepath_option
@token_address_option
@autosign_option
@click.option("--spender", help="Address allowed to spend.", type=AccountAddress(), required=True)
@amount_option
def approve(account, network, registry_filepath, token_address, autosign, spender, amount):
    """Approve another address to spend tokens."""
    token = _load_token(registry_filepath, token_address)
    transactor = Transactor(account=account, autosign=autosign)
    click.echo(f"Approving {amount} tokens for spender {spender}.")
    _echo_receipt(transactor.transact(token.approve, spender, amount))


@cli.command(cls=ConnectedProviderCommand, name="transfer-from")
@account_option()
@network_option(required=True)
@registry_filepath_option
@token_address_option
@autosign_option
@click.option("--from", "owner", help="Owner of the tokens.", type=AccountAddress(), required=True)
@click.option("--to", help="Recipient of the tokens.", type=AccountAddress(), required=True)
@amount_option
def transfer_from_command(
    account, network, registry_filepath, token_address, autosign, owner, to, amount
):
    """Transfer tokens out of an approving owner's balance."""
    token = _load_token(registry_filepath, token_address)
    transactor = Transactor(account=account, autosign=autosign)
    click.echo(f"Transferring {amount} tokens from {owner} to {to}.")
    try:
        receipt = transfer_from(
            transactor=transactor, token=token, owner=owner, recipient=to, amount=amount
        )
    except ValueError as e:
        raise click.ClickException(str(e))
    _echo_receipt(receipt)


@cli.command(cls=ConnectedProviderCommand)
@account_option()
@network_option(required=True)
@registry_filepath_option
@token_address_option
@autosign_option
@amount_option
def burn(account, network, registry_filepath, token_address, autosign, amount):
    """Burn tokens from the account's own balance."""
    token = _load_token(registry_filepath, token_address)
    transactor = Transactor(account=account, autosign=autosign)
    click.echo(f"Burning {amount} tokens.")
    _echo_receipt(transactor.transact(token.burn, amount))


@cli.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@registry_filepath_option
@token_address_option
@click.option("--address", help="Account to check.", type=AccountAddress(), required=True)
def balance(network, registry_filepath, token_address, address):
    """Show the token balance of an address."""
    token = _load_token(registry_filepath, token_address)
    click.echo(f"Balance of {address}: {token.balanceOf(address)}")


@cli.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@registry_filepath_option
@token_address_option
@click.option("--owner", help="Token owner.", type=AccountAddress(), required=True)
@click.option("--spender", help="Approved spender.", type=AccountAddress(), required=True)
def allowance(network, registry_filepath, token_address, owner, spender):
    """Show how much a spender may still move out of an owner's balance."""
    token = _load_token(registry_filepath, token_address)
    click.echo(f"Allowance of {spender} over {owner}: {token.allowance(owner, spender)}")


@cli.command(cls=ConnectedProviderCommand, name="total-supply")
@network_option(required=True)
@registry_filepath_option
@token_address_option
def total_supply(network, registry_filepath, token_address):
    """Show the token's total supply."""
    token = _load_token(registry_filepath, token_address)
    click.echo(f"Total supply: {token.totalSupply()}")


if __name__ == "__main__":
    cli()
