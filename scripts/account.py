#!/usr/bin/python3

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, network_option

from deployment.options import account_alias_option
from deployment.utils import get_deployer_account


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@account_alias_option
def cli(network, account_alias):
    """Show the deployer account and its funds on the connected network."""
    account = get_deployer_account(account_alias)
    click.echo(f"Connected to {networks.provider.network.name} network.")
    click.secho(f"Deployer: {account.address}", fg="green")
    click.echo(f"Balance: {account.balance} wei")
    click.echo(f"Nonce: {account.nonce}")
    if account.balance == 0:
        click.secho("Deployer has no funds to pay for gas on this network.", fg="red")


if __name__ == "__main__":
    cli()
