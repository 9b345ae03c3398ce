#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from deployment.options import (
    account_alias_option,
    autosign_option,
    params_filepath_option,
    tags_option,
    verify_option,
)
from deployment.params import Deployer
from deployment.steps import tasks
from deployment.utils import get_deployer_account


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@account_alias_option
@tags_option
@params_filepath_option
@verify_option
@autosign_option
def cli(network, account_alias, tags, params_filepath, verify, autosign):
    """
    Run the deploy tasks, optionally filtered by tag.

    e.g. ape run deploy --network ethereum:local:test --tags ERC20LYC202330550952
    """
    selected = tasks.select(tags)
    if not selected:
        click.secho(f"No deploy tasks match tags {', '.join(tags)}.", fg="yellow")
        return

    account = get_deployer_account(account_alias)
    deployer = Deployer.from_yaml(
        filepath=params_filepath, verify=verify, account=account, autosign=autosign
    )
    results = tasks.run(deployer, tags=tags)

    deployments = [result for result in results.values() if result is not None]
    deployer.finalize(deployments=deployments)


if __name__ == "__main__":
    cli()
