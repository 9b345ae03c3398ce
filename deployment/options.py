from pathlib import Path

import click

from deployment.constants import DEFAULT_PARAMS_FILEPATH
from deployment.types import AccountAddress, TokenAmount

tags_option = click.option(
    "--tags",
    "-t",
    help="Only run the deploy tasks carrying one of these tags.",
    multiple=True,
    type=click.STRING,
)

account_alias_option = click.option(
    "--account",
    "account_alias",
    help="Alias of the deployer account; defaults to the first test account on local networks.",
    type=click.STRING,
    default=None,
)

params_filepath_option = click.option(
    "--params-filepath",
    "-p",
    help="Constructor parameters YAML.",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    default=DEFAULT_PARAMS_FILEPATH,
    show_default=True,
)

registry_filepath_option = click.option(
    "--registry-filepath",
    "-f",
    help="Deployment registry JSON; defaults to the default params file's artifact.",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
)

verify_option = click.option(
    "--verify/--no-verify",
    help="Publish contract sources to the block explorer.",
    default=False,
)

autosign_option = click.option(
    "--autosign",
    help="Sign transactions without prompting.",
    is_flag=True,
    default=False,
)

token_address_option = click.option(
    "--token-address",
    help="Address of an ERC20Test token; defaults to the registered deployment.",
    type=AccountAddress(),
    default=None,
)

amount_option = click.option(
    "--amount",
    help="Token amount in base units, or in whole tokens with the symbol (e.g. '2.5 CQ').",
    type=TokenAmount(),
    required=True,
)
