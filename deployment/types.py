from decimal import Decimal, InvalidOperation

import click
from ape import accounts
from ape.exceptions import AccountsError
from eth_utils import is_hex_address, to_checksum_address

from deployment.constants import TOKEN_DECIMALS, TOKEN_SYMBOL


class TokenAmount(click.ParamType):
    """
    Non-negative token amount. Plain integers are base units; a value ending
    in the token symbol ("2.5 CQ") is a whole-token amount scaled by the
    token's decimals.
    """

    name = "token_amount"

    def __init__(self, symbol: str = TOKEN_SYMBOL, decimals: int = TOKEN_DECIMALS):
        self.symbol = symbol
        self.decimals = decimals

    def _whole_tokens(self, value, param, ctx) -> int:
        text = value[: -len(self.symbol)].strip()
        try:
            scaled = Decimal(text).scaleb(self.decimals)
        except InvalidOperation:
            self.fail(f"{value} is not a valid {self.symbol} amount", param, ctx)
        if not scaled.is_finite():
            self.fail(f"{value} is not a valid {self.symbol} amount", param, ctx)
        if scaled != scaled.to_integral_value():
            self.fail(f"{value} has more than {self.decimals} decimal places", param, ctx)
        return int(scaled)

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            amount = value
        else:
            value = str(value).strip()
            if value.upper().endswith(self.symbol.upper()):
                amount = self._whole_tokens(value, param, ctx)
            else:
                try:
                    amount = int(value)
                except ValueError:
                    self.fail(f"{value} is not a valid token amount", param, ctx)
        if amount < 0:
            self.fail(f"{value} is a negative token amount", param, ctx)
        return amount


class AccountAddress(click.ParamType):
    """An address given as hex, or the alias of an account in ape's keyfile store."""

    name = "account_address"

    def convert(self, value, param, ctx):
        if is_hex_address(value):
            return to_checksum_address(value)
        try:
            return accounts.load(value).address
        except (KeyError, ValueError, AccountsError):
            self.fail(f"{value} is neither an address nor a known account alias", param, ctx)
