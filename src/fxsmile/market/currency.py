"""
Currency pairs.

A pair ``BASE/COUNTER`` quotes the number of units of the counter currency
per unit of the base currency. Volatility surfaces are stored for one
ordering of a pair and queried for either ordering.
"""

from __future__ import annotations

from dataclasses import dataclass

from fxsmile.errors import InvalidInputError


def validate_currency_code(code: str) -> str:
    """Check an ISO-4217 style code: three upper-case letters."""
    if not isinstance(code, str) or len(code) != 3 or not code.isalpha() or not code.isupper():
        raise InvalidInputError(f"Currency code must be three upper-case letters, got {code!r}")
    return code


@dataclass(frozen=True)
class CurrencyPair:
    """
    Ordered pair of currencies.

    Attributes:
        base: Base currency (e.g., "EUR")
        counter: Counter currency (e.g., "USD")

    Example:
        >>> pair = CurrencyPair("EUR", "USD")
        >>> str(pair.inverse())
        'USD/EUR'
        >>> pair.is_inverse(CurrencyPair.parse("USD/EUR"))
        True
    """

    base: str
    counter: str

    def __post_init__(self):
        validate_currency_code(self.base)
        validate_currency_code(self.counter)
        if self.base == self.counter:
            raise InvalidInputError(f"Currency pair must use two different currencies: {self.base}")

    @classmethod
    def parse(cls, text: str) -> "CurrencyPair":
        """Parse a pair written as ``"EUR/USD"``."""
        parts = text.strip().split("/")
        if len(parts) != 2:
            raise InvalidInputError(f"Currency pair must have the form 'AAA/BBB', got {text!r}")
        return cls(parts[0].strip(), parts[1].strip())

    @classmethod
    def of(cls, pair: "str | CurrencyPair") -> "CurrencyPair":
        """Return ``pair`` unchanged or parse it from its string form."""
        if isinstance(pair, cls):
            return pair
        return cls.parse(pair)

    def inverse(self) -> "CurrencyPair":
        """The same pair quoted the other way round."""
        return CurrencyPair(self.counter, self.base)

    def is_inverse(self, other: "CurrencyPair") -> bool:
        return self.base == other.counter and self.counter == other.base

    def __str__(self) -> str:
        return f"{self.base}/{self.counter}"


__all__ = ["CurrencyPair", "validate_currency_code"]
