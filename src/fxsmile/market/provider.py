"""
Volatility provider for FX options on one currency pair.

Binds a smile surface to a currency pair, a day count convention and a
valuation instant, so that callers can query volatilities and project
sensitivities using wall-clock expiries and either ordering of the pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from fxsmile.errors import DomainError, InvalidInputError
from fxsmile.market.base import SmileTermStructure
from fxsmile.market.conventions import DayCountConvention
from fxsmile.market.currency import CurrencyPair
from fxsmile.risk.projector import SensitivityProjector
from fxsmile.risk.sensitivity import FxOptionSensitivity, NodeSensitivity
from fxsmile.schemas import SensitivitySettings


def _require_aware(instant: datetime, label: str) -> datetime:
    if not isinstance(instant, datetime) or instant.tzinfo is None or instant.utcoffset() is None:
        raise InvalidInputError(f"{label} must be a timezone-aware datetime, got {instant!r}")
    return instant


@dataclass(frozen=True)
class FxSmileVolatilityProvider:
    """
    Black volatilities for a currency pair from a delta smile surface.

    Volatility is invariant when the pair is inverted and strike and forward
    are reciprocated: both describe the same option.

    Attributes:
        surface: Smile term structure, quoted for ``currency_pair``
        currency_pair: Pair the surface is quoted in
        day_count: Convention converting dates to year fractions
        valuation_date_time: Valuation instant, timezone-aware

    Example:
        >>> provider = FxSmileVolatilityProvider.of(surface, "EUR/USD", "ACT/365F", valuation)
        >>> vol = provider.volatility("EUR/USD", expiry, strike=1.45, forward=1.39)
        >>> same = provider.volatility("USD/EUR", expiry, strike=1 / 1.45, forward=1 / 1.39)
    """

    surface: SmileTermStructure
    currency_pair: CurrencyPair
    day_count: DayCountConvention
    valuation_date_time: datetime

    def __post_init__(self):
        """Normalise the pair and day count and check the valuation instant."""
        object.__setattr__(self, "currency_pair", CurrencyPair.of(self.currency_pair))
        object.__setattr__(self, "day_count", DayCountConvention.of(self.day_count))
        _require_aware(self.valuation_date_time, "valuation_date_time")

    @classmethod
    def of(
        cls,
        surface: SmileTermStructure,
        currency_pair: CurrencyPair | str,
        day_count: DayCountConvention | str,
        valuation_date_time: datetime,
    ) -> "FxSmileVolatilityProvider":
        """Create a provider; pair and day count may be given by name."""
        return cls(
            surface=surface,
            currency_pair=CurrencyPair.of(currency_pair),
            day_count=DayCountConvention.of(day_count),
            valuation_date_time=valuation_date_time,
        )

    @property
    def valuation_date(self) -> date:
        return self.valuation_date_time.date()

    def relative_time(self, expiry: datetime) -> float:
        """
        Year fraction from the valuation date to the expiry date.

        The expiry is first expressed in the valuation time zone; the day
        count then applies to the two calendar dates.

        Args:
            expiry: Option expiry, timezone-aware

        Returns:
            Year fraction (0.0 for an expiry on the valuation date)

        Raises:
            DomainError: If the expiry date precedes the valuation date
        """
        _require_aware(expiry, "expiry")
        expiry_date = expiry.astimezone(self.valuation_date_time.tzinfo).date()
        if expiry_date < self.valuation_date:
            raise DomainError(
                f"Expiry {expiry.isoformat()} precedes valuation {self.valuation_date_time.isoformat()}"
            )
        return self.day_count.year_fraction(self.valuation_date, expiry_date)

    def _is_inverse(self, currency_pair: CurrencyPair) -> bool:
        if currency_pair == self.currency_pair:
            return False
        if currency_pair.is_inverse(self.currency_pair):
            return True
        raise InvalidInputError(
            f"Currency pair {currency_pair} is not supported by a provider for {self.currency_pair}"
        )

    def volatility(
        self,
        currency_pair: CurrencyPair | str,
        expiry: datetime,
        strike: float,
        forward: float,
    ) -> float:
        """
        Implied volatility for an option on either ordering of the pair.

        Args:
            currency_pair: Pair the strike and forward are quoted in
            expiry: Option expiry, timezone-aware
            strike: Strike
            forward: Forward rate to the expiry

        Returns:
            Implied volatility
        """
        if not strike > 0.0:
            raise DomainError(f"Strike must be positive, got {strike}")
        if not forward > 0.0:
            raise DomainError(f"Forward must be positive, got {forward}")
        if self._is_inverse(CurrencyPair.of(currency_pair)):
            strike, forward = 1.0 / strike, 1.0 / forward
        return self.surface.volatility(self.relative_time(expiry), strike, forward)

    def surface_parameter_sensitivity(
        self,
        point: FxOptionSensitivity,
        settings: Optional[SensitivitySettings] = None,
    ) -> NodeSensitivity:
        """
        Sensitivity to each surface node of a point sensitivity.

        Args:
            point: dValue/dVol at one (expiry, strike, forward)
            settings: Bump settings for the projection

        Returns:
            NodeSensitivity on the surface nodes
        """
        if self._is_inverse(point.currency_pair):
            point = point.inverted()
        projector = SensitivityProjector(settings)
        return projector.project(
            self.surface,
            self.relative_time(point.expiry),
            point.strike,
            point.forward,
            sensitivity=point.sensitivity,
            currency=point.currency,
        )


__all__ = ["FxSmileVolatilityProvider"]
