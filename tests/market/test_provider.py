"""Tests for the FX smile volatility provider."""

from datetime import datetime, timedelta, timezone
from itertools import product

import pytest

from fxsmile.errors import DomainError, InvalidInputError
from fxsmile.market import CurrencyPair, DayCountConvention, FxSmileVolatilityProvider
from tests.market.sample_data import (
    LONDON,
    SCENARIO,
    TEST_EXPIRIES,
    TEST_FORWARDS,
    TEST_STRIKES,
    VALUATION_DATE_TIME,
)

EUR_USD = CurrencyPair("EUR", "USD")
USD_EUR = CurrencyPair("USD", "EUR")


class TestConstruction:

    def test_of_matches_constructor(self, eur_usd_surface, eur_usd_provider):
        built = FxSmileVolatilityProvider.of(eur_usd_surface, "EUR/USD", "ACT/365F", VALUATION_DATE_TIME)
        assert built == eur_usd_provider
        assert built.currency_pair == EUR_USD
        assert built.day_count is DayCountConvention.ACT_365F

    def test_constructor_normalises_names(self, eur_usd_surface, eur_usd_provider):
        built = FxSmileVolatilityProvider(
            surface=eur_usd_surface,
            currency_pair="EUR/USD",
            day_count="ACT_365F",
            valuation_date_time=VALUATION_DATE_TIME,
        )
        assert built == eur_usd_provider

    def test_naive_valuation_rejected(self, eur_usd_surface):
        with pytest.raises(InvalidInputError):
            FxSmileVolatilityProvider.of(eur_usd_surface, EUR_USD, "ACT/365F", datetime(2015, 2, 17, 13, 45))

    def test_valuation_date(self, eur_usd_provider):
        assert eur_usd_provider.valuation_date == VALUATION_DATE_TIME.date()


class TestRelativeTime:
    """Tests for expiry to year fraction conversion."""

    def test_scenario_expiry(self, eur_usd_provider):
        assert eur_usd_provider.relative_time(SCENARIO["expiry"]) == pytest.approx(486 / 365, abs=1e-15)

    def test_same_day_is_zero(self, eur_usd_provider):
        assert eur_usd_provider.relative_time(VALUATION_DATE_TIME + timedelta(hours=2)) == 0.0
        assert eur_usd_provider.relative_time(VALUATION_DATE_TIME - timedelta(hours=2)) == 0.0

    def test_next_day(self, eur_usd_provider):
        assert eur_usd_provider.relative_time(TEST_EXPIRIES[0]) == pytest.approx(1 / 365)

    def test_expiry_converted_to_valuation_zone(self, eur_usd_provider):
        # 2015-02-18 01:00 in Tokyo is still 2015-02-17 in London
        tokyo = timezone(timedelta(hours=9))
        assert eur_usd_provider.relative_time(datetime(2015, 2, 18, 1, 0, tzinfo=tokyo)) == 0.0

    def test_past_expiry_rejected(self, eur_usd_provider):
        with pytest.raises(DomainError):
            eur_usd_provider.relative_time(datetime(2015, 2, 16, 23, 0, tzinfo=LONDON))

    def test_naive_expiry_rejected(self, eur_usd_provider):
        with pytest.raises(InvalidInputError):
            eur_usd_provider.relative_time(datetime(2016, 6, 17, 11, 45))


class TestVolatility:
    """Tests for volatility queries on either ordering of the pair."""

    def test_matches_surface(self, eur_usd_provider, eur_usd_surface):
        vol = eur_usd_provider.volatility(EUR_USD, SCENARIO["expiry"], SCENARIO["strike"], SCENARIO["forward"])
        expected = eur_usd_surface.volatility(486 / 365, SCENARIO["strike"], SCENARIO["forward"])
        assert vol == expected

    @pytest.mark.parametrize(
        "index,strike", list(product(range(len(TEST_EXPIRIES)), TEST_STRIKES))
    )
    def test_inverse_pair_invariance(self, eur_usd_provider, index, strike):
        expiry, forward = TEST_EXPIRIES[index], TEST_FORWARDS[index]
        direct = eur_usd_provider.volatility(EUR_USD, expiry, strike, forward)
        inverse = eur_usd_provider.volatility(USD_EUR, expiry, 1.0 / strike, 1.0 / forward)
        assert inverse == pytest.approx(direct, abs=1e-12)

    def test_string_pair(self, eur_usd_provider):
        args = (SCENARIO["expiry"], SCENARIO["strike"], SCENARIO["forward"])
        assert eur_usd_provider.volatility("EUR/USD", *args) == eur_usd_provider.volatility(EUR_USD, *args)

    def test_unrelated_pair_rejected(self, eur_usd_provider):
        with pytest.raises(InvalidInputError):
            eur_usd_provider.volatility("GBP/USD", SCENARIO["expiry"], 1.45, 1.39)

    @pytest.mark.parametrize("strike,forward", [(0.0, 1.39), (1.45, 0.0), (-1.0, 1.39)])
    def test_non_positive_inputs(self, eur_usd_provider, strike, forward):
        with pytest.raises(DomainError):
            eur_usd_provider.volatility(EUR_USD, SCENARIO["expiry"], strike, forward)

    def test_same_day_expiry_rejected(self, eur_usd_provider):
        with pytest.raises(DomainError):
            eur_usd_provider.volatility(EUR_USD, VALUATION_DATE_TIME + timedelta(hours=1), 1.45, 1.39)
