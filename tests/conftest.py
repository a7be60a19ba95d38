"""Configure test environment for importing the project package."""
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC = REPO_ROOT / "src"

for path in (SRC, REPO_ROOT):
    if path.exists() and str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture(scope="session")
def eur_usd_surface():
    """Six-pillar EUR/USD delta smile surface."""
    from fxsmile.market import SmileSurface
    from tests.market.sample_data import SMILE_EUR_USD

    return SmileSurface.from_quotes(**SMILE_EUR_USD)


@pytest.fixture(scope="session")
def eur_usd_provider(eur_usd_surface):
    """Provider over the EUR/USD surface, ACT/365F, valued 2015-02-17 13:45 London."""
    from fxsmile.market import CurrencyPair, DayCountConvention, FxSmileVolatilityProvider
    from tests.market.sample_data import VALUATION_DATE_TIME

    return FxSmileVolatilityProvider(
        surface=eur_usd_surface,
        currency_pair=CurrencyPair("EUR", "USD"),
        day_count=DayCountConvention.ACT_365F,
        valuation_date_time=VALUATION_DATE_TIME,
    )
