"""
Example: EUR/USD delta smile surface and node sensitivities

Builds a smile surface from ATM, risk reversal and strangle quotes, queries
volatilities for both orderings of the pair and projects a vega exposure
onto the surface nodes.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from fxsmile import (
    FxOptionSensitivity,
    FxSmileVolatilityProvider,
    SmileSurface,
)
from fxsmile.config import get_config, init_environment

LONDON = ZoneInfo("Europe/London")


def build_provider():
    surface = SmileSurface.from_quotes(
        name="smileEurUsd",
        times=[0.01, 0.252, 0.501, 1.0, 2.0, 5.0],
        deltas=[0.10, 0.25],
        atm=[0.175, 0.185, 0.18, 0.17, 0.16, 0.16],
        risk_reversal=[
            [-0.010, -0.005],
            [-0.011, -0.006],
            [-0.012, -0.007],
            [-0.013, -0.008],
            [-0.014, -0.009],
            [-0.014, -0.009],
        ],
        strangle=[
            [0.030, 0.010],
            [0.031, 0.011],
            [0.032, 0.012],
            [0.033, 0.013],
            [0.034, 0.014],
            [0.034, 0.014],
        ],
    )
    valuation = datetime(2015, 2, 17, 13, 45, tzinfo=LONDON)
    return FxSmileVolatilityProvider.of(surface, "EUR/USD", "ACT/365F", valuation)


def example_smile(provider):
    """Print the synthesised smile at 18 months."""
    print("=" * 70)
    print("Example 1: Smile at a non-pillar expiry")
    print("=" * 70)

    expiry = datetime(2016, 8, 17, 11, 45, tzinfo=LONDON)
    t = provider.relative_time(expiry)
    smile = provider.surface.slice_at_time(t)
    forward = 1.385

    print(f"\nExpiry: {expiry.date()}  ({t:.4f}y)")
    for label, strike, vol in zip(
        smile.delta_labels.tolist(), smile.strikes_for(forward).tolist(), smile.volatilities.tolist()
    ):
        print(f"  {label:5.2f}Δ  K={strike:.4f}  vol={vol * 100:.2f}%")

    direct = provider.volatility("EUR/USD", expiry, 1.45, forward)
    inverse = provider.volatility("USD/EUR", expiry, 1 / 1.45, 1 / forward)
    print(f"\nEUR/USD K=1.45: {direct * 100:.4f}%")
    print(f"USD/EUR K=1/1.45: {inverse * 100:.4f}%")


def example_node_sensitivity(provider):
    """Project a point vega onto the surface nodes."""
    print("\n" + "=" * 70)
    print("Example 2: Node sensitivities")
    print("=" * 70)

    point = FxOptionSensitivity(
        currency_pair=provider.currency_pair,
        expiry=datetime(2016, 6, 17, 11, 45, tzinfo=LONDON),
        strike=1.45,
        forward=1.39,
        currency="USD",
        sensitivity=250_000.0,
    )
    nodes = provider.surface_parameter_sensitivity(point)

    print(f"\nSurface: {nodes.surface_name}  currency: {nodes.currency}")
    for year_fraction, label, value in nodes:
        if value != 0.0:
            print(f"  t={year_fraction:6.3f}  {label:5.2f}Δ  {value:14,.2f}")
    print(f"\nTotal: {nodes.total():,.2f}")


if __name__ == "__main__":
    init_environment(get_config())
    provider = build_provider()
    example_smile(provider)
    example_node_sensitivity(provider)
