"""Sample market data used for validation tests."""

from datetime import datetime
from zoneinfo import ZoneInfo

import jax.numpy as jnp

LONDON = ZoneInfo("Europe/London")

SMILE_EUR_USD = {
    "name": "smileEurUsd",
    "times": jnp.array([0.01, 0.252, 0.501, 1.0, 2.0, 5.0]),
    "deltas": jnp.array([0.10, 0.25]),
    "atm": jnp.array([0.175, 0.185, 0.18, 0.17, 0.16, 0.16]),
    "risk_reversal": jnp.array(
        [
            [-0.010, -0.0050],
            [-0.011, -0.0060],
            [-0.012, -0.0070],
            [-0.013, -0.0080],
            [-0.014, -0.0090],
            [-0.014, -0.0090],
        ]
    ),
    "strangle": jnp.array(
        [
            [0.0300, 0.0100],
            [0.0310, 0.0110],
            [0.0320, 0.0120],
            [0.0330, 0.0130],
            [0.0340, 0.0140],
            [0.0340, 0.0140],
        ]
    ),
}

VALUATION_DATE_TIME = datetime(2015, 2, 17, 13, 45, tzinfo=LONDON)

TEST_EXPIRIES = [
    datetime(2015, 2, 18, 0, 0, tzinfo=LONDON),
    datetime(2015, 9, 17, 11, 45, tzinfo=LONDON),
    datetime(2016, 6, 17, 11, 45, tzinfo=LONDON),
    datetime(2018, 7, 17, 11, 45, tzinfo=LONDON),
]
TEST_FORWARDS = [1.4, 1.395, 1.39, 1.38]
TEST_STRIKES = [1.1, 1.28, 1.45, 1.62, 1.8]

# Scenario point: 2016-06-17 expiry, 486 days after valuation (ACT/365F)
SCENARIO = {
    "expiry": datetime(2016, 6, 17, 11, 45, tzinfo=LONDON),
    "expiry_time": 486 / 365,
    "strike": 1.45,
    "forward": 1.39,
}
