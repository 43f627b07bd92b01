"""
Configuration for the last-two-digit estimator.

Model defaults mirror the command-line defaults:
- alpha:   0.5   Dirichlet prior strength per outcome
- k:       50    sample size at which a day/month view earns half-trust
- epsilon: 1.0   Markov transition prior strength
- weights: (0.5, 1.0, 0.5, 1.0)  exponents for (base, day, month, markov)
- target_day: 16, bt_last: 40, bt_top: 10, fdr: 0.10

`resolve_config` is the only place a configuration is validated. Both
`single_analysis` and `run_backtest` call it on entry.
"""
import math
import os

from lotto2d.errors import ConfigError

NUM_OUTCOMES = 100
ALL_OUTCOMES = list(range(NUM_OUTCOMES))

DATA_DIR = os.environ.get(
    "DATA_DIR", os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")
)
HISTORY_PATH = os.path.join(DATA_DIR, "history.json")
BACKTEST_SUMMARY_PATH = os.path.join(DATA_DIR, "backtest_summary.json")

API_BASE = "https://lotto.api.rayriffy.com"
REQUEST_TIMEOUT = 15

# Buddhist era year = Gregorian year + 543
BE_OFFSET = 543

# Government lottery payout for the last-two-digit prize vs ticket price (baht)
PRIZE_LAST2 = 2000
TICKET_PRICE = 80

DEFAULT_CONFIG = {
    "alpha": 0.5,
    "k": 50.0,
    "epsilon": 1.0,
    "weights": (0.5, 1.0, 0.5, 1.0),
    "target_day": 16,
    "target_month": None,
    "bt_last": 40,
    "bt_top": 10,
    "fdr": 0.10,
    "top": 10,
}

_FLOAT_KEYS = ("alpha", "k", "epsilon", "fdr")
_INT_KEYS = ("target_day", "bt_last", "bt_top", "top")


def _as_float(key, value):
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        out = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number, got {value!r}") from None
    if not math.isfinite(out):
        raise ConfigError(f"{key} must be finite, got {value!r}")
    return out


def _as_int(key, value):
    out = _as_float(key, value)
    if not out.is_integer():
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return int(out)


def parse_weights(text):
    """Parse a comma separated weight string such as ``"0.5,1,0.5,1"``."""
    parts = [p.strip() for p in str(text).split(",")]
    if len(parts) != 4 or any(p == "" for p in parts):
        raise ConfigError(
            f"weights must be 4 comma separated numbers (base,day,month,markov), got {text!r}"
        )
    return tuple(_as_float("weights", p) for p in parts)


def _check_weights(value):
    if isinstance(value, str):
        return parse_weights(value)
    try:
        weights = tuple(value)
    except TypeError:
        raise ConfigError(f"weights must be a sequence of 4 numbers, got {value!r}") from None
    if len(weights) != 4:
        raise ConfigError(f"weights must have exactly 4 entries, got {len(weights)}")
    return tuple(_as_float("weights", w) for w in weights)


def resolve_config(cfg=None, **overrides):
    """
    Merge *cfg* and *overrides* onto DEFAULT_CONFIG and validate the result.

    Keys set to None fall back to their default (except target_month, whose
    default is None meaning "month of the most recent draw").

    Raises
    ------
    ConfigError
        On unknown keys, non-numeric values, a weights vector that is not of
        length 4, or values outside their domain.
    """
    merged = dict(DEFAULT_CONFIG)
    for source in (cfg or {}, overrides):
        unknown = set(source) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigError(f"unknown config keys: {sorted(unknown)}")
        for key, value in source.items():
            if value is not None:
                merged[key] = value

    out = {}
    for key in _FLOAT_KEYS:
        out[key] = _as_float(key, merged[key])
    for key in _INT_KEYS:
        out[key] = _as_int(key, merged[key])
    out["weights"] = _check_weights(merged["weights"])
    out["target_month"] = (
        None if merged["target_month"] is None
        else _as_int("target_month", merged["target_month"])
    )

    if out["alpha"] < 0:
        raise ConfigError(f"alpha must be >= 0, got {out['alpha']}")
    if out["k"] <= 0:
        raise ConfigError(f"k must be > 0, got {out['k']}")
    if out["epsilon"] < 0:
        raise ConfigError(f"epsilon must be >= 0, got {out['epsilon']}")
    if not 0 < out["fdr"] <= 1:
        raise ConfigError(f"fdr must be in (0, 1], got {out['fdr']}")
    if not 1 <= out["target_day"] <= 31:
        raise ConfigError(f"target_day must be in 1-31, got {out['target_day']}")
    if out["target_month"] is not None and not 1 <= out["target_month"] <= 12:
        raise ConfigError(f"target_month must be in 1-12, got {out['target_month']}")
    for key in ("bt_last", "bt_top", "top"):
        if out[key] <= 0:
            raise ConfigError(f"{key} must be > 0, got {out[key]}")

    return out
