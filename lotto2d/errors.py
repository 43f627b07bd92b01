"""Exceptions raised by the estimator and its collaborators."""


class Lotto2DError(Exception):
    """Base class for every error this package raises on purpose."""


class ConfigError(Lotto2DError, ValueError):
    """Malformed analysis/backtest configuration."""


class InsufficientDataError(Lotto2DError, ValueError):
    """Not enough history to form a single out-of-sample prediction."""


class HistoryNotFoundError(Lotto2DError, FileNotFoundError):
    """The local history file does not exist yet."""


class FetchError(Lotto2DError, RuntimeError):
    """Remote draw-result source returned an unusable response."""


class HistoryReadError(Lotto2DError, ValueError):
    """The local history file exists but cannot be parsed."""
