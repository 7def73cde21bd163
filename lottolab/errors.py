"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class LotteryError(Exception):
    """Base error for every failure raised by the computation core."""

    code: str
    message: str
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(LotteryError):
    """Malformed combinatorics or simulation input."""

    def __init__(self, message: str = "Invalid argument", details: Any | None = None) -> None:
        super().__init__(code="invalid_argument", message=message, details=details)


class RangeError(LotteryError):
    """More unique numbers requested than a range holds."""

    def __init__(self, message: str = "Range too small", details: Any | None = None) -> None:
        super().__init__(code="range_error", message=message, details=details)


class InsufficientBudgetError(LotteryError):
    """Budget does not buy a single ticket."""

    def __init__(self, message: str = "Insufficient budget", details: Any | None = None) -> None:
        super().__init__(code="insufficient_budget", message=message, details=details)


class InvalidParameterError(LotteryError):
    """Strategy parameter missing or out of range."""

    def __init__(self, message: str = "Invalid strategy parameters", details: Any | None = None) -> None:
        super().__init__(code="invalid_parameter", message=message, details=details)


class UnsupportedParameterError(InvalidParameterError):
    """Strategy parameter the strategy does not recognize."""

    def __init__(self, message: str = "Unsupported strategy parameter", details: Any | None = None) -> None:
        super().__init__(message=message, details=details)
        self.code = "unsupported_parameter"


class StrategyNotSupportedError(LotteryError):
    """Unknown strategy id, or one the lottery does not offer."""

    def __init__(self, message: str = "Strategy not supported", details: Any | None = None) -> None:
        super().__init__(code="strategy_not_supported", message=message, details=details)


class ComboExplosionError(LotteryError):
    """Combination count above the configured safety bound."""

    def __init__(self, message: str = "Too many combinations", details: Any | None = None) -> None:
        super().__init__(code="combo_explosion", message=message, details=details)


class MalformedPrizeTableError(LotteryError):
    """Prize table keys duplicated, or match vector arity mismatch."""

    def __init__(self, message: str = "Malformed prize table", details: Any | None = None) -> None:
        super().__init__(code="malformed_prize_table", message=message, details=details)


class MissingPrizeParameterError(LotteryError):
    """A prize row needs a monetary value the caller did not supply."""

    def __init__(self, message: str = "Missing prize parameter", details: Any | None = None) -> None:
        super().__init__(code="missing_prize_parameter", message=message, details=details)


class EmptyTicketSetError(LotteryError):
    """Simulation requested without tickets."""

    def __init__(self, message: str = "Ticket set is empty", details: Any | None = None) -> None:
        super().__init__(code="empty_ticket_set", message=message, details=details)


class NoStrategiesEvaluableError(LotteryError):
    """Best-strategy search started with no candidates."""

    def __init__(self, message: str = "No strategies evaluable", details: Any | None = None) -> None:
        super().__init__(code="no_strategies_evaluable", message=message, details=details)


class SimulationCancelledError(LotteryError):
    """Caller asked to stop a simulation between batches."""

    def __init__(self, message: str = "Simulation cancelled", details: Any | None = None) -> None:
        super().__init__(code="simulation_cancelled", message=message, details=details)


class LotteryNotFoundError(LotteryError):
    """Lottery id or name absent from the reference data."""

    def __init__(self, message: str = "Lottery not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, details=details)
