"""
Exception types raised by the simulator.

Only precondition violations are errors; the engines themselves never
raise for normal business conditions.
"""

from typing import Any, Dict, List, Optional


class FounderSimError(Exception):
    """Base class for simulator errors."""


class UnknownStrategyError(FounderSimError, ValueError):
    """Raised when an advisory strategy name is not recognised."""

    def __init__(self, strategy: Any):
        self.strategy = strategy
        super().__init__(f"Unknown strategy: {strategy}")


class InvalidDecisionsError(FounderSimError, ValueError):
    """Raised when raw player decisions fail boundary validation."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)


class GameOverError(FounderSimError):
    """Raised when a turn is requested for a game that already ended."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Game is over (status: {status})")
