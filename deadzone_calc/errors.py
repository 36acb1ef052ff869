from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a combatant, option set or helper argument violates its preconditions."""


class ExplosionLimitError(RuntimeError):
    pass


__all__ = ["InvalidArgumentError", "ExplosionLimitError"]
