"""Exceptions raised by Nardis."""


class NardisError(Exception):
    """Base class for Nardis errors."""


class NoActiveGameError(NardisError, RuntimeError):
    """Raised when restoring from storage that holds no active game."""
