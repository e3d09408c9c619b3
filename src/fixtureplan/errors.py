"""Exceptions raised by fixtureplan."""


class ValidationError(ValueError):
    """Input the scheduler or standings calculator cannot work with."""


class PreconditionError(ValueError):
    """League state does not allow the requested operation."""
