# microin/exceptions.py


class MicroinError(Exception):
    """Base class for errors raised by the marketplace core."""


class NotFoundError(MicroinError):
    """A task or user id did not resolve (or an approve hit an unassigned task)."""


class ValidationFailure(MicroinError):
    """Malformed request body."""


class ExternalServiceFailure(MicroinError):
    """The recommendation backend failed, timed out or returned garbage."""


class FatalConfiguration(MicroinError):
    """Required configuration is missing at startup; the process must not serve."""
