"""Exceptions raised by accesslog.

Only hard failures are exceptions. A line that cannot be parsed is reported
through the stream's counters, never raised to the consumer.
"""


class AccessLogError(Exception):
    """Base class for every accesslog error."""


class UnknownGrammar(AccessLogError, LookupError):
    """A grammar name was requested that is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown grammar: {name!r}")


class SourceUnavailable(AccessLogError):
    """The line source could not be opened or read."""


class FieldDecodeError(AccessLogError, ValueError):
    """The embedded specs payload failed to decode."""

    def __init__(self, stage: str, reason: str):
        self.stage = stage
        super().__init__(f"specs {stage} failed: {reason}")
