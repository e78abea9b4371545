"""
Mensa error hierarchy.

Every failure surfaced by the library derives from MensaError so callers
can render the error kind and message uniformly. None of these errors
are retried internally.
"""


class MensaError(Exception):
    """Base class for all meal plan errors."""
    pass


class DateError(MensaError):
    """Upstream date string could not be resolved to a weekday."""

    def __init__(self, message: str, date_string: str = ""):
        super().__init__(message)
        self.date_string = date_string


class MalformedDate(DateError):
    """
    Date string is not three dot-separated integers.

    Example: "23/05/2023" or "23.05".
    """

    def __init__(self, date_string: str):
        super().__init__(f"malformed date: {date_string!r}", date_string)


class InvalidDate(DateError):
    """
    Date string is well-formed but names no calendar day.

    Example: "31.02.2023" or "01.13.2023".
    """

    def __init__(self, date_string: str, reason: str = ""):
        message = f"invalid date: {date_string!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, date_string)


class UnknownLocation(MensaError):
    """Location identifier is not part of the catalog."""

    def __init__(self, identifier: str):
        super().__init__(f"unknown location: {identifier!r}")
        self.identifier = identifier


class UnknownWeekday(MensaError):
    """Weekday abbreviation could not be parsed."""

    def __init__(self, text: str):
        super().__init__(f"unknown weekday: {text!r}")
        self.text = text
