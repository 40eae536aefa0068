"""
Numerology errors.

The engine raises these and never catches them. The annotation pipeline is
the only place that decides whether a failure skips a record or a company.
"""


class NumerologyError(ValueError):
    """Base class for every engine failure."""


class UnparseableDate(NumerologyError):
    """A date string did not split into a usable numeric day/month/year."""

    def __init__(self, value, reason: str = "expected D/M/Y or D-M-Y"):
        self.value = value
        super().__init__(f"Unparseable date {value!r}: {reason}")


class InvalidMonthName(NumerologyError):
    """A month/year label carried a month token outside the month table."""

    def __init__(self, month: str, label: str = ""):
        self.month = month
        self.label = label
        super().__init__(f"Invalid month name {month!r} in {label or month!r}")
