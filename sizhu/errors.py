"""Error types raised at the calculation boundary."""


class BaziError(ValueError):
    """Base class for rejected birth data."""


class InvalidInput(BaziError):
    """Date or time string is missing, empty, or not parseable."""


class InvalidDate(BaziError):
    """The (year, month, day) triple is not a real calendar date."""
