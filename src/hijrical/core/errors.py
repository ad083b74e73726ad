class HijriCalError(Exception):
    """Base error."""

class TableError(HijriCalError):
    """Raised at load time when the calendar table is missing or malformed."""

class ParseError(HijriCalError, ValueError):
    """Raised by the strict date parser on malformed DD/MM/YYYY text."""
