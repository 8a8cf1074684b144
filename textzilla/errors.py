"""Exception hierarchy. Every class also derives from the closest builtin."""


class TextError(Exception):
    """Base class for all errors raised by TextZilla."""

    pass


class InvalidArgument(TextError, ValueError):
    """Raised when a value can not be used where a string, notation or encoding is expected."""

    pass


class PatternInvalid(TextError, ValueError):
    """Raised when a regular expression is malformed."""

    pass


class OutOfRange(TextError, IndexError):
    """Raised when a single-index write or delete addresses a missing slot."""

    pass
