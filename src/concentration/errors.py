"""Exceptions raised by the memory-matching core."""


class ConcentrationError(Exception):
    """Base class for errors raised by the game core."""


class InvalidConfiguration(ConcentrationError, ValueError):
    """A session cannot be dealt with the requested configuration.

    Raised for pair counts outside the symbol alphabet and for unknown
    difficulty names. Always raised before any session state changes.
    """
