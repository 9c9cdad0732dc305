"""Errors and exceptions raised by the library
"""

from __future__ import annotations


class GecosError(ValueError):
    """Base class for every exception raised by the library.

    Inherits from `ValueError`, since all the errors are caused by
    values the caller supplied.
    """

    def __init__(self, msg: None | str = None) -> None:
        super().__init__(msg)


class ForbiddenCharacter(GecosError):
    """Raised when a text contains a character breaking the passwd format.

    Do not catch this class to differentiate between a failed parse and a
    failed field construction; use :py:class:`ParseError` and
    :py:class:`ValidationError` for that.
    """

    def __init__(self, text: str, position: int, msg: None | str = None) -> None:
        """
        Args:
            text: The rejected text.
            position: Index of the offending character inside *text*.
            msg: The exception message.
        """
        self.text = text
        """The rejected text"""

        self.position = position
        """Index of the first forbidden character found"""

        self.character = text[position]
        """The first forbidden character found"""

        if msg is None:
            msg = f"Forbidden character {self.character!r} at position {position}"
        super().__init__(msg)

    def __reduce__(self):
        return (type(self), (self.text, self.position, str(self)))


class ValidationError(ForbiddenCharacter):
    """Raised when a GECOS sub-field is built from an unsafe text"""


class ParseError(ForbiddenCharacter):
    """Raised when a raw GECOS field contains a record separator"""

