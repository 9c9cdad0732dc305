"""Sanitized GECOS sub-fields.

A GECOS field lives inside a passwd line, so any of its sub-fields
containing a field or record separator would corrupt the whole database.
:py:class:`SanitizedField` is the only way the library stores text, and
it cannot be built from an unsafe string.
"""

from __future__ import annotations

import dataclasses
from typing import FrozenSet, Optional, Union

import gecos.utils.config
from gecos.errors import ValidationError
from gecos.utils import ui

FIELD_SEPARATOR = ","
"""Separator between the sub-fields of a GECOS field"""

RECORD_SEPARATORS: FrozenSet[str] = frozenset(":\n\r")
"""Characters delimiting the columns and lines of the passwd database"""

FORBIDDEN: FrozenSet[str] = RECORD_SEPARATORS | {FIELD_SEPARATOR}
"""Characters a sub-field can never contain"""

CHFN_FORBIDDEN: FrozenSet[str] = FORBIDDEN | frozenset('=\\"')
"""Characters rejected by ``chfn``; used in strict mode"""


def resolve_strict(strict: None | bool = None) -> bool:
    """Return *strict*, or the library setting if it is `None`"""
    if strict is None:
        return gecos.utils.config.conf.settings.strict
    return strict


def forbidden_characters(strict: None | bool = None) -> FrozenSet[str]:
    """Return the characters a sub-field cannot contain.

    Args:
        strict: Use the ``chfn`` character set. If `None`, the value is
            taken from the library settings.
    """
    return CHFN_FORBIDDEN if resolve_strict(strict) else FORBIDDEN


def find_forbidden(text: str, forbidden: FrozenSet[str]) -> Optional[int]:
    """Return the position of the first character of *text* in *forbidden*.

    Returns:
        The index of the character, or `None` if *text* is safe.
    """
    return next((i for i, char in enumerate(text) if char in forbidden), None)


@dataclasses.dataclass(frozen=True, order=True)
class SanitizedField:
    """Text guaranteed to be safe to store in a GECOS sub-field.

    The text is stored exactly as given, surrounding whitespace included.

    Examples:

        Build a field and convert it back::

            >>> name = SanitizedField("Another name")
            >>> str(name)
            'Another name'
            >>> SanitizedField("x,y")
            Traceback (most recent call last):
                ...
            gecos.errors.ValidationError: Forbidden character ',' at position 1

    Raises:
        ValidationError: If the text contains a comma, colon, line feed or
            carriage return (or, in strict mode, ``=``, ``\\`` or ``"``).
    """

    text: str
    """The sanitized text"""

    strict: dataclasses.InitVar[Optional[bool]] = None

    def __post_init__(self, strict: Optional[bool]) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"Expected str, got {type(self.text).__name__}")
        position = find_forbidden(self.text, forbidden_characters(strict))
        if position is not None:
            ui.instance().debug(f"Rejected GECOS sub-field {self.text!r}")
            raise ValidationError(self.text, position)

    def __str__(self) -> str:
        return self.text


def sanitize(
    value: Union[None, str, SanitizedField], strict: None | bool = None
) -> Optional[SanitizedField]:
    """Convert *value* into a sanitized field.

    `None` is returned as-is and strings are validated.
    :py:class:`SanitizedField` objects are returned unchanged, after
    checking them against the ``chfn`` set if *strict* resolves to
    ``True``.

    Raises:
        ValidationError: If *value* contains forbidden characters.
    """
    if value is None:
        return value
    if not isinstance(value, SanitizedField):
        return SanitizedField(value, strict)
    if resolve_strict(strict):
        position = find_forbidden(value.text, CHFN_FORBIDDEN)
        if position is not None:
            ui.instance().debug(f"Rejected GECOS sub-field {value.text!r}")
            raise ValidationError(value.text, position)
    return value
