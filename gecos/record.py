"""Structured GECOS field.

See the ``passwd(5)`` man page for an introduction to the format. The
field is split by commas into, in order: full name, room, work phone,
home phone and any number of *other* entries.
"""

from __future__ import annotations

from typing import (
    Any,
    Iterable,
    List,
    MutableSequence,
    Optional,
    Union,
    overload,
)

from typing_extensions import TypedDict

from gecos.errors import ParseError
from gecos.field import (
    FIELD_SEPARATOR,
    SanitizedField,
    find_forbidden,
    forbidden_characters,
    resolve_strict,
    sanitize,
)
from gecos.utils import ui

FieldLike = Union[None, str, SanitizedField]
"""Values accepted when assigning a GECOS sub-field"""

POSITIONS = ("full_name", "room", "work_phone", "home_phone")
"""Name of the optional sub-fields, in the order they are stored"""


class SanitizedList(MutableSequence[SanitizedField]):
    """List of :py:class:`SanitizedField`.

    Strings inserted are validated, so the list can never hold an
    unsafe value.
    """

    def __init__(
        self,
        values: Iterable[str | SanitizedField] = (),
        strict: None | bool = None,
    ) -> None:
        self.strict: bool = resolve_strict(strict)
        """Validation mode, fixed when the list is created"""

        self._items: list[SanitizedField] = [self._check(v) for v in values]

    def _check(self, value: str | SanitizedField) -> SanitizedField:
        ret = sanitize(value, self.strict)
        if ret is None:
            raise TypeError("None is not a valid GECOS entry")
        return ret

    @overload
    def __getitem__(self, index: int) -> SanitizedField:
        ...

    @overload
    def __getitem__(self, index: slice) -> SanitizedList:
        ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return SanitizedList(self._items[index], self.strict)
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            self._items[index] = [self._check(v) for v in value]
        else:
            self._items[index] = self._check(value)

    def __delitem__(self, index) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, value: str | SanitizedField) -> None:
        self._items.insert(index, self._check(value))

    def extend(self, values: Iterable[str | SanitizedField]) -> None:
        # All or nothing: a failed entry leaves the list untouched
        self._items.extend([self._check(v) for v in values])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SanitizedList, list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SanitizedList({[f.text for f in self._items]!r})"


def _position(index: int, doc: str) -> property:
    """Generate the property for the optional sub-field at *index*"""

    def getter(self: GecosRecord) -> Optional[SanitizedField]:
        return self._fields[index]

    def setter(self: GecosRecord, value: FieldLike) -> None:
        field = sanitize(value, self.strict)
        # An empty sub-field is stored as absent, like the parser does
        self._fields[index] = field if field is not None and field.text else None

    return property(getter, setter, doc=doc)


class GecosRecord:
    """The GECOS field of a passwd entry.

    Every field except `other` can be `None`, meaning the position is
    empty. Fields can be assigned a :py:class:`SanitizedField`, a string
    (validated on assignment) or `None`.

    Examples:

        Parse, modify and write back a GECOS field::

            >>> record = GecosRecord.parse("Some Person,Room,,,Other 1")
            >>> record.full_name = "Another name"
            >>> record.serialize()
            'Another name,Room,,,Other 1'

        Create one from scratch::

            >>> GecosRecord("Test Name", other=["Some info"]).serialize()
            'Test Name,,,,Some info'
    """

    class Serialized(TypedDict):
        full_name: Optional[str]
        room: Optional[str]
        work_phone: Optional[str]
        home_phone: Optional[str]
        other: List[str]
        width: int
        strict: bool

    full_name = _position(0, "Full name, like *Guest*.")
    room = _position(1, "Room number, like *H-1.13*.")
    work_phone = _position(2, "Work phone, like *574*.")
    home_phone = _position(3, "Home phone, like *+491606799999*.")

    def __init__(
        self,
        full_name: FieldLike = None,
        room: FieldLike = None,
        work_phone: FieldLike = None,
        home_phone: FieldLike = None,
        other: Iterable[str | SanitizedField] = (),
        *,
        strict: None | bool = None,
    ) -> None:
        """
        Args:
            full_name: Full name of the user.
            room: Room or building.
            work_phone: Office phone number.
            home_phone: Personal phone number.
            other: Additional entries, like a mail address.
            strict: Validate values with the ``chfn`` character set. If
                `None`, the library settings at creation time decide.

        Raises:
            ValidationError: If any of the values contains a forbidden
                character.
        """
        self.strict: bool = resolve_strict(strict)
        """Validation mode used when assigning values, fixed on creation"""

        self._fields: list[Optional[SanitizedField]] = [None] * len(POSITIONS)
        self._other = SanitizedList(strict=self.strict)

        self._width = 0
        """Number of optional positions present in the parsed text.

        Empty trailing positions are kept on serialization, so a parsed
        text is always written back unchanged.
        """

        self.full_name = full_name
        self.room = room
        self.work_phone = work_phone
        self.home_phone = home_phone
        self.other = other

    @property
    def other(self) -> SanitizedList:
        """Extra entries following the home phone, like a mail address.

        Some implementations allow more than one entry; it is the caller's
        responsibility to ensure compatibility with the consumers of the
        database.
        """
        return self._other

    @other.setter
    def other(self, values: Iterable[str | SanitizedField]) -> None:
        self._other = SanitizedList(values, self.strict)

    @classmethod
    def parse(cls, raw: str, strict: None | bool = None) -> GecosRecord:
        """Convert a GECOS string, as found in the passwd database, into a record.

        Missing positions are `None`, so incomplete strings are accepted::

            >>> record = GecosRecord.parse("Some Person")
            >>> record.full_name, record.room
            (SanitizedField(text='Some Person'), None)

        Args:
            raw: The GECOS field, without the surrounding colons.
            strict: Reject the characters ``chfn`` rejects.

        Raises:
            ParseError: If *raw* contains a colon, a line terminator or (in
                strict mode) a character rejected by ``chfn``.
        """
        strict = resolve_strict(strict)
        position = find_forbidden(raw, forbidden_characters(strict) - {FIELD_SEPARATOR})
        if position is not None:
            ui.instance().debug(f"Rejected GECOS field {raw!r}")
            raise ParseError(raw, position)

        segments = [SanitizedField(s, strict) for s in raw.split(FIELD_SEPARATOR)]
        record = cls(
            *segments[: len(POSITIONS)],
            other=segments[len(POSITIONS) :],
            strict=strict,
        )
        # An empty text has no positions at all
        record._width = min(len(segments), len(POSITIONS)) if raw else 0
        return record

    def serialize(self) -> str:
        """Convert the record into a GECOS string, ready for the passwd database.

        Positions present in the parsed string are always written, even if
        empty. Empty positions before a value are written as empty strings.
        """
        if self._other:
            width = len(POSITIONS)
        else:
            width = max(
                (i + 1 for i, f in enumerate(self._fields) if f is not None),
                default=0,
            )
        width = max(width, self._width)

        segments = ["" if f is None else f.text for f in self._fields[:width]]
        segments.extend(f.text for f in self._other)
        return FIELD_SEPARATOR.join(segments)

    def dict(self) -> Serialized:
        """Serialize the record into a JSON friendly dictionary.

        Returns:
            A (typed) dict that can be fed back to :py:meth:`from_dict`.
        """
        return {
            "full_name": None if self.full_name is None else self.full_name.text,
            "room": None if self.room is None else self.room.text,
            "work_phone": None if self.work_phone is None else self.work_phone.text,
            "home_phone": None if self.home_phone is None else self.home_phone.text,
            "other": [f.text for f in self._other],
            "width": self._width,
            "strict": self.strict,
        }

    @classmethod
    def from_dict(cls, data: Serialized, strict: None | bool = None) -> GecosRecord:
        """Build a record from the output of :py:meth:`dict`.

        Args:
            data: The serialized record. ``width`` and ``strict`` are optional.
            strict: Validation mode; if `None`, the serialized mode is used.
        """
        if strict is None:
            strict = data.get("strict")
        record = cls(
            full_name=data.get("full_name"),
            room=data.get("room"),
            work_phone=data.get("work_phone"),
            home_phone=data.get("home_phone"),
            other=data.get("other", []),
            strict=strict,
        )
        record._width = min(data.get("width", 0), len(POSITIONS))
        return record

    def __str__(self) -> str:
        return self.serialize()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, GecosRecord):
            return NotImplemented
        # Equal records must also write the same text
        return (
            self._fields == other._fields
            and self._other == other._other
            and self.serialize() == other.serialize()
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = [f"{name}={getattr(self, name)!r}" for name in POSITIONS]
        values.append(f"other={self._other!r}")
        return f"GecosRecord({', '.join(values)})"
