"""
In-memory representation of a parsed cfg document.

The hierarchy is Document -> Record -> Tuple -> Attribute:

    'my network'            <- record 1, tuple 1: one attribute
        ip=1.2.3.4          <- record 1, tuple 2
    creds                   <- record 2, tuple 1
        user=alice          <- record 2, tuple 2

Attribute values are plain text. ``value=None`` means the attribute was
written without ``=`` (``foo``); ``value=""`` means it was written with
an empty value (``foo=``).

Lookups and maps follow source order, and the first match wins.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Attribute(BaseModel):
    """
    A name with an optional value.

    Attributes:
        name: Attribute name
        value: Attribute value, None when no ``=`` was given
    """

    name: str
    value: str | None = None

    @property
    def has_value(self) -> bool:
        """True when the attribute carries a non-empty value."""
        return bool(self.value)


class Tuple(BaseModel):
    """One source line's worth of attributes."""

    attributes: list[Attribute] = Field(min_length=1)

    @property
    def primary_key(self) -> str:
        """Name of the first attribute."""
        return self.attributes[0].name

    def lookup(self, name: str) -> tuple[list[Attribute], bool]:
        """Return the attributes called ``name`` and whether any were found."""
        out = [a for a in self.attributes if a.name == name]
        return out, len(out) > 0

    def build_map(self) -> dict[str, list[str]]:
        """
        Map each attribute name to all of its non-empty values.

        A valueless attribute still registers its name, with no values.
        """
        out: dict[str, list[str]] = {}
        for a in self.attributes:
            values = out.setdefault(a.name, [])
            if a.has_value:
                values.append(a.value)  # type: ignore[arg-type]
        return out


class Record(BaseModel):
    """A group of tuples: one unindented line plus its indented lines."""

    tuples: list[Tuple] = Field(min_length=1)

    @property
    def primary_key(self) -> str:
        """Primary key of the first tuple."""
        return self.tuples[0].primary_key

    def lookup(self, name: str) -> tuple[list[Tuple], bool]:
        """Return the tuples whose primary key is ``name`` and whether any were found."""
        out = [t for t in self.tuples if t.primary_key == name]
        return out, len(out) > 0

    def build_map(self) -> dict[str, dict[str, list[str]]]:
        """Map tuple primary keys to tuple attribute maps."""
        out: dict[str, dict[str, list[str]]] = {}
        for t in self.tuples:
            if t.primary_key not in out:
                out[t.primary_key] = t.build_map()
        return out

    def flat_map(self) -> dict[str, str]:
        """
        Union of all tuples' attributes.

        Only the first instance of a name is kept. The value is the first
        non-empty value of that attribute within its tuple, or "" if none.
        """
        return _flatten(self.tuples)


class Document(BaseModel):
    """A complete cfg document: records in source order."""

    records: list[Record] = Field(default_factory=list)

    def lookup(self, name: str) -> tuple[list[Record], bool]:
        """Return the records whose primary key is ``name`` and whether any were found."""
        out = [r for r in self.records if r.primary_key == name]
        return out, len(out) > 0

    def keys(self) -> list[str]:
        """Primary keys of all records, in order."""
        return [r.primary_key for r in self.records]

    def build_map(self) -> dict[str, dict[str, dict[str, list[str]]]]:
        """Map record primary keys to tuple primary keys to attribute maps."""
        out: dict[str, dict[str, dict[str, list[str]]]] = {}
        for r in self.records:
            if r.primary_key not in out:
                out[r.primary_key] = r.build_map()
        return out

    def flat_map(self) -> dict[str, str]:
        """Union of every record's tuples' attributes; first name wins."""
        return _flatten(t for r in self.records for t in r.tuples)

    def is_equivalent(self, other: Document) -> bool:
        """
        Structural equality as preserved by an emit/parse round trip.

        Names must match exactly. A missing value and an empty value compare
        equal because both are emitted as ``name=``.
        """
        return _shape(self) == _shape(other)


# cfg(2) calls the document a Cfg
Cfg = Document


def _flatten(tuples) -> dict[str, str]:
    out: dict[str, str] = {}
    for t in tuples:
        for name, values in t.build_map().items():
            if name in out:
                continue
            out[name] = values[0] if values else ""
    return out


def _shape(doc: Document) -> list[list[list[tuple[str, str]]]]:
    return [
        [[(a.name, a.value or "") for a in t.attributes] for t in r.tuples]
        for r in doc.records
    ]
