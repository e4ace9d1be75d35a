"""A small INI file database of named sections holding name=value fields."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Iterator, TextIO, Union

from observa.text import stricmp

PathLike = Union[str, "os.PathLike[str]"]


def _same(a: str | None, b: str | None) -> bool:
    return a is not None and b is not None and stricmp(a, b) == 0


@dataclass
class IniField:
    """One ``name=value`` entry; either part may be missing (None)."""

    name: str | None = None
    value: str | None = None

    def read(self, stream: TextIO) -> bool:
        """Read the next ``name=value`` line from a seekable text stream.

        Lines without ``=`` are skipped. A ``[`` or ``]`` before the
        ``=`` ends the read with the stream left on that character.
        Returns False when no field could be read.
        """
        self.name = None
        self.value = None
        buf: list[str] = []
        while True:
            pos = stream.tell()
            ch = stream.read(1)
            if not ch:
                return False
            if ch == "=":
                break
            if ch in "\r\n":
                buf.clear()
            elif ch in "[]":
                stream.seek(pos)
                return False
            else:
                buf.append(ch)
        self.name = "".join(buf)
        buf = []
        while True:
            ch = stream.read(1)
            if not ch or ch in "\r\n":
                break
            buf.append(ch)
        self.value = "".join(buf)
        return True

    def write(self, stream: TextIO) -> None:
        """Write the field as a line; a field without a name writes nothing."""
        if self.name is None:
            return
        stream.write(self.name)
        if self.value is not None:
            stream.write(f"={self.value}\n")
        else:
            stream.write("\n")


class IniSection:
    """A named section holding fields in file order."""

    def __init__(self, name: str | None = "") -> None:
        self.name = name
        self.fields: list[IniField] = []

    def clear(self) -> None:
        """Remove every field."""
        self.fields.clear()

    def find(self, field_name: str | None) -> IniField | None:
        """The first field named ``field_name``, ignoring case, or None."""
        if field_name is None:
            return None
        return next((f for f in self.fields if _same(f.name, field_name)), None)

    def remove(self, field_name: str | None) -> None:
        """Remove the first field named ``field_name``, ignoring case."""
        target = self.find(field_name)
        if target is not None:
            self.fields.remove(target)

    def add(self, field: IniField | None) -> IniSection:
        """Append ``field``; None is ignored."""
        if field is not None:
            self.fields.append(field)
        return self

    def read(self, stream: TextIO) -> bool:
        """Read a ``[name]`` header and the fields that follow it.

        Stops before the next section header. Returns False when the
        stream ends before a header is complete.
        """
        self.name = ""
        buf: list[str] = []
        in_name = False
        while True:
            ch = stream.read(1)
            if not ch:
                return False
            if ch in "\r\n":
                in_name = False
                buf.clear()
            elif ch == "[":
                in_name = True
            elif ch == "]":
                self.name = "".join(buf)
                break
            elif in_name:
                buf.append(ch)

        while True:
            pos = stream.tell()
            ch = stream.read(1)
            if not ch:
                break
            stream.seek(pos)
            if ch == "[":
                break
            field = IniField()
            if not field.read(stream):
                break
            self.add(field)
        return True

    def write(self, stream: TextIO) -> None:
        """Write the header, the fields and a blank line."""
        stream.write(f"[{self.name or ''}]\n")
        for field in self.fields:
            field.write(stream)
        stream.write("\n")

    def copy(self) -> IniSection:
        """An independent copy of the section and its fields."""
        other = IniSection(self.name)
        other.fields = [replace(f) for f in self.fields]
        return other

    def __iter__(self) -> Iterator[IniField]:
        return iter(list(self.fields))

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        return f"IniSection({self.name!r}, {self.fields!r})"


class IniFileDB:
    """Sections of an INI file; names are matched ignoring case."""

    def __init__(self) -> None:
        self.fname: PathLike | None = None
        self.sections: list[IniSection] = []

    def clear(self) -> None:
        """Remove every section."""
        self.sections.clear()

    def find(self, section_name: str | None) -> IniSection | None:
        """The section named ``section_name``, or None."""
        if section_name is None:
            return None
        return next(
            (s for s in self.sections if _same(s.name, section_name)), None
        )

    def find_field(
        self, section_name: str | None, field_name: str | None
    ) -> IniField | None:
        """The field ``field_name`` of section ``section_name``, or None."""
        section = self.find(section_name)
        return None if section is None else section.find(field_name)

    def get(
        self, section_name: str, field_name: str, default: str | None = None
    ) -> str | None:
        """The field's value; if missing, ``default`` is stored and returned."""
        field = self.find_field(section_name, field_name)
        if field is not None and field.value is not None:
            return field.value
        self.set(section_name, field_name, default)
        return default

    def set(self, section_name: str, field_name: str, value: str | None) -> None:
        """Store ``value``, creating the section and field as needed."""
        if section_name is None or field_name is None:
            raise ValueError("section and field names must not be None")
        section = self.find(section_name)
        if section is None:
            section = IniSection(section_name)
            self.sections.append(section)
        field = section.find(field_name)
        if field is None:
            section.add(IniField(field_name, value))
        else:
            field.value = value

    def remove(self, section_name: str, field_name: str) -> None:
        """Remove a field; a missing section or field is ignored."""
        section = self.find(section_name)
        if section is not None:
            section.remove(field_name)

    def load(self, fname: PathLike) -> None:
        """Replace the contents with the sections read from ``fname``."""
        self.clear()
        self.fname = fname
        with open(fname, encoding="utf-8", newline="") as stream:
            while True:
                section = IniSection("")
                if not section.read(stream):
                    break
                self.sections.append(section)

    def save_as(self, fname: PathLike) -> None:
        """Write every section to ``fname``."""
        self.fname = fname
        with open(fname, "w", encoding="utf-8", newline="\n") as stream:
            for section in self.sections:
                section.write(stream)

    def copy(self) -> IniFileDB:
        """An independent copy of the database."""
        other = IniFileDB()
        other.fname = self.fname
        other.sections = [s.copy() for s in self.sections]
        return other

    def __iter__(self) -> Iterator[IniSection]:
        return iter(list(self.sections))

    def __len__(self) -> int:
        return len(self.sections)