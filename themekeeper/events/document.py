"""Read-only key-path access over decoded JSON objects.

Handlers only need a handful of typed lookups on webhook payloads, so the
document wrapper exposes exactly those and nothing that could mutate the
decoded value.

Usage
-----
>>> doc = Document({"_embedded": {"item": {"file_name": "foo.html"}}})
>>> doc.get_string("_embedded", "item", "file_name")
'foo.html'
>>> doc.get_object("_embedded", "item").get_string("file_name")
'foo.html'

"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .errors import MissingFieldError

_T = typ.TypeVar("_T")


def _dotted(path: tuple[str, ...]) -> str:
    return ".".join(path)


class Document:
    """Typed, path-addressed view of a JSON object."""

    __slots__ = ("_data",)

    def __init__(self, data: cabc.Mapping[str, typ.Any] | None = None) -> None:
        """Wrap a decoded JSON object (``None`` wraps an empty object)."""
        self._data: cabc.Mapping[str, typ.Any] = data if data is not None else {}

    def __repr__(self) -> str:
        """Return a debug representation showing the top-level keys."""
        return f"Document(keys={sorted(self._data)!r})"

    def __eq__(self, other: object) -> bool:
        """Compare documents by their underlying data."""
        if not isinstance(other, Document):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        """Return ``True`` when the document has at least one key."""
        return bool(self._data)

    def lookup(self, *path: str) -> object:
        """Return the raw value at ``path``.

        Raises
        ------
        MissingFieldError
            If any segment of the path is absent or traverses a non-object.

        """
        current: object = self._data
        for depth, key in enumerate(path):
            if not isinstance(current, cabc.Mapping) or key not in current:
                raise MissingFieldError(_dotted(path[: depth + 1]))
            current = current[key]
        return current

    def _typed(self, path: tuple[str, ...], kind: type[_T], label: str) -> _T:
        value = self.lookup(*path)
        # bool is an int subclass; JSON booleans never count as numbers.
        if isinstance(value, bool) and kind is not bool:
            raise MissingFieldError.wrong_type(_dotted(path), label)
        if not isinstance(value, kind):
            raise MissingFieldError.wrong_type(_dotted(path), label)
        return value

    def get_string(self, *path: str) -> str:
        """Return the string at ``path`` or raise ``MissingFieldError``."""
        return self._typed(path, str, "string")

    def get_int(self, *path: str) -> int:
        """Return the integer at ``path`` or raise ``MissingFieldError``."""
        return self._typed(path, int, "integer")

    def get_bool(self, *path: str) -> bool:
        """Return the boolean at ``path`` or raise ``MissingFieldError``."""
        return self._typed(path, bool, "boolean")

    def get_object(self, *path: str) -> Document:
        """Return the nested object at ``path`` as a ``Document``."""
        value = self.lookup(*path)
        if not isinstance(value, cabc.Mapping):
            raise MissingFieldError.wrong_type(_dotted(path), "object")
        return Document(value)

    def get_array(self, *path: str) -> list[Document]:
        """Return the array of objects at ``path`` as documents.

        Raises
        ------
        MissingFieldError
            If the value is absent, not an array, or holds non-object entries.

        """
        value = self.lookup(*path)
        if not isinstance(value, list):
            raise MissingFieldError.wrong_type(_dotted(path), "array")
        documents: list[Document] = []
        for index, entry in enumerate(value):
            if not isinstance(entry, cabc.Mapping):
                raise MissingFieldError.wrong_type(
                    _dotted((*path, str(index))), "object"
                )
            documents.append(Document(entry))
        return documents

    def string_or(self, *path: str, default: str = "") -> str:
        """Return the string at ``path`` or ``default`` when unreadable."""
        try:
            return self.get_string(*path)
        except MissingFieldError:
            return default

    def int_or(self, *path: str, default: int = 0) -> int:
        """Return the integer at ``path`` or ``default`` when unreadable."""
        try:
            return self.get_int(*path)
        except MissingFieldError:
            return default

    def object_or_empty(self, *path: str) -> Document:
        """Return the object at ``path`` or an empty document."""
        try:
            return self.get_object(*path)
        except MissingFieldError:
            return Document()


__all__ = ["Document"]
