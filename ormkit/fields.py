"""Column expressions rendered as MySQL fragments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["AsField", "Fields", "as_handle"]


def _has_back_quote(text: str) -> bool:
    return "`" in text


def _quoted(text: str) -> str:
    """Wrap ``text`` in back quotes unless it already carries some."""
    return text if _has_back_quote(text) else f"`{text}`"


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quoted_values(value: Any, more: tuple[Any, ...]) -> str:
    return ",".join(f"'{_format_value(v)}'" for v in (value, *more))


def as_handle(field: str, alias: str) -> str:
    """Render ``field AS `alias```, quoting a bare field name."""
    return f"{_quoted(field)} AS `{alias}`"


@dataclass(frozen=True)
class AsField:
    """An aggregate expression that may be given an alias."""

    expr: str

    def as_(self, alias: str) -> str:
        return as_handle(self.expr, alias)

    def __str__(self) -> str:
        return self.expr


@dataclass(frozen=True)
class Fields:
    """A table column that renders SQL fragments about itself."""

    name: str

    @property
    def _plain(self) -> bool:
        return not _has_back_quote(self.name)

    def eq(self, value: Any) -> str:
        return f"{_quoted(self.name)} = '{_format_value(value)}'"

    def values(self) -> str:
        return f"{_quoted(self.name)} = VALUES({self.name})"

    def distinct(self) -> str:
        return f"DISTINCT({_quoted(self.name)})"

    def isnull(self) -> str:
        return f"ISNULL({_quoted(self.name)})"

    def field(self, value: Any, *args: Any) -> str:
        return f"FIELD({_quoted(self.name)}, {_quoted_values(value, args)})"

    def in_(self, value: Any, *args: Any) -> str:
        values = _quoted_values(value, args)
        if self._plain:
            return f"`{self.name}` IN({values})"
        return f"{self.name} IN ({values})"

    def not_in(self, value: Any, *args: Any) -> str:
        values = _quoted_values(value, args)
        if self._plain:
            return f"`{self.name}` NOT IN({values})"
        return f"{self.name} NOT IN ({values})"

    def pre(self, prefix: str) -> Fields:
        """Qualify the column with a table name or alias."""
        return Fields(f"{_quoted(prefix)}.{_quoted(self.name)}")

    def as_(self, alias: str) -> str:
        return as_handle(self.name, alias)

    def asc(self) -> str:
        return f"{_quoted(self.name)} ASC"

    def desc(self) -> str:
        return f"{_quoted(self.name)} DESC"

    def count(self) -> AsField:
        return AsField(f"COUNT({_quoted(self.name)})")

    def sum(self) -> AsField:
        return AsField(f"SUM({_quoted(self.name)})")

    def __str__(self) -> str:
        return _quoted(self.name)