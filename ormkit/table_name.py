"""Table references with optional alias and forced indexes."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["TableName"]


def _quoted(text: str) -> str:
    return text if "`" in text else f"`{text}`"


@dataclass
class TableName:
    """A table reference rendered for a FROM clause."""

    table: str
    alias: str = ""
    indexes: list[str] = field(default_factory=list)

    def as_alias(self, alias: str) -> TableName:
        self.alias = alias
        return self

    def force_index(self, index: str, *args: str) -> TableName:
        self.indexes.extend((index, *args))
        return self

    def _with_indexes(self, rendered: str) -> str:
        if not self.indexes:
            return rendered
        joined = ",".join(_quoted(index) for index in self.indexes)
        return f"{rendered} FORCE INDEX ({joined})"

    def __str__(self) -> str:
        plain = "`" not in self.table
        if self.alias:
            if plain:
                rendered = f"`{self.table}` AS `{self.alias}`"
            else:
                rendered = f"{self.table} AS {self.alias}"
            return self._with_indexes(rendered)
        if plain:
            return self._with_indexes(f"`{self.table}`")
        # A table given with its own quoting is used verbatim.
        return self.table