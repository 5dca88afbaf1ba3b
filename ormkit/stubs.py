"""Templates that the generators fill in."""

from __future__ import annotations

from pathlib import Path

__all__ = ["STUB_DIR", "Stub", "load_stub"]

STUB_DIR = Path(__file__).resolve().parent / "stubs"


def load_stub(filename: str, directory: str | Path | None = None) -> str:
    """Read a template file from ``directory`` (the bundled stubs by default)."""
    base = Path(directory) if directory is not None else STUB_DIR
    return (base / filename).read_bytes().decode("utf-8")


class Stub:
    """A template read once, when it is created."""

    def __init__(self, filename: str, directory: str | Path | None = None) -> None:
        self.filename = filename
        self._context = load_stub(filename, directory)

    def context(self) -> str:
        return self._context