from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .errors import NoActiveTarget


@dataclass(frozen=True)
class Position:
    line: int
    column: int


@dataclass(frozen=True)
class EditorContext:
    file_path: Optional[str] = None
    line: int = 0
    column: int = 0

    @property
    def cursor(self) -> Position:
        return Position(self.line, self.column)

    def require_file(self) -> str:
        if not self.file_path:
            raise NoActiveTarget()
        return self.file_path


def offset_of(text: str, pos: Position) -> int:
    """Character offset of pos, clamped to the document."""
    lines = text.split("\n")
    if pos.line < 0:
        return 0
    if pos.line >= len(lines):
        return len(text)
    start = sum(len(line) + 1 for line in lines[: pos.line])
    line = lines[pos.line]
    width = len(line) - 1 if line.endswith("\r") else len(line)
    return start + min(max(pos.column, 0), width)


def insert_text(text: str, edits: Iterable[Tuple[Position, str]]) -> str:
    # Positions refer to the document before any insert; equal positions keep their order.
    resolved = [(offset_of(text, pos), i, payload) for i, (pos, payload) in enumerate(edits)]
    for offset, _, payload in sorted(resolved, key=lambda e: (-e[0], -e[1])):
        text = text[:offset] + payload + text[offset:]
    return text
