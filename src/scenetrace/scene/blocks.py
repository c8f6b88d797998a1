"""Block splitter for Unity's multi-document scene format.

A scene file is a flat sequence of YAML documents, each introduced by a
header line::

    --- !u!114 &136406839

carrying the object's class number (kind) and its file-local id. This
module cuts the text into those blocks without interpreting any YAML.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

# Headers are only recognised at the start of a physical line.
HEADER_PATTERN = re.compile(r"^---\s*!u!(?P<kind>\d+)\s*&(?P<id>-?\d+)")
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Block:
    """One serialized object from a scene document.

    Attributes:
        kind: Unity class number from the header.
        id: File-local object id (signed 64-bit).
        lines: Raw body lines following the header, header excluded.
        line_number: 1-based line number of the header.
    """

    kind: int
    id: int
    lines: tuple[str, ...] = ()
    line_number: int = 0


def physical_lines(text: str) -> list[str]:
    """Split text on CR, LF and CRLF only.

    Other Unicode line separators (U+2028, form feed, ...) stay inside
    the line. A trailing line break does not start an empty line.
    """
    lines = LINE_BREAK_PATTERN.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def iter_blocks(text: str) -> Iterator[Block]:
    """Yield blocks in document order.

    Lines before the first header are discarded. Text without any
    header yields nothing.

    Args:
        text: Full text of one scene document.

    Yields:
        Block for every header found.
    """
    kind: int | None = None
    block_id = 0
    header_line = 0
    body: list[str] = []

    for line_number, line in enumerate(physical_lines(text), start=1):
        header = HEADER_PATTERN.match(line)
        if header:
            if kind is not None:
                yield Block(kind, block_id, tuple(body), header_line)
            kind = int(header.group("kind"))
            block_id = int(header.group("id"))
            header_line = line_number
            body = []
        elif kind is not None:
            body.append(line)

    if kind is not None:
        yield Block(kind, block_id, tuple(body), header_line)


def index_blocks(blocks: Iterable[Block]) -> dict[int, Block]:
    """Map block id to block. A repeated id keeps the last block seen."""
    index: dict[int, Block] = {}
    for block in blocks:
        index[block.id] = block
    return index


@dataclass(frozen=True)
class SceneDocument:
    """Text of one scene document plus where it came from.

    ``blocks()`` starts a fresh pass over the text on every call, so the
    graph builder can make as many passes as it needs.
    """

    text: str
    path: str = ""

    def blocks(self) -> Iterator[Block]:
        """Iterate the document's blocks from the beginning."""
        return iter_blocks(self.text)
