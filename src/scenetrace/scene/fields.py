"""Line-level conventions inside a block body.

Body lines are interpreted one at a time after stripping indentation:

- ``name: value`` is a field line
- ``{fileID: 123, ...}`` inside a value is a pointer to another block
- ``guid: <32 hex>`` inside a value is a reference to an asset/script
- ``- ...`` is an item of the list opened by the preceding field line

Every lookup here is "first match wins"; later duplicates are ignored.
"""

from __future__ import annotations

import re
from typing import Iterable

FIELD_PATTERN = re.compile(r"^(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*:\s*(?P<value>.*)$")
POINTER_PATTERN = re.compile(r"fileID:\s*(?P<id>-?\d+)")
GUID_PATTERN = re.compile(r"guid:\s*(?P<guid>[0-9a-fA-F]{32})")
LIST_ITEM_PREFIX = "-"


def parse_field(line: str) -> tuple[str, str] | None:
    """Split a body line into (field name, value text), or None."""
    match = FIELD_PATTERN.match(line.strip())
    if not match:
        return None
    return match.group("name"), match.group("value")


def find_pointer(text: str) -> int | None:
    """Return the first ``fileID`` pointer in text."""
    match = POINTER_PATTERN.search(text)
    return int(match.group("id")) if match else None


def find_guid(text: str) -> str | None:
    """Return the first 32-hex-digit guid in text, lower-cased."""
    match = GUID_PATTERN.search(text)
    return match.group("guid").lower() if match else None


def first_field_value(lines: Iterable[str], name: str) -> str | None:
    """Return the stripped value of the first field line called name."""
    for line in lines:
        parsed = parse_field(line)
        if parsed and parsed[0] == name:
            return parsed[1].strip()
    return None


def list_field_pointers(lines: Iterable[str], name: str) -> list[int]:
    """Collect pointers from the list opened by the first ``name:`` line.

    The list ends at the first following line that is not a list item,
    or at the end of the block. Items without a pointer are skipped but
    do not end the list. Duplicates are kept in order.
    """
    pointers: list[int] = []
    in_list = False

    for line in lines:
        stripped = line.strip()
        if not in_list:
            parsed = parse_field(stripped)
            if parsed and parsed[0] == name:
                in_list = True
            continue

        if not stripped.startswith(LIST_ITEM_PREFIX):
            break
        pointer = find_pointer(stripped)
        if pointer is not None:
            pointers.append(pointer)

    return pointers
