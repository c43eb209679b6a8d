"""htpasswd text <-> ordered ``username -> hash`` mapping."""

from __future__ import annotations

from typing import Mapping

from htpasswd_codec.constants import COMMENT_PREFIX, FIELD_SEPARATOR

CredentialTable = dict[str, str]


def parse(text: str) -> CredentialTable:
    """Parse htpasswd text into an ordered ``{username: hash}`` dict.

    Malformed lines (no colon, more than one colon) and ``#`` comments are
    skipped, never reported. A repeated username overwrites the earlier hash
    and keeps its original position.
    """
    table: CredentialTable = {}
    # Lines end at "\n" only; a "\r" before it is dropped by strip().
    for line in text.strip().split("\n"):
        parts = line.strip().split(FIELD_SEPARATOR)
        if len(parts) != 2:
            continue
        # Only reached for lines that split cleanly, "# a:b" included.
        if parts[0].startswith(COMMENT_PREFIX):
            continue
        table[parts[0].strip()] = parts[1].strip()
    return table


def stringify(table: Mapping[str, str]) -> str:
    """Render a table as htpasswd text, one ``user:hash`` line per entry."""
    return "".join(f"{username}{FIELD_SEPARATOR}{pw_hash}\n" for username, pw_hash in table.items())
