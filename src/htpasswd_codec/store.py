"""Load and save htpasswd files through the codec."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Mapping

from htpasswd_codec.codec import CredentialTable, parse, stringify
from htpasswd_codec.constants import COMMENT_PREFIX, DEFAULT_ENCODING, FIELD_SEPARATOR
from htpasswd_codec.errors import HtpasswdFileError, InvalidFieldError, UserNotFoundError

log = logging.getLogger(__name__)


def _read_text(path: Path, encoding: str) -> str:
    try:
        # newline="" keeps "\r" as-is so parse sees the bytes on disk.
        with open(path, encoding=encoding, newline="") as f:
            return f.read()
    except FileNotFoundError:
        raise HtpasswdFileError(f"Htpasswd file not found: {path}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise HtpasswdFileError(f"Cannot read {path}: {exc}") from exc


def _target_mode(path: Path) -> int:
    """Mode for the rewritten file: the existing file's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def validate_entry(username: str, pw_hash: str) -> None:
    """Raise InvalidFieldError if the entry would not parse back unchanged."""
    for label, value in (("username", username), ("hash", pw_hash)):
        if not value.strip():
            raise InvalidFieldError(f"Empty {label}")
        if value != value.strip():
            raise InvalidFieldError(f"{label.capitalize()} has surrounding whitespace: {value!r}")
        if FIELD_SEPARATOR in value:
            raise InvalidFieldError(f"{label.capitalize()} contains '{FIELD_SEPARATOR}': {value!r}")
        if "\n" in value or "\r" in value:
            raise InvalidFieldError(f"{label.capitalize()} contains a line break: {value!r}")
    if username.startswith(COMMENT_PREFIX):
        raise InvalidFieldError(f"Username starts with '{COMMENT_PREFIX}': {username!r}")


def load(
    path: Path,
    *,
    encoding: str = DEFAULT_ENCODING,
    allow_missing: bool = False,
) -> CredentialTable:
    """Read and parse an htpasswd file.

    A missing file yields an empty table when ``allow_missing`` is set,
    otherwise HtpasswdFileError.
    """
    if allow_missing and not path.exists():
        log.debug("htpasswd file %s missing, starting empty", path)
        return {}
    text = _read_text(path, encoding)
    table = parse(text)
    log.debug("Loaded %d entries from %s", len(table), path)
    return table


def save(
    path: Path,
    table: Mapping[str, str],
    *,
    encoding: str = DEFAULT_ENCODING,
    validate: bool = True,
) -> None:
    """Atomically write ``table`` to ``path``.

    Entries are checked with validate_entry first unless ``validate`` is
    off, which is only safe for tables that came out of ``parse``.
    """
    if validate:
        for username, pw_hash in table.items():
            validate_entry(username, pw_hash)

    content = stringify(table)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = _target_mode(path)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
                f.write(content)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise HtpasswdFileError(f"Cannot write {path}: {exc}") from exc
    log.debug("Wrote %d entries to %s", len(table), path)


def set_entry(
    path: Path,
    username: str,
    pw_hash: str,
    *,
    encoding: str = DEFAULT_ENCODING,
    allow_missing: bool = True,
) -> bool:
    """Insert or overwrite one entry. Returns True if the user already existed."""
    validate_entry(username, pw_hash)
    table = load(path, encoding=encoding, allow_missing=allow_missing)
    existed = username in table
    table[username] = pw_hash
    save(path, table, encoding=encoding, validate=False)
    log.info("%s entry for %s in %s", "Updated" if existed else "Added", username, path)
    return existed


def remove_entry(path: Path, username: str, *, encoding: str = DEFAULT_ENCODING) -> None:
    """Delete one entry. Raises UserNotFoundError if it is absent."""
    table = load(path, encoding=encoding)
    if username not in table:
        raise UserNotFoundError(f"User {username!r} not found in {path}")
    del table[username]
    save(path, table, encoding=encoding, validate=False)
    log.info("Removed entry for %s from %s", username, path)


def normalize(path: Path, *, encoding: str = DEFAULT_ENCODING, check: bool = False) -> bool:
    """Rewrite ``path`` in canonical form, dropping comments and bad lines.

    Returns True if the content differs from the canonical form. With
    ``check`` set the file is left untouched.
    """
    text = _read_text(path, encoding)
    table = parse(text)
    changed = stringify(table) != text
    if changed and not check:
        save(path, table, encoding=encoding, validate=False)
        log.info("Normalized %s (%d entries)", path, len(table))
    return changed
