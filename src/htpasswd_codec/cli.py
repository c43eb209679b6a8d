"""Root Typer application for the htpasswd-codec CLI."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from htpasswd_codec import store
from htpasswd_codec.config import get_config
from htpasswd_codec.errors import HtpasswdError, UserNotFoundError

app = typer.Typer(
    name="htpasswd-codec",
    help="Inspect and edit htpasswd credential files (hashes are stored as given).",
    no_args_is_help=True,
)
console = Console()

FileOption = typer.Option(None, "--file", "-f", help="htpasswd file (default: $HTPASSWD_FILE or ./.htpasswd)")


@contextmanager
def _errors() -> Generator[None, None, None]:
    """Turn HtpasswdError into a red message and a non-zero exit."""
    try:
        yield
    except HtpasswdError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(exc.exit_code) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command(name="list")
def list_users(
    file: Optional[Path] = FileOption,
    show_hashes: bool = typer.Option(False, help="Include password hashes"),
) -> None:
    """List users in the file, in file order."""
    cfg = get_config()
    path = file or cfg.htpasswd_file

    with _errors():
        table = store.load(path, encoding=cfg.encoding, allow_missing=cfg.create_missing)

    if not table:
        console.print(f"No entries in {escape(str(path))}.")
        return

    out = Table(title=escape(str(path)))
    out.add_column("User", style="cyan")
    if show_hashes:
        out.add_column("Hash", style="green")
    for username, pw_hash in table.items():
        cells = (username, pw_hash) if show_hashes else (username,)
        out.add_row(*(escape(cell) for cell in cells))
    console.print(out)


@app.command()
def get(
    user: str = typer.Argument(help="Username to look up"),
    file: Optional[Path] = FileOption,
) -> None:
    """Print the stored hash for a user."""
    cfg = get_config()
    path = file or cfg.htpasswd_file

    with _errors():
        table = store.load(path, encoding=cfg.encoding, allow_missing=cfg.create_missing)
        if user not in table:
            raise UserNotFoundError(f"User {user!r} not found in {path}")

    # Plain echo so the hash can be piped without Rich formatting.
    typer.echo(table[user])


@app.command(name="set")
def set_user(
    user: str = typer.Argument(help="Username"),
    pw_hash: str = typer.Argument(help="Already-computed password hash"),
    file: Optional[Path] = FileOption,
) -> None:
    """Add a user or replace their hash."""
    cfg = get_config()
    path = file or cfg.htpasswd_file

    with _errors():
        existed = store.set_entry(path, user, pw_hash, encoding=cfg.encoding)

    verb = "Updated" if existed else "Added"
    console.print(f"[green]{verb} {escape(user)}[/green] in {escape(str(path))}")


@app.command()
def remove(
    user: str = typer.Argument(help="Username to remove"),
    file: Optional[Path] = FileOption,
) -> None:
    """Remove a user from the file."""
    cfg = get_config()
    path = file or cfg.htpasswd_file

    with _errors():
        store.remove_entry(path, user, encoding=cfg.encoding)

    console.print(f"[green]Removed {escape(user)}[/green] from {escape(str(path))}")


@app.command()
def normalize(
    file: Optional[Path] = FileOption,
    check: bool = typer.Option(False, help="Only report; exit 1 if the file is not normalized"),
) -> None:
    """Rewrite the file without comments, blank lines or malformed lines."""
    cfg = get_config()
    path = file or cfg.htpasswd_file

    with _errors():
        changed = store.normalize(path, encoding=cfg.encoding, check=check)

    if not changed:
        console.print(f"Already normalized: {escape(str(path))}")
    elif check:
        console.print(f"[yellow]Not normalized:[/yellow] {escape(str(path))}")
        raise typer.Exit(1)
    else:
        console.print(f"[green]Normalized {escape(str(path))}.[/green]")


if __name__ == "__main__":
    app()
