"""
CLI entry point for pocketstore.

Usage
─────
  # Secure value (one encrypted slot)
  pocketstore save-secret "my-token"
  pocketstore show-secret --reveal
  pocketstore clear-secret

  # People table
  pocketstore add --name Ana --age 30
  pocketstore list --page 2
  pocketstore update --id 3 --name "Ana María" --age 31
  pocketstore delete --id 3          # asks for confirmation
  pocketstore clear --yes            # deletes every row without asking

  # Desktop GUI
  pocketstore gui

Subcommands are implemented as standalone functions (cmd_save_secret,
cmd_list, cmd_add, …) so they can be unit-tested without invoking argparse.
"""

import argparse
import logging
import sys
from typing import Callable, Optional

from pocketstore.config import AppConfig
from pocketstore.exceptions import PocketStoreError
from pocketstore.secure.backend import EncryptedFileBackend
from pocketstore.secure.store import SecureValueStore
from pocketstore.store.db import PersonRegistry
from pocketstore.store.models import ITEMS_PER_PAGE, Person

__all__ = [
    "build_parser",
    "cmd_save_secret",
    "cmd_show_secret",
    "cmd_clear_secret",
    "cmd_list",
    "cmd_add",
    "cmd_update",
    "cmd_delete",
    "cmd_clear",
    "main",
]

logger = logging.getLogger(__name__)


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: save-secret | show-secret | clear-secret |
                 list | add | update | delete | clear | gui
    """
    parser = argparse.ArgumentParser(
        prog="pocketstore",
        description="Local secure value and people registry",
    )
    parser.add_argument(
        "--home",
        default=None,
        metavar="DIR",
        help="Data directory (default: $POCKETSTORE_HOME or ~/.pocketstore)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    # ── secure value ──────────────────────────────────────────────────────
    save = sub.add_parser("save-secret", help="Store the secure value")
    save.add_argument("value", metavar="VALUE", help="Sensitive value to store")

    show = sub.add_parser("show-secret", help="Print the secure value (masked)")
    show.add_argument(
        "--reveal",
        action="store_true",
        default=False,
        help="Print the value in clear text",
    )

    sub.add_parser("clear-secret", help="Delete the secure value")

    # ── people ────────────────────────────────────────────────────────────
    lst = sub.add_parser("list", help="List people, newest first")
    lst.add_argument(
        "--page",
        type=int,
        default=1,
        metavar="N",
        help=f"Page number, {ITEMS_PER_PAGE} people per page (default: 1)",
    )

    add = sub.add_parser("add", help="Add a person")
    add.add_argument("--name", required=True, metavar="NAME")
    add.add_argument("--age", required=True, metavar="AGE")

    upd = sub.add_parser("update", help="Update a person by id")
    upd.add_argument("--id", required=True, type=int, metavar="ID")
    upd.add_argument("--name", required=True, metavar="NAME")
    upd.add_argument("--age", required=True, metavar="AGE")

    dele = sub.add_parser("delete", help="Delete a person by id")
    dele.add_argument("--id", required=True, type=int, metavar="ID")
    dele.add_argument(
        "--yes", "-y",
        action="store_true",
        default=False,
        help="Do not ask for confirmation",
    )

    clr = sub.add_parser("clear", help="Delete every person")
    clr.add_argument(
        "--yes", "-y",
        action="store_true",
        default=False,
        help="Do not ask for confirmation",
    )

    sub.add_parser("gui", help="Open the desktop GUI")

    return parser


# ── Helpers ───────────────────────────────────────────────────────────────────


def _open_secure(config: AppConfig) -> SecureValueStore:
    return SecureValueStore(
        EncryptedFileBackend(str(config.secure_path), str(config.key_path))
    )


def _open_registry(config: AppConfig) -> PersonRegistry:
    return PersonRegistry(str(config.db_path))


def _confirm(prompt: str, assume_yes: bool, ask: Callable[[str], str]) -> bool:
    """Return True if the user agreed (or --yes was given)."""
    if assume_yes:
        return True
    try:
        answer = ask(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _format_person(person: Person) -> str:
    return f"[{person.id:>4}]  {person.name:<30} {person.age:>4} years"


# ── Command implementations ───────────────────────────────────────────────────


def cmd_save_secret(store: SecureValueStore, value: str) -> None:
    """Store *value* in the secure slot."""
    store.save(value)
    print("Value saved securely.")


def cmd_show_secret(store: SecureValueStore, reveal: bool) -> Optional[str]:
    """Print the secure value (masked unless *reveal*); returns it."""
    value = store.load()
    if value is None:
        print("No data stored.")
        return None
    print(value if reveal else "•" * len(value))
    return value


def cmd_clear_secret(store: SecureValueStore) -> bool:
    """Delete the secure value; prints a notice when nothing was stored."""
    removed = store.clear()
    print("Secure value deleted." if removed else "No data to delete.")
    return removed


def cmd_list(registry: PersonRegistry, page: int) -> list[Person]:
    """Print one page of people followed by the page indicator."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    total_pages = registry.count_pages()
    people = registry.list(page)
    if not people:
        print("No people registered.")
    for person in people:
        print(_format_person(person))
    print(f"Page {page} of {total_pages}")
    return people


def cmd_add(registry: PersonRegistry, name: str, age: str) -> Person:
    """Insert a person and print its new id."""
    person = registry.insert(name, age)
    print(f"Person added with id={person.id}")
    return person


def cmd_update(registry: PersonRegistry, person_id: int, name: str, age: str) -> Person:
    """Overwrite a person's name and age."""
    person = registry.update(person_id, name, age)
    print(f"Record {person_id} updated.")
    return person


def cmd_delete(
    registry: PersonRegistry,
    person_id: int,
    assume_yes: bool = False,
    ask: Callable[[str], str] = input,
) -> bool:
    """
    Delete one person after confirmation.

    Returns:
        False if the user declined (nothing is touched), True once deleted.
    """
    if not _confirm(f"Delete record {person_id}?", assume_yes, ask):
        print("Cancelled.")
        return False
    registry.delete(person_id)
    print(f"Record {person_id} deleted.")
    return True


def cmd_clear(
    registry: PersonRegistry,
    assume_yes: bool = False,
    ask: Callable[[str], str] = input,
) -> Optional[int]:
    """
    Delete every person after confirmation.

    Returns:
        Number of rows removed, or None if the user declined.
    """
    if not _confirm("Delete ALL records?", assume_yes, ask):
        print("Cancelled.")
        return None
    removed = registry.delete_all()
    print(f"{removed} records deleted.")
    return removed


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    config = AppConfig.from_env().with_overrides(home=ns.home, debug=ns.debug)
    level = logging.DEBUG if config.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return 0

    try:
        if ns.subcommand == "save-secret":
            cmd_save_secret(_open_secure(config), ns.value)
        elif ns.subcommand == "show-secret":
            cmd_show_secret(_open_secure(config), reveal=ns.reveal)
        elif ns.subcommand == "clear-secret":
            cmd_clear_secret(_open_secure(config))
        elif ns.subcommand == "list":
            cmd_list(_open_registry(config), page=ns.page)
        elif ns.subcommand == "add":
            cmd_add(_open_registry(config), ns.name, ns.age)
        elif ns.subcommand == "update":
            cmd_update(_open_registry(config), ns.id, ns.name, ns.age)
        elif ns.subcommand == "delete":
            cmd_delete(_open_registry(config), ns.id, assume_yes=ns.yes)
        elif ns.subcommand == "clear":
            cmd_clear(_open_registry(config), assume_yes=ns.yes)
        elif ns.subcommand == "gui":
            from pocketstore.gui.main_window import run
            return run(config)
    except (PocketStoreError, ValueError) as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
