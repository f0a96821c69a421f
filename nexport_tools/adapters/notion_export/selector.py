"""Archive entry selection.

Pick text payloads out of an export archive by entry name.
"""

from collections.abc import Callable

from .archive import ExportArchive
from .exceptions import NoMatchError

EntryPredicate = Callable[[str], bool]


def ends_with(suffix: str) -> EntryPredicate:
    """Predicate matching entry names that end with ``suffix``."""

    def predicate(name: str) -> bool:
        return name.endswith(suffix)

    return predicate


is_markdown = ends_with(".md")


def csv_predicate(only_current_view: bool = False) -> EntryPredicate:
    """Predicate for a database CSV.

    Notion writes ``<name>_all.csv`` with every row and ``<name>.csv`` with the
    rows of the current view.
    """
    return ends_with(".csv" if only_current_view else "_all.csv")


def select_one(archive: ExportArchive, predicate: EntryPredicate) -> str:
    """Text of the first entry whose name matches ``predicate``.

    Raises:
        NoMatchError: No entry matched
    """
    for entry in archive.entries():
        if predicate(entry.name):
            return entry.text()

    raise NoMatchError("Could not find file in ZIP.")


def select_all(archive: ExportArchive, predicate: EntryPredicate) -> list[str]:
    """Texts of every matching entry, in archive order.

    Unlike ``select_one`` this returns an empty list when nothing matches.
    """
    return [entry.text() for entry in archive.entries() if predicate(entry.name)]
