from typing import Callable, Optional, Sequence, TextIO
from dataclasses import dataclass
import sys

from stagestat.records import ChangeStat, FileRecord

DEFAULT_MODIFIED_FMT = "%12s %12s %s"
NO_WORKTREE_CHANGES = "nothing"
NO_INDEX_CHANGES = "unchanged"


def modified_fmt(column_width: int) -> str:
    return f"%{column_width}s %{column_width}s %s"


def status_header(fmt: str = DEFAULT_MODIFIED_FMT) -> str:
    return "      " + fmt % ("staged", "unstaged", "path")


def format_changes(stat: ChangeStat, no_changes: str) -> str:
    if stat.binary:
        return "binary"
    if stat.seen:
        return f"+{stat.added}/-{stat.deleted}"
    return no_changes


@dataclass
class ListOptions:
    header: Optional[str]
    print_item: Callable[[int, FileRecord, TextIO], None]


def print_list(items: Sequence[FileRecord], options: ListOptions, out: TextIO | None = None) -> None:
    """Print the header and one numbered line per item. Prints nothing for an empty list."""
    if out is None:
        out = sys.stdout
    if not items:
        return

    if options.header:
        out.write(options.header + "\n")

    for i, item in enumerate(items):
        options.print_item(i, item, out)
        out.write("\n")


class FileItemPrinter:
    def __init__(self,
                 fmt: str = DEFAULT_MODIFIED_FMT,
                 no_worktree_changes: str = NO_WORKTREE_CHANGES,
                 no_index_changes: str = NO_INDEX_CHANGES) -> None:
        self.fmt = fmt
        self.no_worktree_changes = no_worktree_changes
        self.no_index_changes = no_index_changes

    def format_item(self, i: int, record: FileRecord) -> str:
        index = format_changes(record.index_stats, self.no_index_changes)
        worktree = format_changes(record.worktree_stats, self.no_worktree_changes)
        return " %2d: %s" % (i + 1, self.fmt % (index, worktree, record.name))

    def __call__(self, i: int, record: FileRecord, out: TextIO) -> None:
        out.write(self.format_item(i, record))

    def options(self) -> ListOptions:
        return ListOptions(header=status_header(self.fmt), print_item=self)


def print_status(records: Sequence[FileRecord], options: ListOptions, out: TextIO | None = None) -> None:
    """The listing followed by a blank line, which is printed even when nothing changed."""
    if out is None:
        out = sys.stdout
    print_list(records, options, out)
    out.write("\n")
