import io

from stagestat.presenter import (
    FileItemPrinter,
    ListOptions,
    format_changes,
    modified_fmt,
    print_list,
    print_status,
    status_header,
)
from stagestat.records import ChangeStat, FileRecord


def _stat(added=0, deleted=0, seen=False, binary=False) -> ChangeStat:
    return ChangeStat(added=added, deleted=deleted, seen=seen, binary=binary)


def test_format_changes():
    assert format_changes(_stat(), "nothing") == "nothing"
    assert format_changes(_stat(3, 1, seen=True), "nothing") == "+3/-1"
    assert format_changes(_stat(0, 0, seen=True), "nothing") == "+0/-0"
    assert format_changes(_stat(seen=True, binary=True), "nothing") == "binary"
    # binary wins even over the counts
    assert format_changes(_stat(7, 7, seen=True, binary=True), "unchanged") == "binary"


def test_header():
    assert status_header() == "      " + "      staged" + " " + "    unstaged" + " path"
    assert status_header(modified_fmt(8)) == "      " + "  staged" + " " + "unstaged" + " path"


def test_item_lines():
    printer = FileItemPrinter()

    a = FileRecord("a.txt", index_stats=_stat(3, 1, seen=True), worktree_stats=_stat(3, 1, seen=True))
    b = FileRecord("b.bin", index_stats=_stat(seen=True, binary=True))

    assert printer.format_item(0, a) == "  1: " + " " * 7 + "+3/-1" + " " + " " * 7 + "+3/-1" + " a.txt"
    assert printer.format_item(1, b) == "  2: " + " " * 6 + "binary" + " " + " " * 5 + "nothing" + " b.bin"


def test_unseen_index_side_uses_its_own_placeholder():
    printer = FileItemPrinter(no_worktree_changes="-", no_index_changes="same")
    record = FileRecord("x", worktree_stats=_stat(1, 0, seen=True))
    assert printer.format_item(9, record) == " 10: " + " " * 8 + "same" + " " + " " * 7 + "+1/-0" + " x"


def test_print_list_empty_prints_nothing():
    out = io.StringIO()
    print_list([], ListOptions(header="header", print_item=FileItemPrinter()), out)
    assert out.getvalue() == ""


def test_print_status():
    records = [
        FileRecord("a.txt", index_stats=_stat(3, 1, seen=True), worktree_stats=_stat(3, 1, seen=True)),
        FileRecord("b.bin", index_stats=_stat(seen=True, binary=True)),
    ]
    out = io.StringIO()
    print_status(records, FileItemPrinter().options(), out)

    lines = out.getvalue().split("\n")
    assert lines[0] == status_header()
    assert lines[1].endswith(" a.txt")
    assert lines[2].endswith(" b.bin")
    assert lines[3:] == ["", ""]


def test_print_status_empty_is_blank_line():
    out = io.StringIO()
    print_status([], FileItemPrinter().options(), out)
    assert out.getvalue() == "\n"
