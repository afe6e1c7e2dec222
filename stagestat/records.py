"""
Per-path change records gathered while listing the status of a repository.

A status run fills one `RecordList` from two diff passes. `PathRegistry` maps
each pathname to its slot in the list so that a path reported by both passes
ends up in a single `FileRecord`.
"""

from typing import Dict, Iterator, List
from dataclasses import dataclass, field
from enum import IntEnum


class Phase(IntEnum):
    WORKTREE = 0 # working tree vs index
    INDEX = 1    # index vs base commit


@dataclass
class ChangeStat:
    """One phase's observation of one path."""
    added: int = 0
    deleted: int = 0
    seen: bool = False
    binary: bool = False

    def record(self, added: int, deleted: int, is_binary: bool) -> None:
        assert added >= 0 and deleted >= 0, f"Negative line counts: +{added}/-{deleted}"
        self.seen = True
        self.added = added
        self.deleted = deleted
        # Once binary, always binary for the rest of the run
        self.binary = self.binary or is_binary


@dataclass
class FileRecord:
    name: str
    index_stats: ChangeStat = field(default_factory=ChangeStat)
    worktree_stats: ChangeStat = field(default_factory=ChangeStat)

    def stats(self, phase: Phase) -> ChangeStat:
        if phase == Phase.INDEX:
            return self.index_stats
        return self.worktree_stats


def _name_key(record: FileRecord) -> bytes:
    # git paths are bytes; undecodable ones come through as surrogate escapes
    return record.name.encode('utf-8', 'surrogateescape')


class RecordList:
    """Append-only list of `FileRecord`, in first-discovery order until sorted."""

    def __init__(self) -> None:
        self._records: List[FileRecord] = []

    def append(self, record: FileRecord) -> int:
        self._records.append(record)
        return len(self._records) - 1

    def get(self, index: int) -> FileRecord:
        return self._records[index]

    def names(self) -> List[str]:
        return [record.name for record in self._records]

    def sort_by_name(self) -> None:
        self._records.sort(key=_name_key)

    def reset(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self._records)


class PathRegistry:
    """
    Maps a pathname to the slot of its record in a `RecordList`.

    Only the slot index is stored here; the record (and the canonical copy of
    its name) lives in the list.
    """

    def __init__(self, records: RecordList) -> None:
        self.records = records
        self._slots: Dict[str, int] = {}

    def get_or_create(self, name: str) -> int:
        slot = self._slots.get(name)
        if slot is None:
            slot = self.records.append(FileRecord(name))
            self._slots[name] = slot
        return slot

    def clear(self) -> None:
        self._slots.clear()

    def __len__(self) -> int:
        return len(self._slots)
