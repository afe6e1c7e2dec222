"""
Access to a git repository for status listing: reading the index, resolving
HEAD and running the two numstat diff passes through GitPython.
"""

from typing import Callable, Iterator, List, NamedTuple, Optional, Sequence
from pathlib import Path
import logging
import os

from git import Repo
from git.exc import GitCommandError

from stagestat.base import Scope

DEFAULT_BATCH_SIZE = 64


class IndexReadError(Exception):
    pass


class NumStat(NamedTuple):
    path: str
    added: int
    deleted: int
    is_binary: bool


Batch = List[NumStat]
BatchCallback = Callable[[Batch], None]


def _decode_path(raw: bytes) -> str:
    return raw.decode('utf-8', 'surrogateescape')


def parse_numstat(output: bytes) -> Iterator[NumStat]:
    """
    Parse `--numstat -z` output.

    Each entry is `<added>\\t<deleted>\\t<path>\\0`. Binary files report `-`
    for both counts. Renames (only when rename detection is on) leave the path
    empty and follow with `<old>\\0<new>\\0`; the new path is used.
    """
    fields = output.split(b'\0')
    i = 0
    while i < len(fields):
        entry = fields[i]
        i += 1
        if not entry:
            continue

        parts = entry.split(b'\t', 2)
        if len(parts) != 3:
            raise ValueError(f"Malformed numstat entry: {entry!r}")
        added, deleted, path = parts

        if not path:
            # rename/copy: <old>\0<new>\0
            if i + 1 >= len(fields):
                raise ValueError(f"Truncated rename entry: {entry!r}")
            path = fields[i + 1]
            i += 2

        if added == b'-' and deleted == b'-':
            yield NumStat(_decode_path(path), 0, 0, True)
        else:
            yield NumStat(_decode_path(path), int(added), int(deleted), False)


def open_repository(path: Path) -> Repo:
    return Repo(path, search_parent_directories=True)


class GitRepository:
    """
    The repository/index accessor and diff engine used by `DiffCollector`.

    Diff output is handed to the callback in batches through one reused
    buffer; a batch is only valid until the callback returns.
    """

    def __init__(self, repo: Repo, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        assert batch_size > 0, f"Batch size must be positive, got {batch_size}"
        self.repo = repo
        self.batch_size = batch_size

    def read_index(self) -> int:
        """Let git load the index; returns the number of entries."""
        try:
            output = self.repo.git.ls_files('--cached', '-z', stdout_as_string=False)
        except GitCommandError as e:
            raise IndexReadError(f"could not read index: {e}") from e
        count = output.count(b'\0')
        logging.debug(f"Read {count} index entries")
        return count

    def empty_tree_id(self) -> str:
        """Id of the empty tree in this repository's object format (SHA-1 or SHA-256)."""
        return self.repo.git.hash_object('-t', 'tree', os.devnull)

    def resolve_head(self) -> Optional[str]:
        """HEAD commit id, or None when the current branch has no commits yet."""
        try:
            return self.repo.git.rev_parse('--verify', '--quiet', 'HEAD^{commit}')
        except GitCommandError as e:
            # --quiet: exit status 1 with no output when HEAD does not resolve
            if e.status != 1:
                raise
            return None

    def refresh_index(self) -> None:
        # Same as `git update-index -q --refresh`: stat-only changes must not
        # show up as modifications in the worktree pass.
        try:
            self.repo.git.update_index('-q', '--refresh')
        except GitCommandError as e:
            logging.warning(f"Could not refresh index: {e}")

    def run_worktree_vs_index(self, pathspec: Sequence[str], ignore_dirty_submodules: bool,
                              callback: BatchCallback) -> None:
        args = ['--numstat', '-z']
        if ignore_dirty_submodules:
            args.append('--ignore-submodules=dirty')
        output = self.repo.git.diff_files(*args, '--', *pathspec, stdout_as_string=False)
        self._deliver(output, callback)

    def run_index_vs_commit(self, pathspec: Sequence[str], base: str,
                            callback: BatchCallback) -> None:
        output = self.repo.git.diff_index('--cached', '--numstat', '-z', base, '--', *pathspec,
                                          stdout_as_string=False)
        self._deliver(output, callback)

    def _deliver(self, output: bytes, callback: BatchCallback) -> None:
        with Scope() as scope:
            batch: Batch = []
            scope.defer(batch.clear)

            for entry in parse_numstat(output):
                batch.append(entry)
                if len(batch) >= self.batch_size:
                    callback(batch)
                    batch.clear()

            if batch:
                callback(batch)
