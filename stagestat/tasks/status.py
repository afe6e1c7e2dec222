from typing import Sequence, TextIO
from pathlib import Path
import logging
import sys

from git.exc import InvalidGitRepositoryError, NoSuchPathError

from stagestat.base import Scope
from stagestat.collector import DiffCollector
from stagestat.config import load_config
from stagestat.messages import error
from stagestat.presenter import FileItemPrinter, ListOptions, modified_fmt, print_status
from stagestat.records import RecordList
from stagestat.repository import GitRepository, IndexReadError, open_repository


def run_status(repo: GitRepository, pathspec: Sequence[str], records: RecordList,
               options: ListOptions, out: TextIO | None = None) -> bool:
    if out is None:
        out = sys.stdout

    records.reset()

    try:
        DiffCollector(records).collect(repo, pathspec)
    except IndexReadError as e:
        logging.debug(f"Status failed: {e}")
        error("could not read index")
        return False

    # Each pass is ordered on its own, but there were two of them
    records.sort_by_name()

    print_status(records, options, out)
    return True


def status(path: Path, pathspec: Sequence[str] = (), refresh: bool | None = None,
           batch_size: int | None = None, out: TextIO | None = None) -> bool:
    if not path.exists():
        error(f"Path {path} does not exist")
        return False

    with Scope() as scope:
        try:
            repo = open_repository(path)
        except (InvalidGitRepositoryError, NoSuchPathError):
            error(f"{path} is not inside a git repository")
            return False
        scope.defer(lambda: repo.close())

        if repo.bare:
            error(f"{path} is a bare repository")
            return False

        try:
            config = load_config(repo)
        except ValueError as e:
            error(f"Invalid configuration: {e}")
            return False
        if refresh is not None:
            config.refresh = refresh
        if batch_size is not None:
            config.batch_size = batch_size

        git_repo = GitRepository(repo, config.batch_size)
        if config.refresh:
            git_repo.refresh_index()

        printer = FileItemPrinter(
            modified_fmt(config.column_width),
            no_worktree_changes=config.no_worktree_changes,
            no_index_changes=config.no_index_changes)

        records = RecordList()
        scope.defer(records.reset)

        return run_status(git_repo, pathspec, records, printer.options(), out)
