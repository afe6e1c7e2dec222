from typing import Sequence
import logging

from stagestat.base import Scope
from stagestat.records import Phase, PathRegistry, RecordList
from stagestat.repository import Batch, GitRepository


class DiffCollector:
    """
    Merges the worktree-vs-index and index-vs-HEAD numstat passes into one
    record per path.

    The two passes write into disjoint halves of each record, so the order in
    which they run only decides which path gets the earliest slot. The list
    is left unsorted; callers sort it once both passes are done.
    """

    def __init__(self, records: RecordList, registry: PathRegistry | None = None) -> None:
        if registry is None:
            registry = PathRegistry(records)
        assert registry.records is records, "Registry must index the collected record list"
        self.records = records
        self.registry = registry

    def collect(self, repo: GitRepository, pathspec: Sequence[str] = ()) -> RecordList:
        with Scope() as scope:
            scope.on_failure(lambda e: self._discard(e))
            # Slots are only meaningful for the list as it is during this run
            scope.defer(self.registry.clear)
            self.registry.clear()

            repo.read_index()

            head = repo.resolve_head()
            if head is None:
                logging.debug("HEAD is unborn, comparing the index against the empty tree")
                base = repo.empty_tree_id()
            else:
                base = head

            for phase in Phase:
                logging.debug(f"Collecting {phase.name.lower()} changes")
                callback = lambda batch, phase=phase: self._collect_batch(phase, batch)
                if phase == Phase.WORKTREE:
                    repo.run_worktree_vs_index(pathspec, True, callback)
                else:
                    repo.run_index_vs_commit(pathspec, base, callback)

            logging.debug(f"Collected {len(self.records)} changed paths")
        return self.records

    def _collect_batch(self, phase: Phase, batch: Batch) -> None:
        logging.debug(f"  {phase.name.lower()}: batch of {len(batch)}")
        for entry in batch:
            slot = self.registry.get_or_create(entry.path)
            stats = self.records.get(slot).stats(phase)
            stats.record(entry.added, entry.deleted, entry.is_binary)

    def _discard(self, e: BaseException) -> None:
        logging.debug(f"Discarding {len(self.records)} partially collected records: {e}")
        self.records.reset()
        self.registry.clear()
