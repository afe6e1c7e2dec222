from dataclasses import dataclass

from git import Repo

from stagestat.presenter import NO_INDEX_CHANGES, NO_WORKTREE_CHANGES
from stagestat.repository import DEFAULT_BATCH_SIZE

################################################################################
# Status configuration
################################################################################

# Read from the repository's git config, e.g.
#
#   [stagestat]
#       refresh = false
#       batchSize = 256
#       columnWidth = 14
#       noWorktreeChanges = nothing
#       noIndexChanges = unchanged
CONFIG_SECTION = 'stagestat'


@dataclass
class StatusConfig:
    refresh: bool = True
    batch_size: int = DEFAULT_BATCH_SIZE
    column_width: int = 12
    no_worktree_changes: str = NO_WORKTREE_CHANGES
    no_index_changes: str = NO_INDEX_CHANGES

    def __post_init__(self):
        if not isinstance(self.batch_size, int) or self.batch_size <= 0:
            raise ValueError(f"{CONFIG_SECTION}.batchSize must be a positive integer, got {self.batch_size!r}")
        if not isinstance(self.column_width, int) or self.column_width <= 0:
            raise ValueError(f"{CONFIG_SECTION}.columnWidth must be a positive integer, got {self.column_width!r}")


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    match str(value).strip().lower():
        case 'true' | 'yes' | 'on':
            return True
        case 'false' | 'no' | 'off' | '':
            return False
        case other:
            raise ValueError(f"{CONFIG_SECTION}.refresh: expected a boolean, got {other!r}")


def _as_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{CONFIG_SECTION}.{name}: expected an integer, got {value!r}") from None


def load_config(repo: Repo) -> StatusConfig:
    config = repo.config_reader()
    try:
        if not config.has_section(CONFIG_SECTION):
            return StatusConfig()
        # git variable names are case-insensitive
        values = {name.lower(): value for name, value in config.items(CONFIG_SECTION)}
    finally:
        config.release()

    result = StatusConfig()
    if 'refresh' in values:
        result.refresh = _as_bool(values['refresh'])
    if 'batchsize' in values:
        result.batch_size = _as_int('batchSize', values['batchsize'])
    if 'columnwidth' in values:
        result.column_width = _as_int('columnWidth', values['columnwidth'])
    if 'noworktreechanges' in values:
        result.no_worktree_changes = str(values['noworktreechanges'])
    if 'noindexchanges' in values:
        result.no_index_changes = str(values['noindexchanges'])

    # validate the merged values
    return StatusConfig(**vars(result))
