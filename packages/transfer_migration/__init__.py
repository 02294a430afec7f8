"""Public interface for the ``transfer_migration`` package.

Re-exports the run entry point, the pipeline stages and the public models.
There is no runtime logic here, only symbol re-exports.
"""

from .api import build_plan, run_migration
from .classify import classify_group, split_legs
from .config import MigrationConfig, load_config
from .errors import ConfigurationError, StoreConnectionError, TransferMigrationError
from .executor import execute_plan
from .grouping import group_candidates
from .loader import load_candidates
from .merge import build_merge
from .models import (
    Action,
    Disposition,
    ExecutionResult,
    GroupKey,
    MergedTransfer,
    MigrationPlan,
    PlanStats,
    RunOutcome,
    TransferCandidate,
)
from .planner import classify_groups, create_action_plan

__all__ = [
    # API
    "run_migration",
    "build_plan",
    "load_candidates",
    "group_candidates",
    "classify_group",
    "classify_groups",
    "split_legs",
    "build_merge",
    "create_action_plan",
    "execute_plan",
    # Configuration / errors
    "MigrationConfig",
    "load_config",
    "TransferMigrationError",
    "ConfigurationError",
    "StoreConnectionError",
    # Models
    "TransferCandidate",
    "GroupKey",
    "Disposition",
    "MergedTransfer",
    "Action",
    "PlanStats",
    "MigrationPlan",
    "ExecutionResult",
    "RunOutcome",
]
