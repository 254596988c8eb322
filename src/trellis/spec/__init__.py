from .models import (
    BuildResult,
    DirectoryStack,
    Operation,
    OperationKind,
    OperationOutcome,
    OutcomeStatus,
    ParsedLine,
    PlannedStep,
)
from .options import BuildConfig
from .exceptions import ConfigError, StructureRootError, TrellisError

__all__ = [
    "BuildConfig",
    "BuildResult",
    "ConfigError",
    "DirectoryStack",
    "Operation",
    "OperationKind",
    "OperationOutcome",
    "OutcomeStatus",
    "ParsedLine",
    "PlannedStep",
    "StructureRootError",
    "TrellisError",
]
