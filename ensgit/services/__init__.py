"""Application services.

Services coordinate the domain layer (core/) with infrastructure (git/) and
report through the output layer.
"""

from ensgit.services.dispatch import (
    Action,
    DispatchError,
    DispatchReport,
    DispatchService,
    ModuleOutcome,
    ModuleState,
)

__all__ = [
    "Action",
    "DispatchError",
    "DispatchReport",
    "DispatchService",
    "ModuleOutcome",
    "ModuleState",
]
