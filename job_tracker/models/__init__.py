from .application import (
    ACTIVE_STATUSES,
    ApplicationCard,
    ApplicationFields,
    ApplicationRecord,
    ApplicationStats,
    ApplicationStatus,
)

__all__ = [
    "ACTIVE_STATUSES",
    "ApplicationCard",
    "ApplicationFields",
    "ApplicationRecord",
    "ApplicationStats",
    "ApplicationStatus",
]
