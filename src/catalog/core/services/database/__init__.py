from .db_manage import DbManageService
from .db_session import DbSessionService
from .migrations import Migration, MigrationError, MigrationRunner

__all__ = [
    "DbManageService",
    "DbSessionService",
    "Migration",
    "MigrationError",
    "MigrationRunner",
]
