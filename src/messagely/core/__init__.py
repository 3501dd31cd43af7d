from .db_manager import BaseDatabaseManager, DatabaseManager, SQLiteDatabaseManager, create_db_manager
from .exceptions import MessagelyError, NotFoundError, ConstraintViolation
from .gateways import UserGateway, MessageGateway

__all__ = [
    "BaseDatabaseManager",
    "DatabaseManager",
    "SQLiteDatabaseManager",
    "create_db_manager",
    "MessagelyError",
    "NotFoundError",
    "ConstraintViolation",
    "UserGateway",
    "MessageGateway",
]
