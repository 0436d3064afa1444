# =======================================================================================
# campus_access/utils/__init__.py - Utils Package
# =======================================================================================
from .exceptions import *
from .logger import configure_logging, get_logger

__all__ = [
    "CampusAccessError", "ValidationError", "InvalidCardUIDError", "StudentNotFoundError",
    "DuplicateCardUIDError", "AuthenticationError", "CollaboratorError",
    "DirectoryUnavailableError", "AccessLogWriteError", "configure_logging", "get_logger",
]
