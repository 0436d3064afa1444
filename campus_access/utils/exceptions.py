# =======================================================================================
# campus_access/utils/exceptions.py - Custom Exceptions
# =======================================================================================
class CampusAccessError(Exception):
    """Base exception for the campus access control backend."""
    status_code = 500

class ValidationError(CampusAccessError):
    """Raised when request data is rejected before touching the database."""
    status_code = 400

class InvalidCardUIDError(ValidationError):
    """Raised when a card UID is missing or blank."""
    pass

class StudentNotFoundError(CampusAccessError):
    """Raised when a student id does not exist."""
    status_code = 404

class DuplicateCardUIDError(CampusAccessError):
    """Raised when a card UID is already assigned to another student."""
    status_code = 409

class AuthenticationError(CampusAccessError):
    """Raised when admin credentials or tokens are invalid."""
    status_code = 401

class CollaboratorError(CampusAccessError):
    """Raised when a backing store cannot be reached or rejects a call."""
    status_code = 503

class DirectoryUnavailableError(CollaboratorError):
    """Raised when the student directory lookup fails."""
    pass

class AccessLogWriteError(CollaboratorError):
    """Raised when an access log entry cannot be appended."""
    pass
