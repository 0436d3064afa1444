# =======================================================================================
# campus_access/models/enums.py - Enums and Constants
# =======================================================================================
from enum import Enum
from typing import Literal

# Type aliases for better type hints
CardStatus = Literal["active", "blocked"]
AccessType = Literal["allowed", "denied"]
AttendanceStatus = Literal["present", "absent"]

CARD_STATUSES = ("active", "blocked")
ATTENDANCE_STATUSES = ("present", "absent")

class AccessReason(str, Enum):
    """Human readable classification of an access decision."""
    CARD_NOT_FOUND = "Card not found in system"
    CARD_BLOCKED = "Card blocked"
    UNPAID_FEES = "Unpaid fees"
    VALID_ACCESS = "Valid access"
