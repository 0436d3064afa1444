# =======================================================================================
# campus_access/utils/validators.py - Validation Helpers
# =======================================================================================
from typing import Optional

from .exceptions import InvalidCardUIDError, ValidationError
from ..models.enums import CARD_STATUSES, ATTENDANCE_STATUSES


def validate_card_uid(card_uid: Optional[str]) -> str:
    """Card UIDs only need to be non-blank. The value is returned untouched."""
    if card_uid is None or not card_uid.strip():
        raise InvalidCardUIDError("cardUID is required")
    return card_uid


def validate_card_status(card_status: Optional[str]) -> str:
    if card_status not in CARD_STATUSES:
        raise ValidationError("cardStatus must be active or blocked")
    return card_status


def validate_attendance_status(status: Optional[str]) -> str:
    if status not in ATTENDANCE_STATUSES:
        raise ValidationError("status must be present or absent")
    return status
