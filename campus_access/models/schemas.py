# =======================================================================================
# campus_access/models/schemas.py - Pydantic Models
# =======================================================================================
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from .enums import AccessType, AttendanceStatus, CardStatus

# ========== Card tap / access decision ==========
class RFIDLogRequest(BaseModel):
    """Card tap sent by a reader."""
    cardUID: str = Field(..., min_length=1, description="UID encoded on the RFID card")

class RFIDLogResponse(BaseModel):
    """
    Access decision for a tap. `success` means the decision was computed,
    not that access was granted.
    """
    success: bool = True
    access: AccessType
    reason: str
    studentName: Optional[str] = None
    logId: Optional[int] = None

class AccessLogEntry(BaseModel):
    id: int
    cardUID: str
    studentName: Optional[str] = None
    timestamp: datetime
    access: AccessType
    reason: str

# ========== Students ==========
class StudentRecord(BaseModel):
    """Row from the student directory, as used by the decision rule."""
    id: int
    name: str
    email: str
    card_uid: str
    has_paid: bool
    card_status: CardStatus

class StudentOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    email: str
    cardUID: str
    hasPaid: bool
    cardStatus: CardStatus
    institutionId: Optional[int] = None
    photoURL: Optional[str] = None
    class_name: Optional[str] = Field(None, alias="class")
    category: Optional[str] = None
    classLevel: Optional[str] = None
    program: Optional[str] = None
    age: Optional[int] = None
    created_at: Optional[datetime] = None

class StudentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=255)
    cardUID: str = Field(..., min_length=1, max_length=100)
    class_name: Optional[str] = Field(None, alias="class")
    category: Optional[str] = None
    classLevel: Optional[str] = None
    program: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    institutionId: Optional[int] = None
    photoURL: Optional[str] = None

class PaymentStatusUpdate(BaseModel):
    hasPaid: bool

class CardStatusUpdate(BaseModel):
    cardStatus: CardStatus

# ========== Attendance ==========
class AttendanceRecordIn(BaseModel):
    studentId: int
    status: AttendanceStatus
    date: date

class AttendanceSaveRequest(BaseModel):
    records: List[AttendanceRecordIn]

class AttendanceRecordOut(BaseModel):
    id: int
    studentId: int
    date: date
    status: AttendanceStatus
    createdAt: Optional[datetime] = None

class AttendanceSaveResponse(BaseModel):
    success: bool
    saved: int

# ========== Admin Auth ==========
class AdminAuthRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class AdminInfo(BaseModel):
    id: int
    username: str

class AdminAuthResponse(BaseModel):
    token: Optional[str] = None
    message: Optional[str] = None
    admin: Optional[AdminInfo] = None

# ========== Health for dashboard ==========
class HealthResponse(BaseModel):
    status: str                 # "ok" | "error"
    dataAvailable: bool
    message: Optional[str] = None

# ========== Analytics ==========
class Summary(BaseModel):
    totalStudents: int
    paidStudents: int
    unpaidStudents: int
    activeCards: int
    blockedCards: int
    todayAccess: int
    deniedAccess: int

class AnalyticsResponse(BaseModel):
    summary: Summary

# ========== Logs ==========
class LogsResponse(BaseModel):
    logs: List[AccessLogEntry]
    total: int
    limit: int
    offset: int
