# =======================================================================================
# campus_access/models/tables.py - Table Definitions
# =======================================================================================
from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Integer, MetaData, String, Table, Text,
    UniqueConstraint, func,
)

metadata = MetaData()

students = Table(
    "students",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("email", String(255), nullable=False),
    Column("card_uid", String(100), nullable=False, unique=True, index=True),
    Column("has_paid", Boolean, nullable=False, default=False),
    Column("card_status", String(16), nullable=False, default="active"),
    Column("institution_id", Integer, nullable=True),
    Column("photo_url", String(500), nullable=True),
    Column("class_name", String(100), nullable=True),
    Column("category", String(100), nullable=True),
    Column("class_level", String(100), nullable=True),
    Column("program", String(100), nullable=True),
    Column("age", Integer, nullable=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)

access_logs = Table(
    "access_logs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("card_uid", Text, nullable=False, index=True),
    Column("student_name", String(200), nullable=True),
    Column("timestamp", DateTime, nullable=False, index=True),
    Column("access", String(16), nullable=False),
    Column("reason", String(100), nullable=False),
)

attendance = Table(
    "attendance",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("student_id", Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
    Column("date", Date, nullable=False, index=True),
    Column("status", String(16), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("student_id", "date", name="uq_attendance_student_date"),
)

admins = Table(
    "admins",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(100), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)
