# =======================================================================================
# campus_access/api/routes/students.py - Student Directory Endpoints
# =======================================================================================
from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.engine import Connection
from ...models.schemas import CardStatusUpdate, PaymentStatusUpdate, StudentCreate, StudentOut
from ...services.student_service import StudentService
from ..dependencies import get_db_connection, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])
student_service = StudentService()


@router.get("/students", response_model=List[StudentOut])
def list_students(conn: Connection = Depends(get_db_connection)):
    return student_service.list_students(conn)


# declared before /students/{student_id} so "by-class" is not parsed as an id
@router.get("/students/by-class", response_model=List[StudentOut])
def list_students_by_class(
    category: str = Query(..., description="Student category, e.g. Primary"),
    classLevel: str = Query(..., description="Class level within the category"),
    conn: Connection = Depends(get_db_connection),
):
    return student_service.list_by_class(conn, category, classLevel)


@router.get("/students/{student_id}", response_model=StudentOut)
def get_student(student_id: int, conn: Connection = Depends(get_db_connection)):
    return student_service.get_student(conn, student_id)


@router.post("/students", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def create_student(request: StudentCreate, conn: Connection = Depends(get_db_connection)):
    return student_service.create_student(conn, request)


@router.patch("/students/{student_id}/payment", response_model=StudentOut)
def update_payment_status(
    student_id: int, request: PaymentStatusUpdate, conn: Connection = Depends(get_db_connection)
):
    return student_service.update_payment_status(conn, student_id, request.hasPaid)


@router.patch("/students/{student_id}/card-status", response_model=StudentOut)
def update_card_status(
    student_id: int, request: CardStatusUpdate, conn: Connection = Depends(get_db_connection)
):
    return student_service.update_card_status(conn, student_id, request.cardStatus)


@router.delete("/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: int, conn: Connection = Depends(get_db_connection)):
    student_service.delete_student(conn, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
