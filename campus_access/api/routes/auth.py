# =======================================================================================
# campus_access/api/routes/auth.py - Frontend Authentication Endpoints
# =======================================================================================
from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Connection
from ...config import config
from ...models.schemas import AdminAuthRequest, AdminAuthResponse, AdminInfo
from ...utils.logger import get_logger
from ..dependencies import auth_service, get_db_connection, require_admin

router = APIRouter()
logger = get_logger("api.auth")


@router.post("/auth/register", response_model=AdminAuthResponse)
def register_admin(
    request: AdminAuthRequest, conn: Connection = Depends(get_db_connection)
):
    if not config.ADMIN_REGISTRATION_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin registration is disabled",
        )
    if auth_service.username_exists(conn, request.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )

    admin_id = auth_service.create_admin(conn, request.username, request.password)
    logger.info("Registered admin %s", request.username)

    token = auth_service.create_token(admin_id, request.username)
    return AdminAuthResponse(
        token=token,
        message="Admin created successfully",
        admin=AdminInfo(id=admin_id, username=request.username),
    )


@router.post("/auth/login", response_model=AdminAuthResponse)
def login_admin(
    request: AdminAuthRequest, conn: Connection = Depends(get_db_connection)
):
    admin = auth_service.authenticate_admin(conn, request.username, request.password)
    if not admin:
        logger.warning("Failed login for %s", request.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    token = auth_service.create_token(admin["id"], admin["username"])
    return AdminAuthResponse(
        token=token,
        message="Login successful",
        admin=AdminInfo(id=admin["id"], username=admin["username"]),
    )


@router.get("/auth/me", response_model=AdminInfo)
def current_admin(admin: Dict[str, Any] = Depends(require_admin)):
    return AdminInfo(**admin)
