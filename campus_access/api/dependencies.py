# =======================================================================================
# campus_access/api/dependencies.py - FastAPI Dependencies
# =======================================================================================
from typing import Any, Dict, Iterator, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.engine import Connection
from ..database import db_manager
from ..services.auth_service import AuthService
from ..utils.exceptions import AuthenticationError

security = HTTPBearer(auto_error=False)
auth_service = AuthService()

def get_db_connection() -> Iterator[Connection]:
    """Dependency to get a database connection; one transaction per request."""
    with db_manager.get_connection() as conn:
        yield conn

def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that rejects requests without a valid admin bearer token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return auth_service.verify_token(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
