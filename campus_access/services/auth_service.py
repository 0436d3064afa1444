# =======================================================================================
# campus_access/services/auth_service.py - Admin Authentication
# =======================================================================================
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
import jwt
from sqlalchemy import text
from sqlalchemy.engine import Connection
from passlib.context import CryptContext

from ..config import config
from ..utils.exceptions import AuthenticationError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class AuthService:
    """Handles admin authentication (username/password) and signed session tokens."""

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None,
                 expire_minutes: Optional[int] = None):
        self.secret = secret or config.JWT_SECRET
        self.algorithm = algorithm or config.JWT_ALGORITHM
        self.expire_minutes = expire_minutes or config.JWT_EXPIRE_MINUTES

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    def username_exists(self, conn: Connection, username: str) -> bool:
        return conn.execute(
            text("SELECT id FROM admins WHERE username = :u"), {"u": username}
        ).first() is not None

    def create_admin(self, conn: Connection, username: str, password: str) -> int:
        return conn.execute(
            text(
                """
                INSERT INTO admins (username, password_hash)
                VALUES (:username, :password_hash)
                RETURNING id
                """
            ),
            {"username": username, "password_hash": self.hash_password(password)},
        ).scalar_one()

    def authenticate_admin(
        self, conn: Connection, username: str, password: str
    ) -> Optional[Dict[str, Any]]:
        row = conn.execute(
            text(
                """
                SELECT id, username, password_hash
                FROM admins
                WHERE username = :username
                """
            ),
            {"username": username},
        ).mappings().first()

        if not row:
            return None

        if not self.verify_password(password, row["password_hash"]):
            return None

        return {"id": row["id"], "username": row["username"]}

    def create_token(self, admin_id: int, username: str) -> str:
        """Signed JWT carrying the admin identity; survives reloads until it expires."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(admin_id),
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=self.expire_minutes)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """Returns {"id", "username"} or raises AuthenticationError."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token") from e

        try:
            return {"id": int(payload["sub"]), "username": payload["username"]}
        except (KeyError, TypeError, ValueError) as e:
            raise AuthenticationError("Invalid token") from e
