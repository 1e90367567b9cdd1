import hmac
from typing import Optional

from fastapi import HTTPException, status

from ferreteria.core.logger import logger
from ferreteria.core.security.session import SessionManager
from ferreteria.core.settings import settings
from ferreteria.v1_0.entities import SessionDTO


class AuthService:
    """
    Admin login against the configured credentials.
    The resulting session is a single signed token; logout drops it.
    """

    def __init__(self, session_manager: SessionManager) -> None:
        self.session_manager = session_manager

    @staticmethod
    def _check(username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.encode(), settings.ADMIN_USERNAME.encode())
        pass_ok = hmac.compare_digest(password.encode(), settings.ADMIN_PASSWORD.get_secret_value().encode())
        return user_ok and pass_ok

    def login(self, username: str, password: str) -> str:
        """
        Validate the credentials and issue a session token.

        Raises:
            HTTPException: 401 when the credentials do not match.
        """
        if not self._check(username, password):
            logger.warning("[AuthService] login rejected for %s", username)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Credenciales inválidas")
        logger.info("[AuthService] login ok for %s", username)
        return self.session_manager.issue(username)

    def describe(self, token: Optional[str]) -> SessionDTO:
        if not self.session_manager.is_authenticated(token):
            return SessionDTO(authenticated=False)
        claims = self.session_manager.decode(token or "")
        return SessionDTO(authenticated=True, username=claims.sub, expires_at=claims.exp)
