from typing import Optional

from fastapi import Cookie, Header, HTTPException, status

from ferreteria.core.logger import logger
from ferreteria.core.settings import settings
from ferreteria.core.security.session import SessionClaims, session_manager


def token_from(authorization: Optional[str], cookie: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1].strip()
    return cookie


async def require_session(
    authorization: Optional[str] = Header(None),
    session: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE),
) -> SessionClaims:
    token = token_from(authorization, session)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="sesión requerida")
    try:
        return session_manager.decode(token)
    except ValueError as e:
        logger.warning(f"[Auth] session rejected: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
