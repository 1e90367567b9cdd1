import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Response
from jose import JWTError, jwt as jose_jwt

from ferreteria.core.logger import logger
from ferreteria.core.settings import settings

_ALG = "HS256"


@dataclass(frozen=True)
class SessionClaims:
    sub: str
    iat: int
    exp: int

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SessionClaims":
        return cls(sub=str(d["sub"]), iat=int(d["iat"]), exp=int(d["exp"]))


class SessionManager:
    """
    One signed token replaces the old pair of storage flags.
    A session is valid while the signature checks out and `exp` is in the future.
    """

    def __init__(self, secret: str, ttl_sec: int, cookie_name: str = "session") -> None:
        self._secret = secret
        self.ttl_sec = ttl_sec
        self.cookie_name = cookie_name

    def issue(self, subject: str, *, now: Optional[float] = None) -> str:
        iat = int(now if now is not None else time.time())
        claims = {"sub": subject, "iat": iat, "exp": iat + self.ttl_sec}
        return jose_jwt.encode(claims, self._secret, algorithm=_ALG)

    def decode(self, token: str) -> SessionClaims:
        try:
            data = jose_jwt.decode(token, self._secret, algorithms=[_ALG])
        except JWTError as e:
            raise ValueError(f"token inválido: {e}") from e
        try:
            claims = SessionClaims.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError("claims incompletos") from e
        if time.time() > claims.exp:
            raise ValueError("token expirado")
        return claims

    def is_authenticated(self, token: Optional[str]) -> bool:
        if not token:
            return False
        try:
            self.decode(token)
        except ValueError as e:
            logger.debug("[Session] rejected: %s", e)
            return False
        return True

    def attach(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=self.ttl_sec,
            httponly=True,
            samesite="lax",
            secure=settings.APP_ENV == "prod",
        )

    def logout(self, response: Response) -> None:
        response.delete_cookie(self.cookie_name)


session_manager = SessionManager(
    secret=settings.SESSION_SECRET.get_secret_value(),
    ttl_sec=settings.SESSION_TTL_SEC,
    cookie_name=settings.SESSION_COOKIE,
)
