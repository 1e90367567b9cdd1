from dataclasses import dataclass

@dataclass(frozen=True)
class SessionDTO:
    authenticated: bool
    username: str | None = None
    expires_at: int | None = None
