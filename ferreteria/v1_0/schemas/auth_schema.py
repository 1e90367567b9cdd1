from pydantic import BaseModel, Field, SecretStr


class LoginIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=80)
    password: SecretStr
