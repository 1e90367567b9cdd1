import re
from typing import List, Literal, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

PHONE_RE = re.compile(r"[0-9]{11}")
RIF_RE = re.compile(r"[VEJG][0-9]{8,9}")
HEX_COLOR_RE = re.compile(r"#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})")

Category = Literal["Alto Riesgo", "Agente Retención"]


def _check_phone(v: str) -> str:
    if not isinstance(v, str) or not PHONE_RE.fullmatch(v):
        raise ValueError("el teléfono debe tener 11 dígitos (ej. 04121234567)")
    return v


def _check_rif(v: str) -> str:
    if not isinstance(v, str) or not RIF_RE.fullmatch(v):
        raise ValueError("RIF inválido: letra V, E, J o G seguida de 8 o 9 dígitos")
    return v


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _lower(v: Optional[str]) -> Optional[str]:
    return None if v is None else v.lower()


def _check_color(v: str) -> str:
    if not HEX_COLOR_RE.fullmatch(v):
        raise ValueError(f"{v} no es un color hexadecimal válido")
    return v


def _dedupe(v: List[str]) -> List[str]:
    return list(dict.fromkeys(v))


class CustomerCreate(BaseModel):
    """Input schema to create a customer."""
    name: str = Field(..., min_length=1, max_length=120)
    phone: str
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=200)
    municipality: str = Field(..., min_length=1, max_length=80)
    rif: str
    categories: List[Category] = Field(default_factory=list)
    municipality_color: str = "#ffffff"

    model_config = {
        "str_strip_whitespace": True,
        "json_schema_extra": {
            "example": {
                "name": "Ferretería El Tornillo",
                "phone": "04121234567",
                "email": "compras@eltornillo.com",
                "address": "Av. Bolívar, local 3",
                "municipality": "Libertador",
                "rif": "J123456789",
                "categories": ["Agente Retención"],
                "municipality_color": "#1e88e5",
            }
        },
    }

    # teléfono y RIF se validan tal como llegan, sin el recorte de espacios
    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return _check_phone(v)

    @field_validator("rif", mode="before")
    @classmethod
    def validate_rif(cls, v: str) -> str:
        return _check_rif(v)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        return _blank_to_none(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return _lower(v)

    @field_validator("municipality_color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        return _check_color(v)

    @field_validator("categories")
    @classmethod
    def validate_categories(cls, v: List[str]) -> List[str]:
        return _dedupe(v)


class CustomerUpdate(BaseModel):
    """Partial update schema for a customer."""
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=200)
    municipality: Optional[str] = Field(None, min_length=1, max_length=80)
    rif: Optional[str] = None
    categories: Optional[List[Category]] = None
    municipality_color: Optional[str] = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_phone(v)

    @field_validator("rif", mode="before")
    @classmethod
    def validate_rif(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_rif(v)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        return _blank_to_none(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return _lower(v)

    @field_validator("municipality_color")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_color(v)

    @field_validator("categories")
    @classmethod
    def validate_categories(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return None if v is None else _dedupe(v)
