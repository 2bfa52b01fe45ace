"""
Esquemas Pydantic para operaciones de autenticación.

- Mantiene las validaciones y normalizaciones (p. ej. email en minúsculas).
- Cada regla produce su propio mensaje; pydantic reporta todos los campos que fallan.
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

NAME_MIN = 3
PASSWORD_MIN = 6


def _check_email(v: str, message: str) -> str:
    v = v.strip()
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email", message)
    return v.lower()


class RegisterPayload(BaseModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if len(v) < NAME_MIN:
            raise PydanticCustomError("name_length", "Please enter a valid name with at least three characters")
        return v

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return _check_email(v, "Please enter a valid email")

    @field_validator("password")
    @classmethod
    def _check_password(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN:
            raise PydanticCustomError("password_length", "Password must be at least six characters")
        return v


class LoginPayload(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return _check_email(v, "Please enter a valid email.")

    @field_validator("password")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("password_blank", "Password must not be blank.")
        return v


class TokenOut(BaseModel):
    success: bool = True
    token: str
