import re
from datetime import date

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from app.models.note import NoteStatus

ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

PASSWORD_MIN_LENGTH = 6
# bcrypt only looks at the first 72 bytes
PASSWORD_MAX_LENGTH = 72


def normalize_email(email: str) -> str:
    """E-mails are compared case-insensitively: store and look up lower-case."""
    return email.strip().lower()


def require_iso_date(value):
    """Only ``YYYY-MM-DD`` strings (or ``date`` objects) are accepted as dates."""
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str) and ISO_DATE_PATTERN.fullmatch(value):
        return value
    raise ValueError("Date must be a YYYY-MM-DD string")


def require_title(value: str) -> str:
    if not value.strip():
        raise ValueError("Title is required")
    return value


class CamelModel(BaseModel):
    """Serializes with camelCase keys and accepts either case on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ===== Authentication =====


class UserRegister(BaseModel):
    name: str = Field(..., max_length=100, description="Display name")
    email: EmailStr = Field(..., description="E-mail used to log in")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        description="Password for the new account",
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_LENGTH:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_LENGTH} bytes")
        return v


class UserLogin(BaseModel):
    email: str = Field(..., description="E-mail for login")
    password: str = Field(..., description="Password for login")


class UserPublic(BaseModel):
    id: int = Field(..., description="User unique identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="E-mail")

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    user: UserPublic


class AuthResponse(BaseModel):
    user: UserPublic
    token: str = Field(..., description="Opaque session token, also set as a cookie")
    token_type: str = Field(default="bearer", description="Token type")


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


class HealthResponse(BaseModel):
    status: str
    database: bool


# ===== Notes =====


class NoteCreate(CamelModel):
    title: str = Field(..., description="Task description")
    created_date: date | None = Field(
        default=None, description="Creation date, defaults to today"
    )
    completed_date: date = Field(..., description="Due or completion date")
    status: NoteStatus = Field(default=NoteStatus.TODO, description="todo or done")

    model_config = ConfigDict(extra="ignore")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return require_title(v)

    @field_validator("created_date", "completed_date", mode="before")
    @classmethod
    def dates_are_iso(cls, v):
        return require_iso_date(v)


class NoteUpdate(CamelModel):
    """Partial update: only fields present in the payload are applied."""

    title: str | None = None
    created_date: date | None = None
    completed_date: date | None = None
    status: NoteStatus | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", "created_date", "completed_date", "status", mode="before")
    @classmethod
    def reject_null(cls, v):
        # Every note column is required, so an explicit null cannot be applied
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return require_title(v)

    @field_validator("created_date", "completed_date", mode="before")
    @classmethod
    def dates_are_iso(cls, v):
        return require_iso_date(v)

    def changes(self) -> dict:
        """The explicitly supplied fields, keyed by column name."""
        data = self.model_dump(exclude_unset=True)
        if "status" in data:
            data["status"] = NoteStatus(data["status"]).value
        return data


class NoteResponse(CamelModel):
    id: int
    user_id: int
    title: str
    created_date: date
    completed_date: date
    status: NoteStatus
