import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class SignupIn(BaseModel):
    """
    Body of ``POST /signup``.

    Parsing never fails: an email that is not a string becomes ``None`` so
    the route can answer ``email_required`` itself, and falsy optional
    fields become ``None`` so they are stored as NULL, not "".
    """

    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = None
    country: Optional[str] = None
    interest: Optional[str] = None
    lang: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _email_must_be_text(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("country", "interest", "lang", mode="before")
    @classmethod
    def _absent_when_falsy(cls, value: Any) -> Optional[str]:
        if not value:
            return None
        if isinstance(value, (dict, list)):
            return json.dumps(value, separators=(",", ":"))
        return value if isinstance(value, str) else str(value)


class SignupOut(BaseModel):
    ok: bool = True
    count: int


class CountOut(BaseModel):
    count: int
