from typing import Optional
from pydantic import BaseModel, EmailStr, Field, model_validator
import json

from ..roles import Role
from .notification import Notification


class _JsonBodyModel(BaseModel):
    @model_validator(mode='before')
    @classmethod
    def parse_input(cls, v):
        if isinstance(v, bytes):
            v = v.decode("utf-8")
        if isinstance(v, str):
            try:
                return json.loads(v)
            except ValueError:
                pass
        return v


class LoginPayload(_JsonBodyModel):
    email: EmailStr
    password: str


class SignupPayload(_JsonBodyModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class LogoutPayload(_JsonBodyModel):
    refresh_token: str


class AuthUser(BaseModel):
    id: str
    email: EmailStr | None = None
    role: Role = Role.BUYER
    latitude: float | None = None
    longitude: float | None = None


class AuthResponse(BaseModel):
    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: int | None = None
    token_type: str = "bearer"
    user: AuthUser | None = None
    notifications: list[Notification] = []


class RouteOut(BaseModel):
    state: str
    path: str | None = None
