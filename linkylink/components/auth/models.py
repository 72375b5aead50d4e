from dataclasses import dataclass

from linkylink.domain.entities import SessionUser


@dataclass
class LoginInput:
    username: str
    password: str


@dataclass
class RegisterInput:
    username: str
    password: str
    confirm_password: str


@dataclass
class AuthOutput:
    user: SessionUser | None = None
    success: bool = False
    error: str | None = None
