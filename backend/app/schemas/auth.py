"""Auth Schemas — login/registration forms and session state."""

from pydantic import BaseModel


class LoginForm(BaseModel):
    username: str = ""
    password: str = ""


class RegistrationForm(BaseModel):
    username: str = ""
    password: str = ""
    confirm: str = ""


class RedirectResponse(BaseModel):
    redirect: str


class SessionStateResponse(BaseModel):
    is_logged_in: bool
    username: str | None = None
