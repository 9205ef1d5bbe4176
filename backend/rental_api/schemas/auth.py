"""Authentication schemas."""

from pydantic import BaseModel


class Token(BaseModel):
    """Access token response."""

    access_token: str
    token_type: str = "bearer"


class LogoutResponse(BaseModel):
    message: str = "Logged out successfully."
