from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SignupForm(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class PhotoUpload(BaseModel):
    content: bytes
    content_type: str = "application/octet-stream"
    filename: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class AccountPublic(BaseModel):
    """Profile view of an account; the password hash is never part of it."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    photo_url: str = Field(alias="photoUrl")


class LoginResponse(BaseModel):
    message: str
    user: AccountPublic
