"""Pydantic schemas for signup, signin, and the current user.

Request fields are optional at the schema level: the identity service
owns the "all fields required" rule so the HTTP and Python entry points
report it the same way (400, not a schema-level 422).
"""

import uuid
from typing import Optional

from pydantic import BaseModel


class SignupRequest(BaseModel):
    fname: Optional[str] = None
    lname: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class SignupResponse(BaseModel):
    msg: str
    email: str


class SigninRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SigninResponse(BaseModel):
    msg: str
    token: str
    token_type: str = "bearer"
    expires_in: int


class UserMe(BaseModel):
    user_id: uuid.UUID
    email: str
    fname: str
    lname: str
