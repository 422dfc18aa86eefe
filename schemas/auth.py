# schemas/auth.py
"""
Pydantic schemas for sign-up, sign-in and session restore.
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class SignUpRequest(BaseModel):
     email: str = Field(..., min_length=3, max_length=255)
     password: str = Field(..., min_length=6, max_length=128)
     full_name: str = Field(default="", max_length=200)
     phone: Optional[str] = Field(default=None, max_length=50)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "email": "landlord@example.com",
                    "password": "s3cret-pass",
                    "full_name": "Abdul Karim",
               }
          }
     )


class SignInRequest(BaseModel):
     email: str
     password: str


class UserResponse(BaseModel):
     id: int
     email: str
     full_name: str
     phone: Optional[str] = None
     user_type: str

     model_config = ConfigDict(from_attributes=True)


class AuthResult(BaseModel):
     """Auth calls report failures in `error` instead of raising."""
     user: Optional[UserResponse] = None
     token: Optional[str] = None
     error: Optional[str] = None
