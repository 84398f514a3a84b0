"""
Pydantic schemas for API requests
"""

from typing import Optional
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    account_id: str = Field(..., min_length=1)
    password: str


class CreateAccountRequest(BaseModel):
    account_id: str = Field(..., min_length=1, description="Account number")
    holder_name: Optional[str] = None
    password: Optional[str] = Field(None, description="Enrolled when hashed auth is configured")


class AmountRequest(BaseModel):
    amount: str = Field(..., description="Amount as typed, e.g. \"100\" or \"1,250.50\"")
