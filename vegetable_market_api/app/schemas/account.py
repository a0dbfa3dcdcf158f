"""
Pydantic models for accounts and authentication.

An account belongs to exactly one district and market.  The password
hash is never part of any response model.
"""

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Schema for registering an account."""

    username: str = Field(..., examples=["alice"])
    password: str = Field(..., examples=["pw1"])
    district: str = Field(..., examples=["Pune"])
    market: str = Field(..., examples=["MarketA"])


class AccountLogin(BaseModel):
    username: str
    password: str


class AccountProfile(BaseModel):
    """Public profile echoed back on login."""

    username: str
    district: str
    market: str


class LoginResponse(BaseModel):
    token: str
    user: AccountProfile


class MessageResponse(BaseModel):
    message: str
