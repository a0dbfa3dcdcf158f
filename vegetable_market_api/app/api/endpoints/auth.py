"""
Account endpoints.

Provide registration and login.  Login returns a signed bearer token
carrying the account's district and market, which the admin routes use
to scope their queries.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException, status

from vegetable_market_api.app.core.config import Settings, get_settings
from vegetable_market_api.app.core.db import get_db
from vegetable_market_api.app.core.security import create_access_token
from vegetable_market_api.app.schemas.account import (
    AccountCreate,
    AccountLogin,
    AccountProfile,
    LoginResponse,
    MessageResponse,
)
from vegetable_market_api.app.services.account_service import AccountService, DuplicateUsernameError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    account: AccountCreate,
    conn: sqlite3.Connection = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    """Register a new account.

    Returns HTTP 400 if the username is already taken.  The password
    hash is never returned.
    """
    try:
        AccountService.register(conn, account, iterations=settings.password_hash_iterations)
    except DuplicateUsernameError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists.")
    except sqlite3.Error:
        logger.exception("Registration error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed.",
        )
    return MessageResponse(message="User registered successfully!")


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: AccountLogin,
    conn: sqlite3.Connection = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Check the username and password and return a bearer token.

    The same HTTP 400 response is returned whether the username is
    unknown or the password is wrong.
    """
    try:
        account = AccountService.authenticate(conn, credentials.username, credentials.password)
    except sqlite3.Error:
        logger.exception("Login error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error.")
    if account is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials.")
    token = create_access_token(
        {
            "id": account["id"],
            "username": account["username"],
            "district": account["district"],
            "market": account["market"],
        },
        settings.secret_key,
        settings.access_token_expire_minutes,
    )
    return LoginResponse(
        token=token,
        user=AccountProfile(
            username=account["username"],
            district=account["district"],
            market=account["market"],
        ),
    )
