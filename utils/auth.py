"""
Authentication utilities for JWT token generation and validation
Implements secure token-based authentication with expiration
"""
import jwt
import os
import uuid
from datetime import timedelta
from typing import Any, Dict, Optional

from models.user import User
from utils.clock import utc_now


# Secret key for JWT - MUST be set in environment variables for production
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_MINUTES = int(os.getenv("JWT_EXPIRATION_MINUTES", 60))
JWT_ISSUER = os.getenv("JWT_ISSUER", "RoomBookingAPI")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "RoomBookingClient")


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT token for an authenticated user

    Args:
        user: The user the token is issued to
        expires_delta: Lifetime override, defaults to JWT_EXPIRATION_MINUTES

    Returns:
        Encoded JWT token string

    Token includes:
        - sub: User id (as a string, per RFC 7519)
        - email, username, role: Informational claims for the client
        - jti: Unique token id
        - iat / exp: Issued at and expiration timestamps
        - iss / aud: Issuer and audience checked on verification
    """
    now = utc_now()
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "username": user.username,
        "role": user.role.value,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": now + (expires_delta or timedelta(minutes=JWT_EXPIRATION_MINUTES)),
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
    }

    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a user JWT token

    Returns:
        The token claims

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If signature, issuer, audience or format is invalid
    """
    return jwt.decode(
        token,
        JWT_SECRET_KEY,
        algorithms=[JWT_ALGORITHM],
        audience=JWT_AUDIENCE,
        issuer=JWT_ISSUER,
        options={"require": ["exp", "sub"]},
    )
