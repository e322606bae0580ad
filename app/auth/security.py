import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import settings
from app.core.exceptions import TamperedTokenError, UnauthenticatedError

logger = logging.getLogger(__name__)


def hash_password(plain_password: str) -> str:
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # In case the stored hash is invalid/corrupted
        return False


def create_access_token(
    *, subject: Dict, expires_minutes: Optional[int] = None
) -> str:
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes

    to_encode = subject.copy()
    issued_at = datetime.now(timezone.utc)
    to_encode.update({"iat": issued_at, "exp": issued_at + timedelta(minutes=expires_minutes)})
    encoded_jwt = jwt.encode(
        to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )
    return encoded_jwt


def decode_access_token(token: Optional[str]) -> Dict:
    """
    Verify a session token and return its claims.

    Absent, malformed or expired tokens raise UnauthenticatedError (not logged in).
    A well-formed token whose signature does not verify raises TamperedTokenError.
    """
    if not token:
        raise UnauthenticatedError()

    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise UnauthenticatedError() from e
    if header.get("alg") != settings.jwt_algorithm:
        logger.warning("Rejected token signed with unexpected algorithm")
        raise TamperedTokenError()

    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError as e:
        raise UnauthenticatedError("Session expired, please log in again") from e
    except JWTError as e:
        logger.warning("Rejected token that failed signature verification")
        raise TamperedTokenError() from e
