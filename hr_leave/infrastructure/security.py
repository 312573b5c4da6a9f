"""Security Primitives — bcrypt password hashing and HS256 session tokens.

Invariants:
    - Passwords are hashed with a per-hash random salt; plain text is never stored
    - bcrypt only accepts up to 72 password bytes; longer input is rejected, not truncated
    - Tokens carry sub (employee id as str), email, role, iat, exp
    - decode() raises AuthenticationFailedError for any signature, expiry or claim problem
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from hr_leave.config import Settings
from hr_leave.core.domain_types import EmployeeId, Identity, Role
from hr_leave.core.errors import AuthenticationFailedError, InvalidInputError

logger = logging.getLogger(__name__)

BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Slow, salted one-way hashing with bcrypt."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        raw = password.encode("utf-8")
        if len(raw) > BCRYPT_MAX_PASSWORD_BYTES:
            raise InvalidInputError(
                f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes", "password",
            )
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        raw = password.encode("utf-8")
        if len(raw) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(raw, hashed_password.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            logger.warning("Password verification against malformed hash")
            return False


class TokenManager:
    """Issues and verifies signed session tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expiration_hours: int = 24):
        self.secret = secret
        self.algorithm = algorithm
        self.expiration = timedelta(hours=expiration_hours)

    def issue(self, employee_id: int, email: str, role: Role | None) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(employee_id),
            "email": email,
            "role": role.value if role else None,
            "iat": now,
            "exp": now + self.expiration,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Identity:
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailedError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationFailedError("Invalid or expired token")

        try:
            employee_id = EmployeeId(int(claims["sub"]))
            role = Role(claims["role"]) if claims.get("role") else None
        except (TypeError, ValueError):
            raise AuthenticationFailedError("Invalid token claims")
        return Identity(
            employee_id=employee_id, email=claims.get("email", ""), role=role,
        )


def build_password_hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


def build_token_manager(settings: Settings) -> TokenManager:
    return TokenManager(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration_hours=settings.jwt_expiration_hours,
    )
