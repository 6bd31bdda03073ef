# server/core/security.py

import logging
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordValueError
from core.errors import InternalError, InvalidTokenError, ValidationError


logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_ROUNDS = 12


class CredentialManager:
    """
    Owns the credential and token lifecycle.

    Passwords are stored as salted bcrypt hashes; a successful authentication
    becomes a signed JWT carrying the user id. Tokens are stateless: validity
    is decided by the signature (and the `exp` claim, when an expiry is set).
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        rounds: int = DEFAULT_ROUNDS,
        expires_delta: timedelta | None = None,
    ):
        if not secret_key:
            raise ValueError("secret_key must be a non-empty string")

        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    # -------------------------------
    # Passwords
    # -------------------------------

    def hash_password(self, password: str) -> str:
        if not password:
            raise ValidationError("Password is required", field="password")
        try:
            return self.pwd_context.hash(password)
        except PasswordValueError:
            raise ValidationError("Password contains unsupported characters", field="password") from None

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        if not plain_password or not hashed_password:
            return False
        if self.pwd_context.identify(hashed_password) is None:
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except PasswordValueError:
            # Passwords passlib refuses to hash never match.
            return False
        except ValueError as exc:
            logger.exception("Stored password hash could not be verified")
            raise InternalError() from exc

    # -------------------------------
    # Tokens
    # -------------------------------

    def issue_token(self, user_id: int, name: str | None = None) -> str:
        to_encode = {"sub": str(user_id), "id": user_id}
        if name is not None:
            to_encode["name"] = name
        if self.expires_delta:
            to_encode["exp"] = datetime.now(timezone.utc) + self.expires_delta
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def validate_token(self, token: str) -> int:
        """
        Returns the user id bound to `token`.
        Every failure raises the same InvalidTokenError, whatever went wrong.
        """
        if not token or not isinstance(token, str):
            raise InvalidTokenError()
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
            return int(payload["sub"])
        except (JWTError, KeyError, TypeError, ValueError):
            raise InvalidTokenError() from None

    @staticmethod
    def extract_bearer(authorization: str | None) -> str:
        """Pulls the token out of an `Authorization: Bearer <token>` header value."""
        if not authorization:
            raise InvalidTokenError("Access denied")

        scheme, _, token = authorization.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise InvalidTokenError("Access denied")
        return token
