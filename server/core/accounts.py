# server/core/accounts.py

import logging
from dataclasses import dataclass
from core.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    PasswordMismatchError,
    UserNotFoundError,
    ValidationError,
)
from core.security import CredentialManager
from core.store import UserStore
from models.user import User


logger = logging.getLogger(__name__)

# Required-field messages. Fields are checked in the order they are passed,
# and the first missing one is reported.
FIELD_LABELS = {
    "name": "Name",
    "email": "Email",
    "phone": "Phone",
    "password": "Password",
    "confirmpassword": "Password confirmation",
}


@dataclass
class AuthResult:
    """Outcome of a successful registration or login."""
    message: str
    token: str
    user_id: int


def public_view(user: User) -> dict:
    """User record as exposed to clients; the password hash never leaves the store."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "image": user.image,
    }


def require_fields(**fields) -> None:
    for field, value in fields.items():
        if value is None or not str(value).strip():
            raise ValidationError(f"{FIELD_LABELS[field]} is required", field=field)


class AccountService:
    """
    Registration, login and profile flows.
    Each call is a single attempt: errors propagate to the caller unchanged.
    """

    def __init__(self, store: UserStore, credentials: CredentialManager):
        self.store = store
        self.credentials = credentials

    def _authenticated(self, user: User) -> AuthResult:
        token = self.credentials.issue_token(user.id, user.name)
        return AuthResult(message="You are authenticated", token=token, user_id=user.id)

    def register(
        self,
        name: str | None,
        email: str | None,
        phone: str | None,
        password: str | None,
        confirmpassword: str | None,
    ) -> AuthResult:
        require_fields(
            name=name,
            email=email,
            phone=phone,
            password=password,
            confirmpassword=confirmpassword,
        )

        if password != confirmpassword:
            raise PasswordMismatchError()

        if self.store.find_by_email(email) is not None:
            raise DuplicateEmailError()

        user = User(
            name=name,
            email=email,
            phone=phone,
            password=self.credentials.hash_password(password),
        )
        user = self.store.insert(user)
        logger.info("Registered user %s", user.id)

        return self._authenticated(user)

    def login(self, email: str | None, password: str | None) -> AuthResult:
        require_fields(email=email, password=password)

        user = self.store.find_by_email(email)
        if user is None:
            raise UserNotFoundError("No user registered with this email")

        if not self.credentials.verify_password(password, user.password):
            logger.warning("Rejected login for user %s", user.id)
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return self._authenticated(user)

    def current_user(self, token: str) -> User:
        user = self.store.find_by_id(self.credentials.validate_token(token))
        if user is None:
            raise UserNotFoundError()
        return user

    def check_user(self, token: str | None) -> dict | None:
        """Public view of the token's owner, or None when no token is presented."""
        if not token:
            return None

        user = self.store.find_by_id(self.credentials.validate_token(token))
        return public_view(user) if user is not None else None

    def get_user_by_id(self, user_id: int) -> dict:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return public_view(user)

    def edit_user(
        self,
        token: str,
        name: str | None,
        email: str | None,
        phone: str | None,
        password: str | None = None,
        confirmpassword: str | None = None,
        image: str | None = None,
    ) -> dict:
        user = self.current_user(token)

        require_fields(name=name, email=email, phone=phone)

        # Keeping one's own address is never a conflict.
        if email != user.email:
            existing = self.store.find_by_email(email)
            if existing is not None and existing.id != user.id:
                raise DuplicateEmailError()

        fields = {"name": name, "email": email, "phone": phone}

        if password or confirmpassword:
            if password != confirmpassword:
                raise PasswordMismatchError()
            fields["password"] = self.credentials.hash_password(password)

        if image:
            fields["image"] = image

        updated = self.store.update_by_id(user.id, fields)
        if updated is None:
            raise UserNotFoundError()

        logger.info("Updated profile of user %s", user.id)
        return public_view(updated)
