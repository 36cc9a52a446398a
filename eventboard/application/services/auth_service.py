"""Auth service — registration, login and token-to-user resolution."""

from typing import Tuple

import structlog

from eventboard.core.exceptions import UnauthorizedError, ValidationError
from eventboard.core.security import hash_password, verify_password
from eventboard.core.tokens import TokenError, TokenService
from eventboard.domain.models.user import Role, User
from eventboard.domain.repositories.user_repository import DuplicateEmailError, UserRepository
from eventboard.domain.schemas.auth import LoginRequest, RegisterRequest

logger = structlog.get_logger(__name__)

EMAIL_TAKEN = "Email is already registered."
INVALID_CREDENTIALS = "Invalid email or password."


def register_user(users: UserRepository, payload: RegisterRequest, role: Role = Role.USER) -> User:
    data = payload.model_dump()
    if users.get_by_email(data["email"]):
        raise ValidationError({"email": EMAIL_TAKEN})

    password = data.pop("password")
    user = User(role=role, password_hash=hash_password(password), **data)
    try:
        user = users.create(user)
    except DuplicateEmailError:
        # Lost a race with a concurrent registration
        raise ValidationError({"email": EMAIL_TAKEN})

    logger.info("User registered", user_id=user.id, role=user.role.value)
    return user


def authenticate_user(users: UserRepository, payload: LoginRequest) -> User:
    """Check credentials. Unknown email and wrong password are indistinguishable."""
    user = users.get_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info("Login rejected", reason="invalid_credentials")
        raise UnauthorizedError(INVALID_CREDENTIALS, code="invalid_credentials")
    return user


def login(users: UserRepository, tokens: TokenService, payload: LoginRequest) -> Tuple[str, User]:
    user = authenticate_user(users, payload)
    token = tokens.issue(user.id)
    logger.info("User logged in", user_id=user.id)
    return token, user


def resolve_user(users: UserRepository, tokens: TokenService, token: str) -> User:
    """Map a bearer token to the user it was issued for."""
    try:
        claims = tokens.verify(token)
    except TokenError as exc:
        raise UnauthorizedError(exc.message, code=exc.reason)

    user = users.get_by_id(claims.subject_id)
    if user is None:
        raise UnauthorizedError("Invalid token: User not found.", code="token_user_not_found")
    return user


def ensure_admin_account(users: UserRepository, email: str, password: str) -> User:
    """Create the bootstrap admin unless a user with that email already exists."""
    existing = users.get_by_email(email)
    if existing:
        return existing
    admin = register_user(users, RegisterRequest(name="Admin", email=email, password=password), role=Role.ADMIN)
    logger.info("Default admin user created", email=admin.email)
    return admin
