import uuid

from sqlalchemy.exc import SQLAlchemyError

from context import AppContext
from models import User
from repositories.user_repository import UserRepository
from schemas import UserCreate
from services.result import ErrorKind, INVALID_CREDENTIALS_MESSAGE, ServiceResult
from utils.passwords import PasswordHasher

EMAIL_REQUIRED = "Email is required"


def normalize_email(email: str) -> str:
    """Emails are stored and looked up without surrounding whitespace"""
    return (email or "").strip()


class UserService:
    """Registration, lookup and credential checks for users"""

    def __init__(self, repository: UserRepository, hasher: PasswordHasher, context: AppContext):
        self._repository = repository
        self._hasher = hasher
        self._logger = context.get_logger("services.user")

    def get_by_email(self, email: str) -> ServiceResult[User]:
        email = normalize_email(email)
        try:
            user = self._repository.get_by_email(email)
        except SQLAlchemyError:
            self._logger.error("Failed to retrieve user by email %s", email)
            return ServiceResult.infrastructure()
        if user is None:
            self._logger.warning("User not found with email: %s", email)
            return ServiceResult.not_found()
        return ServiceResult.success(user)

    def get_by_id(self, user_id: uuid.UUID) -> ServiceResult[User]:
        try:
            user = self._repository.get_by_id(user_id)
        except SQLAlchemyError:
            self._logger.error("Failed to retrieve user %s", user_id)
            return ServiceResult.infrastructure()
        if user is None:
            self._logger.warning("User not found with id: %s", user_id)
            return ServiceResult.not_found()
        return ServiceResult.success(user)

    def add(self, payload: UserCreate) -> ServiceResult[User]:
        """
        Register a user

        The password is stored as a salted hash. A duplicate email is rejected
        by the database and surfaces as an infrastructure error.
        """
        email = normalize_email(payload.email)
        if not email:
            self._logger.warning("Attempted to add user with empty email")
            return ServiceResult.validation(EMAIL_REQUIRED)

        user = User(
            id=payload.id,
            name=payload.name,
            email=email,
            password_hash=self._hasher.hash(payload.password),
        )
        self._logger.info("Adding new user with email: %s", user.email)
        try:
            self._repository.insert(user)
        except SQLAlchemyError:
            self._logger.error("Failed to add user with email %s", user.email)
            return ServiceResult.infrastructure()
        return ServiceResult.success(user)

    def login(self, email: str, password: str) -> ServiceResult[User]:
        """Unknown email and wrong password fail the same way"""
        email = normalize_email(email)
        self._logger.info("Attempting login for user with email: %s", email)
        try:
            user = self._repository.get_by_email(email)
        except SQLAlchemyError:
            self._logger.error("Failed to look up user %s during login", email)
            return ServiceResult.infrastructure()

        if user is None:
            self._hasher.verify_dummy(password)
            self._logger.warning("Login failed - user not found with email: %s", email)
            return ServiceResult.failure(ErrorKind.AUTHENTICATION, INVALID_CREDENTIALS_MESSAGE)

        if not self._hasher.verify(password, user.password_hash):
            self._logger.warning("Login failed - invalid password for user with email: %s", email)
            return ServiceResult.failure(ErrorKind.AUTHENTICATION, INVALID_CREDENTIALS_MESSAGE)

        self._logger.info("User successfully logged in with email: %s", email)
        return ServiceResult.success(user)
