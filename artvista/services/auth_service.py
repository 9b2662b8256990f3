# artvista/services/auth_service.py
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artvista.data.models.user import UserModel
from artvista.domain.errors import ConflictError, InvalidCredentials, NotFound, ValidationError
from artvista.domain.serializers import user_detail, user_summary
from artvista.repos.user_repo import UserRepo
from artvista.utils.logging import get_logger
from artvista.utils.security import create_access_token, hash_password, verify_password

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """
    Rejestracja, logowanie i odczyt biezacego uzytkownika.
    Weryfikacja tokena jest w zaleznosci FastAPI (api/deps.py).
    """

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        name = (name or "").strip()
        email = (email or "").strip().lower()

        if not name or not email or not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Invalid input")

        if self.repo.get_by_email(email):
            logger.warning(f"Registration rejected, email {email} already registered")
            raise ConflictError("Email already registered")

        try:
            user = self.repo.create_user(
                UserModel(
                    name=name,
                    email=email,
                    password=hash_password(password),
                    role="user",
                )
            )
        except IntegrityError:
            #rownolegla rejestracja z tym samym emailem, unique w bazie
            self.repo.db.rollback()
            raise ConflictError("Email already registered")

        logger.info(f"Registered user {user.id}")

        return {
            "user": user_summary(user),
            "token": create_access_token(user.id, user.role),
        }

    def login(self, email: str, password: str) -> Dict[str, Any]:
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValidationError("Invalid input")

        user = self.repo.get_by_email(email)

        # ta sama odpowiedz dla nieznanego emaila i zlego hasla
        if not user or not verify_password(password, user.password):
            logger.warning("Login failed")
            raise InvalidCredentials()

        return {
            "user": user_summary(user),
            "token": create_access_token(user.id, user.role),
        }

    def me(self, user_id: int) -> Dict[str, Any]:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("Not found")
        return {"user": user_detail(user)}
