# artvista/utils/security.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt
from passlib.context import CryptContext

from artvista.domain.errors import Unauthorized
from artvista.utils.settings import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_EXPIRE_DAYS, JWT_SECRET

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, role: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=JWT_EXPIRE_DAYS))
    payload = {"id": str(user_id), "role": role, "exp": expire}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Returns the ``{id, role}`` principal carried by a valid token."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise Unauthorized("Invalid or expired token")

    user_id = payload.get("id")
    if user_id is None:
        raise Unauthorized("Invalid token")
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token")

    return {"id": user_id, "role": payload.get("role", "user")}
