import uuid
from contextlib import contextmanager

import redis

from artvista.domain.errors import ConflictError
from artvista.utils.retry import redis_retry
from artvista.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS
from artvista.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL
#zwalnia tylko ten kto trzyma lock (porownanie tokena)


class LockService:
    """
    -blokada koszyka uzytkownika na czas jednej mutacji
    -zwalnianie locka tylko przez wlasciciela tokena
    -atomowosc przy pomocy lua
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def cart_key(user_id: int) -> str:
        return f"cart:user:{user_id}:lock"

    @redis_retry()
    def acquire(self, key: str, token: str, ttl: int) -> bool:
        logger.info(f"Acquire lock {key}")
        #SET cart:user:1:lock "<token>" NX EX 10
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True, #tylko jesli klucz nie istnieje
                ex=ttl, #wygasa sam, padniety worker nie zablokuje koszyka na zawsze
            )
        )

    @redis_retry()
    def release(self, key: str, token: str) -> bool:
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def cart_lock(self, user_id: int, ttl: int = CART_LOCK_TTL_SECONDS):
        key = self.cart_key(user_id)
        token = uuid.uuid4().hex

        if not self.acquire(key, token, ttl):
            logger.warning(f"Cart of user {user_id} is locked by another request")
            raise ConflictError("Cart is being modified by another request, try again")

        try:
            yield
        finally:
            self.release(key, token)
