import uuid
from contextlib import contextmanager

import redis

from app.domain.errors import Conflict
from app.utils.retry import redis_retry, poll_until_true
from app.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS, CART_LOCK_WAIT_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje atomowo przez lua, skrypt dziala jako jedna nieprzerywalna operacja
#nie mozna wcisnac sie miedzy GET a DEL, wiec tylko wlasciciel tokena zwalnia lock


def cart_lock_key(user_id: str, product_id: str) -> str:
    return f"cart:{user_id}:{product_id}:lock"


class LockService:
    """
    -wzajemne wykluczanie dla pary (user, produkt) przy zmianach koszyka
    -zwalnianie locka tylko przez wlasciciela tokena
    -atomowosc przy pomocy lua
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client if client is not None else redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @redis_retry()
    def acquire(self, key: str, token: str, ttl: int) -> bool:
        #SET cart:u1:p1:lock "token" NX EX 10
        return bool(self.redis.set(name=key, value=token, nx=True, ex=ttl))

    @redis_retry()
    def release(self, key: str, token: str) -> bool:
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def hold(self, key: str, ttl: int = CART_LOCK_TTL_SECONDS, wait: float = CART_LOCK_WAIT_SECONDS):
        token = uuid.uuid4().hex

        # czekamy az inny request zwolni lock, najwyzej `wait` sekund
        acquired = poll_until_true(max_wait=wait)(self.acquire)(key, token, ttl)
        if not acquired:
            logger.warning(f"Nie udalo sie uzyskac locka {key} w {wait}s")
            raise Conflict("Cart is being modified by another request, try again")

        logger.debug(f"Acquired lock {key}")
        try:
            yield
        finally:
            if not self.release(key, token):
                # TTL minal w trakcie operacji, lock juz nie nasz
                logger.warning(f"Lock {key} wygasl przed zwolnieniem")
