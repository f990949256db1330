# stockroom/services/lock_service.py
import uuid

import redis

from stockroom.utils.retry import redis_retry
from stockroom.utils.settings import REDIS_URL
from stockroom.utils.logging import get_logger

logger = get_logger(__name__)

WITHDRAWAL_LOCK_KEY = "stock:withdrawal:lock"

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua jako jedna nieprzerywalna operacje
#nie mozna wcisnac sie miedzy GET a DEL, wiec zwalnia tylko wlasciciel tokenu


class LockService:
    """
    -blokada na czas zatwierdzania wydania (sprawdz stan -> zdejmij stan)
    -zwalnianie blokady tylko przez wlasciciela tokenu
    -atomowosc przy pomocy lua
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def new_token() -> str:
        return uuid.uuid4().hex

    @redis_retry()
    def acquire_withdrawal_lock(self, token: str, ttl: int) -> bool:
        logger.info(f"Acquire lock {WITHDRAWAL_LOCK_KEY} token {token}")
        #SET stock:withdrawal:lock "<token>" NX EX ttl
        return bool(
            self.redis.set(
                name=WITHDRAWAL_LOCK_KEY,
                value=token,
                nx=True, #tylko jesli nikt inny nie trzyma blokady
                ex=ttl, #wygasa sama gdy proces padnie w trakcie
            )
        )

    @redis_retry()
    def release_withdrawal_lock(self, token: str) -> bool:
        logger.info(f"Release lock {WITHDRAWAL_LOCK_KEY} token {token}")
        res = self.redis.eval(_RELEASE_LUA, 1, WITHDRAWAL_LOCK_KEY, token)
        return bool(res)
