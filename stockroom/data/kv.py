# stockroom/data/kv.py
import redis

from stockroom.utils.settings import REDIS_URL

#klient tworzony leniwie, from_url nie laczy sie od razu
_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    global _client
    if _client is None:
        _client = redis.Redis.from_url(REDIS_URL, decode_responses=True)
    return _client
