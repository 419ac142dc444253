import json
import redis
from redis.exceptions import RedisError

from app.core.config import settings
from app.core.logging_config import get_logger

logger = get_logger()

_redis_client = None

DIRECTORY_PREFIX = "venues:directory:"


def get_redis_client():
    global _redis_client

    if _redis_client is not None:
        return _redis_client

    if not settings.REDIS_URL:
        return None

    try:
        client = redis.Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        client.ping()
        logger.info("Redis connected")
        _redis_client = client
        return _redis_client
    except RedisError as e:
        logger.warning(f"Redis unavailable: {e}")
        return None


def get_cache(key: str):
    client = get_redis_client()
    if not client:
        return None
    try:
        data = client.get(key)
        return json.loads(data) if data else None
    except RedisError:
        return None


def set_cache(key: str, value, ttl: int = 60):
    client = get_redis_client()
    if not client:
        return
    try:
        client.setex(key, ttl, json.dumps(value, default=str))
    except RedisError:
        pass


def directory_cache_key(search: str | None, city: str | None, game_type: str | None):
    return f"{DIRECTORY_PREFIX}{(search or '').lower()}|{city or 'all'}|{game_type or 'all'}"


def invalidate_directory_cache():
    client = get_redis_client()
    if not client:
        return
    try:
        keys = list(client.scan_iter(match=f"{DIRECTORY_PREFIX}*"))
        if keys:
            client.delete(*keys)
    except RedisError:
        pass
