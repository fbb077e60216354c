import logging

import redis

from coursereviews.config import RedisSettings, config

logger = logging.getLogger("coursereviews")


def redis_connection_kwargs(settings: RedisSettings = config) -> dict:
    return {
        "host": settings.REDIS_HOST,
        "port": settings.REDIS_PORT,
        "password": settings.REDIS_PASSWORD,
    }


# Make Redis client optional
redis_client = None
try:
    redis_client = redis.Redis(
        **redis_connection_kwargs(),
        decode_responses=True,
        socket_connect_timeout=2,
    )
    # Test the connection
    redis_client.ping()
except redis.RedisError:
    logger.warning("Redis not available. Session revocation will be disabled.")
    redis_client = None


def add_to_blacklist(token: str, expires_in: int) -> None:
    if redis_client:
        redis_client.setex(f"blacklist_token:{token}", expires_in, "1")


def is_blacklisted(token: str) -> bool:
    if redis_client:
        return redis_client.exists(f"blacklist_token:{token}") == 1
    return False
