import redis.asyncio as redis

from settings import redis_settings

redis_client = redis.Redis.from_url(url=redis_settings.url, decode_responses=True)
