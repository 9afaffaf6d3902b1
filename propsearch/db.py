"""
Database connection and initialization.
"""

import logging
from typing import Optional

import asyncpg
import redis.asyncio as redis

from .config import DatabaseConfig, get_search_settings

logger = logging.getLogger(__name__)

# Global connection pools
pg_pool: Optional[asyncpg.Pool] = None
redis_client: Optional[redis.Redis] = None


async def init_db(config: Optional[DatabaseConfig] = None, use_redis: bool = False):
    """
    Initialize database connections.

    Args:
        config: Connection settings (default: from environment)
        use_redis: Also connect to Redis (shared geocode cache)
    """
    global pg_pool, redis_client
    config = config or get_search_settings().database

    # PostgreSQL
    try:
        pg_pool = await asyncpg.create_pool(
            config.database_url,
            min_size=config.min_pool_size,
            max_size=config.max_pool_size,
        )
        logger.info("PostgreSQL connection pool created")
    except Exception as e:
        logger.error(f"Failed to connect to PostgreSQL: {e}")
        raise

    if not use_redis:
        return

    # Redis
    try:
        redis_client = redis.from_url(config.redis_url, decode_responses=True)
        await redis_client.ping()
        logger.info("Redis connection established")
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        raise


async def close_db():
    """Close database connections"""
    global pg_pool, redis_client

    if pg_pool:
        await pg_pool.close()
        pg_pool = None
        logger.info("PostgreSQL connection pool closed")

    if redis_client:
        await redis_client.close()
        redis_client = None
        logger.info("Redis connection closed")


def get_pg_pool() -> asyncpg.Pool:
    """Get PostgreSQL connection pool"""
    if pg_pool is None:
        raise RuntimeError("Database not initialized")
    return pg_pool


def get_redis() -> redis.Redis:
    """Get Redis client"""
    if redis_client is None:
        raise RuntimeError("Redis not initialized")
    return redis_client
