"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration for the limit catalog tables."""

    model_config = {"env_prefix": "RETIREPLAN_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "RETIREPLAN_REDIS_"}

    enabled: bool = False
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    cache_ttl: int = 300
    decode_responses: bool = True  # cached values are JSON text


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "RETIREPLAN_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    catalog_backend: Literal["memory", "dynamodb"] = "memory"
    seed_path: str | None = None  # JSON facts loaded into the memory catalog at startup

    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
