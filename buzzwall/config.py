from __future__ import annotations
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env', env_file_encoding='utf-8', extra='ignore', populate_by_name=True,
    )

    environment: str = Field(default='development', alias='APP_ENV')

    # Word wall
    max_words: int = Field(default=200, alias='MAX_WORDS')
    word_ttl_sec: float = Field(default=30 * 60, alias='WORD_TTL_SEC')
    max_word_length: int = Field(default=50, alias='MAX_WORD_LENGTH')
    max_batch_size: int = Field(default=80, alias='MAX_BATCH_SIZE')

    # Rate limiting
    rate_limit_window_sec: float = Field(default=60, alias='RATE_LIMIT_WINDOW_SEC')
    rate_limit_max_requests: Optional[int] = Field(default=None, alias='RATE_LIMIT_MAX_REQUESTS')
    rate_limit_sweep_probability: float = Field(default=0.1, alias='RATE_LIMIT_SWEEP_PROBABILITY')

    # Music task cache
    task_ttl_sec: float = Field(default=60 * 60, alias='TASK_TTL_SEC')

    admin_token: Optional[str] = Field(default=None, alias='ADMIN_TOKEN')
    cors_allow_origins: List[str] = Field(default=['*'], alias='CORS_ALLOW_ORIGINS')
    log_level: str = Field(default='INFO', alias='LOG_LEVEL')

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == 'production'

    @property
    def max_requests(self) -> int:
        if self.rate_limit_max_requests is not None:
            return self.rate_limit_max_requests
        # Many phones share one NAT address at demos; be generous outside production
        return 300 if self.is_production else 500


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
