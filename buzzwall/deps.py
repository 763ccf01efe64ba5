from __future__ import annotations
from fastapi import Request

from .config import Settings
from .managers.rate_limit import RateLimiter
from .managers.tasks import TaskStatusStore
from .managers.words import WordStore

# Stores are built once in create_app() and hung off app.state;
# handlers reach them through these dependencies.


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_word_store(request: Request) -> WordStore:
    return request.app.state.words


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.limiter


def get_task_store(request: Request) -> TaskStatusStore:
    return request.app.state.tasks


def get_sio(request: Request):
    return request.app.state.sio
