import pytest
from fastapi.testclient import TestClient

from buzzwall.config import Settings
from buzzwall.main import create_app
from buzzwall.managers.rate_limit import RateLimiter
from buzzwall.managers.tasks import TaskStatusStore
from buzzwall.managers.words import WordStore


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def settings():
    return Settings(
        environment='development',
        max_words=3,
        rate_limit_max_requests=5,
        rate_limit_sweep_probability=0.0,
        admin_token=None,
    )


@pytest.fixture()
def word_store(clock, settings):
    return WordStore(max_words=settings.max_words, ttl_sec=settings.word_ttl_sec, clock=clock)


@pytest.fixture()
def limiter(clock, settings):
    return RateLimiter(max_requests=settings.max_requests, window_sec=settings.rate_limit_window_sec, clock=clock)


@pytest.fixture()
def task_store(clock):
    return TaskStatusStore(clock=clock)


@pytest.fixture()
def asgi_app(settings, word_store, limiter, task_store):
    return create_app(settings=settings, words=word_store, limiter=limiter, tasks=task_store)


@pytest.fixture()
def client(asgi_app):
    with TestClient(asgi_app) as c:
        yield c


@pytest.fixture()
def emitted(asgi_app, monkeypatch):
    """Record Socket.IO broadcasts instead of sending them."""
    events = []
    sio = asgi_app.other_asgi_app.state.sio

    async def fake_emit(event, data=None, **kwargs):
        events.append((event, data))

    monkeypatch.setattr(sio, 'emit', fake_emit)
    return events
