from __future__ import annotations
import logging
from typing import Optional

import socketio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .logging_setup import setup_logging
from .managers.rate_limit import RateLimiter
from .managers.tasks import TaskStatusStore
from .managers.words import WordStore
from .routers import tasks as tasks_router
from .routers import words as words_router
from .validation import SubmissionError

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    words: Optional[WordStore] = None,
    limiter: Optional[RateLimiter] = None,
    tasks: Optional[TaskStatusStore] = None,
):
    """Build the ASGI app: FastAPI for REST with Socket.IO mounted alongside.

    Each store is created once here (unless passed in) and shared by every
    request through ``app.state``. Nothing is shared across processes.
    """
    settings = settings or get_settings()

    # Socket.IO server (ASGI)
    origins = '*' if '*' in settings.cors_allow_origins else settings.cors_allow_origins
    sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins=origins)
    app = FastAPI(title="Buzzwall Server", version="0.1.0")

    app.state.settings = settings
    app.state.sio = sio
    if words is None:
        words = WordStore(max_words=settings.max_words, ttl_sec=settings.word_ttl_sec)
    if limiter is None:
        limiter = RateLimiter(max_requests=settings.max_requests, window_sec=settings.rate_limit_window_sec)
    if tasks is None:
        tasks = TaskStatusStore(ttl_sec=settings.task_ttl_sec)
    app.state.words = words
    app.state.limiter = limiter
    app.state.tasks = tasks

    # CORS for REST
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.exception_handler(SubmissionError)
    async def submission_error(request: Request, exc: SubmissionError):
        return JSONResponse({'error': str(exc)}, status_code=400)

    app.include_router(words_router.router)
    app.include_router(tasks_router.router)

    @app.get('/health')
    async def health():
        return {'status': 'ok'}

    # Socket.IO Events
    @sio.event
    async def connect(sid, environ, auth=None):
        # Late joiners get the whole wall straight away
        await sio.emit('words:list', [w.model_dump() for w in words.list()], to=sid)

    @sio.on('words:list')
    async def words_list(sid):
        await sio.emit('words:list', [w.model_dump() for w in words.list()], to=sid)

    logger.info(
        "Buzzwall ready (%s): max_words=%d ttl=%ss rate=%d/%ss",
        settings.environment, settings.max_words, settings.word_ttl_sec,
        settings.max_requests, settings.rate_limit_window_sec,
    )
    # Mount Socket.IO ASGI application
    return socketio.ASGIApp(sio, other_asgi_app=app)


def build_application():
    """Process entry point: configure logging once, then build the app."""
    settings = get_settings()
    setup_logging(level=settings.log_level)
    return create_app(settings)


# Export ASGI app for uvicorn
application = build_application()

# For local running: uvicorn buzzwall.main:application --reload --host 0.0.0.0 --port 8000
