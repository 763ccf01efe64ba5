from __future__ import annotations
import json
import logging
import random
from typing import Optional, Union
from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..config import Settings
from ..deps import get_rate_limiter, get_settings, get_sio, get_word_store
from ..managers.rate_limit import RateLimiter
from ..managers.words import WordStore
from ..schemas import BatchAdded, WordAdded, WordDuplicate, WordList, WordStats, WordSubmission
from ..validation import SubmissionError, clean_batch, clean_word

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/api/words', tags=['words'])

LOCAL_HOSTS = {'localhost', '127.0.0.1'}


def client_id(request: Request) -> str:
    forwarded = request.headers.get('x-forwarded-for')
    if forwarded:
        return forwarded.split(',')[0].strip()
    real_ip = request.headers.get('x-real-ip')
    if real_ip:
        return real_ip
    if request.client and request.client.host:
        return request.client.host
    return 'unknown'


def may_clear(request: Request, admin_token: Optional[str]) -> bool:
    # No token configured means a local/dev install
    if not admin_token:
        return True
    if request.headers.get('authorization') == f'Bearer {admin_token}':
        return True
    origin = request.headers.get('origin')
    host = request.headers.get('host')
    if not origin or not host:
        return False
    if origin in (f'http://{host}', f'https://{host}'):
        return True
    try:
        return urlsplit(origin).hostname in LOCAL_HOSTS
    except ValueError:
        return False


async def _read_submission(request: Request) -> WordSubmission:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise SubmissionError('Invalid request')
    try:
        return WordSubmission.model_validate(body)
    except ValidationError:
        raise SubmissionError('Invalid request')


@router.get('', response_model=WordList)
async def list_words(words: WordStore = Depends(get_word_store)):
    return WordList(words=words.list())


@router.get('/stats', response_model=WordStats)
async def word_stats(words: WordStore = Depends(get_word_store)):
    texts = words.texts()
    return WordStats(count=len(texts), texts=texts)


@router.post('', response_model=Union[WordAdded, WordDuplicate, BatchAdded])
async def submit_words(
    request: Request,
    words: WordStore = Depends(get_word_store),
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
    sio=Depends(get_sio),
):
    cid = client_id(request)
    decision = limiter.check(cid)
    if not decision.allowed:
        logger.warning("Rate limit exceeded for %s", cid)
        return JSONResponse(
            {'error': 'Rate limit exceeded. Try again in a minute.'},
            status_code=429,
            headers={
                'X-RateLimit-Remaining': '0',
                'Retry-After': str(int(limiter.window_sec)),
            },
        )

    submission = await _read_submission(request)
    if submission.is_batch:
        texts = clean_batch(submission.words, settings.max_word_length, settings.max_batch_size)
        added = words.add_batch(texts)
        body = BatchAdded(added=len(added), words=added)
    else:
        text = clean_word(submission.word, settings.max_word_length)
        word = words.add(text)
        added = [word] if word is not None else []
        body = WordAdded(word=word) if word is not None else WordDuplicate()

    if random.random() < settings.rate_limit_sweep_probability:
        limiter.sweep()

    if added:
        await sio.emit('words:added', [w.model_dump() for w in added])

    return JSONResponse(
        body.model_dump(),
        headers={'X-RateLimit-Remaining': str(decision.remaining)},
    )


@router.delete('')
async def clear_words(
    request: Request,
    words: WordStore = Depends(get_word_store),
    settings: Settings = Depends(get_settings),
    sio=Depends(get_sio),
):
    if not may_clear(request, settings.admin_token):
        return JSONResponse({'error': 'Unauthorized'}, status_code=401)
    words.clear()
    logger.info("Word wall cleared by %s", client_id(request))
    await sio.emit('words:cleared')
    return {'success': True}
