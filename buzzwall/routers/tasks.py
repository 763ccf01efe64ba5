from __future__ import annotations
import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..deps import get_task_store
from ..managers.tasks import TaskStatusStore
from ..schemas import MusicStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/api', tags=['music'])

COMPLETED = {'completed', 'SUCCESS'}
FAILED = {'failed', 'FAILED'}


def parse_callback(body: dict) -> dict:
    """Map a provider callback payload onto TaskResult fields.

    The provider is not consistent about nesting, so most values may sit at
    the top level or under ``data``.
    """
    data = body.get('data') if isinstance(body.get('data'), dict) else {}
    status = body.get('status') or data.get('status')
    status = status if isinstance(status, str) else None
    code = body.get('code')
    code = code if isinstance(code, int) else None

    failed = status in FAILED or (code is not None and code >= 400)
    completed = status in COMPLETED or code == 200

    details = data.get('musicDetails') or body.get('musicDetails') or []
    if not isinstance(details, list):
        details = []
    first = details[0] if details and isinstance(details[0], dict) else {}
    fields = {
        'status': 'failed' if failed else 'completed' if completed else 'processing',
        'audioUrl': first.get('audioUrl') or data.get('audioUrl') or body.get('audioUrl'),
        'musicDetails': [d for d in details if isinstance(d, dict)],
        'error': str(body.get('msg') or body.get('error') or 'Generation failed') if failed else None,
    }
    stream_url = first.get('streamAudioUrl') or data.get('streamAudioUrl') or body.get('streamAudioUrl')
    if stream_url:
        fields['streamAudioUrl'] = stream_url
    return fields


@router.post('/webhooks/music')
async def music_callback(request: Request, tasks: TaskStatusStore = Depends(get_task_store)):
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.exception("Music webhook sent an unreadable body")
        return JSONResponse({'error': 'Webhook processing failed'}, status_code=500)
    if not isinstance(body, dict):
        body = {}

    data = body.get('data') if isinstance(body.get('data'), dict) else {}
    task_id = body.get('taskId') or body.get('task_id') or data.get('taskId')
    if not task_id:
        logger.error("Webhook missing taskId: %s", body)
        return JSONResponse({'error': 'Missing taskId'}, status_code=400)

    try:
        result = tasks.set(str(task_id), **parse_callback(body))
    except ValidationError:
        logger.exception("Music webhook payload for %s did not fit", task_id)
        return JSONResponse({'error': 'Webhook processing failed'}, status_code=500)
    logger.info("Music task %s updated: %s", result.taskId, result.status)
    tasks.sweep()
    return {'success': True}


@router.get('/webhooks/music')
async def music_callback_ready():
    return {'status': 'Music webhook endpoint ready'}


@router.get('/music-status/{task_id}', response_model=MusicStatus, response_model_exclude_none=True)
async def music_status(task_id: str, tasks: TaskStatusStore = Depends(get_task_store)):
    result = tasks.get(task_id)
    if result is None or result.status in ('pending', 'processing'):
        return MusicStatus(status='processing', message='Music is being generated...')
    if result.status == 'failed':
        return MusicStatus(status='failed', error=result.error or 'Music generation failed')
    url = result.playable_url
    if not url:
        return MusicStatus(status='processing', message='Waiting for audio URL...')
    return MusicStatus(status='completed', audioUrl=url)
