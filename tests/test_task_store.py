from buzzwall.managers.tasks import TaskStatusStore
from buzzwall.schemas import MusicDetail, TaskResult


def test_new_task_starts_pending(task_store):
    result = task_store.set('t1')
    assert result.status == 'pending'
    assert task_store.get('t1') == result
    assert task_store.get('missing') is None


def test_set_merges_into_existing(task_store, clock):
    task_store.set('t1', status='processing', audioUrl='https://cdn/full.mp3')
    first = task_store.get('t1').updatedAt
    clock.advance(5)
    merged = task_store.set('t1', status='completed')
    assert merged.audioUrl == 'https://cdn/full.mp3'
    assert merged.status == 'completed'
    assert merged.updatedAt == first + 5000


def test_sweep_drops_stale_tasks(clock):
    store = TaskStatusStore(ttl_sec=60, clock=clock)
    store.set('old')
    clock.advance(30)
    store.set('new')
    clock.advance(30)
    assert store.sweep() == 1
    assert store.get('old') is None
    assert store.get('new') is not None


def test_playable_url_prefers_stream():
    result = TaskResult(
        taskId='t',
        audioUrl='full',
        musicDetails=[MusicDetail(audioUrl='detail-full', streamAudioUrl='detail-stream')],
    )
    assert result.playable_url == 'detail-stream'
    assert TaskResult(taskId='t', audioUrl='full').playable_url == 'full'
    assert TaskResult(taskId='t').playable_url is None
