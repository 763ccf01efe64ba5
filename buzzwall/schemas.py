from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from typing import Any, List, Literal, Optional


class Word(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    # epoch milliseconds
    timestamp: int


class WordSubmission(BaseModel):
    # Either a single `word` or a batch of `words`; entries are checked in validation.py
    word: Any = None
    words: Any = None

    @property
    def is_batch(self) -> bool:
        return isinstance(self.words, list)


class WordList(BaseModel):
    words: List[Word]


class WordAdded(BaseModel):
    success: bool = True
    word: Word


class WordDuplicate(BaseModel):
    success: bool = True
    duplicate: bool = True
    message: str = 'Word already exists'


class BatchAdded(BaseModel):
    success: bool = True
    added: int
    words: List[Word]


class WordStats(BaseModel):
    count: int
    texts: List[str]


TaskStatus = Literal['pending', 'processing', 'completed', 'failed']


class MusicDetail(BaseModel):
    audioUrl: Optional[str] = None
    streamAudioUrl: Optional[str] = None
    title: Optional[str] = None
    duration: Optional[float] = None


class TaskResult(BaseModel):
    taskId: str
    status: TaskStatus = 'pending'
    streamAudioUrl: Optional[str] = None
    audioUrl: Optional[str] = None
    musicDetails: List[MusicDetail] = []
    error: Optional[str] = None
    # epoch milliseconds
    updatedAt: int = 0

    @property
    def playable_url(self) -> Optional[str]:
        # stream URL is ready well before the full download
        first = self.musicDetails[0] if self.musicDetails else None
        return (
            self.streamAudioUrl
            or (first.streamAudioUrl if first else None)
            or self.audioUrl
            or (first.audioUrl if first else None)
        )


class MusicStatus(BaseModel):
    status: Literal['processing', 'completed', 'failed']
    audioUrl: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None
