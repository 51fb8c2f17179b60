"""
Debounced autosave for free-text notes.

``NotesAutosaver`` records edits locally and persists the latest text once
the writer has been idle for ``delay`` seconds. A failed save is reported
through ``status`` and is never retried on its own; call ``retry()``.
"""

import asyncio
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

import structlog

from components.core.config import get_settings

logger = structlog.get_logger(__name__)

IDLE = "idle"
SAVING = "saving"
SAVED = "saved"
ERROR = "error"

SaveFn = Callable[[str], Awaitable[None]]


class NotesAutosaver:
    def __init__(self, save: SaveFn, delay: Optional[float] = None, initial: str = ""):
        self._save = save
        self.delay = get_settings().autosave_delay if delay is None else delay
        self.text = initial
        self.saved_text = initial
        self.status = IDLE
        self.last_saved_at: Optional[datetime] = None
        self.last_error: Optional[Exception] = None
        self._timer: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    @property
    def has_unsaved_changes(self) -> bool:
        return self.text != self.saved_text

    def update(self, text: str) -> None:
        """Record an edit and restart the idle timer."""
        self.text = text
        self._cancel_timer()
        if self.has_unsaved_changes:
            self._timer = asyncio.get_running_loop().create_task(self._save_after_delay())

    async def _save_after_delay(self) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None
        await self._persist()

    async def _persist(self) -> None:
        async with self._lock:
            text = self.text
            if text == self.saved_text:
                return
            self.status = SAVING
            try:
                await self._save(text)
            except Exception as exc:
                self.status = ERROR
                self.last_error = exc
                logger.warning("notes_autosave_failed", error=str(exc))
                return
            self.saved_text = text
            self.status = SAVED
            self.last_error = None
            self.last_saved_at = datetime.now(timezone.utc)

    async def retry(self) -> None:
        """Re-submit the current text right away after a failed save."""
        self._cancel_timer()
        await self._persist()

    async def flush(self) -> None:
        """Persist pending text now instead of waiting for the timer."""
        self._cancel_timer()
        if self.has_unsaved_changes:
            await self._persist()

    def close(self) -> None:
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
