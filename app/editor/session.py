import asyncio
from datetime import datetime, timezone
from typing import Callable

from loguru import logger

from app.config import settings
from app.editor.autosave import Autosaver
from app.editor.client import DocumentsClient
from app.editor.state import EditorState
from app.errors import DocsError
from app.versioning import presenter


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_save_status(last_saved: datetime | None, now: datetime) -> str:
    if last_saved is None:
        return "Not saved"
    seconds = int((presenter.as_utc(now) - presenter.as_utc(last_saved)).total_seconds())
    minutes = seconds // 60
    if seconds < 30:
        return "Saved just now"
    if minutes == 0:
        return f"Saved {seconds} seconds ago"
    if minutes == 1:
        return "Saved 1 minute ago"
    if minutes < 60:
        return f"Saved {minutes} minutes ago"
    local = presenter.as_utc(last_saved).astimezone(presenter.display_zone())
    return f"Saved at {local:%H:%M}"


class EditorSession:
    """Owns the editor state for one open document.

    Edits only touch local drafts and the autosave timer; storage calls
    happen in ``save``, ``load_versions`` and ``restore``. Failures land in
    ``state.error`` instead of propagating, so the editing session survives
    them.
    """

    def __init__(
        self,
        client: DocumentsClient,
        document_id: int,
        *,
        debounce_seconds: float | None = None,
        refresh_seconds: float | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.client = client
        self.document_id = document_id
        self.clock = clock
        self.refresh_seconds = refresh_seconds or settings.relative_time_refresh_seconds
        self.autosaver = Autosaver(
            self.save,
            delay=debounce_seconds if debounce_seconds is not None else settings.autosave_debounce_seconds,
        )
        self.state = EditorState()

    async def open(self) -> EditorState:
        self.state = self.state.with_loading()
        try:
            doc = await self.client.get_document(self.document_id)
        except DocsError as e:
            self.state = self.state.with_error(e.message)
            return self.state
        self.state = self.state.with_document(doc).with_loading(False)
        return self.state

    def edit_title(self, title: str) -> EditorState:
        self.state = self.state.with_draft(title=title)
        self.autosaver.touch()
        return self.state

    def edit_content(self, content: str) -> EditorState:
        self.state = self.state.with_draft(content=content)
        self.autosaver.touch()
        return self.state

    async def save(self) -> EditorState:
        doc = self.state.document
        if doc is None:
            return self.state
        title = self.state.draft_title
        if not title.strip():
            title = doc.title
        content = self.state.draft_content
        if title == doc.title and content == doc.content:
            return self.state

        self.state = self.state.with_saving()
        try:
            saved = await self.client.update_document(self.document_id, title=title, content=content)
        except DocsError as e:
            logger.warning("save of document {} failed: {}", self.document_id, e.message)
            self.state = self.state.with_error(e.message)
            return self.state
        self.state = self.state.saved(saved, self.clock())
        return self.state

    async def flush(self) -> EditorState:
        await self.autosaver.flush()
        return self.state

    async def load_versions(self) -> EditorState:
        self.state = self.state.with_versions_loading()
        try:
            versions = await self.client.list_versions(self.document_id)
        except DocsError as e:
            self.state = self.state.with_error(e.message)
            return self.state
        self.state = self.state.with_versions(versions, self._relative_times(versions))
        return self.state

    async def restore(self, version_id: int) -> EditorState:
        # Pending edits would overwrite the restored state once the timer fires,
        # and a save already on the wire must land before the restore does.
        self.autosaver.cancel()
        await self.autosaver.wait_idle()
        try:
            doc = await self.client.restore_version(self.document_id, version_id)
        except DocsError as e:
            logger.warning("restore of document {} to version {} failed: {}", self.document_id, version_id, e.message)
            self.state = self.state.with_error(e.message)
            return self.state
        self.state = self.state.with_document(doc)
        return await self.load_versions()

    def clear_error(self) -> EditorState:
        self.state = self.state.cleared_error()
        return self.state

    def day_groups(self, now: datetime | None = None) -> list[presenter.DayGroup]:
        return presenter.group_by_day(self.state.versions, now or self.clock())

    def save_status(self, now: datetime | None = None) -> str:
        return format_save_status(self.state.last_saved_at, now or self.clock())

    def refresh_relative_times(self, now: datetime | None = None) -> EditorState:
        self.state = self.state.with_relative_times(self._relative_times(self.state.versions, now))
        return self.state

    async def run_relative_time_refresh(self, stop: asyncio.Event) -> None:
        """Recompute relative-time labels on a fixed interval until ``stop`` is set."""
        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.refresh_seconds)
            except asyncio.TimeoutError:
                self.refresh_relative_times()

    async def close(self) -> None:
        await self.autosaver.close()

    def _relative_times(self, versions, now: datetime | None = None) -> dict[int, str]:
        now = now or self.clock()
        return {v.id: presenter.format_relative_time(v.created_at, now) for v in versions}
