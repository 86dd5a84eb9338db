from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.document import DocumentOut
from app.schemas.version import VersionOut


class EditorState(BaseModel):
    """Snapshot of everything the editor shows for one open document.

    Instances are immutable; every setter returns a new state.
    """

    model_config = ConfigDict(frozen=True)

    document: DocumentOut | None = None
    draft_title: str = ""
    draft_content: str = ""
    versions: tuple[VersionOut, ...] = ()
    relative_times: dict[int, str] = Field(default_factory=dict)
    loading: bool = False
    versions_loading: bool = False
    saving: bool = False
    error: str | None = None
    last_saved_at: datetime | None = None

    @property
    def dirty(self) -> bool:
        if self.document is None:
            return False
        return (self.draft_title, self.draft_content) != (self.document.title, self.document.content)

    def with_document(self, document: DocumentOut, *, reset_drafts: bool = True) -> "EditorState":
        update = {"document": document}
        if reset_drafts:
            update.update(draft_title=document.title, draft_content=document.content)
        return self.model_copy(update=update)

    def with_draft(self, *, title: str | None = None, content: str | None = None) -> "EditorState":
        update = {}
        if title is not None:
            update["draft_title"] = title
        if content is not None:
            update["draft_content"] = content
        return self.model_copy(update=update)

    def with_versions(self, versions, relative_times: dict[int, str]) -> "EditorState":
        return self.model_copy(update={
            "versions": tuple(versions),
            "relative_times": dict(relative_times),
            "versions_loading": False,
        })

    def with_relative_times(self, relative_times: dict[int, str]) -> "EditorState":
        return self.model_copy(update={"relative_times": dict(relative_times)})

    def with_loading(self, loading: bool = True) -> "EditorState":
        update = {"loading": loading}
        if loading:
            update["error"] = None
        return self.model_copy(update=update)

    def with_versions_loading(self, loading: bool = True) -> "EditorState":
        return self.model_copy(update={"versions_loading": loading})

    def with_saving(self, saving: bool = True) -> "EditorState":
        return self.model_copy(update={"saving": saving})

    def saved(self, document: DocumentOut, at: datetime) -> "EditorState":
        return self.model_copy(update={"document": document, "last_saved_at": at, "saving": False})

    def with_error(self, message: str) -> "EditorState":
        return self.model_copy(update={
            "error": message,
            "loading": False,
            "versions_loading": False,
            "saving": False,
        })

    def cleared_error(self) -> "EditorState":
        return self.model_copy(update={"error": None})
