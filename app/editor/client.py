import httpx
from loguru import logger

from app.errors import DocsError, NotAuthenticatedError, NotFoundError, StorageError, ValidationError
from app.schemas.document import DocumentOut
from app.schemas.version import DayGroupOut, VersionOut

_STATUS_ERRORS = {
    401: NotAuthenticatedError,
    404: NotFoundError,
    422: ValidationError,
}


class DocumentsClient:
    """Async client for the documents API, used by the editor session."""

    def __init__(self, http: httpx.AsyncClient, token: str | None = None):
        self.http = http
        self.token = token

    async def _request(self, method: str, path: str, json: dict | None = None):
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            r = await self.http.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error("{} {} failed: {}", method, path, e)
            raise StorageError(f"Request failed: {e}") from e
        if r.status_code >= 400:
            raise self._error(r)
        if r.status_code == 204 or not r.content:
            return None
        return r.json()

    @staticmethod
    def _error(r: httpx.Response) -> DocsError:
        try:
            body = r.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None
        if not isinstance(detail, str):
            detail = r.reason_phrase or f"HTTP {r.status_code}"
        return _STATUS_ERRORS.get(r.status_code, StorageError)(detail, status=r.status_code)

    async def login(self, email: str, password: str) -> str:
        data = await self._request("POST", "/auth/login", {"email": email, "password": password})
        self.token = data["access_token"]
        return self.token

    async def list_documents(self) -> list[DocumentOut]:
        data = await self._request("GET", "/documents")
        return [DocumentOut.model_validate(d) for d in data]

    async def create_document(self, title: str, content: str = "") -> DocumentOut:
        data = await self._request("POST", "/documents", {"title": title, "content": content})
        return DocumentOut.model_validate(data)

    async def get_document(self, doc_id: int) -> DocumentOut:
        return DocumentOut.model_validate(await self._request("GET", f"/documents/{doc_id}"))

    async def update_document(self, doc_id: int, *, title: str | None = None, content: str | None = None) -> DocumentOut:
        body = {k: v for k, v in (("title", title), ("content", content)) if v is not None}
        return DocumentOut.model_validate(await self._request("PUT", f"/documents/{doc_id}", body))

    async def delete_document(self, doc_id: int) -> None:
        await self._request("DELETE", f"/documents/{doc_id}")

    async def list_versions(self, doc_id: int) -> list[VersionOut]:
        data = await self._request("GET", f"/documents/{doc_id}/versions")
        return [VersionOut.model_validate(v) for v in data]

    async def list_version_groups(self, doc_id: int) -> list[DayGroupOut]:
        data = await self._request("GET", f"/documents/{doc_id}/versions/grouped")
        return [DayGroupOut.model_validate(g) for g in data]

    async def get_version(self, doc_id: int, version_id: int) -> VersionOut:
        return VersionOut.model_validate(await self._request("GET", f"/documents/{doc_id}/versions/{version_id}"))

    async def restore_version(self, doc_id: int, version_id: int) -> DocumentOut:
        data = await self._request("POST", f"/documents/{doc_id}/versions/{version_id}/restore")
        return DocumentOut.model_validate(data)
