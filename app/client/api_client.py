"""HTTP client for the LinkUp backend (photo uploads and prompts)."""

from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field

from app.config.settings import settings
from app.modules.profiles.schemas import Prompt

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class UploadedPhoto(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    key: str
    id: str
    image_url: str = Field(alias="imageUrl")
    position: int
    is_primary: bool = Field(False, alias="isPrimary")


class ApiClient:
    def __init__(
        self,
        token_provider: TokenProvider,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.token_provider = token_provider
        # uploads are single requests with no timeout or retry
        self._client = httpx.Client(
            base_url=base_url or settings.api_url,
            transport=transport,
            timeout=None,
        )

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _headers(self) -> Dict[str, str]:
        token = self.token_provider()
        if not token:
            raise ApiError(401, "Not signed in")
        return {"Authorization": f"Bearer {token}"}

    def _request(self, method: str, path: str, **kwargs) -> dict:
        response = self._client.request(method, path, headers=self._headers(), **kwargs)
        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.status_code >= 400 or body.get("success") is False:
            message = body.get("error") or response.reason_phrase or "Request failed"
            logger.error(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message)
        return body

    def upload_photo(
        self,
        content: bytes,
        filename: str = "photo.jpg",
        content_type: str = "image/jpeg",
        replace_id: Optional[str] = None,
    ) -> UploadedPhoto:
        data = {"replaceId": replace_id} if replace_id else None
        body = self._request(
            "POST", "/upload", files={"image": (filename, content, content_type)}, data=data
        )
        return UploadedPhoto.model_validate(body)

    def delete_photo(self, photo_id: str) -> None:
        self._request("DELETE", f"/upload/{photo_id}")

    def reorder_photos(self, order: Sequence[Tuple[str, int]]) -> None:
        photos = [{"id": photo_id, "position": position} for photo_id, position in order]
        self._request("PATCH", "/upload/reorder", json={"photos": photos})

    def save_prompts(self, prompts: Sequence[Prompt]) -> List[Prompt]:
        payload = [{"question": p.question, "answer": p.answer} for p in prompts]
        body = self._request("POST", "/prompts", json={"prompts": payload})
        return [Prompt.model_validate(p) for p in body.get("prompts") or []]
