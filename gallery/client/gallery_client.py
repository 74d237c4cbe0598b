# File: gallery/client/gallery_client.py
"""Async HTTP client for the guest gallery routes."""
from pathlib import Path
import uuid
from typing import Any, Dict, List, Optional
import httpx
import logging

from gallery.schemas.feedback import FeedbackSubmitResult
from gallery.schemas.photo import PhotoOut

logger = logging.getLogger(__name__)


class GalleryClient:
    def __init__(
        self,
        base_url: str,
        guest_token: Optional[str] = None,
        api_prefix: str = "/api/v1",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.guest_token = guest_token
        self.api_prefix = api_prefix.rstrip("/")
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "GalleryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _url(self, slug: str, path: str = "") -> str:
        return f"{self.api_prefix}/gallery/{slug}{path}"

    def _headers(self) -> Dict[str, str]:
        if self.guest_token:
            return {"X-Guest-Token": self.guest_token}
        return {}

    async def request_guest_token(self, slug: str) -> str:
        response = await self._client.post(self._url(slug, "/guest-token"), headers=self._headers())
        response.raise_for_status()
        self.guest_token = response.json()["guest_token"]
        return self.guest_token

    async def list_photos(
        self,
        slug: str,
        category_id: Optional[int] = None,
        liked: bool = False,
        favorited: bool = False,
        operator: str = "OR",
    ) -> List[PhotoOut]:
        params: Dict[str, Any] = {}
        if category_id is not None:
            params["category_id"] = category_id
        if liked or favorited:
            params.update({"liked": liked, "favorited": favorited, "operator": operator})

        response = await self._client.get(self._url(slug, "/photos"), params=params, headers=self._headers())
        response.raise_for_status()
        return [PhotoOut(**item) for item in response.json()]

    async def download_photo(self, slug: str, photo_id: int, filename: str, dest_dir: Path) -> Path:
        """Stream one original into ``dest_dir`` and return the written path.

        The file is named ``<photo_id>_<filename>`` so photos sharing a
        filename never collide. Bytes land in a ``.part`` file that replaces
        the target only once the whole body has arrived; on any failure the
        partial file is removed and an earlier copy of the target is untouched.
        """
        dest_dir = Path(dest_dir)
        dest_dir.mkdir(parents=True, exist_ok=True)
        target = dest_dir / f"{photo_id}_{Path(filename).name}"
        partial = target.with_name(f".{target.name}.{uuid.uuid4().hex}.part")

        try:
            async with self._client.stream(
                "GET", self._url(slug, f"/photos/{photo_id}/download"), headers=self._headers()
            ) as response:
                response.raise_for_status()
                with open(partial, "wb") as fh:
                    async for chunk in response.aiter_bytes():
                        fh.write(chunk)
            partial.replace(target)
        finally:
            if partial.exists():
                partial.unlink()

        logger.debug(f"Downloaded photo {photo_id} to {target}")
        return target

    async def submit_feedback(
        self,
        slug: str,
        photo_id: int,
        feedback_type: str,
        rating: Optional[int] = None,
        comment: Optional[str] = None,
        guest_name: Optional[str] = None,
        guest_email: Optional[str] = None,
    ) -> FeedbackSubmitResult:
        payload = {
            "feedback_type": feedback_type,
            "rating": rating,
            "comment": comment,
            "guest_name": guest_name,
            "guest_email": guest_email,
        }
        response = await self._client.post(
            self._url(slug, f"/photos/{photo_id}/feedback"),
            json={k: v for k, v in payload.items() if v is not None},
            headers=self._headers(),
        )
        response.raise_for_status()
        return FeedbackSubmitResult(**response.json())
