# File: gallery/client/photo_grid.py
"""Selection, lightbox and download state behind the guest photo grid.

Rendering is left to the front end; this module holds the state machine and
the calls it makes, so the same rules apply to every client.
"""
import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Set
import logging

from gallery.client.gallery_client import GalleryClient
from gallery.models.photo import PhotoType
from gallery.schemas.photo import PhotoOut

logger = logging.getLogger(__name__)

PROTECTION_LEVELS = ("basic", "standard", "enhanced", "maximum")

Notifier = Callable[[str, str], None]
Tracker = Callable[[str, Dict[str, Any]], None]


def log_notification(level: str, message: str) -> None:
    logger.info(f"[{level}] {message}")


def log_analytics(event_name: str, data: Dict[str, Any]) -> None:
    logger.debug(f"analytics {event_name}: {data}")


@dataclass
class ThumbnailBadge:
    kind: str  # "comments" | "rating"
    label: str
    title: str


@dataclass
class ThumbnailView:
    photo_id: int
    src: Optional[str]
    alt: str
    is_selected: bool
    show_selection_checkbox: bool
    show_download_button: bool
    is_collage: bool
    badges: List[ThumbnailBadge] = field(default_factory=list)

    # Options handed to the protected image loader
    protect_from_download: bool = False
    use_canvas_rendering: bool = False
    fragment_grid: bool = False
    block_keyboard_shortcuts: bool = False
    detect_print_screen: bool = False
    detect_devtools: bool = False
    watermark_text: Optional[str] = None

    @classmethod
    def for_photo(
        cls,
        photo: PhotoOut,
        *,
        is_selected: bool = False,
        is_selection_mode: bool = False,
        feedback_enabled: bool = False,
        allow_downloads: bool = True,
        protection_level: str = "standard",
        use_enhanced_protection: bool = False,
    ) -> "ThumbnailView":
        badges: List[ThumbnailBadge] = []
        if feedback_enabled and (photo.has_feedback or photo.average_rating > 0 or photo.comment_count > 0):
            if photo.comment_count > 0:
                badges.append(
                    ThumbnailBadge("comments", str(photo.comment_count), f"{photo.comment_count} comments")
                )
            if photo.average_rating > 0:
                rating = f"{photo.average_rating:.1f}"
                badges.append(ThumbnailBadge("rating", rating, f"Rating: {rating}"))

        return cls(
            photo_id=photo.id,
            src=photo.thumbnail_url or photo.url,
            alt=photo.filename,
            is_selected=is_selected,
            show_selection_checkbox=is_selection_mode,
            show_download_button=allow_downloads and not is_selection_mode,
            is_collage=photo.type == PhotoType.COLLAGE.value,
            badges=badges,
            protect_from_download=not allow_downloads or use_enhanced_protection,
            use_canvas_rendering=protection_level == "maximum",
            fragment_grid=protection_level in ("enhanced", "maximum"),
            block_keyboard_shortcuts=use_enhanced_protection,
            detect_print_screen=use_enhanced_protection,
            detect_devtools=protection_level == "maximum",
            watermark_text="Protected" if use_enhanced_protection else None,
        )


class PhotoGrid:
    """Single-select opens the lightbox; multi-select collects photo ids.

    Multi-select is entered through ``toggle_selection_mode`` or a ctrl/cmd
    click. Changing the category always clears the selection.
    """

    def __init__(
        self,
        photos: Sequence[PhotoOut],
        slug: str,
        client: GalleryClient,
        *,
        category_id: Optional[int] = None,
        feedback_enabled: bool = False,
        allow_downloads: bool = True,
        protection_level: str = "standard",
        use_enhanced_protection: bool = False,
        download_dir: Path = Path("."),
        notify: Optional[Notifier] = None,
        track: Optional[Tracker] = None,
    ):
        if protection_level not in PROTECTION_LEVELS:
            raise ValueError(f"Unknown protection level: {protection_level}")

        self.photos: List[PhotoOut] = list(photos)
        self.slug = slug
        self.client = client
        self.category_id = category_id
        self.feedback_enabled = feedback_enabled
        self.allow_downloads = allow_downloads
        self.protection_level = protection_level
        self.use_enhanced_protection = use_enhanced_protection
        self.download_dir = Path(download_dir)
        self.notify = notify or log_notification
        self.track = track or log_analytics

        self.selected_photo_index: Optional[int] = None
        self.selected_photos: Set[int] = set()
        self.is_selection_mode = False
        self.is_downloading = False

    # ---------------------------
    # View state
    # ---------------------------
    @property
    def show_selection_controls(self) -> bool:
        return len(self.photos) > 1

    @property
    def lightbox_photo(self) -> Optional[PhotoOut]:
        if self.selected_photo_index is None:
            return None
        return self.photos[self.selected_photo_index]

    def thumbnails(self) -> List[ThumbnailView]:
        return [
            ThumbnailView.for_photo(
                photo,
                is_selected=photo.id in self.selected_photos,
                is_selection_mode=self.is_selection_mode,
                feedback_enabled=self.feedback_enabled,
                allow_downloads=self.allow_downloads,
                protection_level=self.protection_level,
                use_enhanced_protection=self.use_enhanced_protection,
            )
            for photo in self.photos
        ]

    def set_category(self, category_id: Optional[int], photos: Optional[Sequence[PhotoOut]] = None) -> None:
        if photos is not None:
            self.photos = list(photos)
            self.selected_photo_index = None
        if category_id != self.category_id:
            self.category_id = category_id
            self.selected_photos = set()

    # ---------------------------
    # Selection
    # ---------------------------
    def handle_photo_click(self, index: int, ctrl_key: bool = False, meta_key: bool = False) -> None:
        photo_id = self.photos[index].id
        if ctrl_key or meta_key:
            self.is_selection_mode = True
            self._toggle(photo_id)
        elif self.is_selection_mode:
            self._toggle(photo_id)
        else:
            self.selected_photo_index = index

    def _toggle(self, photo_id: int) -> None:
        if photo_id in self.selected_photos:
            self.selected_photos.discard(photo_id)
        else:
            self.selected_photos.add(photo_id)

    def toggle_selection_mode(self) -> None:
        self.is_selection_mode = not self.is_selection_mode
        self.selected_photos = set()

    def select_all(self) -> None:
        self.is_selection_mode = True
        self.selected_photos = {photo.id for photo in self.photos}

    def deselect_all(self) -> None:
        self.selected_photos = set()

    def close_lightbox(self) -> None:
        self.selected_photo_index = None

    # ---------------------------
    # Downloads
    # ---------------------------
    async def download(self, photo: PhotoOut) -> Path:
        self.track("download", {"photo_id": photo.id, "gallery": self.slug, "bulk": False})
        return await self.client.download_photo(self.slug, photo.id, photo.filename, self.download_dir)

    async def _download_quietly(self, photo: PhotoOut) -> Optional[Path]:
        try:
            return await self.client.download_photo(self.slug, photo.id, photo.filename, self.download_dir)
        except Exception as e:
            logger.warning(f"Download of photo {photo.id} from {self.slug} failed: {str(e)}")
            return None

    async def download_selected(self) -> int:
        """Download every selected photo at once; returns how many succeeded."""
        if not self.selected_photos:
            return 0

        selected = [photo for photo in self.photos if photo.id in self.selected_photos]
        self.notify("info", f"Downloading {len(selected)} photos...")

        self.is_downloading = True
        try:
            results = await asyncio.gather(*(self._download_quietly(photo) for photo in selected))
        finally:
            self.is_downloading = False

        downloaded = sum(1 for path in results if path is not None)
        if downloaded == 0:
            self.notify("error", "Download failed. Please try again.")
            return 0

        self.notify("success", f"Downloaded {downloaded} photos")
        self.track("bulk_download", {"gallery": self.slug, "photo_count": len(selected)})

        self.selected_photos = set()
        self.is_selection_mode = False
        return downloaded
