from .gallery_client import GalleryClient
from .photo_grid import PhotoGrid, ThumbnailBadge, ThumbnailView

__all__ = ["GalleryClient", "PhotoGrid", "ThumbnailBadge", "ThumbnailView"]
