from .storage import (
    ImageUploadError,
    InvalidImageError,
    delete_image,
    upload_image,
    upload_images,
)

__all__ = [
    "ImageUploadError",
    "InvalidImageError",
    "delete_image",
    "upload_image",
    "upload_images",
]
