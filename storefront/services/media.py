# storefront/services/media.py
# Image upload passthrough to Cloudinary through the official SDK.
# The URL Cloudinary returns is handed back to the caller unchanged.

import io
import logging
from typing import Optional

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from decouple import config

logger = logging.getLogger(__name__)

CLOUDINARY_CLOUD_NAME = config("CLOUDINARY_CLOUD_NAME", default="")
CLOUDINARY_API_KEY = config("CLOUDINARY_API_KEY", default="")
CLOUDINARY_API_SECRET = config("CLOUDINARY_API_SECRET", default="")
CLOUDINARY_FOLDER = config("CLOUDINARY_FOLDER", default="educate_a_girl")

ALLOWED_FORMATS = ["jpg", "png", "jpeg", "webp"]


class MediaUploadError(Exception):
    """The media host rejected the file or could not be reached."""


class CloudinarySink:
    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = CLOUDINARY_FOLDER,
        *,
        timeout: float = 30,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def upload(self, filename: str, content: bytes, content_type: Optional[str] = None) -> str:
        """Upload one image and return its `secure_url`."""
        if not self.configured:
            raise MediaUploadError("Media host credentials are not configured")

        stream = io.BytesIO(content)
        stream.name = filename or "upload"
        try:
            result = cloudinary.uploader.upload(
                stream,
                folder=self.folder,
                allowed_formats=ALLOWED_FORMATS,
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                timeout=self.timeout,
            )
        except CloudinaryError as e:
            raise MediaUploadError(str(e) or "File upload failed") from e

        url = result.get("secure_url")
        if not url:
            raise MediaUploadError("File upload failed: media host returned no URL")
        logger.info(f"Uploaded {filename!r} -> {url}")
        return url


sink = CloudinarySink(CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET)


def get_media_sink() -> CloudinarySink:
    return sink
