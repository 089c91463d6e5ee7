"""Image processing service."""

import io
import logging
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from recipelens.config import settings
from recipelens.utils.exceptions import ImageProcessingError

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")

# Labels do not improve past this size, uploads do get slower
VISION_MAX_DIM = 1600
JPEG_QUALITY = 85
RESIZE_MIN_BYTES = 350_000


class ImageService:
    """Service for processing uploaded food photos."""

    @staticmethod
    def validate_image(file_content: bytes, filename: str) -> Tuple[bytes, str]:
        """
        Validate an uploaded image.

        Args:
            file_content: Image file bytes
            filename: Original filename

        Returns:
            Tuple of (image_bytes, mime_type)

        Raises:
            ImageProcessingError: If image is invalid
        """
        if not file_content:
            raise ImageProcessingError("No image file provided")

        if len(file_content) > settings.max_request_size:
            raise ImageProcessingError(
                f"Image file too large (max {settings.max_request_size / 1024 / 1024:.0f}MB)"
            )

        mime_type = ImageService._detect_mime_type(file_content)

        if mime_type not in SUPPORTED_MIME_TYPES:
            raise ImageProcessingError(
                f"Unsupported image format in {filename}: {mime_type}. Supported: JPEG, PNG, WebP"
            )

        return file_content, mime_type

    @staticmethod
    def prepare_for_vision(image_bytes: bytes, mime_type: Optional[str]) -> Tuple[bytes, str]:
        """
        Downscale and recompress large photos before labeling.

        Returns the original bytes when the image is already small or cannot
        be decoded.
        """
        mime_type = mime_type or "image/jpeg"
        if len(image_bytes) < RESIZE_MIN_BYTES:
            return image_bytes, mime_type

        try:
            with Image.open(io.BytesIO(image_bytes)) as im:
                # Composite transparency onto white
                if im.mode in ("RGBA", "LA") or (im.mode == "P" and "transparency" in im.info):
                    bg = Image.new("RGBA", im.size, (255, 255, 255, 255))
                    im = Image.alpha_composite(bg, im.convert("RGBA")).convert("RGB")
                else:
                    im = im.convert("RGB")

                w, h = im.size
                max_side = max(w, h)
                if max_side > VISION_MAX_DIM:
                    scale = VISION_MAX_DIM / float(max_side)
                    im = im.resize((max(1, int(w * scale)), max(1, int(h * scale))), Image.LANCZOS)

                out = io.BytesIO()
                im.save(out, format="JPEG", quality=JPEG_QUALITY, optimize=True)
        except (OSError, UnidentifiedImageError, ValueError) as e:
            logger.warning(f"Image resize/compress skipped: {e}")
            return image_bytes, mime_type

        optimized = out.getvalue()
        if len(optimized) >= len(image_bytes):
            return image_bytes, mime_type
        return optimized, "image/jpeg"

    @staticmethod
    def _detect_mime_type(file_content: bytes) -> str:
        """
        Detect MIME type from file content (magic bytes).

        Args:
            file_content: File bytes

        Returns:
            MIME type string
        """
        if file_content.startswith(b"\xff\xd8\xff"):
            return "image/jpeg"
        elif file_content.startswith(b"\x89PNG\r\n\x1a\n"):
            return "image/png"
        elif file_content.startswith(b"RIFF") and b"WEBP" in file_content[:12]:
            return "image/webp"
        else:
            try:
                with Image.open(io.BytesIO(file_content)) as image:
                    fmt = (image.format or "").lower()
            except (OSError, UnidentifiedImageError):
                return "application/octet-stream"
            return f"image/{fmt}" if fmt else "application/octet-stream"
