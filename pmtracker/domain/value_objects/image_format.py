from enum import Enum

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8"


class ImageFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"

    @property
    def content_type(self) -> str:
        return f"image/{self.value}"


CONTENT_TYPES: dict[str, ImageFormat] = {
    "image/png": ImageFormat.PNG,
    "image/jpeg": ImageFormat.JPEG,
    "image/jpg": ImageFormat.JPEG,
    "image/pjpeg": ImageFormat.JPEG,
}


def detect_image_format(data: bytes) -> ImageFormat | None:
    """Sniff PNG/JPEG from magic bytes. Anything else returns None."""
    if len(data) > len(PNG_MAGIC) and data.startswith(PNG_MAGIC):
        return ImageFormat.PNG
    if len(data) > len(JPEG_MAGIC) and data.startswith(JPEG_MAGIC):
        return ImageFormat.JPEG
    return None


def format_for_content_type(content_type: str) -> ImageFormat | None:
    base = content_type.split(";", 1)[0].strip().lower()
    return CONTENT_TYPES.get(base)
