"""Thumbnail and watermark rendering with Pillow."""

import io
from dataclasses import dataclass

from PIL import Image, ImageColor, ImageDraw, ImageFont, UnidentifiedImageError

WATERMARK_POSITIONS = frozenset(
    {"center", "top-left", "top-right", "bottom-left", "bottom-right"}
)


@dataclass(frozen=True)
class WatermarkOptions:
    """Text overlay applied to client-facing previews."""

    text: str
    position: str = "bottom-right"
    opacity: float = 0.5
    font_size: int = 24
    color: str = "white"


def probe_format(content: bytes) -> str | None:
    """Return Pillow's format name for image bytes, or None if undecodable."""
    try:
        with Image.open(io.BytesIO(content)) as image:
            image_format = image.format
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        return None
    return image_format


def content_type_for(image_format: str) -> str | None:
    """Return the MIME type Pillow registers for a format name."""
    Image.preinit()
    return Image.MIME.get(image_format.upper())


def make_thumbnail(
    content: bytes, max_width: int = 300, max_height: int = 300
) -> bytes:
    """Downscale an image to fit the box, keeping its aspect ratio and format."""
    with Image.open(io.BytesIO(content)) as image:
        image_format = image.format or "JPEG"
        image.load()
        thumbnail = image.copy()
    thumbnail.thumbnail((max_width, max_height))
    return _encode(thumbnail, image_format)


def apply_watermark(content: bytes, options: WatermarkOptions) -> bytes:
    """Draw watermark text onto an image and return the re-encoded bytes."""
    with Image.open(io.BytesIO(content)) as image:
        image_format = image.format or "JPEG"
        base = image.convert("RGBA")

    overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    font = ImageFont.load_default(size=options.font_size)
    red, green, blue = ImageColor.getrgb(options.color)[:3]
    alpha = round(255 * max(0.0, min(options.opacity, 1.0)))
    xy, anchor = _text_anchor(base.size, options.position, options.font_size)
    draw.text(
        xy, options.text, font=font, fill=(red, green, blue, alpha), anchor=anchor
    )
    return _encode(Image.alpha_composite(base, overlay), image_format)


def _text_anchor(
    size: tuple[int, int], position: str, font_size: int
) -> tuple[tuple[float, float], str]:
    width, height = size
    if position == "top-left":
        return (font_size, font_size * 1.5), "ls"
    if position == "top-right":
        return (width - font_size, font_size * 1.5), "rs"
    if position == "bottom-left":
        return (font_size, height - font_size), "ls"
    if position == "bottom-right":
        return (width - font_size, height - font_size), "rs"
    return (width / 2, height / 2), "ms"


def _encode(image: Image.Image, image_format: str) -> bytes:
    if image_format.upper() in {"JPEG", "JPG"} and image.mode not in {"RGB", "L"}:
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()
