"""Turning downloaded file contents into something a window can show."""

from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum

from PIL import Image


class PreviewKind(Enum):
    """How a preview is displayed."""

    IMAGE = "image"
    TEXT = "text"


@dataclass(frozen=True)
class Preview:
    """Displayable form of a remote file."""

    kind: PreviewKind
    title: str
    text: str = ""
    image: Image.Image | None = None

    @property
    def size(self) -> tuple[int, int] | None:
        """Pixel size of the image, or None for text."""
        return self.image.size if self.image is not None else None


def _load_image(data: bytes) -> Image.Image | None:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError):
        return None
    return image


def _fit(image: Image.Image, max_size: tuple[int, int]) -> Image.Image:
    max_width, max_height = max_size
    width, height = image.size
    scale = min(max_width / width, max_height / height)
    size = (max(1, round(width * scale)), max(1, round(height * scale)))
    if size == image.size:
        return image
    return image.resize(size)


def make_preview(
    data: bytes, name: str, max_size: tuple[int, int] | None = None
) -> Preview:
    """Build a preview: an image if ``data`` decodes as one, otherwise text.

    With ``max_size`` the image is scaled, up or down, to fit inside that box
    while keeping its aspect ratio.
    """
    if max_size is not None and (max_size[0] <= 0 or max_size[1] <= 0):
        raise ValueError(f"preview size must be positive, got {max_size}")
    title = f"Preview: {name}"
    image = _load_image(data)
    if image is None:
        return Preview(
            kind=PreviewKind.TEXT,
            title=title,
            text=data.decode("utf-8", errors="replace"),
        )
    if max_size is not None:
        image = _fit(image, max_size)
    return Preview(kind=PreviewKind.IMAGE, title=title, image=image)