"""
Derived variants are compressed JPEG copies of image originals.

Derivation is a pure function of the original bytes, so two requests racing to
materialize the same variant produce identical output.
"""
import io
from typing import Optional

from PIL import Image

from .errors import DerivationFailed
from .schemas import IMAGE_PREFIX

DEFAULT_QUALITY = 70


def is_derivable(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.startswith(IMAGE_PREFIX)


def _flatten(img: Image.Image) -> Image.Image:
    # JPEG has no alpha channel or palette
    if img.mode == "RGB":
        return img
    if img.mode == "P" and "transparency" in img.info:
        img = img.convert("RGBA")
    return img.convert("RGB")


class JpegDeriver:
    """Transcode any Pillow-readable image to JPEG at a fixed quality"""

    def __init__(self, quality: int = DEFAULT_QUALITY):
        self.quality = quality

    def __call__(self, body: bytes, content_type: str) -> bytes:
        try:
            with Image.open(io.BytesIO(body)) as img:
                img.load()
                out = io.BytesIO()
                _flatten(img).save(out, format="JPEG", quality=self.quality)
        # Pillow plugins raise many unrelated exception types on corrupt input
        except Exception as e:
            raise DerivationFailed(f"{content_type}: {e}") from e
        return out.getvalue()
