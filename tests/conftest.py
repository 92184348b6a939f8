from io import BytesIO
from typing import List, Optional, Set

import pytest
from PIL import Image, ImageDraw

from variantio import derive
from variantio.errors import StoreUnavailable
from variantio.gateway import ObjectGateway
from variantio.schemas import StoreId
from variantio.stores import MemoryBlobStore


def make_png_bytes(size=(64, 48), mode="RGB") -> bytes:
    """Produce a small but well-formed PNG with some structure to compress."""
    img = Image.new("RGBA", size, color=(240, 240, 240, 255))
    draw = ImageDraw.Draw(img)
    for idx in range(0, img.height, 8):
        shade = (30, 90, 160, 255) if (idx // 8) % 2 else (200, 120, 40, 128)
        draw.rectangle([(0, idx), (img.width, idx + 4)], fill=shade)
    buf = BytesIO()
    img.convert(mode).save(buf, format="PNG")
    return buf.getvalue()


class CountingDeriver:
    def __init__(self, quality: int = derive.DEFAULT_QUALITY):
        self.inner = derive.JpegDeriver(quality=quality)
        self.calls: List[str] = []

    def __call__(self, body: bytes, content_type: str) -> bytes:
        self.calls.append(content_type)
        return self.inner(body, content_type)


class FaultyStore(MemoryBlobStore):
    """Memory store that fails the selected operations"""

    def __init__(self, store_id: StoreId, fail: Optional[Set[str]] = None):
        super().__init__(store_id)
        self.fail = fail or set()

    def _check(self, op: str, key: str):
        if op in self.fail:
            raise StoreUnavailable(self.store_id, key, f"simulated {op} fault")

    def get(self, key):
        self._check("get", key)
        return super().get(key)

    def put(self, key, body, content_type):
        self._check("put", key)
        super().put(key, body, content_type)

    def delete(self, key):
        self._check("delete", key)
        super().delete(key)


@pytest.fixture
def png_bytes() -> bytes:
    return make_png_bytes()


@pytest.fixture
def origin() -> MemoryBlobStore:
    return MemoryBlobStore(StoreId.ORIGIN)


@pytest.fixture
def derived() -> MemoryBlobStore:
    return MemoryBlobStore(StoreId.DERIVED)


@pytest.fixture
def deriver() -> CountingDeriver:
    return CountingDeriver()


@pytest.fixture
def gateway(origin, derived, deriver) -> ObjectGateway:
    return ObjectGateway(origin=origin, derived=derived, deriver=deriver)
