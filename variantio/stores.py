"""
Key-addressed blob stores.  The gateway talks to two of these, one holding
originals and one holding derived variants.
"""
import threading
from typing import Dict, Optional, Protocol, Tuple, runtime_checkable

from . import schemas
from .errors import NotFound


@runtime_checkable
class BlobStore(Protocol):
    store_id: schemas.StoreId

    def get(self, key: str) -> schemas.StoredObject:
        """Read one object.  Raise NotFound or StoreUnavailable."""
        ...

    def put(self, key: str, body: bytes, content_type: str) -> None:
        """Write (or overwrite) one object.  Raise StoreUnavailable."""
        ...

    def delete(self, key: str) -> None:
        """Delete one object.  Deleting an absent key is not an error."""
        ...


class MemoryBlobStore:
    """Dict-backed store for local development and testing"""

    def __init__(self, store_id: schemas.StoreId):
        self.store_id = store_id
        self._objects: Dict[str, Tuple[bytes, str]] = {}
        self._lock = threading.Lock()

    def __contains__(self, key: str) -> bool:
        return key in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def get(self, key: str) -> schemas.StoredObject:
        with self._lock:
            found: Optional[Tuple[bytes, str]] = self._objects.get(key)
        if found is None:
            raise NotFound(self.store_id, key)
        body, content_type = found
        return schemas.StoredObject(
            key=key, body=body, content_type=content_type, store=self.store_id
        )

    def put(self, key: str, body: bytes, content_type: str) -> None:
        with self._lock:
            self._objects[key] = (bytes(body), content_type)

    def delete(self, key: str) -> None:
        with self._lock:
            self._objects.pop(key, None)
