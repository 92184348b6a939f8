"""
The object gateway keeps an origin store and a derived store coherent.

Derived variants are not indexed anywhere.  Their existence is discovered by
reading the derived store, and a miss is filled by deriving from the origin
object and writing the result back.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from . import derive, schemas
from .errors import DerivationFailed, NotFound, PartialDeleteFailure, StoreUnavailable
from .schemas import DERIVED_CONTENT_TYPE, StoreId
from .stores import BlobStore

logger = logging.getLogger("gateway")

Deriver = Callable[[bytes, str], bytes]


def _failed(store: StoreId, key: str, e: Exception) -> schemas.Outcome:
    return schemas.Outcome(
        store=store, key=key, ok=False, error=str(e), error_kind=type(e).__name__
    )


class ObjectGateway:
    """Store, Fetch and Remove across the origin and derived stores.

    The gateway holds no per-request state and can be shared between
    concurrent requests.
    """

    def __init__(self, origin: BlobStore, derived: BlobStore, deriver: Deriver):
        self.origin = origin
        self.derived = derived
        self.deriver = deriver

    def _put(
        self, store: BlobStore, key: str, body: bytes, content_type: str
    ) -> schemas.Outcome:
        try:
            store.put(key, body, content_type)
        except StoreUnavailable as e:
            logger.warning(f"write to {store.store_id.value} store failed: {e}")
            return _failed(store.store_id, key, e)
        return schemas.Outcome(store=store.store_id, key=key, ok=True)

    def _delete(self, store: BlobStore, key: str) -> schemas.Outcome:
        try:
            store.delete(key)
        except StoreUnavailable as e:
            logger.warning(f"delete from {store.store_id.value} store failed: {e}")
            return _failed(store.store_id, key, e)
        return schemas.Outcome(store=store.store_id, key=key, ok=True)

    def _rollback_derived(self, key: str) -> schemas.Outcome:
        error = "rolled back because the origin write failed"
        try:
            self.derived.delete(key)
        except StoreUnavailable as e:
            logger.warning(f"rollback of derived {key} failed: {e}")
            error = f"{error}; rollback failed: {e}"
        return schemas.Outcome(
            store=StoreId.DERIVED,
            key=key,
            ok=False,
            error=error,
            error_kind="StoreUnavailable",
        )

    def store(self, key: str, body: bytes, content_type: str) -> schemas.StoreResult:
        """Write the original and, for images, its derived variant.

        Both writes are always attempted.  A failure on the derived side never
        affects the origin write; the result reports each outcome.
        A derived object is never left behind when the origin write fails.
        """
        derived_outcome: Optional[schemas.Outcome] = None
        with ThreadPoolExecutor(max_workers=2) as pool:
            origin_future = pool.submit(self._put, self.origin, key, body, content_type)
            derived_future = None
            if derive.is_derivable(content_type):
                try:
                    derived_body = self.deriver(body, content_type)
                except DerivationFailed as e:
                    logger.warning(f"derivation skipped for {key}: {e}")
                    derived_outcome = _failed(StoreId.DERIVED, key, e)
                else:
                    derived_future = pool.submit(
                        self._put, self.derived, key, derived_body, DERIVED_CONTENT_TYPE
                    )
            origin_outcome = origin_future.result()
            if derived_future is not None:
                derived_outcome = derived_future.result()
        if not origin_outcome.ok and derived_outcome is not None and derived_outcome.ok:
            derived_outcome = self._rollback_derived(key)
        return schemas.StoreResult(
            key=key, origin=origin_outcome, derived=derived_outcome
        )

    def fetch(self, key: str, want_derived: bool = False) -> schemas.FetchResult:
        """Return the original, or the derived variant materializing it on a miss.

        Raises NotFound when the origin object is absent, StoreUnavailable on
        any other store read error, and DerivationFailed when the original
        cannot be transcoded.
        """
        if not want_derived:
            original = self.origin.get(key)
            return schemas.FetchResult(
                key=key,
                body=original.body,
                content_type=original.content_type,
                variant=StoreId.ORIGIN,
            )

        try:
            cached = self.derived.get(key)
        except NotFound:
            logger.info(f"derived miss for {key}")
        else:
            return schemas.FetchResult(
                key=key,
                body=cached.body,
                content_type=DERIVED_CONTENT_TYPE,
                variant=StoreId.DERIVED,
                cache_hit=True,
            )

        original = self.origin.get(key)
        if not derive.is_derivable(original.content_type):
            return schemas.FetchResult(
                key=key,
                body=original.body,
                content_type=original.content_type,
                variant=StoreId.ORIGIN,
            )

        try:
            derived_body = self.deriver(original.body, original.content_type)
        except DerivationFailed as e:
            raise DerivationFailed(e.reason, key=key) from e

        # populating the cache is best effort
        self._put(self.derived, key, derived_body, DERIVED_CONTENT_TYPE)
        return schemas.FetchResult(
            key=key,
            body=derived_body,
            content_type=DERIVED_CONTENT_TYPE,
            variant=StoreId.DERIVED,
        )

    def remove(self, key: str, aggregate: bool = False) -> schemas.RemoveResult:
        """Delete the key from both stores concurrently.

        Both deletes are always attempted.  With ``aggregate``, a single failed
        delete raises PartialDeleteFailure and two failed deletes raise
        StoreUnavailable; otherwise failures are only reported.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            origin_future = pool.submit(self._delete, self.origin, key)
            derived_future = pool.submit(self._delete, self.derived, key)
            result = schemas.RemoveResult(
                key=key, origin=origin_future.result(), derived=derived_future.result()
            )
        if aggregate and not result.succeeded:
            if result.partial:
                raise PartialDeleteFailure(result)
            raise StoreUnavailable(StoreId.ORIGIN, key, result.origin.error)
        return result
