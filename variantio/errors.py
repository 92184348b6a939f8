"""
Error kinds raised across the gateway boundary
"""
from typing import Optional

from .schemas import RemoveResult, StoreId


class VariantError(RuntimeError):
    def __init__(self, key: Optional[str], message: str):
        self.key = key
        super().__init__(message)


class NotFound(VariantError):
    """The key is absent from the store the operation required"""

    def __init__(self, store: StoreId, key: str):
        self.store = store
        super().__init__(key, f"{key} not found in {store.value} store")


class StoreUnavailable(VariantError):
    """Transport or infrastructure failure from either store"""

    def __init__(self, store: StoreId, key: str, reason: Optional[str] = None):
        self.store = store
        self.reason = reason
        message = f"{store.value} store unavailable for {key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(key, message)


class DerivationFailed(VariantError):
    """Input could not be decoded or transcoded into the derived format"""

    def __init__(self, reason: str, key: Optional[str] = None):
        self.reason = reason
        subject = f"variant for {key}" if key else "variant"
        super().__init__(key, f"could not derive {subject}: {reason}")


class PartialDeleteFailure(VariantError):
    """One of the two deletes failed while the other succeeded"""

    def __init__(self, result: RemoveResult):
        self.result = result
        failed = result.derived if result.origin.ok else result.origin
        super().__init__(
            result.key,
            f"delete of {result.key} failed in {failed.store.value} store: {failed.error}",
        )
