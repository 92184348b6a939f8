import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

IMAGE_PREFIX = "image/"
DERIVED_CONTENT_TYPE = "image/jpeg"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class StoreId(str, enum.Enum):
    """
    ORIGIN holds the bytes exactly as they were uploaded
    DERIVED holds the lazily computed JPEG variant under the same key
    """

    ORIGIN = "origin"
    DERIVED = "derived"


class StorageNode(BaseModel):
    """Connection details for an S3-compatible endpoint"""

    region_name: str
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None


###########################################################
# Gateway Schemas
###########################################################


class StoredObject(BaseModel):
    key: str
    body: bytes
    content_type: str = DEFAULT_CONTENT_TYPE
    store: StoreId


class Outcome(BaseModel):
    """Result of one write or delete against one store"""

    store: StoreId
    key: str
    ok: bool
    error: Optional[str] = None
    error_kind: Optional[str] = None


class StoreResult(BaseModel):
    key: str
    origin: Outcome
    # absent when the content type is not eligible for derivation
    derived: Optional[Outcome] = None

    @property
    def succeeded(self) -> bool:
        return self.origin.ok


class FetchResult(BaseModel):
    key: str
    body: bytes
    content_type: str
    variant: StoreId
    cache_hit: bool = False


class RemoveResult(BaseModel):
    key: str
    origin: Outcome
    derived: Outcome

    @property
    def succeeded(self) -> bool:
        return self.origin.ok and self.derived.ok

    @property
    def partial(self) -> bool:
        return self.origin.ok != self.derived.ok


###########################################################
# API Schemas
###########################################################


class ServerInfo(BaseModel):
    public_address: str
    origin_bucket: str
    derived_bucket: str


class UploadRequest(BaseModel):
    # base64, optionally wrapped in a data URL like data:image/png;base64,...
    file: str
    file_key: str = Field(alias="fileKey", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class UploadResponse(BaseModel):
    message: str
    result: StoreResult


class RemoveResponse(BaseModel):
    message: str
    result: RemoveResult
