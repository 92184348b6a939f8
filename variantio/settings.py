import os
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import schemas


class Settings(BaseSettings):
    public_name: str = "http://localhost:8100"

    origin_bucket: str = Field(
        "originals",
        validation_alias=AliasChoices(
            "variantio_origin_bucket", "file_upload_bucket_name"
        ),
    )
    derived_bucket: str = Field(
        "compressed",
        validation_alias=AliasChoices(
            "variantio_derived_bucket", "file_upload_compressed_bucket_name"
        ),
    )

    region_name: str = "us-east-1"
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None

    jpeg_quality: int = Field(70, ge=1, le=95)
    cache_max_age: int = Field(3600, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="variantio_",
        env_file=os.getenv("DOTENV_PATH", ".env"),
        extra="ignore",
    )

    def storage_node(self) -> schemas.StorageNode:
        return schemas.StorageNode(
            region_name=self.region_name,
            endpoint_url=self.endpoint_url,
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
        )


settings = Settings()
