"""
Helper functions for working with S3
"""
import contextlib
import hashlib
import logging
from typing import Dict, Iterator

import boto3
from botocore.client import BaseClient, Config
from botocore.exceptions import BotoCoreError, ClientError

from . import schemas
from .errors import NotFound, StoreUnavailable

logger = logging.getLogger("s3")

# S3 reports a missing key as NoSuchKey on GET and as a bare 404 on HEAD
NOT_FOUND_CODES = {"NoSuchKey", "NotFound", "404"}


class Boto3ClientCache:
    """
    The origin and derived buckets usually live on the same node.  Once a client
    has been established, cache it for future use.
    """

    def __init__(self):
        self.cache: Dict[str, BaseClient] = {}

    @staticmethod
    def _get_primary_key(node: schemas.StorageNode) -> str:
        primary_key = (
            (
                f"s3{node.region_name}{node.endpoint_url}"
                f"{node.access_key_id}{node.secret_access_key}"
            )
            .lower()
            .encode("utf-8")
        )
        return hashlib.sha256(primary_key).hexdigest()

    def get_client(self, node: schemas.StorageNode) -> BaseClient:
        primary_key_short_sha256 = Boto3ClientCache._get_primary_key(node)
        client = self.cache.get(primary_key_short_sha256, None)
        if client is None:
            client = boto3.client(
                "s3",
                region_name=node.region_name,
                endpoint_url=node.endpoint_url,
                aws_access_key_id=node.access_key_id,
                aws_secret_access_key=node.secret_access_key,
                config=Config(signature_version="s3v4"),
            )
            self.cache[primary_key_short_sha256] = client
        return client


def error_code(e: ClientError) -> str:
    return str(e.response.get("Error", {}).get("Code", ""))


class S3BlobStore:
    """One bucket exposed through the BlobStore interface"""

    def __init__(self, client: BaseClient, bucket: str, store_id: schemas.StoreId):
        self.client = client
        self.bucket = bucket
        self.store_id = store_id

    @contextlib.contextmanager
    def _translate_errors(self, key: str, missing_ok: bool = False) -> Iterator[None]:
        try:
            yield
        except ClientError as e:
            code = error_code(e)
            if code in NOT_FOUND_CODES and not missing_ok:
                raise NotFound(self.store_id, key) from e
            if code in NOT_FOUND_CODES:
                return
            raise StoreUnavailable(self.store_id, key, code) from e
        except BotoCoreError as e:
            raise StoreUnavailable(self.store_id, key, str(e)) from e

    def get(self, key: str) -> schemas.StoredObject:
        with self._translate_errors(key):
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            body = response["Body"].read()
        return schemas.StoredObject(
            key=key,
            body=body,
            content_type=response.get("ContentType") or schemas.DEFAULT_CONTENT_TYPE,
            store=self.store_id,
        )

    def put(self, key: str, body: bytes, content_type: str) -> None:
        with self._translate_errors(key):
            self.client.put_object(
                Bucket=self.bucket, Key=key, Body=body, ContentType=content_type
            )

    def delete(self, key: str) -> None:
        with self._translate_errors(key, missing_ok=True):
            self.client.delete_object(Bucket=self.bucket, Key=key)

    def create_bucket(self) -> bool:
        """Create the backing bucket.  Return False if it already exists."""
        params = {"ACL": "private", "Bucket": self.bucket}
        region = self.client.meta.region_name
        if region and region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}
        try:
            self.client.create_bucket(**params)
        except ClientError as e:
            code = error_code(e)
            if code in {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}:
                logger.warning(code)
                return False
            raise StoreUnavailable(self.store_id, self.bucket, code) from e
        return True
