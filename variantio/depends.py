"""
FastAPI endpoint dependencies
"""
from . import derive, gateway, s3utils, settings
from .schemas import StoreId

clientCache = s3utils.Boto3ClientCache()


def get_stores():
    cfg = settings.settings
    client = clientCache.get_client(cfg.storage_node())
    return (
        s3utils.S3BlobStore(client, cfg.origin_bucket, StoreId.ORIGIN),
        s3utils.S3BlobStore(client, cfg.derived_bucket, StoreId.DERIVED),
    )


def get_gateway() -> gateway.ObjectGateway:
    origin, derived = get_stores()
    return gateway.ObjectGateway(
        origin=origin,
        derived=derived,
        deriver=derive.JpegDeriver(quality=settings.settings.jpeg_quality),
    )
