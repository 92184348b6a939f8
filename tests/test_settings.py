import pytest
from pydantic import ValidationError

from variantio.settings import Settings


def test_defaults():
    cfg = Settings(_env_file=None)
    assert cfg.origin_bucket == "originals"
    assert cfg.derived_bucket == "compressed"
    assert cfg.jpeg_quality == 70
    assert cfg.storage_node().region_name == "us-east-1"


def test_prefixed_environment(monkeypatch):
    monkeypatch.setenv("VARIANTIO_ORIGIN_BUCKET", "uploads")
    monkeypatch.setenv("VARIANTIO_JPEG_QUALITY", "55")
    monkeypatch.setenv("VARIANTIO_ENDPOINT_URL", "http://localhost:9000")
    cfg = Settings(_env_file=None)
    assert cfg.origin_bucket == "uploads"
    assert cfg.jpeg_quality == 55
    assert cfg.storage_node().endpoint_url == "http://localhost:9000"


def test_legacy_bucket_names(monkeypatch):
    monkeypatch.setenv("FILE_UPLOAD_BUCKET_NAME", "legacy-originals")
    monkeypatch.setenv("FILE_UPLOAD_COMPRESSED_BUCKET_NAME", "legacy-compressed")
    cfg = Settings(_env_file=None)
    assert cfg.origin_bucket == "legacy-originals"
    assert cfg.derived_bucket == "legacy-compressed"


def test_quality_bounds(monkeypatch):
    monkeypatch.setenv("VARIANTIO_JPEG_QUALITY", "120")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
