import json

import pytest
import requests
from click.testing import CliRunner

from variantio import utils
from variantio.cli import VioSession, cli


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=b"", headers=None):
        self.status_code = status_code
        self.ok = status_code < 400
        self._payload = payload
        self.content = content
        self.text = json.dumps(payload) if payload is not None else ""
        self.headers = headers or {}
        self.url = "http://api/files"
        self.request = requests.Request("POST", self.url).prepare()

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def calls(monkeypatch):
    recorded = []
    responses = []

    def fake_request(self, method, url, *args, **kwargs):
        recorded.append((method, url, kwargs))
        return responses.pop(0)

    monkeypatch.setattr(VioSession, "request", fake_request)
    return recorded, responses


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("VIO_CONFIG_PATH", str(tmp_path / "vio.json"))
    return CliRunner()


def test_upload(runner, calls, tmp_path):
    recorded, responses = calls
    responses.append(FakeResponse(payload={"message": "ok"}))
    image = tmp_path / "cat.png"
    image.write_bytes(b"\x89PNG fake")

    result = runner.invoke(cli, ["upload", str(image), "--key", "pets/cat.png"])

    assert result.exit_code == 0, result.output
    method, url, kwargs = recorded[0]
    assert method == "POST"
    assert url == "files"
    assert kwargs["json"]["fileKey"] == "pets/cat.png"
    assert utils.decode_upload(kwargs["json"]["file"]) == (b"\x89PNG fake", "image/png")


def test_upload_defaults_key_to_filename(runner, calls, tmp_path):
    recorded, responses = calls
    responses.append(FakeResponse(payload={"message": "ok"}))
    blob = tmp_path / "blob"
    blob.write_bytes(b"data")

    result = runner.invoke(cli, ["put", str(blob)])

    assert result.exit_code == 0, result.output
    payload = recorded[0][2]["json"]
    assert payload["fileKey"] == "blob"
    assert payload["file"].startswith("data:image/jpeg;base64,")


def test_download_compressed_to_file(runner, calls, tmp_path):
    recorded, responses = calls
    responses.append(
        FakeResponse(content=b"jpeg", headers={"Content-Type": "image/jpeg"})
    )
    out = tmp_path / "out.jpg"

    result = runner.invoke(
        cli, ["download", "my pets/cat.png", "--compressed", "-o", str(out)]
    )

    assert result.exit_code == 0, result.output
    method, url, kwargs = recorded[0]
    assert method == "GET"
    assert url == "files/my%20pets/cat.png"
    assert kwargs["params"] == {"variant": "compressed"}
    assert out.read_bytes() == b"jpeg"


def test_download_not_found_exits_nonzero(runner, calls):
    _, responses = calls
    responses.append(FakeResponse(status_code=404, payload={"message": "missing"}))

    result = runner.invoke(cli, ["get", "missing.png"])

    assert result.exit_code == 1
    assert '"status": 404' in result.output


def test_delete(runner, calls):
    recorded, responses = calls
    responses.append(FakeResponse(payload={"message": "deleted"}))

    result = runner.invoke(cli, ["rm", "cat.png"])

    assert result.exit_code == 0, result.output
    assert recorded[0][:2] == ("DELETE", "files/cat.png")


def test_configure_persists_api_url(runner, tmp_path):
    result = runner.invoke(cli, ["configure", "--api-url", "http://files.local/api"])

    assert result.exit_code == 0, result.output
    saved = json.loads((tmp_path / "vio.json").read_text())
    assert saved["api_url"] == "http://files.local/api"
