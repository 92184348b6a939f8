import base64
import binascii
import re
from typing import Tuple

DATA_URL_PREFIX = re.compile(r"^data:([^;]+);base64,")
# uploads without a data URL prefix are assumed to be JPEG
DEFAULT_UPLOAD_CONTENT_TYPE = "image/jpeg"


def decode_upload(payload: str) -> Tuple[bytes, str]:
    """Strip an optional data URL prefix and decode the base64 payload"""
    match = DATA_URL_PREFIX.match(payload)
    content_type = match.group(1) if match else DEFAULT_UPLOAD_CONTENT_TYPE
    encoded = payload[match.end() :] if match else payload
    try:
        return base64.b64decode(encoded), content_type
    except binascii.Error as e:
        raise ValueError(f"file is not valid base64: {e}") from e


def encode_upload(body: bytes, content_type: str) -> str:
    encoded = base64.b64encode(body).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
