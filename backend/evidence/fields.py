"""
Serializer field for evidence images carried inline as base64.

Accepted input forms:

    data:image/png;base64,iVBORw0KGgo...     (data URL, MIME taken from header)
    iVBORw0KGgo...                            (bare base64)

The field decodes to a ``DecodedImage`` holding the raw bytes and the
MIME type found in the data-URL header (``None`` for bare base64).  On
output the stored bytes are returned as bare base64; the MIME type is
exposed by its own model field.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import NamedTuple

from rest_framework import serializers

from core.constants import MAX_EVIDENCE_IMAGE_BYTES

_DATA_URL_RE = re.compile(r"^data:(?P<mime>image/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


class DecodedImage(NamedTuple):
    content: bytes
    mime: str | None


def decode_image(value: str) -> DecodedImage:
    """
    Decode a data URL or bare base64 string.

    Raises ``ValueError`` on malformed input, on a non-image data URL,
    or when the decoded payload exceeds ``MAX_EVIDENCE_IMAGE_BYTES``.
    """
    value = value.strip()
    mime = None
    if value.startswith("data:"):
        match = _DATA_URL_RE.match(value)
        if match is None:
            raise ValueError("Only base64 image data URLs are accepted.")
        mime = match.group("mime")
        value = match.group("payload")

    try:
        content = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("Image is not valid base64.")

    if not content:
        raise ValueError("Image is empty.")
    if len(content) > MAX_EVIDENCE_IMAGE_BYTES:
        raise ValueError(
            f"Image exceeds the maximum size of {MAX_EVIDENCE_IMAGE_BYTES // (1024 * 1024)} MiB."
        )
    return DecodedImage(content=content, mime=mime)


def encode_image(content: bytes | memoryview | None) -> str | None:
    if content is None:
        return None
    return base64.b64encode(bytes(content)).decode("ascii")


class Base64ImageField(serializers.Field):
    """Read/write field mapping base64 text to raw image bytes."""

    default_error_messages = {
        "invalid": "{message}",
        "type": "Expected a base64 string.",
    }

    def to_internal_value(self, data) -> DecodedImage:
        if not isinstance(data, str):
            self.fail("type")
        try:
            return decode_image(data)
        except ValueError as exc:
            self.fail("invalid", message=str(exc))

    def to_representation(self, value) -> str | None:
        return encode_image(value)
