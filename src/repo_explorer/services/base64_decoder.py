"""Decode the base64 payload GitHub returns for blobs."""

from __future__ import annotations

import base64
import binascii
import re

from repo_explorer.domain.exceptions import ContentEncodingError

_WHITESPACE_RE = re.compile(r"\s+")


def decode_base64(raw: str) -> str:
    """Strip all whitespace from *raw* and decode it as standard base64.

    GitHub wraps blob content at 60 columns, hence the whitespace tolerance.
    Invalid UTF-8 sequences become U+FFFD rather than failing the decode.
    """
    cleaned = _WHITESPACE_RE.sub("", raw)
    try:
        data = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ContentEncodingError("Invalid file content encoding") from exc
    return data.decode("utf-8", errors="replace")
