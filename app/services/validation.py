from __future__ import annotations

import base64
import binascii
import re

CODE_RE = re.compile(r"^[A-Za-z0-9]{1,20}$")
BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*=*$")


def is_valid_code(code: str) -> bool:
    return bool(CODE_RE.fullmatch(code))


def is_valid_base64(text: str) -> bool:
    """Charset check first, then a real decode; both must pass."""
    if not BASE64_RE.fullmatch(text):
        return False
    try:
        base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True
