"""
MenuRelay Backend — Payload Field Checks
==========================================

Presence check and base64 decoding for the encoded payload fields of
/detectFaces and /uploadPdfDirect.

Only absence is a client error. Whether the payload decodes is not checked
at the request boundary: a decode failure is reported by the calling service
as a failure of the operation it was meant to feed (Vision call or upload).
"""

import base64
from typing import Optional

from menurelay.exceptions import ValidationError


def require_field(value: Optional[str], field: str) -> str:
    """
    Return `value`, or raise when it is absent.

    Raises:
        ValidationError: "No <field> provided" when None or empty.
    """
    if not value:
        raise ValidationError(message=f"No {field} provided", field=field)
    return value


def decode_base64(value: str) -> bytes:
    """
    Decode standard or URL-safe base64.

    Characters outside both alphabets (line breaks, whitespace) are skipped.

    Raises:
        ValueError: bad padding, or nothing left to decode.
            binascii.Error is a ValueError subclass.
    """
    # "-" and "_" map onto "+" and "/"; the standard alphabet still decodes
    decoded = base64.b64decode(value, altchars=b"-_")
    if not decoded:
        raise ValueError("base64 payload decoded to zero bytes")
    return decoded
