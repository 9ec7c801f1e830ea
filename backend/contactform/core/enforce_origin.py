"""Origin Enforcement - same-site check over raw Host/Origin/Referer headers.

Invariants:
    - check_same_site is PURE: works on raw header bytes, no request object
    - Host is mandatory; Referer is optional; Origin is checked only in
      strict mode, where it is also mandatory
    - Domain matching is plain substring containment on the header text:
      no URL parsing, no case folding, no scheme/port stripping
    - An empty Origin/Referer value passes (treated like an absent one)

Design Decisions:
    - Header text must be visible ASCII (or tab); anything else is a decode
      error, reported separately from a missing header
    - Checks run Host -> Origin -> Referer and the first failure wins
"""

from typing import Mapping


HOST_HEADER = "host"
ORIGIN_HEADER = "origin"
REFERER_HEADER = "referer"


def decode_header_value(raw: bytes) -> str | None:
    """Decode a header value as text. Returns None if it is not representable."""
    for byte in raw:
        if byte != 0x09 and not 0x20 <= byte <= 0x7E:
            return None
    return raw.decode("ascii")


def _missing(header: str) -> dict:
    return {
        "status": "error",
        "error_code": "HEADER_MISSING",
        "header": header,
        "message": f"Missing {header} header",
    }


def _invalid(header: str) -> dict:
    return {
        "status": "error",
        "error_code": "HEADER_INVALID",
        "header": header,
        "message": f"Invalid {header} header",
    }


def _forbidden(header: str) -> dict:
    return {
        "status": "error",
        "error_code": "ORIGIN_FORBIDDEN",
        "header": header,
        "message": "Access denied",
    }


def _check_header(
    headers: Mapping[str, bytes],
    header: str,
    allowed_domain: str,
    required: bool,
    allow_empty: bool,
) -> dict | None:
    raw = headers.get(header)
    if raw is None:
        return _missing(header) if required else None

    value = decode_header_value(raw)
    if value is None:
        return _invalid(header)

    if not value and allow_empty:
        return None
    if allowed_domain not in value:
        return _forbidden(header)
    return None


def check_same_site(
    headers: Mapping[str, bytes],
    allowed_domain: str,
    require_origin: bool = False,
) -> dict | None:
    """Rule set for cross-site rejection. Keys of headers are lower-case names."""
    error = _check_header(
        headers, HOST_HEADER, allowed_domain, required=True, allow_empty=False,
    )
    if error:
        return error

    if require_origin:
        error = _check_header(
            headers, ORIGIN_HEADER, allowed_domain,
            required=True, allow_empty=True,
        )
        if error:
            return error

    return _check_header(
        headers, REFERER_HEADER, allowed_domain, required=False, allow_empty=True,
    )
