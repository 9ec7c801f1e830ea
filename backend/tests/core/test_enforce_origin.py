"""Origin Enforcement - tests for the Host/Origin/Referer same-site policy.

Tests cover:
    - Host mandatory and substring-matched
    - Referer optional; empty Referer passes; foreign Referer forbidden
    - Origin ignored by default, mandatory and matched in strict mode
    - undecodable header bytes reported separately from missing headers
    - matching is raw substring containment (no parsing, no case folding)
"""

import pytest

from contactform.core.enforce_origin import check_same_site, decode_header_value


DOMAIN = "example.com"


# ─── decode_header_value ─────────────────────────────────────────

def test_decode_visible_ascii():
    assert decode_header_value(b"https://example.com/contact") == "https://example.com/contact"


def test_decode_allows_tab_and_empty():
    assert decode_header_value(b"a\tb") == "a\tb"
    assert decode_header_value(b"") == ""


@pytest.mark.parametrize("raw", [b"caf\xc3\xa9.com", b"\x00host", b"host\x7f", b"\xff"])
def test_decode_rejects_non_text_bytes(raw):
    assert decode_header_value(raw) is None


# ─── Host ────────────────────────────────────────────────────────

def test_host_matching_domain_passes():
    assert check_same_site({"host": b"example.com"}, DOMAIN) is None


def test_host_subdomain_passes():
    assert check_same_site({"host": b"www.example.com"}, DOMAIN) is None


def test_host_with_port_passes():
    assert check_same_site({"host": b"example.com:8080"}, DOMAIN) is None


def test_foreign_host_forbidden():
    error = check_same_site({"host": b"evil.com"}, DOMAIN)
    assert error["error_code"] == "ORIGIN_FORBIDDEN"
    assert error["header"] == "host"
    assert error["message"] == "Access denied"


def test_missing_host_is_bad_request():
    error = check_same_site({}, DOMAIN)
    assert error["error_code"] == "HEADER_MISSING"
    assert error["message"] == "Missing host header"


def test_empty_host_forbidden():
    error = check_same_site({"host": b""}, DOMAIN)
    assert error["error_code"] == "ORIGIN_FORBIDDEN"


def test_undecodable_host_is_bad_request():
    error = check_same_site({"host": b"ex\xe4mple.com"}, DOMAIN)
    assert error["error_code"] == "HEADER_INVALID"
    assert error["message"] == "Invalid host header"


def test_matching_is_case_sensitive():
    error = check_same_site({"host": b"EXAMPLE.COM"}, DOMAIN)
    assert error["error_code"] == "ORIGIN_FORBIDDEN"


def test_matching_is_plain_substring():
    # Loose by contract: any header text containing the domain passes
    assert check_same_site({"host": b"example.com.evil.net"}, DOMAIN) is None


# ─── Referer ─────────────────────────────────────────────────────

def test_missing_referer_passes():
    assert check_same_site({"host": b"example.com"}, DOMAIN) is None


def test_empty_referer_passes():
    headers = {"host": b"example.com", "referer": b""}
    assert check_same_site(headers, DOMAIN) is None


def test_matching_referer_passes():
    headers = {"host": b"example.com", "referer": b"https://www.example.com/contact"}
    assert check_same_site(headers, DOMAIN) is None


def test_foreign_referer_forbidden():
    headers = {"host": b"example.com", "referer": b"http://evil.com"}
    error = check_same_site(headers, DOMAIN)
    assert error["error_code"] == "ORIGIN_FORBIDDEN"
    assert error["header"] == "referer"


def test_undecodable_referer_is_bad_request():
    headers = {"host": b"example.com", "referer": b"http://example.com/\xff"}
    error = check_same_site(headers, DOMAIN)
    assert error["error_code"] == "HEADER_INVALID"
    assert error["message"] == "Invalid referer header"


def test_host_checked_before_referer():
    headers = {"host": b"evil.com", "referer": b"\xff"}
    error = check_same_site(headers, DOMAIN)
    assert error["header"] == "host"


# ─── Origin ──────────────────────────────────────────────────────

def test_origin_ignored_by_default():
    headers = {"host": b"example.com", "origin": b"http://evil.com"}
    assert check_same_site(headers, DOMAIN) is None


def test_strict_mode_requires_origin():
    error = check_same_site({"host": b"example.com"}, DOMAIN, require_origin=True)
    assert error["error_code"] == "HEADER_MISSING"
    assert error["message"] == "Missing origin header"


def test_strict_mode_matching_origin_passes():
    headers = {"host": b"example.com", "origin": b"https://example.com"}
    assert check_same_site(headers, DOMAIN, require_origin=True) is None


def test_strict_mode_empty_origin_passes():
    headers = {"host": b"example.com", "origin": b""}
    assert check_same_site(headers, DOMAIN, require_origin=True) is None


def test_strict_mode_foreign_origin_forbidden():
    headers = {"host": b"example.com", "origin": b"https://evil.com"}
    error = check_same_site(headers, DOMAIN, require_origin=True)
    assert error["error_code"] == "ORIGIN_FORBIDDEN"
    assert error["header"] == "origin"


def test_strict_mode_undecodable_origin_is_bad_request():
    headers = {"host": b"example.com", "origin": b"\x80"}
    error = check_same_site(headers, DOMAIN, require_origin=True)
    assert error["error_code"] == "HEADER_INVALID"
    assert error["message"] == "Invalid origin header"


def test_strict_mode_origin_checked_before_referer():
    headers = {
        "host": b"example.com",
        "origin": b"https://evil.com",
        "referer": b"https://evil.com/",
    }
    error = check_same_site(headers, DOMAIN, require_origin=True)
    assert error["header"] == "origin"
