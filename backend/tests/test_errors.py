"""Tests for the error taxonomy in errors.py."""

from __future__ import annotations

import pytest

from errors import FetchFailedError, PayloadTooLargeError, format_size


@pytest.mark.parametrize("num_bytes, expected", [
    (5 * 1024 * 1024, "5MB"),
    (1024 * 1024, "1MB"),
    (512 * 1024, "524288 bytes"),
    (3 * 1024 * 1024 + 1, "3145729 bytes"),
    (100, "100 bytes"),
])
def test_format_size(num_bytes, expected) -> None:
    """Given a byte limit When formatted Then sub-MB limits never read as 0MB."""

    assert format_size(num_bytes) == expected


def test_default_payload_message_uses_configured_limit() -> None:
    assert PayloadTooLargeError().message == "Response size exceeds 5MB limit"


def test_fetch_failed_message_without_reason() -> None:
    error = FetchFailedError(503)

    assert error.message == "Failed to fetch URL: 503"
    assert error.status_code == 500
