"""Tests for url_guard.validate_url."""

from __future__ import annotations

import socket

import pytest

from errors import BlockedHostError, InvalidSchemeError
from url_guard import is_blocked_address, validate_url


@pytest.mark.parametrize(
    "url",
    ["ftp://example.com/file", "javascript:alert(1)", "file:///etc/passwd", "mailto:me@example.com"],
)
def test_non_http_scheme_is_rejected_before_dns(url, make_resolver) -> None:
    """Given a non-HTTP scheme When validated Then InvalidScheme is raised without a lookup."""

    resolver = make_resolver()

    with pytest.raises(InvalidSchemeError):
        validate_url(url, resolver=resolver)

    assert resolver.calls == []


@pytest.mark.parametrize(
    "url",
    ["http://localhost:3000/", "https://LOCALHOST/", "http://0.0.0.0/", "http://[::]/"],
)
def test_literal_local_hosts_are_blocked(url, make_resolver) -> None:
    resolver = make_resolver()

    with pytest.raises(BlockedHostError):
        validate_url(url, resolver=resolver)

    assert resolver.calls == []


@pytest.mark.parametrize(
    "address",
    [
        "127.0.0.1",
        "127.255.0.9",
        "10.1.2.3",
        "172.16.0.1",
        "172.31.255.255",
        "192.168.1.10",
        "169.254.169.254",
        "::1",
        "fc00::1",
        "fd12:3456::1",
        "fe80::1%eth0",
        "::ffff:10.0.0.1",
    ],
)
def test_private_resolved_addresses_are_blocked(address, make_resolver) -> None:
    """Given a host resolving into a private range When validated Then BlockedHost is raised."""

    with pytest.raises(BlockedHostError):
        validate_url("https://internal.example.com/", resolver=make_resolver(address))


@pytest.mark.parametrize("address", ["93.184.216.34", "172.32.0.1", "172.15.255.255", "2606:2800:220:1::1"])
def test_public_addresses_pass(address, make_resolver) -> None:
    url = "https://example.com/page"

    assert validate_url(url, resolver=make_resolver(address)) == url


def test_dns_failure_is_deferred_to_fetch(make_resolver) -> None:
    """Given a DNS lookup error When validated Then the URL is accepted for the fetch to report."""

    resolver = make_resolver(error=socket.gaierror(-2, "Name or service not known"))

    assert validate_url("https://no-such-host.invalid/", resolver=resolver) == "https://no-such-host.invalid/"
    assert resolver.calls == ["no-such-host.invalid"]


def test_hostname_is_lowercased_before_lookup(make_resolver) -> None:
    resolver = make_resolver()

    validate_url("https://WWW.Example.COM/", resolver=resolver)

    assert resolver.calls == ["www.example.com"]


def test_url_without_host_is_rejected(make_resolver) -> None:
    with pytest.raises(InvalidSchemeError):
        validate_url("http:///only-a-path", resolver=make_resolver())


def test_is_blocked_address_ignores_non_ip_values() -> None:
    assert is_blocked_address("not-an-ip") is False
    assert is_blocked_address("8.8.8.8") is False
    assert is_blocked_address("192.168.0.1") is True
