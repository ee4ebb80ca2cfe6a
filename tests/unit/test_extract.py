"""
Unit tests for IP literal extraction
"""

import pytest

from clientip import extract_ip, is_ip


class TestIsIp:
    """Test IP literal validation"""

    @pytest.mark.parametrize("value", [
        "123.34.56.78",
        "0.0.0.0",
        "2001:db8::1428:57ab",
        "::1",
        "::ffff:10.0.0.1",
    ])
    def test_valid_literals(self, value):
        """Test valid IPv4 and IPv6 literals are accepted"""
        assert is_ip(value)

    @pytest.mark.parametrize("value", [
        "",
        "example.com",
        "1234.32.12.32",
        "123.34.56",
        "123.34.56.78:80",
        "[2001:db8::1]",
        "unknown",
        None,
        12345,
    ])
    def test_invalid_literals(self, value):
        """Test hostnames, malformed tokens and non-strings are rejected"""
        assert not is_ip(value)


class TestExtractIp:
    """Test token to IP extraction"""

    @pytest.mark.parametrize("ip", ["123.34.56.78", "2001:db8::1428:57ab", "::1"])
    def test_literal_passes_through(self, ip):
        """Test a bare literal is returned unchanged"""
        assert extract_ip(ip) == ip

    def test_strips_ipv4_port(self):
        """Test ip:port keeps the address"""
        assert extract_ip("123.34.56.78:4561") == "123.34.56.78"

    def test_bracketed_ipv6(self):
        """Test brackets are removed from IPv6"""
        assert extract_ip("[2001:db8::1428:57ab]") == "2001:db8::1428:57ab"

    def test_bracketed_ipv6_with_port(self):
        """Test the port after the closing bracket is dropped"""
        assert extract_ip("[2001:db8::1428:57ab]:4561") == "2001:db8::1428:57ab"

    def test_unterminated_bracket(self):
        """Test a missing closing bracket is no match"""
        assert extract_ip("[2001:db8::1428:57ab") is None

    def test_bare_ipv6_is_not_split(self):
        """Test multi-colon tokens are not treated as ip:port"""
        assert extract_ip("2001:db8::1") == "2001:db8::1"

    def test_bracketed_ipv4_accepted(self):
        """Test the bracket path validates as any IP version"""
        assert extract_ip("[10.0.0.1]:80") == "10.0.0.1"

    @pytest.mark.parametrize("token", ["blahblah", "1234.32.12.32", "example.com:80", "[]", ""])
    def test_non_ip_tokens(self, token):
        """Test tokens without an IP give None"""
        assert extract_ip(token) is None

    def test_two_part_token_falls_through_to_validation(self):
        """Test 'a:b' keeps 'a' and only validates it"""
        assert extract_ip("10.0.0.1:not-a-port") == "10.0.0.1"
        assert extract_ip("host:80") is None

    def test_never_returns_hostname(self):
        """Test hostnames with ports are rejected"""
        assert extract_ip("localhost:8080") is None
