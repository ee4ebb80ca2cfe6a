"""
Client IP resolution

Resolves the originating client address of a request sitting behind
proxies, load balancers or CDNs.

Resolution order:
1. If ``allowed_remotes`` is configured and the connecting peer is unknown or
   untrusted, the peer address is returned and headers are ignored.
2. Headers are tried in order; the first one that yields a valid IP wins.
3. Otherwise the peer address is returned (None if there is none).

Resolution never raises; anything unusable is skipped.

Example:
    from clientip import ClientIP, ClientIPConfig

    client_ip = ClientIP(ClientIPConfig(allowed_remotes="loopback"))
    ip = client_ip.get_client_ip(request)

    # Or with the shared default instance
    from clientip import get_client_ip
    ip = get_client_ip({"headers": {"x-real-ip": "203.0.113.7"}})
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional, Sequence, Union

from .config import (
    ClientIPConfig,
    HeaderSpec,
    HeaderSpecLike,
    normalize_header_specs,
    normalize_header_validators,
)
from .extract import is_ip
from .logging import get_logger, log_error
from .parsers import BareLiteralParser, FirstSegmentParser, ForwardedParser, HeaderValidator
from .remote import get_remote_address

logger = get_logger(__name__)

DEFAULT_HEADERS = (
    "x-client-ip",
    "x-forwarded-for",
    "cf-connecting-ip",
    "fastly-client-ip",
    "true-client-ip",
    "x-real-ip",
    "x-cluster-client-ip",
    "x-forwarded",
    "forwarded-for",
    "forwarded",
)

DEFAULT_HEADER_VALIDATORS = MappingProxyType({
    "forwarded-for": FirstSegmentParser(),
    "forwarded": ForwardedParser(),
})

_BARE_LITERAL = BareLiteralParser()

ConfigLike = Union[ClientIPConfig, Mapping, None]


def get_request_headers(request: Any) -> Any:
    """Header map of a request-like object or mapping (empty dict if absent)"""
    if isinstance(request, Mapping):
        headers = request.get("headers")
    else:
        headers = getattr(request, "headers", None)
    return headers if headers is not None else {}


def get_header_value(headers: Any, name: str) -> Optional[str]:
    """
    First occurrence of a header, or None if absent or empty.

    ``headers`` may be a plain dict keyed by lower-case names or any
    case-insensitive header map with a ``get`` method.
    """
    value = headers.get(name)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return value or None


class ClientIPValidator:
    """
    Header list plus parser registry; the unit that performs resolution.

    Instances are read-only after construction and can be shared between
    concurrent requests.

    Args:
        allowed_headers: Ordered header specifications
        header_validators: Parser registry keyed by header name
    """

    def __init__(
        self,
        allowed_headers: Sequence[HeaderSpecLike] = DEFAULT_HEADERS,
        header_validators: Mapping = DEFAULT_HEADER_VALIDATORS,
    ):
        self.allowed_headers = normalize_header_specs(allowed_headers)
        self.header_validators = normalize_header_validators(header_validators)

    def get_client_ip(self, request: Any, config: ConfigLike = None) -> Optional[str]:
        """
        Resolve the client IP of a request.

        Args:
            request: Request-like object or mapping
            config: ClientIPConfig, a mapping of its fields, or None

        Returns:
            IPv4/IPv6 literal, or None if no source yields one
        """
        config = ClientIPConfig.coerce(config)

        if config.remote_trust is not None:
            remote_address = self.get_remote_address(request)
            if remote_address is None or not config.remote_trust.is_trusted(remote_address):
                logger.debug(f"Remote {remote_address} not trusted, ignoring forwarding headers")
                return remote_address

        headers = get_request_headers(request)
        allowed_headers = config.allowed_headers if config.allowed_headers is not None else self.allowed_headers
        for spec in allowed_headers:
            ip = self.try_extract_ip(headers, spec, config.header_validators)
            if ip:
                logger.debug(f"Client IP {ip} resolved from header {spec.name}")
                return ip

        return self.get_remote_address(request)

    def select_validator(self, name: str, header_validators: Optional[Mapping] = None) -> HeaderValidator:
        """Parser for a header: per-config entry, then built-in, then bare literal"""
        if header_validators:
            validator = header_validators.get(name)
            if validator is not None:
                return validator
        return self.header_validators.get(name, _BARE_LITERAL)

    def try_extract_ip(
        self,
        headers: Any,
        spec: HeaderSpecLike,
        header_validators: Optional[Mapping] = None,
    ) -> Optional[str]:
        """Try a single header specification; None if absent or unusable"""
        if not isinstance(spec, HeaderSpec):
            spec = HeaderSpec.coerce(spec)

        raw_value = get_header_value(headers, spec.name)
        if raw_value is None:
            return None

        validator = self.select_validator(spec.name, header_validators)
        try:
            ip = validator(raw_value, spec.constraints)
        except Exception as e:
            log_error(__name__, e, header=spec.name)
            return None

        if ip is not None and not is_ip(ip):
            logger.debug(f"Validator for {spec.name} returned non-IP value {ip!r}")
            return None
        return ip

    def get_remote_address(self, request: Any) -> Optional[str]:
        """Transport peer address of the request, if any"""
        return get_remote_address(request)

    def __repr__(self):
        return (
            f"ClientIPValidator(headers={[spec.name for spec in self.allowed_headers]}, "
            f"validators={sorted(self.header_validators)})"
        )


DEFAULT_VALIDATOR = ClientIPValidator()


class ClientIP:
    """
    A configuration bound to a validator.

    Args:
        config: ClientIPConfig or mapping of its fields
        validator: ClientIPValidator to use (default: DEFAULT_VALIDATOR)

    Example:
        client_ip = ClientIP({"allowed_headers": ["x-real-ip"]})
        ip = client_ip.get_client_ip(request)
    """

    def __init__(self, config: ConfigLike = None, validator: Optional[ClientIPValidator] = None):
        self.config = ClientIPConfig.coerce(config)
        self.validator = validator or DEFAULT_VALIDATOR

    def get_client_ip(self, request: Any) -> Optional[str]:
        return self.validator.get_client_ip(request, self.config)

    __call__ = get_client_ip

    @staticmethod
    def resolve(request: Any, config: ConfigLike = None) -> Optional[str]:
        """Resolve with the shared default validator"""
        return DEFAULT_VALIDATOR.get_client_ip(request, config)


def get_client_ip(request: Any, config: ConfigLike = None) -> Optional[str]:
    """Resolve the client IP of a request with the default header list"""
    return DEFAULT_VALIDATOR.get_client_ip(request, config)
