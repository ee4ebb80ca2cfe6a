"""
Configuration Classes

Provides validated configuration objects for client IP resolution and the
framework middleware.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from .exceptions import InvalidHeaderSpecError
from .parsers import HeaderValidator
from .trust import CidrMatcherFactory, RemoteTrust, TrustSpec, compile_cidr_matcher


class HeaderSpec(NamedTuple):
    """
    A header to inspect, with optional attribute constraints.

    Constraints only mean something to structured parsers such as the
    ``forwarded`` one, e.g. ``HeaderSpec("forwarded", {"secret": "abc"})``.
    """
    name: str
    constraints: Mapping[str, Any] = MappingProxyType({})

    @classmethod
    def coerce(cls, value: Any) -> "HeaderSpec":
        """
        Build a HeaderSpec from a name or a ``(name, constraints)`` pair.

        Raises:
            InvalidHeaderSpecError: If value has any other shape
        """
        if isinstance(value, cls):
            name, constraints = value
        elif isinstance(value, str):
            name, constraints = value, {}
        elif isinstance(value, (tuple, list)) and len(value) == 2:
            name, constraints = value
        else:
            raise InvalidHeaderSpecError(f"Invalid header specification: {value!r}", value)

        if not isinstance(name, str) or not name.strip():
            raise InvalidHeaderSpecError(f"Header name must be a non-empty string: {value!r}", value)
        if constraints is None:
            constraints = {}
        if not isinstance(constraints, Mapping):
            raise InvalidHeaderSpecError(f"Header constraints must be a mapping: {value!r}", value)
        return cls(name.strip().lower(), MappingProxyType(dict(constraints)))


HeaderSpecLike = Union[str, HeaderSpec, Tuple[str, Mapping[str, Any]]]


def normalize_header_specs(specs: Sequence[HeaderSpecLike]) -> Tuple[HeaderSpec, ...]:
    """Coerce a header list into an immutable tuple of HeaderSpec"""
    if isinstance(specs, str):
        raise InvalidHeaderSpecError("allowed_headers must be a list of header specifications, not a string", specs)
    return tuple(HeaderSpec.coerce(spec) for spec in specs)


def normalize_header_validators(validators: Mapping[str, HeaderValidator]) -> Mapping[str, HeaderValidator]:
    """Lower-case registry keys and freeze the registry"""
    normalized = {}
    for name, validator in validators.items():
        if not callable(validator):
            raise InvalidHeaderSpecError(f"Validator for {name!r} is not callable", validator)
        normalized[name.strip().lower()] = validator
    return MappingProxyType(normalized)


@dataclass(frozen=True)
class ClientIPConfig:
    """
    Configuration for client IP resolution.

    Instances are immutable; the trust spec is compiled once at construction.
    Use ``dataclasses.replace`` to derive a changed configuration.

    Args:
        allowed_remotes: Trust spec for the connecting peer. When set, headers
            are only read if the peer is trusted. An empty string is treated
            as unset.
        allowed_headers: Ordered header list replacing the default one
        header_validators: Per-header parsers merged over the built-in ones
        cidr_matcher: Factory used to compile list/string trust specs;
            None for exact address matching

    Example:
        >>> config = ClientIPConfig(
        ...     allowed_remotes="loopback, 10.0.0.0/8",
        ...     allowed_headers=[("forwarded", {"secret": "abc"}), "x-real-ip"],
        ... )
    """
    allowed_remotes: Optional[TrustSpec] = None
    allowed_headers: Optional[Sequence[HeaderSpecLike]] = None
    header_validators: Optional[Mapping[str, HeaderValidator]] = None
    cidr_matcher: Optional[CidrMatcherFactory] = compile_cidr_matcher
    remote_trust: Optional[RemoteTrust] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate and compile configuration"""
        if self.allowed_headers is not None:
            object.__setattr__(self, "allowed_headers", normalize_header_specs(self.allowed_headers))
        if self.header_validators is not None:
            object.__setattr__(self, "header_validators", normalize_header_validators(self.header_validators))
        # An empty string means "not configured"; an empty list trusts nobody
        if self.allowed_remotes is not None and self.allowed_remotes != "":
            object.__setattr__(self, "remote_trust", RemoteTrust(self.allowed_remotes, self.cidr_matcher))

    @classmethod
    def coerce(cls, config: Union["ClientIPConfig", Mapping[str, Any], None]) -> "ClientIPConfig":
        """Accept a ClientIPConfig, a mapping of its fields, or None"""
        if config is None:
            return _EMPTY_CONFIG
        if isinstance(config, cls):
            return config
        return cls(**config)


_EMPTY_CONFIG = ClientIPConfig()


@dataclass
class MiddlewareConfig:
    """
    Configuration for the framework middleware.

    Args:
        attribute_name: Name the resolved IP is exposed under
            (``request.state``, ``request.ctx`` or the aiohttp request mapping)
        exclude_paths: Paths that skip resolution entirely
    """
    attribute_name: str = "client_ip"
    exclude_paths: Optional[Sequence[str]] = None

    def __post_init__(self):
        """Validate configuration"""
        if not isinstance(self.attribute_name, str) or not self.attribute_name.isidentifier():
            raise ValueError("attribute_name must be a valid identifier")
        self.exclude_paths = frozenset(self.exclude_paths or ())
