"""
Remote address trust

Decides whether the directly-connected peer is a proxy whose forwarding
headers may be believed. A trust spec is one of:

- a predicate ``(ip) -> bool``
- a list of entries, or a comma-separated string of them

List entries are matched by a CIDR matcher when one is available: plain
addresses, ranges (``10.0.0.0/8``, ``10.0.0.0/255.0.0.0``) and the named
ranges ``loopback``, ``linklocal`` and ``uniquelocal``. Without a matcher the
list is an exact allow-list of address strings.

Example:
    trust = RemoteTrust("loopback, 10.0.0.0/8")
    trust.is_trusted("10.1.2.3")   # True

    exact = RemoteTrust(["10.0.0.1"], cidr_matcher=None)
    exact.is_trusted("10.0.0.2")   # False
"""

import ipaddress
from typing import Callable, Iterable, List, Optional, Sequence, Union

from .exceptions import InvalidTrustSpecError
from .logging import get_logger, log_error

logger = get_logger(__name__)

TrustPredicate = Callable[[str], bool]
TrustSpec = Union[str, Sequence[str], TrustPredicate]
AddressMatcher = Callable[[str, int], bool]
CidrMatcherFactory = Callable[[Sequence[str]], AddressMatcher]

NAMED_RANGES = {
    "linklocal": ("169.254.0.0/16", "fe80::/10"),
    "loopback": ("127.0.0.1/8", "::1/128"),
    "uniquelocal": ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16", "fc00::/7"),
}


def split_trust_list(spec: Union[str, Iterable[str]]) -> List[str]:
    """Normalise a comma-separated string or iterable into trimmed entries."""
    items = spec.split(",") if isinstance(spec, str) else spec
    entries = []
    for item in items:
        if not isinstance(item, str):
            raise InvalidTrustSpecError(f"Trust list entries must be strings, got {type(item).__name__}", item)
        item = item.strip()
        if item:
            entries.append(item)
    return entries


class CidrMatcher:
    """
    Subnet-aware address matcher.

    Called as ``matcher(ip, hop)``; the hop index is accepted for
    compatibility with chain-walking matchers and is not used.
    """

    def __init__(self, networks: Sequence[Union[ipaddress.IPv4Network, ipaddress.IPv6Network]]):
        self.networks = tuple(networks)

    def __call__(self, ip: str, hop: int = 0) -> bool:
        try:
            address = ipaddress.ip_address(ip)
        except ValueError:
            return False
        candidates = [address]
        if address.version == 6 and address.ipv4_mapped is not None:
            candidates.append(address.ipv4_mapped)
        # ``in`` does not compare versions, so filter explicitly
        return any(
            candidate in network
            for candidate in candidates
            for network in self.networks
            if network.version == candidate.version
        )

    def __repr__(self):
        return f"CidrMatcher({[str(n) for n in self.networks]})"


def compile_cidr_matcher(entries: Sequence[str]) -> CidrMatcher:
    """
    Compile allow-list entries into a CidrMatcher.

    Raises:
        InvalidTrustSpecError: If an entry is neither a named range nor a
            parseable address/network
    """
    networks = []
    for entry in entries:
        ranges = NAMED_RANGES.get(entry.lower(), (entry,))
        for value in ranges:
            try:
                networks.append(ipaddress.ip_network(value, strict=False))
            except ValueError as e:
                raise InvalidTrustSpecError(f"Invalid trusted address or range: {entry!r}", entry) from e
    return CidrMatcher(networks)


class RemoteTrust:
    """
    A trust spec compiled once, evaluated per request.

    Args:
        spec: Predicate, list of entries, or comma-separated string
        cidr_matcher: Factory turning list entries into a matcher. None, or a
            factory whose backend cannot be imported, selects exact matching.
    """

    def __init__(self, spec: TrustSpec, cidr_matcher: Optional[CidrMatcherFactory] = compile_cidr_matcher):
        self.spec = spec
        self.mode = "predicate"
        self._predicate: Optional[TrustPredicate] = None
        self._matcher: Optional[AddressMatcher] = None
        self._allowed = frozenset()

        if callable(spec):
            self._predicate = spec
            return
        if not isinstance(spec, (str, list, tuple, set, frozenset)):
            raise InvalidTrustSpecError(
                f"allowed_remotes must be a callable, string or list, got {type(spec).__name__}", spec
            )

        entries = split_trust_list(spec)
        if cidr_matcher is not None:
            try:
                self._matcher = cidr_matcher(entries)
                self.mode = "cidr"
                return
            except ImportError as e:
                logger.debug(f"CIDR matcher unavailable ({e}); using exact address matching")
        self._allowed = frozenset(entries)
        self.mode = "exact"

    def is_trusted(self, ip: str) -> bool:
        if self._predicate is None and self._matcher is None:
            return ip in self._allowed
        try:
            if self._predicate is not None:
                return bool(self._predicate(ip))
            return bool(self._matcher(ip, 0))
        except Exception as e:
            log_error(__name__, e, remote_address=ip, mode=self.mode)
            return False

    __call__ = is_trusted

    def __repr__(self):
        return f"RemoteTrust(mode={self.mode!r}, spec={self.spec!r})"


def validate_remote_address(
    ip: str,
    spec: TrustSpec,
    cidr_matcher: Optional[CidrMatcherFactory] = compile_cidr_matcher,
) -> bool:
    """
    One-shot trust check. Prefer RemoteTrust when the same allow-list is checked repeatedly.

    Example:
        >>> validate_remote_address("127.0.0.1", "loopback")
        True
        >>> validate_remote_address("10.0.0.1", "10.0.0.0/8", cidr_matcher=None)
        False
    """
    return RemoteTrust(spec, cidr_matcher).is_trusted(ip)
