from __future__ import annotations

import ipaddress
from typing import Optional, Protocol, Union

import tldextract

from .config import ResolverConfig
from .log import get_logger

logger = get_logger(__name__)


class InvalidHostnameError(ValueError):
    pass


class BaseDomainResolver(Protocol):
    def base_domain_of(self, hostname: str) -> str: ...

    def is_ipv4_literal(self, hostname: str) -> bool: ...

    def is_ipv6_literal(self, hostname: str) -> bool: ...


IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _ip_literal(hostname: str) -> Optional[IPAddress]:
    try:
        return ipaddress.ip_address(hostname.strip("[]"))
    except ValueError:
        return None


def is_ipv4_literal(hostname: str) -> bool:
    address = _ip_literal(hostname)
    return address is not None and address.version == 4


def is_ipv6_literal(hostname: str) -> bool:
    address = _ip_literal(hostname)
    return address is not None and address.version == 6


class PublicSuffixResolver:
    """Resolve registrable base domains from the public suffix list.

    Backed by ``tldextract``. Unless ``fetch_suffix_list`` is set, only the
    snapshot bundled with the library is used and no network access happens.
    """

    def __init__(self, config: Optional[ResolverConfig] = None) -> None:
        self.config = config or ResolverConfig()
        kwargs: dict = {
            "include_psl_private_domains": self.config.include_private_domains,
        }
        if not self.config.fetch_suffix_list:
            kwargs["suffix_list_urls"] = ()
        if self.config.cache_dir:
            kwargs["cache_dir"] = self.config.cache_dir
        self._extract = tldextract.TLDExtract(**kwargs)
        logger.debug(
            "Suffix resolver ready (private_domains=%s, fetch=%s)",
            self.config.include_private_domains,
            self.config.fetch_suffix_list,
        )

    def base_domain_of(self, hostname: str) -> str:
        host = (hostname or "").lower()
        if not host.strip():
            raise InvalidHostnameError("hostname must not be empty")
        if _ip_literal(host) is not None:
            return host
        extracted = self._extract(host)
        if extracted.domain and extracted.suffix:
            return f"{extracted.domain}.{extracted.suffix}"
        return host

    def is_ipv4_literal(self, hostname: str) -> bool:
        return is_ipv4_literal(hostname)

    def is_ipv6_literal(self, hostname: str) -> bool:
        return is_ipv6_literal(hostname)
