from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar

from .resolver import BaseDomainResolver

T = TypeVar("T")


@dataclass(frozen=True)
class SortKey:
    base_part: str
    subdomain_part: str

    @property
    def combined(self) -> str:
        return f"{self.base_part}.{self.subdomain_part}"


def sort_key_of(hostname: str, resolver: BaseDomainResolver) -> SortKey:
    """Build the ordering key for a hostname.

    The base part is the registrable domain without its top-level suffix, so
    ``example.com`` and ``example.org`` land next to each other. The subdomain
    part lists the remaining labels right to left: ``a.b.example.com`` gives
    ``b.a``. Apex domains get an empty subdomain part and sort first within
    their group. Hostnames are compared lowercased and without a trailing dot.
    """
    host = hostname.strip().lower().rstrip(".")
    base = resolver.base_domain_of(host)

    subdomain_part = ""
    if len(host) > len(base):
        leading = host[: len(host) - len(base) - 1]
        subdomain_part = ".".join(reversed(leading.split(".")))

    base_part = base
    is_ip = resolver.is_ipv4_literal(host) or resolver.is_ipv6_literal(host)
    if "." in base and not is_ip:
        base_part = base.split(".", 1)[0]

    return SortKey(base_part=base_part, subdomain_part=subdomain_part)


def _ordered_indices(hostnames: Sequence[str], resolver: BaseDomainResolver) -> list[int]:
    keys = [sort_key_of(hostname, resolver).combined for hostname in hostnames]
    # index as the final tie-break keeps equal keys in input order
    return sorted(range(len(keys)), key=lambda i: (keys[i], i))


def sort_domains(hostnames: Sequence[str], resolver: BaseDomainResolver) -> list[str]:
    return [hostnames[i] for i in _ordered_indices(hostnames, resolver)]


def sort_records(records: Sequence[T], resolver: BaseDomainResolver) -> list[T]:
    """Order origin records by their ``hostname`` the same way as sort_domains."""
    hostnames = [record.hostname for record in records]
    return [records[i] for i in _ordered_indices(hostnames, resolver)]
