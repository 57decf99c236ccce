import pytest
from pydantic import ValidationError

from originpanel.actions import ActionKind
from originpanel.models import DomainList, OriginRecord, OverrideRequest
from originpanel.resolver import is_ipv4_literal, is_ipv6_literal


class SuffixResolver:
    def base_domain_of(self, hostname: str) -> str:
        return ".".join(hostname.split(".")[-2:])

    def is_ipv4_literal(self, hostname: str) -> bool:
        return is_ipv4_literal(hostname)

    def is_ipv6_literal(self, hostname: str) -> bool:
        return is_ipv6_literal(hostname)


def test_from_raw_decodes_user_prefix() -> None:
    record = OriginRecord.from_raw("ads.example.com", "user_block")
    assert record.action is ActionKind.BLOCK
    assert record.is_user_override is True

    record = OriginRecord.from_raw("example.com", "cookieblock", is_dnt_whitelisted=True)
    assert record.action is ActionKind.COOKIE_BLOCK
    assert record.is_user_override is False
    assert record.is_dnt_whitelisted is True


def test_from_raw_defaults_unknown_actions() -> None:
    assert OriginRecord.from_raw("example.com", "mystery").action is ActionKind.NO_ACTION


def test_record_requires_hostname() -> None:
    with pytest.raises(ValidationError):
        OriginRecord(hostname="  ")


def test_records_are_immutable() -> None:
    record = OriginRecord(hostname="example.com")
    with pytest.raises(ValidationError):
        record.action = ActionKind.BLOCK


def test_markers_round_trip_through_decode() -> None:
    record = OriginRecord(hostname="t.co", action=ActionKind.ALLOW, is_user_override=True)
    assert record.markers() == {"allow", "userset"}
    decoded = OriginRecord.from_markers("t.co", record.markers())
    assert decoded == record


def test_dnt_markers_decode_as_allow() -> None:
    record = OriginRecord(hostname="t.co", action=ActionKind.DNT, is_dnt_whitelisted=True)
    assert record.markers() == {"allow"}
    decoded = OriginRecord.from_markers("t.co", record.markers(), is_dnt_whitelisted=True)
    assert decoded.action is ActionKind.ALLOW
    assert decoded.is_dnt_whitelisted is True

    user_record = record.with_user_action(ActionKind.DNT)
    assert user_record.markers() == {"allow", "userset"}


def test_dnt_whitelist_does_not_change_action() -> None:
    record = OriginRecord(hostname="t.co", action=ActionKind.BLOCK, is_dnt_whitelisted=True)
    assert record.action is ActionKind.BLOCK
    assert record.markers() == {"block"}


def test_with_user_action_returns_new_record() -> None:
    record = OriginRecord(hostname="example.com", action=ActionKind.BLOCK)
    updated = record.with_user_action(ActionKind.ALLOW)
    assert updated.action is ActionKind.ALLOW
    assert updated.is_user_override is True
    assert record.action is ActionKind.BLOCK
    assert record.is_user_override is False


def test_domain_list_override_replaces_single_record() -> None:
    domains = DomainList(
        records=(
            OriginRecord(hostname="a.example.com", action=ActionKind.BLOCK),
            OriginRecord(hostname="tracker.net", action=ActionKind.NO_ACTION),
        )
    )
    updated = domains.with_override("tracker.net", ActionKind.COOKIE_BLOCK)
    assert updated.get("tracker.net").action is ActionKind.COOKIE_BLOCK
    assert updated.get("tracker.net").is_user_override is True
    assert updated.get("a.example.com") == domains.get("a.example.com")
    assert domains.get("tracker.net").action is ActionKind.NO_ACTION


def test_domain_list_override_unknown_host() -> None:
    domains = DomainList(records=(OriginRecord(hostname="example.com"),))
    with pytest.raises(KeyError):
        domains.with_override("other.com", ActionKind.BLOCK)


def test_domain_list_sorted_by_domain() -> None:
    domains = DomainList(
        records=(
            OriginRecord(hostname="x.example.com"),
            OriginRecord(hostname="alpha.io"),
            OriginRecord(hostname="example.com"),
        )
    )
    ordered = domains.sorted_by_domain(SuffixResolver())
    assert ordered.hostnames() == ["alpha.io", "example.com", "x.example.com"]
    assert domains.hostnames() == ["x.example.com", "alpha.io", "example.com"]
    assert len(ordered) == 3


def test_override_request_parses_action_strings() -> None:
    payload = {
        "origins": [{"hostname": "example.com", "action": "dnt"}],
        "hostname": "example.com",
        "action": "block",
    }
    req = OverrideRequest(**payload)
    assert req.origins[0].action is ActionKind.DNT
    assert req.action is ActionKind.BLOCK
    with pytest.raises(ValidationError):
        OverrideRequest(origins=[], hostname="example.com", action="explode")
