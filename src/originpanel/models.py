from __future__ import annotations

from typing import AbstractSet, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .actions import (
    USER_OVERRIDE_MARKER,
    ActionKind,
    apply_user_override,
    current_action_of,
    marker_for,
)
from .ordering import sort_records
from .resolver import BaseDomainResolver

USER_ACTION_PREFIX = "user_"


class OriginRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    hostname: str
    action: ActionKind = ActionKind.NO_ACTION
    is_user_override: bool = False
    is_dnt_whitelisted: bool = False

    @field_validator("hostname")
    @classmethod
    def validate_hostname(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("hostname must not be empty")
        return value

    @classmethod
    def from_raw(
        cls, hostname: str, raw_action: str, is_dnt_whitelisted: bool = False
    ) -> "OriginRecord":
        """Decode an upstream action string such as ``block`` or ``user_block``."""
        is_user_override = raw_action.startswith(USER_ACTION_PREFIX)
        if is_user_override:
            raw_action = raw_action[len(USER_ACTION_PREFIX):]
        action = ActionKind.parse(raw_action) or ActionKind.NO_ACTION
        return cls(
            hostname=hostname,
            action=action,
            is_user_override=is_user_override,
            is_dnt_whitelisted=is_dnt_whitelisted,
        )

    @classmethod
    def from_markers(
        cls, hostname: str, markers: AbstractSet[str], is_dnt_whitelisted: bool = False
    ) -> "OriginRecord":
        return cls(
            hostname=hostname,
            action=current_action_of(markers),
            is_user_override=USER_OVERRIDE_MARKER in markers,
            is_dnt_whitelisted=is_dnt_whitelisted,
        )

    def markers(self) -> frozenset[str]:
        """Encode as presentation markers. A DNT record encodes as ``allow``."""
        if self.is_user_override:
            return apply_user_override(frozenset(), self.action)
        return frozenset({marker_for(self.action)})

    def with_user_action(self, action: ActionKind) -> "OriginRecord":
        return self.model_copy(
            update={"action": ActionKind(action), "is_user_override": True}
        )


class DomainList(BaseModel):
    model_config = ConfigDict(frozen=True)

    records: Tuple[OriginRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def hostnames(self) -> List[str]:
        return [record.hostname for record in self.records]

    def get(self, hostname: str) -> Optional[OriginRecord]:
        for record in self.records:
            if record.hostname == hostname:
                return record
        return None

    def sorted_by_domain(self, resolver: BaseDomainResolver) -> "DomainList":
        return DomainList(records=tuple(sort_records(self.records, resolver)))

    def with_override(self, hostname: str, action: ActionKind) -> "DomainList":
        if self.get(hostname) is None:
            raise KeyError(hostname)
        records = tuple(
            record.with_user_action(action) if record.hostname == hostname else record
            for record in self.records
        )
        return DomainList(records=records)


class SortDomainsRequest(BaseModel):
    hostnames: List[str]


class SortDomainsResponse(BaseModel):
    hostnames: List[str]


class PanelRequest(BaseModel):
    origins: List[OriginRecord] = Field(default_factory=list)


class OverrideRequest(BaseModel):
    origins: List[OriginRecord] = Field(default_factory=list)
    hostname: str
    action: ActionKind


class OverrideResponse(BaseModel):
    origins: List[OriginRecord]


class OriginRow(BaseModel):
    hostname: str
    action: ActionKind
    markers: List[str]
    description: str
    toggle_label: str
    toggle_class: str
    selected: Dict[ActionKind, bool]
    dnt_compliant: bool
    user_override: bool


class PanelResponse(BaseModel):
    rows: List[OriginRow]
    blocked: List[str]
    not_blocked: List[str]
    non_trackers: List[str]
