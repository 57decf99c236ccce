from __future__ import annotations

from typing import Optional

from .actions import (
    ActionKind,
    describe_action,
    is_blocking,
    is_selected,
    toggle_button_for,
)
from .messages import MessageCatalog
from .models import DomainList, OriginRecord, OriginRow, PanelResponse
from .resolver import BaseDomainResolver

# Controls offered per origin, in display order.
CONTROL_ACTIONS = (ActionKind.BLOCK, ActionKind.COOKIE_BLOCK, ActionKind.ALLOW)


def build_row(
    record: OriginRecord, catalog: Optional[MessageCatalog] = None
) -> OriginRow:
    button = toggle_button_for(record.action)
    return OriginRow(
        hostname=record.hostname,
        action=record.action,
        markers=sorted(record.markers()),
        description=describe_action(
            record.action, record.hostname, record.is_dnt_whitelisted, catalog
        ),
        toggle_label=button.label,
        toggle_class=button.css_class,
        selected={
            candidate: is_selected(candidate, record.action)
            for candidate in CONTROL_ACTIONS
        },
        dnt_compliant=record.is_dnt_whitelisted,
        user_override=record.is_user_override,
    )


def build_panel(
    domains: DomainList,
    resolver: BaseDomainResolver,
    catalog: Optional[MessageCatalog] = None,
) -> PanelResponse:
    """Order the origins and split them into the popup's sections.

    Blocked origins (block, cookieblock) and not-blocked ones (allow, dnt)
    are trackers; everything classified ``noaction`` goes to non-trackers.
    Each section keeps the domain ordering.
    """
    ordered = domains.sorted_by_domain(resolver)
    rows = [build_row(record, catalog) for record in ordered.records]

    blocked: list[str] = []
    not_blocked: list[str] = []
    non_trackers: list[str] = []
    for record in ordered.records:
        if is_blocking(record.action):
            blocked.append(record.hostname)
        elif record.action == ActionKind.NO_ACTION:
            non_trackers.append(record.hostname)
        else:
            not_blocked.append(record.hostname)

    return PanelResponse(
        rows=rows,
        blocked=blocked,
        not_blocked=not_blocked,
        non_trackers=non_trackers,
    )
