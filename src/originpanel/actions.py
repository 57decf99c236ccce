from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import AbstractSet, Mapping, Optional, Union

from .log import get_logger
from .messages import DEFAULT_CATALOG, MessageCatalog, fill_origin

logger = get_logger(__name__)

USER_OVERRIDE_MARKER = "userset"


class ActionKind(str, Enum):
    NO_ACTION = "noaction"
    BLOCK = "block"
    COOKIE_BLOCK = "cookieblock"
    ALLOW = "allow"
    DNT = "dnt"

    @classmethod
    def parse(cls, value: Union["ActionKind", str]) -> Optional["ActionKind"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# Markers are checked in this order when decoding untyped presentation state.
MARKER_PRIORITY = (
    ActionKind.BLOCK,
    ActionKind.COOKIE_BLOCK,
    ActionKind.ALLOW,
    ActionKind.NO_ACTION,
)
ACTION_MARKERS = frozenset(kind.value for kind in MARKER_PRIORITY)


@dataclass(frozen=True)
class ToggleButton:
    label: str
    css_class: str


_UNBLOCK_BUTTON = ToggleButton(label="Unblock", css_class="unblockButton")
_BLOCK_BUTTON = ToggleButton(label="Block", css_class="blockButton")

TOGGLE_BUTTONS: Mapping[ActionKind, ToggleButton] = MappingProxyType(
    {
        ActionKind.BLOCK: _UNBLOCK_BUTTON,
        ActionKind.COOKIE_BLOCK: _BLOCK_BUTTON,
        ActionKind.NO_ACTION: _BLOCK_BUTTON,
        ActionKind.ALLOW: _BLOCK_BUTTON,
        ActionKind.DNT: _BLOCK_BUTTON,
    }
)


def _collapse(value: Union[ActionKind, str]) -> Optional[ActionKind]:
    action = ActionKind.parse(value)
    if action == ActionKind.DNT:
        return ActionKind.ALLOW
    return action


def is_selected(candidate: ActionKind, origin_action: ActionKind) -> bool:
    """Return True if the control for ``candidate`` shows as selected.

    A DNT-compliant origin is presented exactly like an allowed one here;
    ``OriginRecord.is_dnt_whitelisted`` keeps the two apart elsewhere.
    """
    collapsed = _collapse(origin_action)
    return collapsed is not None and ActionKind.parse(candidate) == collapsed


def is_blocking(action: ActionKind) -> bool:
    return action in (ActionKind.BLOCK, ActionKind.COOKIE_BLOCK)


def toggle_button_for(action: ActionKind) -> ToggleButton:
    return TOGGLE_BUTTONS.get(ActionKind.parse(action), _BLOCK_BUTTON)


@dataclass(frozen=True)
class DntExempt:
    text: str


@dataclass(frozen=True)
class Templated:
    action: ActionKind
    text: str


@dataclass(frozen=True)
class Unknown:
    original_value: str
    text: str


Description = Union[DntExempt, Templated, Unknown]


def resolve_description(
    action: Union[ActionKind, str],
    origin: str,
    is_whitelisted: bool,
    catalog: Optional[MessageCatalog] = None,
) -> Description:
    """Work out how an origin's current state should be described.

    Whitelisted origins always get the DNT tooltip. Otherwise the catalog
    template for the action is filled with ``origin``; actions without a
    template come back as ``Unknown`` carrying the origin itself as text.
    """
    catalog = catalog or DEFAULT_CATALOG
    if is_whitelisted:
        return DntExempt(text=catalog.dnt_tooltip)

    kind = ActionKind.parse(action)
    template = catalog.status_template(kind.value) if kind is not None else None
    if kind is None or template is None:
        raw = action.value if isinstance(action, ActionKind) else str(action)
        logger.debug("No description template for action %r", raw)
        return Unknown(original_value=raw, text=origin)
    return Templated(action=kind, text=fill_origin(template, origin))


def describe_action(
    action: Union[ActionKind, str],
    origin: str,
    is_whitelisted: bool,
    catalog: Optional[MessageCatalog] = None,
) -> str:
    return resolve_description(action, origin, is_whitelisted, catalog).text


def current_action_of(markers: AbstractSet[str]) -> ActionKind:
    for kind in MARKER_PRIORITY:
        if kind.value in markers:
            return kind
    return ActionKind.NO_ACTION


def marker_for(action: Union[ActionKind, str]) -> str:
    """Return the presentation marker for an action.

    DNT has no marker of its own and is shown as ``allow``, so decoding the
    marker gives back ``allow``; the DNT status travels in
    ``is_dnt_whitelisted``. Unrecognised actions are used as-is.
    """
    collapsed = _collapse(action)
    if collapsed is None:
        return str(action)
    return collapsed.value


def apply_user_override(
    current: AbstractSet[str], new_action: Union[ActionKind, str]
) -> frozenset[str]:
    kept = {marker for marker in current if marker not in ACTION_MARKERS}
    kept.add(marker_for(new_action))
    kept.add(USER_OVERRIDE_MARKER)
    return frozenset(kept)
