from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict

ORIGIN_PLACEHOLDER = "{origin}"


class MessageCatalog(BaseModel):
    """Localized strings used when describing an origin's state.

    Status templates carry an ``{origin}`` placeholder that is replaced with the
    origin's hostname. Only the fields below are looked up; extra keys in a
    catalog file are ignored.
    """

    model_config = ConfigDict(frozen=True)

    status_block: str = "{origin} has been blocked"
    status_cookieblock: Optional[str] = None
    status_noaction: str = "{origin} does not appear to be tracking you"
    status_allow: str = "{origin} is allowed"
    dnt_tooltip: str = "This domain promises not to track you."

    def status_template(self, action: str) -> Optional[str]:
        if action == "block":
            return self.status_block
        if action == "cookieblock":
            return self.status_cookieblock or self.status_block
        if action == "noaction":
            return self.status_noaction
        if action == "allow":
            return self.status_allow
        return None


DEFAULT_CATALOG = MessageCatalog()


def fill_origin(template: str, origin: str) -> str:
    return template.replace(ORIGIN_PLACEHOLDER, origin)


def load_catalog(path: Optional[str] = None) -> MessageCatalog:
    if not path:
        return DEFAULT_CATALOG
    catalog_path = Path(path)
    if not catalog_path.exists():
        return DEFAULT_CATALOG
    data = yaml.safe_load(catalog_path.read_text(encoding="utf-8")) or {}
    return MessageCatalog(**data)
