import os

from fastapi import FastAPI, HTTPException

from .config import load_config
from .log import configure_logging, get_logger
from .messages import load_catalog
from .models import (
    DomainList,
    OverrideRequest,
    OverrideResponse,
    PanelRequest,
    PanelResponse,
    SortDomainsRequest,
    SortDomainsResponse,
)
from .ordering import sort_domains
from .panel import build_panel
from .resolver import PublicSuffixResolver

settings = load_config(os.getenv("ORIGINPANEL_CONFIG"))
configure_logging(settings.log_level)
logger = get_logger(__name__)

resolver = PublicSuffixResolver(settings.resolver)
catalog = load_catalog(settings.messages_path)

app = FastAPI()
logger.info("originpanel service configured (messages=%s)", settings.messages_path)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/v1/sort_domains", response_model=SortDomainsResponse)
async def sort_domains_endpoint(payload: SortDomainsRequest) -> SortDomainsResponse:
    try:
        ordered = sort_domains(payload.hostnames, resolver)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return SortDomainsResponse(hostnames=ordered)


@app.post("/v1/panel", response_model=PanelResponse)
async def panel(payload: PanelRequest) -> PanelResponse:
    domains = DomainList(records=tuple(payload.origins))
    try:
        return build_panel(domains, resolver, catalog)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@app.post("/v1/override", response_model=OverrideResponse)
async def override(payload: OverrideRequest) -> OverrideResponse:
    domains = DomainList(records=tuple(payload.origins))
    try:
        updated = domains.with_override(payload.hostname, payload.action)
    except KeyError:
        raise HTTPException(status_code=404, detail="origin not found")
    try:
        ordered = updated.sorted_by_domain(resolver)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return OverrideResponse(origins=list(ordered.records))
