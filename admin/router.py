"""
Admin API

JSON endpoints over the configuration store, mounted under /api so the
rest of the path space belongs to the proxied site.

Reads are open. Writes require x-admin-token when ADMIN_TOKEN is set and
are rejected before the store is touched.
"""

import json
import logging
from typing import Optional, Type, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import BaseModel, ValidationError

from store import (
    ConfigStore,
    ConfigStoreError,
    Personality,
    normalize_personalities,
    slugify,
    unique_id_from_name,
)

from .schemas import (
    ConfigResponse,
    PersonalitiesReplace,
    PersonalitiesResponse,
    PersonalityUpsert,
    PersonalityUpsertResponse,
    PromptResponse,
    PromptUpdate,
)
from .security import require_admin_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Admin"])

M = TypeVar("M", bound=BaseModel)


def _store(request: Request) -> ConfigStore:
    return request.app.state.store


async def _parse_body(request: Request, model: Type[M]) -> Optional[M]:
    """Decode a JSON body into ``model``; None when it is not usable."""
    try:
        payload = json.loads(await request.body())
        if not isinstance(payload, dict):
            return None
        return model.model_validate(payload)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError):
        return None


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _store_unavailable(e: ConfigStoreError) -> HTTPException:
    logger.error(f"Configuration write failed: {e}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Configuration store unavailable",
    )


# ============================================================================
# HEALTH
# ============================================================================

@router.get("/health")
async def health(request: Request) -> dict:
    """Liveness check, plus what the proxy is wired to."""
    state = request.app.state
    return {
        "status": "alive",
        "providers": state.provider_chain.names,
        "origin_configured": bool(state.config.origin_base_url),
    }


# ============================================================================
# CONFIGURATION
# ============================================================================

@router.get("/config", response_model=ConfigResponse)
async def read_config(request: Request) -> ConfigResponse:
    store = _store(request)
    return ConfigResponse(
        mainPrompt=store.read_main_prompt(),
        personalities=store.read_personalities(),
    )


@router.put(
    "/config/prompt",
    response_model=PromptResponse,
    dependencies=[Depends(require_admin_token)],
)
async def update_prompt(request: Request) -> PromptResponse:
    body = await _parse_body(request, PromptUpdate)
    if body is None or not body.mainPrompt or not body.mainPrompt.strip():
        raise _bad_request("mainPrompt is required")

    try:
        main_prompt = _store(request).write_main_prompt(body.mainPrompt)
    except ConfigStoreError as e:
        raise _store_unavailable(e)

    logger.info("Main prompt updated")
    return PromptResponse(mainPrompt=main_prompt)


# ============================================================================
# PERSONALITIES
# ============================================================================

@router.get("/config/personalities", response_model=PersonalitiesResponse)
async def list_personalities(request: Request) -> PersonalitiesResponse:
    return PersonalitiesResponse(personalities=_store(request).read_personalities())


@router.put(
    "/config/personalities",
    response_model=PersonalitiesResponse,
    dependencies=[Depends(require_admin_token)],
)
async def replace_personalities(request: Request) -> PersonalitiesResponse:
    body = await _parse_body(request, PersonalitiesReplace)
    if body is None or body.personalities is None:
        raise _bad_request("personalities array is required")

    personalities = normalize_personalities(body.personalities)
    try:
        _store(request).write_personalities(personalities)
    except ConfigStoreError as e:
        raise _store_unavailable(e)

    logger.info(f"Personalities replaced ({len(personalities)} total)")
    return PersonalitiesResponse(personalities=personalities)


@router.post(
    "/config/personalities",
    response_model=PersonalityUpsertResponse,
    dependencies=[Depends(require_admin_token)],
)
async def upsert_personality(request: Request) -> PersonalityUpsertResponse:
    """Add a personality, or replace the one with the same id."""
    body = await _parse_body(request, PersonalityUpsert)
    if body is None or body.name is None or body.prompt is None:
        raise _bad_request("name and prompt are required")

    name = body.name.strip()
    prompt = body.prompt.strip()
    if not name or not prompt:
        raise _bad_request("name and prompt cannot be empty")

    store = _store(request)
    current = store.read_personalities()
    if body.id and body.id.strip():
        personality_id = slugify(body.id.strip())
    else:
        personality_id = unique_id_from_name(name, current)

    updated = [item for item in current if item.id != personality_id]
    updated.append(Personality(id=personality_id, name=name, prompt=prompt))
    personalities = normalize_personalities(updated)

    try:
        store.write_personalities(personalities)
    except ConfigStoreError as e:
        raise _store_unavailable(e)

    logger.info(f"Personality '{personality_id}' saved")
    return PersonalityUpsertResponse(personalities=personalities, id=personality_id)


@router.delete(
    "/config/personalities/{personality_id}",
    response_model=PersonalitiesResponse,
    dependencies=[Depends(require_admin_token)],
)
async def delete_personality(personality_id: str, request: Request) -> PersonalitiesResponse:
    store = _store(request)
    remaining = [item for item in store.read_personalities() if item.id != personality_id]

    if not remaining:
        raise _bad_request("At least one personality must remain")

    try:
        store.write_personalities(remaining)
    except ConfigStoreError as e:
        raise _store_unavailable(e)

    logger.info(f"Personality '{personality_id}' deleted")
    return PersonalitiesResponse(personalities=remaining)


@router.options("/{rest:path}", include_in_schema=False)
async def api_options(rest: str) -> Response:
    """Bare OPTIONS on the admin API; CORS preflights are answered by the middleware."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Everything else under /api is ours, never proxied
@router.api_route(
    "/{rest:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def api_not_found(rest: str) -> None:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
