"""Runtime loading of Anchor-compatible IDLs.

No IDL is embedded in the SDK. Loaded documents get a structural check only:
``version`` and ``name`` are non-empty strings and ``instructions`` is a list.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import aiohttp

from threeium.common import ensure, ensure_non_empty_string, log_event
from threeium.errors import IdlLoadError


@dataclass(slots=True, frozen=True)
class AnchorIdl:
    version: str
    name: str
    instructions: tuple[Any, ...]
    accounts: tuple[Any, ...] = ()
    types: tuple[Any, ...] = ()
    events: tuple[Any, ...] = ()
    errors: tuple[Any, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)


def _optional_list(idl: dict[str, Any], key: str) -> tuple[Any, ...]:
    value = idl.get(key)
    if value is None:
        return ()
    ensure(isinstance(value, list), "E_IDL_INVALID", f"IDL.{key} must be an array when present")
    return tuple(value)


def validate_anchor_idl(idl: Any) -> AnchorIdl:
    ensure(isinstance(idl, dict), "E_IDL_INVALID", "IDL must be a JSON object")
    ensure_non_empty_string(idl.get("version"), "E_IDL_INVALID", "IDL.version must be a non-empty string")
    ensure_non_empty_string(idl.get("name"), "E_IDL_INVALID", "IDL.name must be a non-empty string")
    ensure(isinstance(idl.get("instructions"), list), "E_IDL_INVALID", "IDL.instructions must be an array")

    metadata = idl.get("metadata")
    if metadata is not None:
        ensure(isinstance(metadata, dict), "E_IDL_INVALID", "IDL.metadata must be an object when present")

    return AnchorIdl(
        version=idl["version"],
        name=idl["name"],
        instructions=tuple(idl["instructions"]),
        accounts=_optional_list(idl, "accounts"),
        types=_optional_list(idl, "types"),
        events=_optional_list(idl, "events"),
        errors=_optional_list(idl, "errors"),
        metadata=dict(metadata or {}),
    )


def load_idl_from_file(path: str | Path, *, logger: logging.Logger) -> AnchorIdl:
    ensure(
        isinstance(path, Path) or (isinstance(path, str) and len(path) > 0),
        "E_IDL_PATH_REQUIRED",
        "IDL path is required",
    )

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as error:
        raise IdlLoadError(
            code="E_IDL_READ_FAILED",
            message="Failed to read IDL from file",
            details={"path": str(path)},
        ) from error

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as error:
        raise IdlLoadError(
            code="E_IDL_PARSE_FAILED",
            message="Failed to parse IDL JSON",
            details={"path": str(path)},
        ) from error

    idl = validate_anchor_idl(parsed)
    log_event(logger, level="info", event="idl_loaded", message="Loaded IDL", source="file", path=str(path), program=idl.name)
    return idl


async def load_idl_from_url(
    url: str,
    *,
    session: aiohttp.ClientSession,
    logger: logging.Logger,
) -> AnchorIdl:
    ensure_non_empty_string(url, "E_IDL_URL_REQUIRED", "IDL URL is required")
    parsed_url = urlsplit(url)
    ensure(
        parsed_url.scheme in {"http", "https"} and bool(parsed_url.netloc),
        "E_IDL_URL_INVALID",
        "IDL URL must be a valid http or https URL",
        url=url,
    )

    try:
        async with session.get(url) as response:
            status_code = response.status
            raw_text = await response.text()
    except (aiohttp.ClientError, asyncio.TimeoutError) as error:
        raise IdlLoadError(
            code="E_IDL_FETCH_FAILED",
            message="Failed to fetch IDL",
            details={"url": url},
        ) from error

    if status_code >= 400:
        raise IdlLoadError(
            code="E_IDL_FETCH_FAILED",
            message="IDL fetch returned non-OK status",
            details={"url": url, "status": status_code},
        )

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise IdlLoadError(
            code="E_IDL_PARSE_FAILED",
            message="Failed to parse IDL JSON from URL",
            details={"url": url},
        ) from error

    idl = validate_anchor_idl(parsed)
    log_event(logger, level="info", event="idl_loaded", message="Loaded IDL", source="url", url=url, program=idl.name)
    return idl
