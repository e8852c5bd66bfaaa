"""
ETag / Cache-Control helpers for read-only content responses.
"""

import hashlib
import json
from typing import Any

from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

# max-age tiers (seconds) by resource type
LESSONS_MAX_AGE = 3600
FLASHCARDS_MAX_AGE = 3600
DAILY_WORDS_MAX_AGE = 600


def compute_etag(body: bytes) -> str:
    return '"' + hashlib.sha256(body).hexdigest()[:32] + '"'


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    """True when an If-None-Match header value covers this ETag (weak comparison)."""
    if not if_none_match:
        return False
    if if_none_match.strip() == "*":
        return True
    for candidate in if_none_match.split(","):
        candidate = candidate.strip()
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == etag:
            return True
    return False


def cached_json(request: Request, payload: Any, *, max_age: int, visibility: str = "public") -> Response:
    """JSON response carrying an ETag; answers 304 when the client already has it."""
    content = jsonable_encoder(payload, by_alias=True)
    body = json.dumps(content, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    etag = compute_etag(body)
    headers = {
        "ETag": etag,
        "Cache-Control": f"{visibility}, max-age={max_age}",
    }
    if etag_matches(request.headers.get("if-none-match"), etag):
        return Response(status_code=304, headers=headers)
    return JSONResponse(content=content, headers=headers)


def uncached_json(payload: Any) -> Response:
    return JSONResponse(content=jsonable_encoder(payload, by_alias=True), headers={"Cache-Control": "no-store"})
