from __future__ import annotations

import json
from typing import Any

import httpx

from dialqr.providers.common import ProviderAdapterResult, failed_result, now_ms, parse_json_or_raw

_PROVIDER = "gemini"
_ACTION = "generate_structured"
_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


def parse_json_object(text: str) -> dict[str, Any] | None:
    try:
        loaded = json.loads(text.strip())
    except ValueError:
        return None
    return loaded if isinstance(loaded, dict) else None


def extract_candidate_text(body: dict[str, Any]) -> str:
    text = ""
    for candidate in body.get("candidates") or []:
        if not isinstance(candidate, dict):
            continue
        parts = ((candidate.get("content") or {}).get("parts") or [])
        for part in parts:
            if isinstance(part, dict) and isinstance(part.get("text"), str):
                text += part["text"]
    return text


async def generate_structured(
    *,
    api_key: str | None,
    model: str,
    prompt: str,
    response_schema: dict[str, Any],
    timeout_seconds: float = 30.0,
) -> ProviderAdapterResult:
    """Run one JSON-constrained generateContent call.

    ``mapped`` is the parsed JSON object from the reply text, or ``None`` when
    the call failed or the reply was not a JSON object. Transport errors are
    reported in ``attempt`` rather than raised.
    """
    if not api_key:
        return failed_result(_PROVIDER, _ACTION, error="missing_api_key")

    url = f"{_BASE_URL}/{model.strip()}:generateContent"
    payload = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": response_schema,
        },
    }
    start_ms = now_ms()

    try:
        async with httpx.AsyncClient(timeout=timeout_seconds) as client:
            res = await client.post(url, params={"key": api_key}, json=payload)
            body = parse_json_or_raw(res.text, res.json)
    except httpx.TimeoutException:
        return failed_result(_PROVIDER, _ACTION, error="timeout", duration_ms=now_ms() - start_ms)
    except httpx.HTTPError as exc:
        return failed_result(
            _PROVIDER,
            _ACTION,
            error=f"http_error:{exc.__class__.__name__}",
            duration_ms=now_ms() - start_ms,
        )

    duration_ms = now_ms() - start_ms
    if res.status_code >= 400:
        return failed_result(
            _PROVIDER,
            _ACTION,
            http_status=res.status_code,
            duration_ms=duration_ms,
            raw_response=body,
        )

    text = extract_candidate_text(body)
    if not text.strip():
        return failed_result(
            _PROVIDER,
            _ACTION,
            error="empty_response",
            http_status=res.status_code,
            duration_ms=duration_ms,
            raw_response=body,
        )

    mapped = parse_json_object(text)
    return {
        "attempt": {
            "provider": _PROVIDER,
            "action": _ACTION,
            "status": "completed" if mapped is not None else "failed",
            "provider_status": "invalid_json_output" if mapped is None else "ok",
            "http_status": res.status_code,
            "duration_ms": duration_ms,
            "raw_response": body,
        },
        "mapped": mapped,
    }
