from __future__ import annotations

import logging
from typing import Protocol

from dialqr.config import Settings
from dialqr.contracts.phone_analysis import PHONE_ANALYSIS_RESPONSE_SCHEMA, PhoneAnalysis
from dialqr.providers import gemini

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_COUNTRY = "Unknown"

_PROMPT_TEMPLATE = (
    "Analyze this phone number and provide feedback: {number}. "
    "Determine if it looks like a valid international or local format and identify the likely country."
)


class PhoneAnalyzer(Protocol):
    async def analyze(self, number: str) -> PhoneAnalysis:
        ...


def build_prompt(number: str) -> str:
    return _PROMPT_TEMPLATE.format(number=number)


def fallback_analysis(number: str, *, country_label: str = DEFAULT_FALLBACK_COUNTRY) -> PhoneAnalysis:
    return PhoneAnalysis(is_valid=True, formatted=number, country_suggestion=country_label)


class GeminiPhoneAnalyzer:
    """Phone number analysis backed by a single Gemini structured-output call.

    ``analyze`` never raises: every provider failure (missing key, transport
    error, HTTP error, empty or non-JSON reply) is logged and replaced by
    :func:`fallback_analysis`. Any reply that parses as a JSON object is
    returned unchanged.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str = "gemini-3-flash-preview",
        timeout_seconds: float = 30.0,
        fallback_country: str = DEFAULT_FALLBACK_COUNTRY,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout_seconds = timeout_seconds
        self._fallback_country = fallback_country

    @classmethod
    def from_settings(cls, settings: Settings) -> GeminiPhoneAnalyzer:
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout_seconds=settings.gemini_timeout_seconds,
            fallback_country=settings.fallback_country_label,
        )

    async def analyze(self, number: str) -> PhoneAnalysis:
        try:
            result = await gemini.generate_structured(
                api_key=self._api_key,
                model=self._model,
                prompt=build_prompt(number),
                response_schema=PHONE_ANALYSIS_RESPONSE_SCHEMA,
                timeout_seconds=self._timeout_seconds,
            )
        except Exception:  # noqa: BLE001
            logger.exception("Gemini phone analysis call raised", extra={"model": self._model})
            return self._fallback(number)

        attempt = result["attempt"]
        mapped = result["mapped"]
        if mapped is None:
            logger.warning(
                "Gemini phone analysis failed, using fallback",
                extra={
                    "model": self._model,
                    "error": attempt.get("error") or attempt.get("provider_status"),
                    "http_status": attempt.get("http_status"),
                },
            )
            return self._fallback(number)

        return PhoneAnalysis.from_reply(mapped)

    def _fallback(self, number: str) -> PhoneAnalysis:
        return fallback_analysis(number, country_label=self._fallback_country)
