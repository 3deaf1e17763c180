from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class PhoneAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool | None = Field(default=None, alias="isValid")
    formatted: str | None = None
    country_suggestion: str | None = Field(default=None, alias="countrySuggestion")
    security_note: str | None = Field(default=None, alias="securityNote")

    @classmethod
    def from_reply(cls, reply: dict[str, Any]) -> "PhoneAnalysis":
        """Wrap a parsed model reply as-is: no validation, no coercion."""
        return cls.model_construct(
            is_valid=reply.get("isValid"),
            formatted=reply.get("formatted"),
            country_suggestion=reply.get("countrySuggestion"),
            security_note=reply.get("securityNote"),
        )

    @model_serializer
    def _wire_fields(self) -> dict[str, Any]:
        # Reply values may not match the annotations; emit them untouched.
        data = {
            "isValid": self.is_valid,
            "formatted": self.formatted,
            "countrySuggestion": self.country_suggestion,
            "securityNote": self.security_note,
        }
        return {key: value for key, value in data.items() if value is not None}


# Output schema declared to Gemini (REST `Schema` object, OpenAPI subset).
PHONE_ANALYSIS_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "isValid": {"type": "BOOLEAN"},
        "formatted": {"type": "STRING"},
        "countrySuggestion": {"type": "STRING"},
        "securityNote": {"type": "STRING"},
    },
    "required": ["isValid", "formatted"],
}
