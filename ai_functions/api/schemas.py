from __future__ import annotations

import base64
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="Service status indicator. `ok` means the dev server is up and responding.",
        examples=["ok"],
    )


class ResultOut(BaseModel):
    """Success envelope."""

    result: str


class ErrorOut(BaseModel):
    """Error envelope."""

    error: str


class FunctionEvent(BaseModel):
    """
    Request event handed over by the serverless runtime.

    Accepts the Netlify / API Gateway REST shape (`httpMethod`) and falls back to the
    API Gateway HTTP API v2 shape (`requestContext.http.method`).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    http_method: str = Field(
        default="",
        validation_alias=AliasChoices("httpMethod", "http_method"),
    )
    path: str | None = None
    headers: dict[str, str] | None = None
    body: str | None = None
    is_base64_encoded: bool = Field(
        default=False,
        validation_alias=AliasChoices("isBase64Encoded", "is_base64_encoded"),
    )

    @model_validator(mode="before")
    @classmethod
    def _fallback_http_method(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("httpMethod") or data.get("http_method"):
            return data
        context = data.get("requestContext")
        http = context.get("http") if isinstance(context, dict) else None
        method = http.get("method") if isinstance(http, dict) else None
        if isinstance(method, str):
            return {**data, "httpMethod": method}
        return data

    @property
    def method(self) -> str:
        return self.http_method.upper()

    def decoded_body(self) -> str | None:
        """Return the raw body text, decoding base64 payloads when flagged by the runtime."""

        if self.body is None or not self.is_base64_encoded:
            return self.body
        return base64.b64decode(self.body).decode("utf-8")


class FunctionResponse(BaseModel):
    """Response object returned to the serverless runtime."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(serialization_alias="statusCode")
    headers: dict[str, str] = Field(default_factory=dict)
    body: str

    def to_event_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
