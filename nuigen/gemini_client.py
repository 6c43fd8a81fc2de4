"""Async client for the Google Generative Language (Gemini) API.

Wraps ``models/{model}:generateContent`` with JSON structured output: a
Pydantic model is translated into the API's ``responseSchema`` and the
returned JSON is validated back into that model.  All methods are async so
they slot into the builders' event loop.

Typical usage::

    client = GeminiClient(api_key="...")
    files = await client.generate(NuxtComponentFiles, prompt)
    print(files.component_content)

Anything that implements :class:`ObjectGenerator` can stand in for the
client; the builders only depend on that interface.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Protocol, TypeVar

import httpx
from pydantic import BaseModel, Field, ValidationError

from nuigen.errors import GenerationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

_GEMINI_TYPES = {
    "string": "STRING",
    "integer": "INTEGER",
    "number": "NUMBER",
    "boolean": "BOOLEAN",
    "array": "ARRAY",
    "object": "OBJECT",
}


class ObjectGenerator(Protocol):
    """Produces an instance of *schema* from a natural-language prompt."""

    async def generate(
        self,
        schema: type[SchemaT],
        prompt: str,
        *,
        model: Optional[str] = None,
    ) -> SchemaT: ...


class GeminiResponse(BaseModel):
    """Structured response from a ``generateContent`` call."""

    text: str = Field(default="", description="Concatenated text of the first candidate")
    model: str = Field(default="", description="Model that produced the response")
    total_tokens: int = Field(default=0, description="Prompt + candidate token count")
    finish_reason: str = Field(default="", description="Finish reason of the first candidate")
    success: bool = Field(default=True, description="Whether the request succeeded")
    error: str | None = Field(default=None, description="Error message on failure")


def response_schema(schema: type[BaseModel]) -> dict[str, Any]:
    """Translate a Pydantic model into a Gemini ``responseSchema`` object.

    Field aliases are used as property names, JSON-schema types are mapped to
    the API's upper-case type names and field descriptions are kept so the
    model sees them.  ``$ref`` entries are inlined from ``$defs``.
    """
    json_schema = schema.model_json_schema(by_alias=True)
    return _convert_schema_node(json_schema, json_schema.get("$defs", {}))


def _convert_schema_node(node: dict[str, Any], defs: dict[str, Any]) -> dict[str, Any]:
    if "$ref" in node:
        ref_name = node["$ref"].rsplit("/", 1)[-1]
        return _convert_schema_node(defs[ref_name], defs)

    if "anyOf" in node:
        # Optional[X] -> X, nullable
        options = [opt for opt in node["anyOf"] if opt.get("type") != "null"]
        converted = _convert_schema_node(options[0], defs) if options else {"type": "STRING"}
        converted["nullable"] = True
        if "description" in node:
            converted["description"] = node["description"]
        return converted

    result: dict[str, Any] = {"type": _GEMINI_TYPES.get(node.get("type", "string"), "STRING")}
    if "description" in node:
        result["description"] = node["description"]
    if "enum" in node:
        result["enum"] = [str(v) for v in node["enum"]]
    if result["type"] == "OBJECT":
        result["properties"] = {
            name: _convert_schema_node(prop, defs)
            for name, prop in node.get("properties", {}).items()
        }
        if node.get("required"):
            result["required"] = list(node["required"])
    if result["type"] == "ARRAY" and "items" in node:
        result["items"] = _convert_schema_node(node["items"], defs)
    return result


class GeminiClient:
    """Async client for the Gemini REST API.

    The client uses ``httpx.AsyncClient`` for non-blocking HTTP.  Text
    generation never raises (errors are reported on the ``GeminiResponse``);
    :meth:`generate` raises ``GenerationError`` so callers can decide per item
    whether a failure is fatal.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        model: str = "gemini-2.5-pro-preview-05-06",
        timeout: int = 300,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"x-goog-api-key": self.api_key},
        )

    @staticmethod
    def _build_payload(prompt: str, schema: type[BaseModel] | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        if schema is not None:
            payload["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema(schema),
            }
        return payload

    @staticmethod
    def _extract_text(data: dict) -> str:
        """Join the text parts of the first candidate."""
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    @staticmethod
    def _extract_tokens(data: dict) -> int:
        return int((data.get("usageMetadata") or {}).get("totalTokenCount", 0))

    @staticmethod
    def _block_reason(data: dict) -> str | None:
        """Explain an empty candidate list (safety block or similar)."""
        if data.get("candidates"):
            return None
        feedback = data.get("promptFeedback") or {}
        return feedback.get("blockReason") or "no candidates returned"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def generate_text(
        self,
        prompt: str,
        schema: type[BaseModel] | None = None,
        model: str | None = None,
    ) -> GeminiResponse:
        """Send a prompt, optionally constrained to JSON matching *schema*.

        Args:
            prompt: The user prompt.
            schema: Pydantic model describing the expected JSON output.
            model: Model name; defaults to the client's model.

        Returns:
            A ``GeminiResponse`` with the generated text or an error.
        """
        model = model or self.model
        payload = self._build_payload(prompt, schema)

        try:
            async with self._client() as client:
                response = await client.post(f"/models/{model}:generateContent", json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.ConnectError:
            return GeminiResponse(
                model=model,
                success=False,
                error=f"Cannot connect to the Gemini API at {self.base_url}.",
            )
        except httpx.TimeoutException:
            return GeminiResponse(
                model=model,
                success=False,
                error=f"Request to the Gemini API timed out after {self.timeout}s.",
            )
        except httpx.HTTPStatusError as exc:
            return GeminiResponse(
                model=model,
                success=False,
                error=f"Gemini API returned HTTP {exc.response.status_code}: {exc.response.text[:500]}",
            )
        except (httpx.HTTPError, ValueError) as exc:
            return GeminiResponse(
                model=model,
                success=False,
                error=f"Unexpected error during Gemini generate: {exc}",
            )

        blocked = self._block_reason(data)
        if blocked:
            return GeminiResponse(model=model, success=False, error=f"Generation blocked: {blocked}")

        candidate = data["candidates"][0]
        return GeminiResponse(
            text=self._extract_text(data),
            model=data.get("modelVersion", model),
            total_tokens=self._extract_tokens(data),
            finish_reason=candidate.get("finishReason", ""),
            success=True,
        )

    async def generate(
        self,
        schema: type[SchemaT],
        prompt: str,
        *,
        model: str | None = None,
    ) -> SchemaT:
        """Generate an object conforming to *schema*.

        Raises:
            GenerationError: On transport failure, an empty reply, invalid
                JSON, or output that does not validate against *schema*.
        """
        model = model or self.model
        result = await self.generate_text(prompt, schema=schema, model=model)
        if not result.success:
            raise GenerationError(result.error or "generation failed", model=model)
        if not result.text.strip():
            raise GenerationError("model returned an empty response", model=model)

        try:
            data = json.loads(result.text)
        except json.JSONDecodeError as exc:
            raise GenerationError(f"response is not valid JSON: {exc}", model=model) from exc

        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            raise GenerationError(
                f"response does not match {schema.__name__}: {exc.error_count()} error(s)",
                model=model,
            ) from exc

    async def is_available(self) -> bool:
        """Return ``True`` if the API answers ``GET /models`` with the configured key."""
        try:
            async with self._client() as client:
                response = await client.get("/models")
                return response.status_code == 200
        except httpx.HTTPError:
            return False
