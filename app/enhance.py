"""
Accessibility enhancement pass.

Sends already-rewritten HTML plus a department prompt to a text-generation
service and gets back the same document with aria-label attributes on links.
The service is reached through the narrow Enhancer interface so it can be
swapped for a fake.
"""

from __future__ import annotations

from typing import Optional, Protocol

import httpx
from bs4 import BeautifulSoup, ParserRejectedMarkup

from .config import Settings
from .departments import DepartmentRegistry
from .logger import get_logger, sanitize_token

logger = get_logger("enhance")


class HtmlEnhancementError(Exception):
    pass


class ParseError(HtmlEnhancementError):
    pass


class EmptyResponseError(HtmlEnhancementError):
    pass


class TransformationError(Exception):
    """User-facing failure of the enhancement step."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"HTML transformation failed: {reason}")


class Enhancer(Protocol):
    async def enhance(self, html: str, prompt: str) -> Optional[str]:
        ...


class ChatCompletionEnhancer:
    """Enhancer backed by an OpenAI-compatible /chat/completions endpoint."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.settings = settings
        self.transport = transport

    def _payload(self, html: str, prompt: str) -> dict:
        return {
            "model": self.settings.llm_model,
            "messages": [
                {"role": "system", "content": prompt},
                {"role": "user", "content": html},
            ],
            "temperature": self.settings.llm_temperature,
            "max_tokens": self.settings.llm_max_tokens,
        }

    async def enhance(self, html: str, prompt: str) -> Optional[str]:
        logger.debug(
            "Requesting completion from %s (model=%s, key=%s)",
            self.settings.llm_base_url,
            self.settings.llm_model,
            sanitize_token(self.settings.llm_api_key),
        )
        async with httpx.AsyncClient(
            base_url=self.settings.llm_base_url,
            headers={"Authorization": f"Bearer {self.settings.llm_api_key}"},
            timeout=self.settings.llm_timeout,
            transport=self.transport,
        ) as client:
            resp = await client.post("/chat/completions", json=self._payload(html, prompt))
            resp.raise_for_status()
            data = resp.json()

        choices = data.get("choices") or []
        if not choices:
            return None
        return (choices[0].get("message") or {}).get("content")


def ensure_parseable(html: str, source: str) -> BeautifulSoup:
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"{source} HTML could not be parsed: {exc}") from exc

    if soup.find() is None:
        raise ParseError(f"{source} HTML contains no markup")
    return soup


async def interpret(html: str, department: str, enhancer: Enhancer, registry: DepartmentRegistry) -> str:
    """
    Add aria-label attributes to the links of an already-normalized document.

    Raises:
        TransformationError: the input or the returned text is not HTML, the
            service returned nothing, or the request itself failed.
    """
    rule = registry.get_or_create(department)

    try:
        ensure_parseable(html, "Input")

        transformed = await enhancer.enhance(html, rule.prompt)
        if not transformed:
            raise EmptyResponseError("Failed to transform HTML")

        ensure_parseable(transformed, "Returned")
    except Exception as exc:
        logger.warning("Enhancement failed for %s: %s", department, exc)
        raise TransformationError(str(exc) or type(exc).__name__) from exc

    logger.info("Enhanced document for %s", department)
    return transformed
