from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

import httpx

from config.settings import Settings, get_settings


logger = logging.getLogger(__name__)

Extractor = Callable[[Any], Optional[str]]


class ProviderError(RuntimeError):
    """A remote provider could not be reached or answered with an error status.

    ``status_code`` is None for transport failures. ``body`` is the serialized
    error payload and ``payload`` the decoded one when it was JSON.
    """

    def __init__(
        self,
        provider: str,
        status_code: Optional[int],
        body: str,
        payload: Any = None,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        self.body = body
        self.payload = payload
        status = status_code if status_code is not None else "transport"
        super().__init__(f"{provider} request failed ({status}): {body}")


def first_extracted(payload: Any, extractors: Iterable[Extractor]) -> Optional[str]:
    """Run ``extractors`` in order and return the first non-empty text."""

    for extract in extractors:
        text = extract(payload)
        if isinstance(text, str) and text.strip():
            return text
    return None


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class RemoteResponder:
    """Base for responders that answer through one HTTP call to a provider."""

    provider = "remote"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    async def respond(self, message: str, history: Sequence[str] = ()) -> str:
        raise NotImplementedError

    async def __call__(self, message: str, history: Sequence[str] = ()) -> str:
        return await self.respond(message, history)

    async def _post(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.request_timeout, transport=self._transport
            ) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("%s transport error: %s", self.provider, exc)
            raise ProviderError(self.provider, None, str(exc)) from exc

        data = _decode(response)
        if not response.is_success:
            body = json.dumps(data) if data is not None else response.text
            logger.warning(
                "%s responded with HTTP %s: %s", self.provider, response.status_code, body[:500]
            )
            raise ProviderError(self.provider, response.status_code, body, data)
        if data is None:
            raise ProviderError(
                self.provider, response.status_code, f"Non-JSON response: {response.text[:500]}"
            )
        return data
