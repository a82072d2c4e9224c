from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from advisor.core.history import build_messages, to_role_dicts
from advisor.core.prompt import TROUBLE_CONNECTING_MESSAGE, missing_credential_message
from advisor.responders.base import RemoteResponder, first_extracted


logger = logging.getLogger(__name__)


def _choice_content(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content")


class OpenAIResponder(RemoteResponder):
    """Chat completions endpoint with a role/content message list."""

    provider = "openai"

    def build_payload(self, message: str, history: Sequence[str] = ()) -> dict:
        return {
            "model": self.settings.openai_model,
            "messages": to_role_dicts(build_messages(message, history)),
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
        }

    async def respond(self, message: str, history: Sequence[str] = ()) -> str:
        api_key = self.settings.openai_api_key
        if not api_key:
            logger.warning("OPENAI_API_KEY not set; skipping OpenAI request")
            return missing_credential_message("OpenAI", "OPENAI_API_KEY")

        payload = self.build_payload(message, history)
        logger.info(
            "OpenAI request: model=%s messages=%s",
            payload["model"],
            len(payload["messages"]),
        )
        data = await self._post(
            self.settings.openai_api_url,
            payload,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        text = first_extracted(data, (_choice_content,))
        return text.strip() if text else TROUBLE_CONNECTING_MESSAGE
