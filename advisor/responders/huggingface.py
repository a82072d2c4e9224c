"""Hugging Face text-generation endpoint driven by a flattened prompt.

The inference API answers with a bare string, a list of generation objects or
a single generation object depending on the model and task, so extraction
tries each shape in that order.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from advisor.core.history import ROLE_LABELS, build_messages, to_prompt
from advisor.core.prompt import TROUBLE_CONNECTING_MESSAGE, WARMING_UP_MESSAGE
from advisor.responders.base import ProviderError, RemoteResponder, first_extracted


logger = logging.getLogger(__name__)

TURN_DELIMITER = f"{ROLE_LABELS['human']}:"


def _bare_string(payload: Any) -> Optional[str]:
    return payload if isinstance(payload, str) else None


def _first_generation(payload: Any) -> Optional[str]:
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        return payload[0].get("generated_text")
    return None


def _single_generation(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        return payload.get("generated_text")
    return None


EXTRACTORS = (_bare_string, _first_generation, _single_generation)


def strip_leaked_turns(text: str) -> str:
    """Drop anything the model generated past the next user turn."""

    return text.split(TURN_DELIMITER, 1)[0].strip()


def is_model_loading(exc: ProviderError) -> bool:
    if exc.status_code != 503:
        return False
    error = exc.payload.get("error") if isinstance(exc.payload, dict) else exc.body
    return "loading" in str(error or "").lower()


class HuggingFaceResponder(RemoteResponder):
    provider = "huggingface"

    def build_payload(self, message: str, history: Sequence[str] = ()) -> dict:
        return {
            "inputs": to_prompt(build_messages(message, history)),
            "parameters": {
                "max_new_tokens": self.settings.max_tokens,
                "temperature": self.settings.temperature,
                "top_p": self.settings.top_p,
                "do_sample": True,
                "return_full_text": False,
            },
        }

    async def respond(self, message: str, history: Sequence[str] = ()) -> str:
        payload = self.build_payload(message, history)
        logger.info("Hugging Face request: prompt_len=%s", len(payload["inputs"]))
        try:
            data = await self._post(self.settings.hf_inference_url, payload)
        except ProviderError as exc:
            if is_model_loading(exc):
                logger.info("Hugging Face model is still loading")
                return WARMING_UP_MESSAGE
            raise

        text = first_extracted(data, EXTRACTORS)
        if not text:
            return TROUBLE_CONNECTING_MESSAGE
        return strip_leaked_turns(text) or TROUBLE_CONNECTING_MESSAGE
