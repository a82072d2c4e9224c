from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from advisor.core.history import build_messages
from advisor.core.prompt import TROUBLE_CONNECTING_MESSAGE, missing_credential_message
from advisor.responders.base import ProviderError, RemoteResponder, first_extracted
from config.settings import Settings


logger = logging.getLogger(__name__)


def _string_content(content: Any) -> Optional[str]:
    return content if isinstance(content, str) else None


def _text_parts(content: Any) -> Optional[str]:
    if not isinstance(content, list):
        return None
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text") or "")
    return "".join(parts)


class GeminiResponder(RemoteResponder):
    """Google Gemini chat model driven through langchain."""

    provider = "gemini"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm: Optional[BaseChatModel] = None,
    ) -> None:
        super().__init__(settings)
        self._llm = llm

    def build_llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = ChatGoogleGenerativeAI(
                model=self.settings.gemini_model,
                google_api_key=self.settings.google_api_key,
                temperature=self.settings.temperature,
                top_p=self.settings.top_p,
                max_output_tokens=self.settings.max_tokens,
            )
        return self._llm

    async def respond(self, message: str, history: Sequence[str] = ()) -> str:
        if self._llm is None and not self.settings.google_api_key:
            logger.warning("GOOGLE_API_KEY not set; skipping Gemini request")
            return missing_credential_message("Gemini", "GOOGLE_API_KEY")

        messages = build_messages(message, history)
        logger.info(
            "Gemini request: model=%s messages=%s", self.settings.gemini_model, len(messages)
        )
        try:
            result = await self.build_llm().ainvoke(messages)
        except Exception as exc:
            logger.warning("Gemini call failed: %s", exc)
            status = getattr(exc, "code", None)
            raise ProviderError(
                self.provider, status if isinstance(status, int) else None, str(exc)
            ) from exc

        text = first_extracted(result.content, (_string_content, _text_parts))
        return text.strip() if text else TROUBLE_CONNECTING_MESSAGE
