"""Choose a responder for each message and fall back to local templates."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Awaitable, Callable, Dict, Mapping, Optional, Sequence, Union

from advisor.responders import (
    GeminiResponder,
    HuggingFaceResponder,
    OpenAIResponder,
    respond_locally,
)
from config.settings import Settings, get_settings


logger = logging.getLogger(__name__)

Responder = Callable[[str, Sequence[str]], Awaitable[str]]

SHORT_GREETING = re.compile(r"^(hi|hello|hey|greetings|howdy)(?:$|[\s!.,?;:])", re.IGNORECASE)


class ResponseMode(str, Enum):
    LOCAL = "local"
    OPENAI = "openai"
    HUGGINGFACE = "huggingface"
    GEMINI = "gemini"


def is_short_greeting(message: str) -> bool:
    return bool(SHORT_GREETING.match(message))


def build_remote_responders(settings: Optional[Settings] = None) -> Dict[ResponseMode, Responder]:
    settings = settings or get_settings()
    return {
        ResponseMode.OPENAI: OpenAIResponder(settings),
        ResponseMode.HUGGINGFACE: HuggingFaceResponder(settings),
        ResponseMode.GEMINI: GeminiResponder(settings),
    }


def resolve_mode(mode: Union[ResponseMode, str]) -> ResponseMode:
    try:
        return ResponseMode(mode)
    except ValueError:
        logger.warning("Unknown response mode %r; answering locally", mode)
        return ResponseMode.LOCAL


async def generate_response(
    message: str,
    history: Sequence[str] = (),
    mode: Union[ResponseMode, str] = ResponseMode.LOCAL,
    responders: Optional[Mapping[ResponseMode, Responder]] = None,
) -> str:
    """Answer ``message``; never raises.

    Local mode and short greetings skip remote providers entirely. Any error
    from a remote responder is logged and replaced by the local answer.
    """

    selected = resolve_mode(mode)
    if selected is ResponseMode.LOCAL or is_short_greeting(message):
        logger.info("Answering locally (mode=%s)", selected.value)
        return respond_locally(message)

    if responders is None:
        responders = build_remote_responders()
    responder = responders.get(selected)
    if responder is None:
        logger.warning("No responder registered for mode=%s; answering locally", selected.value)
        return respond_locally(message)

    try:
        return await responder(message, list(history or ()))
    except Exception as exc:
        logger.warning(
            "Remote responder %s failed, falling back to local: %s", selected.value, exc
        )
        return respond_locally(message)
