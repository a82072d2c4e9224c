from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import logging
from pydantic import BaseModel, Field, field_validator

from advisor.core.history import flatten_turns
from advisor.dispatcher import ResponseMode, generate_response, resolve_mode
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("financeguru")

app = FastAPI(title="FinanceGuru Advisor", version="1.0.0")

# CORS: allow local frontend during development
settings = get_settings()
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class ChatTurn(BaseModel):
    role: str = Field(..., description="'user' or 'assistant'")
    content: str


class ChatRequest(BaseModel):
    message: str = Field(..., description="User's latest message")
    conversation_history: Optional[List[ChatTurn]] = Field(
        default_factory=list,
        description="Earlier turns, alternating user and assistant, starting with the user",
    )
    mode: Optional[ResponseMode] = Field(
        default=None,
        description="Responder to use; defaults to DEFAULT_RESPONSE_MODE",
    )

    @field_validator("conversation_history")
    @classmethod
    def _alternating_turns(cls, turns: Optional[List[ChatTurn]]) -> Optional[List[ChatTurn]]:
        # ValueError here becomes a 422 response
        flatten_turns([t.model_dump() for t in turns or []])
        return turns


@app.post("/advisor/chat")
async def chat(req: ChatRequest) -> Dict[str, Any]:
    settings = get_settings()
    mode = resolve_mode(req.mode or settings.default_response_mode)
    try:
        history = flatten_turns([t.model_dump() for t in (req.conversation_history or [])])
        logger.info(
            "Incoming chat: mode=%s history_turns=%s message_len=%s",
            mode.value,
            len(history),
            len(req.message or ""),
        )
        output_text = await generate_response(req.message, history, mode)
        logger.info("Advisor responded with %s chars", len(output_text))
        return {"ai_response": output_text, "mode": mode.value}
    except Exception as e:
        logger.exception("Chat processing failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/health")
def health():
    return {"status": "ok"}
