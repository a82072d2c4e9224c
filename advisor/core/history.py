"""Conversion of flat conversation history into role-tagged chat messages.

Callers hand over history as a flat list of strings where even positions are
user turns and odd positions are assistant turns. Everything sent to a remote
provider is first expressed as ``langchain_core`` messages so each provider
only has to serialize one shape.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from advisor.core.prompt import SYSTEM_PROMPT


ROLE_LABELS = {"system": "System", "human": "User", "ai": "Assistant"}
OPENAI_ROLES = {"system": "system", "human": "user", "ai": "assistant"}


class InvalidHistoryError(ValueError):
    """History cannot be paired into alternating user/assistant turns."""


def to_lc_messages(history: Sequence[str]) -> List[BaseMessage]:
    if len(history) % 2:
        raise InvalidHistoryError(
            f"History must hold complete user/assistant pairs, got {len(history)} entries"
        )
    messages: List[BaseMessage] = []
    for idx, content in enumerate(history):
        if idx % 2 == 0:
            messages.append(HumanMessage(content=content))
        else:
            messages.append(AIMessage(content=content))
    return messages


def build_messages(message: str, history: Sequence[str] = ()) -> List[BaseMessage]:
    """System prompt, paired history, then ``message`` as the final user turn."""

    return [
        SystemMessage(content=SYSTEM_PROMPT),
        *to_lc_messages(history),
        HumanMessage(content=message),
    ]


def to_role_dicts(messages: Sequence[BaseMessage]) -> List[Dict[str, str]]:
    return [{"role": OPENAI_ROLES[m.type], "content": m.content} for m in messages]


def to_prompt(messages: Sequence[BaseMessage]) -> str:
    # Trailing label cues the model to answer as the assistant.
    lines = [f"{ROLE_LABELS[m.type]}: {m.content}" for m in messages]
    lines.append(f"{ROLE_LABELS['ai']}:")
    return "\n".join(lines)


def flatten_turns(turns: Sequence[Dict[str, str]]) -> List[str]:
    """Role-tagged turns to the flat history list, enforcing user-first alternation."""

    flat: List[str] = []
    for idx, turn in enumerate(turns):
        role = (turn.get("role") or "").lower()
        expected = ("user", "human") if idx % 2 == 0 else ("assistant", "ai", "bot")
        if role not in expected:
            raise InvalidHistoryError(
                f"Turn {idx} has role {role!r}; expected {expected[0]!r}"
            )
        flat.append(turn.get("content") or "")
    if len(flat) % 2:
        raise InvalidHistoryError("History must end with an assistant turn")
    return flat
