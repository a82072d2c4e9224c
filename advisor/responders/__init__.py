from advisor.responders.base import ProviderError, RemoteResponder
from advisor.responders.gemini import GeminiResponder
from advisor.responders.huggingface import HuggingFaceResponder
from advisor.responders.local import respond_locally
from advisor.responders.openai_chat import OpenAIResponder

__all__ = [
    "GeminiResponder",
    "HuggingFaceResponder",
    "OpenAIResponder",
    "ProviderError",
    "RemoteResponder",
    "respond_locally",
]
