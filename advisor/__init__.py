from advisor.dispatcher import ResponseMode, generate_response

__all__ = ["ResponseMode", "generate_response"]
