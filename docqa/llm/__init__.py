"""
LLM client module for OpenAI-compatible chat APIs.
"""

from .client import ChatClient, client_from_env, create_client

__all__ = ["ChatClient", "client_from_env", "create_client"]
