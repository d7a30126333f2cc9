"""
Orchestrator: retrieval over the document window and answer composition.
"""

from .agent import AssistantResponse, DocumentAssistant
from .deps import build_assistant

__all__ = [
    "AssistantResponse",
    "DocumentAssistant",
    "build_assistant",
]
