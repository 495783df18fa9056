"""
LLM Integration

This module provides prompt construction and the chat-completion client.
"""

from .prompts import PromptBuilder, SYSTEM_PROMPT
from .client import ModelClient, ProviderProfile, PROVIDER_PROFILES, get_provider_profile

__all__ = [
    'PromptBuilder',
    'SYSTEM_PROMPT',
    'ModelClient',
    'ProviderProfile',
    'PROVIDER_PROFILES',
    'get_provider_profile',
]
