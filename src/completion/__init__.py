"""Completion client for the Generative Language API.

Responsibilities:
    - Building generateContent requests with fixed generation limits
    - Extracting the first candidate's text
    - Classifying failures (invalid input, network, upstream)
"""

from src.completion.client import (
    CompletionClient,
    CompletionError,
    DeferredCompletionClient,
    InvalidInputError,
    NetworkFailureError,
    UpstreamError,
    get_completion_client,
    get_deferred_completion_client,
)
from src.completion.config import CompletionConfig, get_completion_config

__all__ = [
    "CompletionClient",
    "CompletionConfig",
    "CompletionError",
    "DeferredCompletionClient",
    "InvalidInputError",
    "NetworkFailureError",
    "UpstreamError",
    "get_completion_client",
    "get_completion_config",
    "get_deferred_completion_client",
]
