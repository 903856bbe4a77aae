"""Custom exceptions for the LLM module."""


class LLMError(Exception):
    """Base exception for LLM-related errors."""


class BedrockClientError(LLMError):
    """Error related to AWS Bedrock API calls."""
