"""LLM access for task advice."""

from src.llm.advice import TaskAdvisor, format_task_summary
from src.llm.bedrock_client import BedrockClient, resolve_model_id
from src.llm.exceptions import BedrockClientError, LLMError

__all__ = [
    "BedrockClient",
    "BedrockClientError",
    "LLMError",
    "TaskAdvisor",
    "format_task_summary",
    "resolve_model_id",
]
