"""AWS Bedrock client for task advice."""

from __future__ import annotations

import logging
import os
import time
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.llm.exceptions import BedrockClientError

if TYPE_CHECKING:
    from mypy_boto3_bedrock_runtime import BedrockRuntimeClient
    from mypy_boto3_bedrock_runtime.type_defs import ContentBlockTypeDef, MessageTypeDef

logger = logging.getLogger(__name__)

# Model ID aliases - use these instead of full Bedrock model IDs
MODEL_ALIASES: dict[str, str] = {
    "haiku": "global.anthropic.claude-haiku-4-5-20251001-v1:0",
    "sonnet": "global.anthropic.claude-sonnet-4-5-20250929-v1:0",
    "opus": "global.anthropic.claude-opus-4-5-20251101-v1:0",
}

# Valid model alias options
VALID_MODEL_OPTIONS = frozenset(MODEL_ALIASES.keys())


def resolve_model_id(model_id: str) -> str:
    """Resolve a model alias to a full model ID.

    :param model_id: Model alias (haiku, sonnet, opus).
    :returns: Full Bedrock model ID.
    :raises ValueError: If model_id is not a valid alias.
    """
    model_lower = model_id.lower()
    if model_lower not in MODEL_ALIASES:
        valid_options = ", ".join(sorted(VALID_MODEL_OPTIONS))
        raise ValueError(f"Invalid model '{model_id}'. Must be one of: {valid_options}")
    return MODEL_ALIASES[model_lower]


class BedrockClient:
    """Client for the AWS Bedrock Converse API.

    Only single-turn text completions are needed here: one user message
    in, the model's text out, no tools and no streaming.
    """

    def __init__(
        self,
        region_name: str | None = None,
    ) -> None:
        """Initialise the Bedrock client.

        :param region_name: AWS region. Defaults to AWS_REGION env var or eu-west-2.
        """
        self.region_name = region_name or os.environ.get("AWS_REGION", "eu-west-2")

        self._client: BedrockRuntimeClient = boto3.client(
            "bedrock-runtime",
            region_name=self.region_name,
        )

        logger.debug(f"Initialised BedrockClient: region={self.region_name}")

    def converse(
        self,
        messages: list[MessageTypeDef],
        model_id: str,
        max_tokens: int = 1024,
        temperature: float = 0.0,
    ) -> dict[str, Any]:
        """Invoke the Bedrock Converse API.

        :param messages: Conversation messages.
        :param model_id: Model alias (haiku, sonnet, opus) to use for this request.
        :param max_tokens: Maximum tokens in response.
        :param temperature: Sampling temperature (0.0 for deterministic).
        :returns: Converse API response.
        :raises BedrockClientError: If the API call fails.
        :raises ValueError: If model_id is not a valid alias.
        """
        effective_model = resolve_model_id(model_id)

        try:
            logger.debug(
                f"Calling Bedrock Converse: model={effective_model}, messages_count={len(messages)}"
            )
            start_time = time.perf_counter()
            response = self._client.converse(
                modelId=effective_model,
                messages=messages,
                inferenceConfig={"maxTokens": max_tokens, "temperature": temperature},
            )
            latency_ms = int((time.perf_counter() - start_time) * 1000)

            logger.debug(
                f"Bedrock response: stop_reason={response.get('stopReason')}, "
                f"usage={response.get('usage', {})}, latency_ms={latency_ms}"
            )
            return dict(response)

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            error_message = e.response.get("Error", {}).get("Message", str(e))
            logger.exception(f"Bedrock API error: code={error_code}, message={error_message}")
            raise BedrockClientError(
                f"Bedrock API call failed: {error_code} - {error_message}"
            ) from e
        except BotoCoreError as e:
            logger.exception("Bedrock request could not be sent")
            raise BedrockClientError(f"Bedrock API call failed: {e}") from e

    def complete(self, prompt: str, model_id: str, max_tokens: int = 1024) -> str:
        """Send a single user prompt and return the model's text.

        :param prompt: Prompt text.
        :param model_id: Model alias to use.
        :param max_tokens: Maximum tokens in response.
        :returns: Text of the response.
        :raises BedrockClientError: If the API call fails.
        """
        response = self.converse(
            [self.create_user_message(prompt)], model_id=model_id, max_tokens=max_tokens
        )
        return self.parse_text_response(response)

    def parse_text_response(self, response: dict[str, Any]) -> str:
        """Extract text content from a Converse response.

        :param response: Converse API response.
        :returns: Concatenated text content from the response.
        """
        output = response.get("output", {})
        message = output.get("message", {})
        content: list[ContentBlockTypeDef] = message.get("content", [])

        text_parts: list[str] = []
        for block in content:
            if "text" in block:
                text_parts.append(block["text"])

        return "\n".join(text_parts)

    def create_user_message(self, text: str) -> MessageTypeDef:
        """Create a user message.

        :param text: Message text.
        :returns: User message dictionary.
        """
        return {"role": "user", "content": [{"text": text}]}
