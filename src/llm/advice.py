"""LLM-generated advice for lists of Notion tasks."""

import logging
from collections.abc import Sequence

from src.llm.bedrock_client import BedrockClient
from src.notion.models import NotionTask

logger = logging.getLogger(__name__)

DEFAULT_ADVICE_MODEL = "haiku"
ADVICE_MAX_TOKENS = 1024


def format_task_summary(tasks: Sequence[NotionTask]) -> str:
    """Render tasks as numbered lines for a prompt.

    :param tasks: Tasks to summarise.
    :returns: One line per task with title, due date and assignee.
    """
    return "\n".join(
        f"{i}. {task.title} | Due: {task.due_date or '-'} | Assignee: {task.assignee or '-'}"
        for i, task in enumerate(tasks, start=1)
    )


class TaskAdvisor:
    """Asks the LLM for action items on a set of tasks."""

    def __init__(
        self,
        client: BedrockClient | None = None,
        model: str = DEFAULT_ADVICE_MODEL,
    ) -> None:
        """Initialise the advisor.

        :param client: Bedrock client. Created on first use if not given.
        :param model: Model alias used for advice.
        """
        self._client = client
        self.model = model

    @property
    def client(self) -> BedrockClient:
        """The Bedrock client, created lazily so the bot starts without AWS access."""
        if self._client is None:
            self._client = BedrockClient()
        return self._client

    def _complete(self, prompt: str) -> str:
        logger.info(f"Requesting task advice: model={self.model}")
        return self.client.complete(prompt, model_id=self.model, max_tokens=ADVICE_MAX_TOKENS)

    def advise_for_assignee(self, assignee: str, tasks: Sequence[NotionTask]) -> str:
        """Get action items for one person's open tasks.

        :param assignee: Assignee display name.
        :param tasks: The assignee's open tasks.
        :returns: Advice text.
        :raises BedrockClientError: If the LLM call fails.
        """
        prompt = (
            f"Tasks for {assignee}:\n{format_task_summary(tasks)}\n"
            "As a project manager, provide action items:"
        )
        return self._complete(prompt)

    def advise_for_week(self, tasks: Sequence[NotionTask]) -> str:
        """Get next steps for tasks due this week.

        :param tasks: Open tasks due this week.
        :returns: Advice text.
        :raises BedrockClientError: If the LLM call fails.
        """
        prompt = (
            f"Tasks due this week:\n{format_task_summary(tasks)}\n"
            "As a PM, suggest next steps:"
        )
        return self._complete(prompt)
