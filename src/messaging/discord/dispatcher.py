"""Slash command dispatcher for the Discord bot.

Turns a command invocation into a reply string. It knows nothing about
discord.py, so it runs the same in the bot, in tests and in scripts.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

from src.api.client import BotAPIError
from src.guild_config.base import GuildConfigStore
from src.guild_config.models import GuildConfig
from src.llm.advice import TaskAdvisor
from src.llm.exceptions import LLMError
from src.messaging.discord.utils.formatting import truncate_message, with_header
from src.notion.client import NotionClient
from src.notion.enums import TaskStatus
from src.notion.exceptions import NotionClientError, describe_error
from src.notion.models import NotionTask, TaskCreate
from src.notion.parser import parse_notion_date, parse_notion_timestamp

logger = logging.getLogger(__name__)

# Commands that manage configuration and so run without a complete config
SETUP_COMMANDS = frozenset({"setup", "config", "reset"})

TASK_COMMANDS = frozenset(
    {
        "addtask",
        "mytasks",
        "duetasks",
        "advise",
        "weekprogress",
        "weekadvise",
        "listassignees",
        "liststatus",
    }
)

COMPLETED_STATUS = TaskStatus.DONE.value
DUE_SOON_WINDOW = timedelta(days=3)
LIST_LIMIT = 10

SETUP_REQUIRED_MESSAGE = (
    "❌ Setup is not complete. Run `/setup` first to connect a Notion database."
)
GUILD_ONLY_MESSAGE = "❌ This command can only be used in a server."
CONFIG_ERROR_MESSAGE = "⚠️ Could not check the configuration. Please try again later."
ADVICE_ERROR_MESSAGE = "⚠️ Could not generate advice right now. Please try again later."

type ClientFactory = Callable[[str, str], NotionClient]


@dataclass
class CommandInvocation:
    """A slash command as the dispatcher sees it."""

    name: str
    guild_id: str | None
    options: dict[str, str | None] = field(default_factory=dict)
    user_id: str | None = None

    def option(self, key: str) -> str | None:
        """Get an option value, treating blank strings as missing."""
        value = self.options.get(key)
        if value is None:
            return None
        value = value.strip()
        return value or None


@dataclass(frozen=True)
class CommandReply:
    """Text to send back, and whether only the invoking user sees it."""

    content: str
    ephemeral: bool = False


def _reply(content: str, *, ephemeral: bool = False) -> CommandReply:
    return CommandReply(truncate_message(content), ephemeral)


def _is_open(task: NotionTask) -> bool:
    return task.status != COMPLETED_STATUS


def _start_of_week(now: datetime) -> datetime:
    """Monday 00:00 of the week containing now, in now's timezone."""
    monday = now - timedelta(days=now.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


class CommandDispatcher:
    """Runs slash commands against a guild's Notion database.

    Every command except setup, config and reset needs a complete guild
    configuration. When it is missing the dispatcher answers with a setup
    prompt and never builds a Notion client.
    """

    def __init__(
        self,
        config_store: GuildConfigStore,
        client_factory: ClientFactory = NotionClient,
        advisor: TaskAdvisor | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialise the dispatcher.

        :param config_store: Where guild settings are read and written.
        :param client_factory: Builds a Notion client from (api_key, database_id).
        :param advisor: LLM advisor for /advise and /weekadvise.
        :param now: Clock returning an aware datetime. Defaults to UTC now.
        """
        self._config_store = config_store
        self._client_factory = client_factory
        self._advisor = advisor or TaskAdvisor()
        self._now = now or (lambda: datetime.now(UTC))

    def dispatch(self, invocation: CommandInvocation) -> CommandReply:
        """Run a command end to end.

        :param invocation: The command to run.
        :returns: The reply to send.
        """
        if invocation.name in SETUP_COMMANDS:
            return self.run_setup(invocation)

        resolved = self.require_config(invocation)
        if isinstance(resolved, CommandReply):
            return resolved
        return self.run(invocation, resolved)

    def require_config(self, invocation: CommandInvocation) -> GuildConfig | CommandReply:
        """Load the guild's configuration, or explain why the command cannot run.

        :param invocation: The command being run.
        :returns: The complete configuration, or an ephemeral reply.
        """
        if invocation.guild_id is None:
            return _reply(GUILD_ONLY_MESSAGE, ephemeral=True)

        try:
            config = self._config_store.get(invocation.guild_id)
        except BotAPIError:
            logger.exception(f"[config-check] failed to load config: guild_id={invocation.guild_id}")
            return _reply(CONFIG_ERROR_MESSAGE, ephemeral=True)

        if config is None or not config.is_complete:
            logger.info(f"Setup required: guild_id={invocation.guild_id} command={invocation.name}")
            return _reply(SETUP_REQUIRED_MESSAGE, ephemeral=True)
        return config

    def run(self, invocation: CommandInvocation, config: GuildConfig) -> CommandReply:
        """Run a task command with an already resolved configuration.

        :param invocation: The command to run.
        :param config: Complete configuration for the invoking guild.
        :returns: The reply to send. Failures produce an ephemeral reply.
        """
        handler = self._task_handlers().get(invocation.name)
        if handler is None:
            return _reply(f"❌ Unknown command: /{invocation.name}", ephemeral=True)

        context = f"command-{invocation.name}"
        try:
            client = self._client_factory(config.notion_api_key or "", config.notion_database_id or "")
            return handler(invocation, client)
        except NotionClientError as e:
            logger.exception(f"[{context}] Notion error: code={e.code} guild_id={invocation.guild_id}")
            return _reply(f"⚠️ {describe_error(e)}", ephemeral=True)
        except LLMError:
            logger.exception(f"[{context}] advice generation failed: guild_id={invocation.guild_id}")
            return _reply(ADVICE_ERROR_MESSAGE, ephemeral=True)

    def _task_handlers(
        self,
    ) -> dict[str, Callable[[CommandInvocation, NotionClient], CommandReply]]:
        return {
            "addtask": self._add_task,
            "mytasks": self._my_tasks,
            "duetasks": self._due_tasks,
            "advise": self._advise,
            "weekprogress": self._week_progress,
            "weekadvise": self._week_advise,
            "listassignees": self._list_assignees,
            "liststatus": self._list_status,
        }

    # Setup commands

    def run_setup(self, invocation: CommandInvocation) -> CommandReply:
        """Handle setup, config and reset. Replies are always ephemeral.

        :param invocation: The command to run.
        :returns: The reply to send.
        """
        if invocation.guild_id is None:
            return _reply(GUILD_ONLY_MESSAGE, ephemeral=True)

        context = f"command-{invocation.name}"
        try:
            match invocation.name:
                case "setup":
                    return self._setup(invocation)
                case "config":
                    return self._show_config(invocation)
                case "reset":
                    return self._reset(invocation)
                case _:
                    return _reply(f"❌ Unknown command: /{invocation.name}", ephemeral=True)
        except BotAPIError:
            logger.exception(f"[{context}] config store failed: guild_id={invocation.guild_id}")
            return _reply(
                "⚠️ Something went wrong while updating the configuration. Please try again later.",
                ephemeral=True,
            )

    def _setup(self, invocation: CommandInvocation) -> CommandReply:
        token = invocation.option("notion_token")
        database_id = invocation.option("notion_database_id")
        if not token or not database_id:
            return _reply(
                "❌ Both `notion_token` and `notion_database_id` are required.", ephemeral=True
            )

        self._config_store.save(
            invocation.guild_id or "",
            token,
            database_id,
            discord_user_id=invocation.user_id,
        )
        logger.info(f"Saved Notion config: guild_id={invocation.guild_id}")
        return _reply("✅ Notion settings saved.", ephemeral=True)

    def _show_config(self, invocation: CommandInvocation) -> CommandReply:
        config = self._config_store.get(invocation.guild_id or "")
        if config is None:
            return _reply("❌ No settings found. Run `/setup` to configure.", ephemeral=True)

        token_state = "set" if config.notion_api_key else "not set"
        lines = [
            "📝 Current settings:",
            f"- Notion token: {token_state}",
            f"- Database ID: {config.notion_database_id or 'not set'}",
            f"- Advice model: {self._advisor.model}",
        ]
        return _reply("\n".join(lines), ephemeral=True)

    def _reset(self, invocation: CommandInvocation) -> CommandReply:
        if not self._config_store.delete(invocation.guild_id or ""):
            return _reply("❌ No settings to reset.", ephemeral=True)
        logger.info(f"Reset Notion config: guild_id={invocation.guild_id}")
        return _reply("✅ Settings have been reset.", ephemeral=True)

    # Task commands

    def _add_task(self, invocation: CommandInvocation, client: NotionClient) -> CommandReply:
        content = invocation.option("content")
        if not content:
            return _reply("❌ Task content is required.", ephemeral=True)

        task = client.create_task(TaskCreate(title=content))
        message = f"✅ Task added: **{task.title}**"
        if task.url:
            message = f"{message}\n{task.url}"
        return _reply(message)

    def _my_tasks(self, invocation: CommandInvocation, client: NotionClient) -> CommandReply:
        assignee = invocation.option("assignee")
        if not assignee:
            return _reply("❌ An assignee is required.", ephemeral=True)

        tasks = [t for t in client.get_tasks() if t.assignee == assignee and _is_open(t)]
        lines = (
            f"{i}. {t.title} | Status: {t.status or '-'} | Due: {t.due_date or '-'}"
            for i, t in enumerate(tasks, start=1)
        )
        return _reply(with_header(f"📋 Open tasks for **{assignee}**:", lines, "• No tasks found"))

    def _due_tasks(self, invocation: CommandInvocation, client: NotionClient) -> CommandReply:
        assignee = invocation.option("assignee")
        now = self._now()
        limit = now + DUE_SOON_WINDOW

        def is_due_soon(task: NotionTask) -> bool:
            due = parse_notion_date(task.due_date)
            if isinstance(due, datetime):
                return now <= due <= limit
            if isinstance(due, date):
                return now.date() <= due <= limit.date()
            return False

        tasks = [
            t
            for t in client.get_tasks()
            if _is_open(t) and is_due_soon(t) and (assignee is None or t.assignee == assignee)
        ]
        header = (
            f"📋 Tasks for **{assignee}** due in the next 3 days:"
            if assignee
            else "📋 Tasks due in the next 3 days:"
        )
        lines = (
            f"• {t.title} | Assignee: {t.assignee or '-'} | Due: {t.due_date}" for t in tasks
        )
        return _reply(with_header(header, lines, "• No matching tasks"))

    def _advise(self, invocation: CommandInvocation, client: NotionClient) -> CommandReply:
        assignee = invocation.option("assignee")
        if not assignee:
            return _reply("❌ An assignee is required.", ephemeral=True)

        header = f"📊 Task advice for **{assignee}**:"
        tasks = [t for t in client.get_tasks() if t.assignee == assignee and _is_open(t)]
        if not tasks:
            return _reply(f"{header}\n• No tasks found")

        advice = self._advisor.advise_for_assignee(assignee, tasks)
        return _reply(f"{header}\n{advice}")

    def _week_progress(self, invocation: CommandInvocation, client: NotionClient) -> CommandReply:
        week_start = _start_of_week(self._now())
        filter_ = {
            "timestamp": "created_time",
            "created_time": {"on_or_after": week_start.isoformat()},
        }

        tasks = []
        for task in client.get_tasks(filter_):
            created = parse_notion_timestamp(task.created_time)
            if created is not None and created >= week_start:
                tasks.append(task)
        tasks.sort(key=lambda t: t.created_time or "")

        lines = (
            f"{i}. {t.title} | Created: {t.created_time}" for i, t in enumerate(tasks, start=1)
        )
        return _reply(with_header("📅 Tasks created this week:", lines, "• No tasks"))

    def _week_advise(self, invocation: CommandInvocation, client: NotionClient) -> CommandReply:
        week_start = _start_of_week(self._now()).date()
        week_end = week_start + timedelta(days=6)

        def is_due_this_week(task: NotionTask) -> bool:
            due = parse_notion_date(task.due_date)
            if isinstance(due, datetime):
                due = due.date()
            return due is not None and week_start <= due <= week_end

        header = "📈 Advice for tasks due this week:"
        tasks = [t for t in client.get_tasks() if _is_open(t) and is_due_this_week(t)]
        if not tasks:
            return _reply(f"{header}\n• No tasks")

        advice = self._advisor.advise_for_week(tasks)
        return _reply(f"{header}\n{advice}")

    # TODO: rank by frequency once product confirms. Both show one line per task for the
    # first 10 rows Notion returns, re-sorted newest first by get_tasks, duplicates kept
    def _list_assignees(self, invocation: CommandInvocation, client: NotionClient) -> CommandReply:
        tasks = client.get_tasks(page_size=LIST_LIMIT)[:LIST_LIMIT]
        lines = (f"**{i}**. {t.assignee or '-'}" for i, t in enumerate(tasks, start=1))
        return _reply(with_header("👥 Top 10 assignees:", lines, "None"))

    def _list_status(self, invocation: CommandInvocation, client: NotionClient) -> CommandReply:
        tasks = client.get_tasks(page_size=LIST_LIMIT)[:LIST_LIMIT]
        lines = (f"**{i}**. {t.status or '-'}" for i, t in enumerate(tasks, start=1))
        return _reply(with_header("🔖 Top 10 statuses:", lines, "None"))
