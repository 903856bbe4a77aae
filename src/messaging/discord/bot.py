"""discord.py adapter for the task bot.

Registers the slash commands and hands each interaction to the
CommandDispatcher on a worker thread, so Notion and Bedrock calls never
block the gateway.
"""

import asyncio
import logging

import discord
from discord import app_commands
from discord.ext import commands
from dotenv import load_dotenv

from src.guild_config import create_config_store
from src.llm.advice import TaskAdvisor
from src.messaging.discord.dispatcher import (
    SETUP_COMMANDS,
    CommandDispatcher,
    CommandInvocation,
    CommandReply,
)
from src.messaging.discord.utils.config import DiscordConfig, get_discord_settings
from src.observability.sentry import init_sentry
from src.paths import ENV_FILE
from src.utils.logging import configure_logging

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "⚠️ Something went wrong. Please try again later."


async def _send_error(
    interaction: discord.Interaction, content: str, *, deferred_publicly: bool
) -> None:
    """Send an error only the invoking user can see.

    A public defer leaves a public thinking message, and the first followup
    would inherit its visibility, so it is deleted first.
    """
    if not interaction.response.is_done():
        await interaction.response.send_message(content, ephemeral=True)
        return

    if deferred_publicly:
        try:
            await interaction.delete_original_response()
        except discord.HTTPException:
            logger.warning("Could not delete the thinking message before the error reply")
    await interaction.followup.send(content, ephemeral=True)


async def _send_deferred(interaction: discord.Interaction, reply: CommandReply) -> None:
    """Send a reply after defer(), replacing the public thinking message if needed."""
    if reply.ephemeral:
        # The thinking message is public, so drop it before the private reply
        await interaction.delete_original_response()
        await interaction.followup.send(reply.content, ephemeral=True)
    else:
        await interaction.followup.send(reply.content)


async def handle_interaction(
    interaction: discord.Interaction,
    dispatcher: CommandDispatcher,
    invocation: CommandInvocation,
) -> None:
    """Run one slash command and respond to the interaction.

    Setup commands are deferred privately. Task commands check the guild's
    configuration first and answer straight away when it is incomplete;
    otherwise they defer publicly and reply once the dispatcher finishes.

    :param interaction: The Discord interaction to respond to.
    :param dispatcher: Dispatcher that runs the command.
    :param invocation: The command and its options.
    """
    logger.info(
        f"Slash command received: command={invocation.name} "
        f"guild_id={invocation.guild_id} user_id={invocation.user_id}"
    )
    deferred_publicly = False
    try:
        if invocation.name in SETUP_COMMANDS:
            await interaction.response.defer(ephemeral=True, thinking=True)
            reply = await asyncio.to_thread(dispatcher.run_setup, invocation)
            await interaction.followup.send(reply.content, ephemeral=True)
            return

        resolved = await asyncio.to_thread(dispatcher.require_config, invocation)
        if isinstance(resolved, CommandReply):
            await interaction.response.send_message(resolved.content, ephemeral=True)
            return

        await interaction.response.defer(thinking=True)
        deferred_publicly = True
        reply = await asyncio.to_thread(dispatcher.run, invocation, resolved)
        await _send_deferred(interaction, reply)
    except Exception:
        logger.exception(f"[command-{invocation.name}] unhandled error: guild_id={invocation.guild_id}")
        await _send_error(interaction, UNEXPECTED_ERROR_MESSAGE, deferred_publicly=deferred_publicly)


def _invocation(
    interaction: discord.Interaction, name: str, **options: str | None
) -> CommandInvocation:
    return CommandInvocation(
        name=name,
        guild_id=str(interaction.guild_id) if interaction.guild_id is not None else None,
        options=options,
        user_id=str(interaction.user.id),
    )


def register_commands(tree: app_commands.CommandTree, dispatcher: CommandDispatcher) -> None:
    """Add every slash command to a command tree.

    :param tree: The bot's command tree.
    :param dispatcher: Dispatcher the commands delegate to.
    """

    async def run(interaction: discord.Interaction, name: str, **options: str | None) -> None:
        await handle_interaction(interaction, dispatcher, _invocation(interaction, name, **options))

    @tree.command(name="setup", description="Connect a Notion database to this server")
    @app_commands.describe(
        notion_token="Notion integration token",
        notion_database_id="ID of the Notion task database",
    )
    async def setup(
        interaction: discord.Interaction, notion_token: str, notion_database_id: str
    ) -> None:
        await run(
            interaction, "setup", notion_token=notion_token, notion_database_id=notion_database_id
        )

    @tree.command(name="config", description="Show this server's Notion settings")
    async def config(interaction: discord.Interaction) -> None:
        await run(interaction, "config")

    @tree.command(name="reset", description="Remove this server's Notion settings")
    async def reset(interaction: discord.Interaction) -> None:
        await run(interaction, "reset")

    @tree.command(name="addtask", description="Add a task to Notion")
    @app_commands.describe(content="Task title")
    async def addtask(interaction: discord.Interaction, content: str) -> None:
        await run(interaction, "addtask", content=content)

    @tree.command(name="mytasks", description="List open tasks for an assignee")
    @app_commands.describe(assignee="Assignee name as written in Notion")
    async def mytasks(interaction: discord.Interaction, assignee: str) -> None:
        await run(interaction, "mytasks", assignee=assignee)

    @tree.command(name="duetasks", description="List tasks due in the next 3 days")
    @app_commands.describe(assignee="Only show tasks for this assignee")
    async def duetasks(interaction: discord.Interaction, assignee: str | None = None) -> None:
        await run(interaction, "duetasks", assignee=assignee)

    @tree.command(name="advise", description="Get advice on an assignee's open tasks")
    @app_commands.describe(assignee="Assignee name as written in Notion")
    async def advise(interaction: discord.Interaction, assignee: str) -> None:
        await run(interaction, "advise", assignee=assignee)

    @tree.command(name="weekprogress", description="List tasks created this week")
    async def weekprogress(interaction: discord.Interaction) -> None:
        await run(interaction, "weekprogress")

    @tree.command(name="weekadvise", description="Get advice on tasks due this week")
    async def weekadvise(interaction: discord.Interaction) -> None:
        await run(interaction, "weekadvise")

    @tree.command(name="listassignees", description="List assignees from recent tasks")
    async def listassignees(interaction: discord.Interaction) -> None:
        await run(interaction, "listassignees")

    @tree.command(name="liststatus", description="List statuses from recent tasks")
    async def liststatus(interaction: discord.Interaction) -> None:
        await run(interaction, "liststatus")


class TaskBot(commands.Bot):
    """Discord bot exposing the Notion task slash commands."""

    def __init__(self, dispatcher: CommandDispatcher, settings: DiscordConfig) -> None:
        """Initialise the bot and register its commands.

        :param dispatcher: Dispatcher that runs each command.
        :param settings: Discord settings.
        """
        super().__init__(command_prefix=commands.when_mentioned, intents=discord.Intents.default())
        self.settings = settings
        self._synced = False
        register_commands(self.tree, dispatcher)

    async def on_ready(self) -> None:
        """Log the connection and sync commands once if enabled."""
        logger.info(f"Discord bot connected: user={self.user} guilds={len(self.guilds)}")
        if self.settings.sync_commands and not self._synced:
            await self.sync_commands()
            self._synced = True

    async def sync_commands(self) -> None:
        """Push the command tree to Discord, scoped to one guild when configured."""
        guild_id = self.settings.command_guild_id
        if guild_id is not None:
            guild = discord.Object(id=guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info(f"Synced {len(synced)} commands to guild {guild_id}")
        else:
            synced = await self.tree.sync()
            logger.info(f"Synced {len(synced)} commands globally")


def create_bot(
    settings: DiscordConfig | None = None,
    dispatcher: CommandDispatcher | None = None,
) -> TaskBot:
    """Build the bot with its dispatcher.

    :param settings: Discord settings. Loaded from env if not provided.
    :param dispatcher: Command dispatcher. Built from env if not provided.
    :returns: A bot ready to run.
    """
    settings = settings or get_discord_settings()
    dispatcher = dispatcher or CommandDispatcher(
        config_store=create_config_store(),
        advisor=TaskAdvisor(model=settings.advice_model),
    )
    return TaskBot(dispatcher, settings)


def main() -> None:
    """Entry point for running the Discord bot."""
    load_dotenv(ENV_FILE)
    configure_logging()
    init_sentry("discord-bot")
    bot = create_bot()
    # Logging is already configured, so stop discord.py installing its own handler
    bot.run(bot.settings.bot_token, log_handler=None)


if __name__ == "__main__":
    main()
