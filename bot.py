"""
Discord entry point: builds the service container, loads the command cogs and
keeps the slash-command tree in sync.
"""

import logging

from config import LOG_LEVEL

# Must run before discord is imported
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True,
)
logger = logging.getLogger("gate_bot")

import discord
from discord import app_commands
from discord.ext import commands, tasks

logging.getLogger("discord").handlers.clear()

from config import (
    BOT_OWNER_IDS,
    COMMAND_TIMEOUT_SECONDS,
    DB_PATH,
    DEV_GUILD_ID,
    DEVELOPMENT_MODE,
    DISCORD_BOT_TOKEN,
    HELPER_USER_IDS,
    IS_CANARY,
    RATE_LIMIT_SWEEP_INTERVAL_SECONDS,
)
from infrastructure.service_container import ServiceConfig, ServiceContainer
from services.interaction_dispatcher import COMMAND_NOT_FOUND_MESSAGE
from utils.debug_logging import debug_log
from utils.interaction_safety import safe_followup

# Slash commands need no privileged intents
bot = commands.Bot(command_prefix="!", intents=discord.Intents.default())

_container: ServiceContainer | None = None

EXTENSIONS = [
    "commands.info",
    "commands.admin",
]


def _init_services() -> ServiceContainer:
    """Build the ServiceContainer once and expose its services on the bot."""
    global _container
    if _container is None:
        _container = ServiceContainer(
            ServiceConfig(
                db_path=DB_PATH,
                owner_ids=BOT_OWNER_IDS,
                helper_ids=HELPER_USER_IDS,
                development_mode=DEVELOPMENT_MODE,
                command_timeout_seconds=COMMAND_TIMEOUT_SECONDS,
            )
        )
        _container.initialize()
        _container.expose_to_bot(bot)
        debug_log(
            "startup",
            "bot.py:_init_services",
            "service container ready",
            {"owners": len(BOT_OWNER_IDS), "helpers": len(HELPER_USER_IDS)},
        )
    return _container


async def _load_extensions() -> None:
    failed = []
    for ext in EXTENSIONS:
        if ext in bot.extensions:
            logger.debug(f"Extension {ext} already loaded")
            continue
        try:
            await bot.load_extension(ext)
            logger.info(f"Loaded extension: {ext}")
        except Exception as exc:
            failed.append(ext)
            logger.error(f"Failed to load extension {ext}: {exc}", exc_info=True)

    registered = {descriptor.name for descriptor in bot.command_registry.all()}
    unrouted = sorted({cmd.name for cmd in bot.tree.walk_commands()} - registered)
    if unrouted:
        logger.warning(f"Slash commands without a registered descriptor: {unrouted}")
    logger.info(f"Commands registered: {sorted(registered)} ({len(failed)} extension(s) failed)")


@tasks.loop(seconds=RATE_LIMIT_SWEEP_INTERVAL_SECONDS)
async def sweep_rate_limits():
    """Evict rate-limit buckets whose window has elapsed."""
    removed = bot.rate_limiter_registry.sweep()
    if removed:
        logger.debug(f"Swept {removed} expired rate-limit buckets")


@bot.event
async def setup_hook():
    _init_services()
    await _load_extensions()
    if RATE_LIMIT_SWEEP_INTERVAL_SECONDS > 0:
        sweep_rate_limits.start()


@bot.event
async def on_ready():
    logger.info(f"{bot.user} connected to {len(bot.guilds)} guild(s)")

    try:
        if IS_CANARY and DEV_GUILD_ID:
            # Canary builds only ever register to the dev guild
            guild = discord.Object(id=DEV_GUILD_ID)
            bot.tree.copy_global_to(guild=guild)
            synced = await bot.tree.sync(guild=guild)
            logger.info(f"Synced {len(synced)} commands to dev guild {DEV_GUILD_ID}")
        else:
            synced = await bot.tree.sync()
            logger.info(f"Synced {len(synced)} global commands")
    except discord.HTTPException as exc:
        logger.error(f"Failed to sync commands: {exc}", exc_info=True)


@bot.tree.error
async def on_app_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError):
    """Answer the user for errors raised outside the dispatcher (e.g. stale commands)."""
    if isinstance(error, app_commands.CommandNotFound):
        logger.warning(f"Unknown command '{error.name}' from {interaction.user.id}")
        message = COMMAND_NOT_FOUND_MESSAGE
    else:
        name = interaction.command.name if interaction.command else "unknown"
        logger.error(f"App command error in /{name}: {error}", exc_info=error)
        message = "An error occurred while processing your command."

    try:
        await safe_followup(interaction, content=f"❌ {message}", ephemeral=True)
    except discord.HTTPException as exc:
        logger.error(f"Failed to send error message to {interaction.user.id}: {exc}")


def main():
    if not DISCORD_BOT_TOKEN:
        logger.error("DISCORD_BOT_TOKEN is not set")
        return
    bot.run(DISCORD_BOT_TOKEN, log_handler=None)


if __name__ == "__main__":
    main()
