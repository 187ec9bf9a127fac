import discord
from discord.ext import commands

from database import database_startup
from utils.config import BOT_PREFIX, DISCORD_TOKEN, VERIFY_DELAY_SECONDS
from utils.db_service import ProfileService, TournamentService
from utils.logger_config import logger
from utils.rank_assignment import SimulatedRankLookup
from utils.sentry_config import setup_sentry
from utils.ui_components import TournamentHelp

COGS = (
    "cogs.management",
    "cogs.tournaments",
    "cogs.registration",
    "cogs.profile",
    "cogs.admin",
)


class TournamentBot(commands.Bot):
    def __init__(self, db=None, rank_lookup=None):
        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = True
        intents.guilds = True
        activity = discord.Activity(
            type=discord.ActivityType.watching,
            name="Valorant Tournaments - !help",
        )
        super().__init__(
            command_prefix=BOT_PREFIX,
            intents=intents,
            activity=activity,
            help_command=TournamentHelp(),
        )
        self.db = db
        self.tournament_service = TournamentService(db)
        self.profile_service = ProfileService(db)
        self.rank_lookup = rank_lookup or SimulatedRankLookup(VERIFY_DELAY_SECONDS)

    async def setup_hook(self):
        # runs when the bot starts up.
        for cog in COGS:
            await self.load_extension(cog)
        logger.info(f"✅ Loaded {len(COGS)} cogs.")
        if self.tournament_service.demo_mode:
            logger.warning("⚠️ No database connection, tournaments are sample data.")

    async def on_ready(self):
        logger.info(f"✅ Logged in as {self.user} in {len(self.guilds)} guilds.")


def bot_startup():
    setup_sentry()
    if not DISCORD_TOKEN:
        logger.error("❌ ERROR: DISCORD_TOKEN is not set.")
        return
    bot = TournamentBot(db=database_startup())
    try:
        bot.run(DISCORD_TOKEN, log_handler=None)
    except discord.errors.LoginFailure:
        logger.exception(
            "❌ ERROR: Invalid Token detected. Please check your DISCORD_TOKEN.",
        )
    except Exception as e:
        logger.exception(f"❌ ERROR: occurred while running the bot: {e}")


if __name__ == "__main__":
    bot_startup()
