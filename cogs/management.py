import contextlib

import discord
from discord.ext import commands

from utils.exceptions import DatabaseError, TournamentBotError
from utils.logger_config import logger
from utils.permissions import NotTournamentAdmin


class Management(commands.Cog):
    """Handles bot command errors, cooldowns, and permissions."""

    def __init__(self, bot):
        self.bot = bot

    @commands.Cog.listener()
    async def on_command_error(
          self,
          ctx: commands.Context,
          error: commands.CommandError,
    ):
        # Unwrap discord command error wrapper so we can access the original error.
        unwrapped_error = getattr(error, "original", error)
        if isinstance(unwrapped_error, commands.CommandNotFound):
            return await ctx.send(
                "Sorry, I don't know that command",
                delete_after=10,
            )
        if isinstance(unwrapped_error, commands.MissingRequiredArgument):
            return await ctx.send(
                f"Missing arguments. Usage: !{ctx.command} {ctx.command.signature}",
                delete_after=10,
            )
        if isinstance(unwrapped_error, commands.BadArgument):
            return await ctx.send(f"Invalid argument: {unwrapped_error}", delete_after=10)
        if isinstance(unwrapped_error, commands.CommandOnCooldown):
            embed = discord.Embed(
                title = "Slow Down!",
                description = (
                    f"You're using '{ctx.command}' too fast. "
                    f"Try again in {round(unwrapped_error.retry_after, 2)}s."
                ),
                color=discord.Color.orange(),
            )
            return await ctx.send(
                embed=embed,
                delete_after=10,
            )
        if isinstance(unwrapped_error, commands.BotMissingPermissions):
            perms = unwrapped_error.missing_permissions
            logger.warning(f"Bot missing perms in {ctx.guild.id}: {perms}")
            with contextlib.suppress(discord.Forbidden):
                return await ctx.author.send(
                    f"I'm missing permissions (**{perms}**) in **{ctx.guild.name}**!",
                )
            return None
        if isinstance(unwrapped_error, NotTournamentAdmin):
            return await ctx.send(str(unwrapped_error), delete_after=10)
        if isinstance(unwrapped_error, DatabaseError):
            logger.error(f"❌ ERROR: {unwrapped_error}", exc_info=unwrapped_error)
            return await ctx.send(unwrapped_error.message)
        if isinstance(unwrapped_error, TournamentBotError):
            return await ctx.send(unwrapped_error.message)
        if isinstance(unwrapped_error, commands.CheckFailure):
            return await ctx.send(
                "You don't have permission to use this command.",
                delete_after=10,
            )
        logger.error(
            f"❌ ERROR: {unwrapped_error}",
            exc_info=unwrapped_error,
        )
        return await ctx.send("An unexpected error occurred.")

async def setup(bot):
    await bot.add_cog(Management(bot))
