from discord.ext import commands

from utils.helpers import parse_bool, parse_key_value_args, parse_tournament_fields
from utils.logger_config import logger
from utils.permissions import tournament_admin

# !edittournament keys mapped to Tournament attributes
EDIT_FIELD_NAMES = {
    "name": "name",
    "description": "description",
    "rules": "rules",
    "start": "start_date",
    "end": "end_date",
    "deadline": "registration_deadline",
    "status": "status",
}


class Admin(commands.Cog):
    """Handles tournament administration."""

    def __init__(self, bot):
        self.bot = bot

    @tournament_admin()
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.cooldown(1, 5, commands.BucketType.user)
    @commands.command(name="edittournament")
    async def edit_tournament(self, ctx, tournament_id: str, *, arguments: str):
        """Edits a tournament's details.

        Usage: !edittournament <id> [name="..."] [description="..."]
        [rules="..."] [start=<iso date>] [end=<iso date>]
        [deadline=<iso date>] [status=<status>]
        """
        raw_fields = parse_key_value_args(arguments)
        unknown = set(raw_fields) - set(EDIT_FIELD_NAMES)
        if unknown:
            return await ctx.send(
                f"These fields cannot be edited: {', '.join(sorted(unknown))}",
            )
        fields = parse_tournament_fields(raw_fields, partial=True)
        changes = {EDIT_FIELD_NAMES[key]: value for key, value in fields.items()}
        if not changes:
            return await ctx.send("Nothing to change.")
        updated = await self.bot.tournament_service.update_tournament(
            tournament_id,
            changes,
        )
        logger.info(f"{ctx.author.id} edited tournament {tournament_id}: {sorted(changes)}")
        await ctx.send(f"✏️ **{updated.name}** updated.")

    @tournament_admin()
    @commands.bot_has_permissions(send_messages=True)
    @commands.cooldown(1, 5, commands.BucketType.user)
    @commands.command(name="deletetournament")
    async def delete_tournament(self, ctx, tournament_id: str):
        """Deletes a tournament and its registered teams.

        Usage: !deletetournament <id>
        """
        await self.bot.tournament_service.delete_tournament(tournament_id)
        logger.info(f"{ctx.author.id} deleted tournament {tournament_id}")
        await ctx.send(f"🗑️ Tournament `{tournament_id}` deleted.")

    @tournament_admin()
    @commands.bot_has_permissions(send_messages=True)
    @commands.cooldown(1, 5, commands.BucketType.user)
    @commands.command()
    async def feature(self, ctx, tournament_id: str, state: str = "on"):
        """Features or unfeatures a tournament.

        Usage: !feature <id> [on|off]
        Featured tournaments are listed first in !tournaments.
        """
        featured = parse_bool(state)
        if featured is None:
            return await ctx.send("State must be on or off.")
        updated = await self.bot.tournament_service.set_featured(
            tournament_id,
            featured,
        )
        verb = "is now featured" if featured else "is no longer featured"
        await ctx.send(f"⭐ **{updated.name}** {verb}.")

async def setup(bot):
    await bot.add_cog(Admin(bot))
