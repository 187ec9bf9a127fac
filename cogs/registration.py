from discord.ext import commands

from utils.logger_config import logger
from utils.ui_components import rank_card_embed, team_registered_embed


class Registration(commands.Cog):
    """Handles player verification and team registration."""

    def __init__(self, bot):
        self.bot = bot

    @commands.cooldown(1, 5, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command()
    async def verify(self, ctx, tracker_url: str):
        """Verifies a player's rank from their tracker.gg profile.

        Usage: !verify <tracker.gg url>
        Example: !verify https://tracker.gg/valorant/profile/riot/username%23tag
        """
        async with ctx.typing():
            player = await self.bot.rank_lookup.lookup(tracker_url)
        await ctx.send(embed=rank_card_embed(player))

    @commands.cooldown(1, 10, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command()
    async def register(self, ctx, tournament_id: str, team_name: str, *tracker_urls: str):
        """Registers a team for a tournament.

        Usage: !register <tournament id> "<team name>" <tracker url> ...
        Give one tracker.gg URL per player. The first player is the captain
        and you are recorded as their contact.
        """
        if not tracker_urls:
            return await ctx.send(
                "Invalid input, please ensure syntax is: "
                "!register <tournament id> \"<team name>\" <tracker url> ...",
            )
        players = []
        async with ctx.typing():
            for tracker_url in tracker_urls:
                players.append(await self.bot.rank_lookup.lookup(tracker_url))
        players[0].contact = str(ctx.author)
        team = await self.bot.tournament_service.register_team(
            tournament_id,
            team_name,
            players,
        )
        tournament = await self.bot.tournament_service.get_tournament(tournament_id)
        logger.info(f"{ctx.author.id} registered {team.name} in {tournament_id}")
        await ctx.send(embed=team_registered_embed(team, tournament))

async def setup(bot):
    await bot.add_cog(Registration(bot))
