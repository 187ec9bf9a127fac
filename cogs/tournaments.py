from discord.ext import commands

from utils.constants import DEFAULT_GAME
from utils.helpers import parse_key_value_args, parse_tournament_fields
from utils.logger_config import logger
from utils.models import Tournament, TournamentRequirements
from utils.permissions import is_tournament_admin
from utils.tournament_filter import filter_tournaments, parse_filter_args
from utils.ui_components import TournamentDetailView, tournament_list_embed


def build_tournament(fields, organizer, created_by=None):
    """Turns parsed !createtournament fields into a new Tournament."""
    return Tournament(
        id="",
        name=fields["name"],
        description=fields["description"],
        game=DEFAULT_GAME,
        format=fields["format"],
        stages=fields["stages"],
        max_teams=fields["max_teams"],
        team_size=fields["team_size"],
        prize_pool=fields["prize_pool"],
        entry_fee=fields["entry_fee"],
        start_date=fields["start"],
        end_date=fields["end"],
        registration_deadline=fields["deadline"],
        status=fields["status"],
        organizer=organizer,
        rules=fields["rules"],
        requirements=TournamentRequirements(
            region=fields["region"],
            min_rank=fields["min_rank"],
            max_rank=fields["max_rank"],
        ),
        featured=fields["featured"],
        banner_image=fields["banner"],
        sponsors=fields["sponsors"],
        socials=fields["socials"],
        created_by=created_by,
    )


class Tournaments(commands.Cog):
    """Handles browsing and creating tournaments."""

    def __init__(self, bot):
        self.bot = bot

    @commands.cooldown(1, 3, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command(name="tournaments")
    async def list_tournaments(self, ctx, *, filters: str = ""):
        """Lists tournaments, featured ones first.

        Usage: !tournaments [search words] [status:<status>] [region:<region>]
        Status is one of upcoming, registration, ongoing, completed.
        Region is one of NA, EU, ASIA, OCE.
        Wrap words in double quotes to search for them exactly, e.g.
        !tournaments "status:open"
        """
        query, status, region = parse_filter_args(filters)
        tournaments = await self.bot.tournament_service.get_tournaments()
        result = filter_tournaments(tournaments, query, status, region)
        embed = tournament_list_embed(result, query, status, region)
        if self.bot.tournament_service.demo_mode:
            embed.description = (
                (embed.description + "\n\n") if embed.description else ""
            ) + "🧪 Demo mode: showing sample tournaments."
        await ctx.send(embed=embed)

    @commands.cooldown(1, 3, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command(name="tournament")
    async def show_tournament(self, ctx, tournament_id: str):
        """Shows the details of a single tournament.

        Usage: !tournament <id>
        Use the buttons to switch between the overview, teams and rules.
        """
        tournament = await self.bot.tournament_service.get_tournament(tournament_id)
        view = TournamentDetailView(tournament)
        view.message = await ctx.send(embed=view.create_overview_embed(), view=view)

    @commands.cooldown(1, 10, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command(name="createtournament")
    async def create_tournament(self, ctx, *, arguments: str):
        """Creates a new tournament.

        Usage: !createtournament name="Cup Night" start=2025-02-15T18:00
        end=2025-02-16T22:00 deadline=2025-02-14T23:59 [region=NA]
        [format=single-elimination] [stages=1] [max_teams=16] [team_size=5]
        [prize_pool="$500"] [entry_fee=10] [min_rank="Gold 1"]
        [max_rank="Diamond 3"] [rules="..."] [description="..."]
        [sponsors="A,B"] [social.twitter=<url>] [banner=<url>] [featured=true]
        Only tournament admins may create featured tournaments.
        """
        raw_fields = parse_key_value_args(arguments)
        fields = parse_tournament_fields(raw_fields)
        if fields["featured"] and not await is_tournament_admin(
            ctx.author,
            self.bot.profile_service,
        ):
            return await ctx.send(
                "Only tournament admins can create featured tournaments.",
            )
        organizer = raw_fields.get("organizer") or (
            ctx.author.display_name or "Anonymous"
        )
        tournament = build_tournament(fields, organizer, created_by=str(ctx.author.id))
        created = await self.bot.tournament_service.create_tournament(tournament)
        logger.info(f"{ctx.author.id} created tournament {created.id}")
        await ctx.send(
            f"🏆 **{created.name}** created! Players can join with "
            f"`!register {created.id} \"<team name>\" <tracker urls...>` once "
            "registration opens.",
        )

async def setup(bot):
    await bot.add_cog(Tournaments(bot))
