import contextlib

import discord
from discord.ext import commands

from utils.constants import STAGE_OPTIONS, STATUS_COLORS, STATUS_LABELS

MAX_LISTED_TOURNAMENTS = 10
FIELD_VALUE_LIMIT = 1024
# Room kept for the "...and N more" line.
MORE_LINE_RESERVE = 64
MAX_SUMMARY_LENGTH = 300
LISTING_SEPARATOR = "\n\n"


class TournamentHelp(commands.MinimalHelpCommand):
    def __init__(self):
        super().__init__(command_attrs={
            "checks": [commands.bot_has_permissions(
                send_messages=True,
                embed_links=True,
            ).predicate],
            "cooldown": commands.CooldownMapping.from_cooldown(
                1,
                3,
                commands.BucketType.user,
            ),
        })

    def add_bot_commands_formatting(self, commands, _heading):
        """This replaces the category heading with an 'Available Commands' label."""
        if commands:
            self.paginator.add_line("**Available Commands:**")
            for command in commands:
                self.add_subcommand_formatting(command)

    async def send_bot_help(self, mapping):
        self.paginator.add_line(
            "⚠️ **DISCLAIMER**: This bot is a community project and is not " \
            "affiliated with Riot Games or tracker.gg.",
        )
        self.paginator.add_line(
            "**NOTE**: Player ranks are simulated from the tracker.gg profile name " \
            "until a live rank API is connected.",
        )
        self.paginator.add_line()
        await super().send_bot_help(mapping)

    def get_ending_note(self):
        """Adds a blank space before the 'Type !help command for more info' message."""
        return f"\n{super().get_ending_note()}"

    def get_opening_note(self):
        """Only returns the 'help [command]' instruction, removing the category line."""
        command_name = f"{self.context.clean_prefix}{self.invoked_with}"
        return f"Use `{command_name} [command]` for more info on a command."


def format_date(value):
    if value is None:
        return "TBA"
    return value.strftime("%b %d, %Y %H:%M UTC")


def requirement_line(requirements):
    parts = []
    if requirements.region:
        parts.append(f"🌍 {requirements.region}")
    if requirements.min_rank:
        parts.append(f"⬆️ {requirements.min_rank}+")
    if requirements.max_rank:
        parts.append(f"⬇️ up to {requirements.max_rank}")
    return " | ".join(parts) or "Open to everyone"


def tournament_summary_line(tournament):
    prize = f" - 💰 {tournament.prize_pool}" if tournament.prize_pool else ""
    return (
        f"**{tournament.name}** (`{tournament.id}`)\n"
        f"{STATUS_LABELS.get(tournament.status, tournament.status)} - "
        f"{len(tournament.teams)}/{tournament.max_teams} teams - "
        f"{requirement_line(tournament.requirements)}{prize}"
    )


def _listing_field_value(tournaments):
    """Joins summary lines, stopping before Discord's field value limit."""
    lines = []
    length = 0
    for tournament in tournaments[:MAX_LISTED_TOURNAMENTS]:
        line = tournament_summary_line(tournament)
        if len(line) > MAX_SUMMARY_LENGTH:
            line = line[:MAX_SUMMARY_LENGTH - 3] + "..."
        added = len(line) + (len(LISTING_SEPARATOR) if lines else 0)
        if length + added > FIELD_VALUE_LIMIT - MORE_LINE_RESERVE:
            break
        lines.append(line)
        length += added
    hidden = len(tournaments) - len(lines)
    if hidden > 0:
        lines.append(f"...and {hidden} more. Narrow your search to see them.")
    return LISTING_SEPARATOR.join(lines)


def tournament_list_embed(result, query="", status="all", region="all"):
    """Renders a FilterResult with featured tournaments on top."""
    embed = discord.Embed(title="🏆 Valorant Tournaments", color=discord.Color.red())
    filters = []
    if query:
        filters.append(f'"{query[:100]}"')
    if status != "all":
        filters.append(f"status: {status}")
    if region != "all":
        filters.append(f"region: {region}")
    if filters:
        embed.set_footer(text="Filters: " + ", ".join(filters))
    if not result.featured and not result.regular:
        embed.description = (
            "No tournaments found.\nTry adjusting your filters or search query."
        )
        return embed
    if result.featured:
        embed.add_field(
            name="⭐ Featured",
            value=_listing_field_value(result.featured),
            inline=False,
        )
    if result.regular:
        embed.add_field(
            name="All Tournaments",
            value=_listing_field_value(result.regular),
            inline=False,
        )
    return embed


def rank_card_embed(player, title="✅ Player Verified"):
    embed = discord.Embed(
        title=title,
        description=f"**{player.username}**",
        color=discord.Color(player.rank.color_value),
    )
    embed.add_field(name="Rank", value=player.rank.display, inline=True)
    embed.add_field(name="RR", value=str(player.rr), inline=True)
    if player.tracker_url:
        embed.add_field(
            name="Tracker",
            value=f"[tracker.gg]({player.tracker_url})",
            inline=True,
        )
    return embed


def team_registered_embed(team, tournament):
    embed = discord.Embed(
        title=f"📝 {team.name} registered",
        description=f"Registered for **{tournament.name}**",
        color=discord.Color.green(),
    )
    lines = []
    for player in team.players:
        crown = " 👑" if player.id == team.captain else ""
        lines.append(
            f"{player.rank.icon} **{player.username}**{crown} - "
            f"{player.rank.tier_name} ({player.rr} RR)",
        )
    embed.add_field(name="Roster", value="\n".join(lines), inline=False)
    return embed


def profile_embed(profile, member=None):
    embed = discord.Embed(
        title=f"👤 {profile.username}",
        color=(
            discord.Color(profile.rank.color_value)
            if profile.rank else discord.Color.dark_grey()
        ),
    )
    if member is not None and member.display_avatar:
        embed.set_thumbnail(url=member.display_avatar.url)
    if profile.tracker_url:
        embed.add_field(
            name="Valorant",
            value=f"[{profile.valorant_username}]({profile.tracker_url})",
            inline=False,
        )
        if profile.rank:
            embed.add_field(name="Rank", value=profile.rank.display, inline=True)
            embed.add_field(name="RR", value=str(profile.rr), inline=True)
    else:
        embed.add_field(
            name="Valorant",
            value="Not linked. Use `!linktracker <tracker.gg url>`.",
            inline=False,
        )
    if profile.is_admin:
        embed.set_footer(text="Tournament admin")
    return embed


class TournamentDetailView(discord.ui.View):
    """A view that switches a tournament embed between overview, teams and rules."""
    def __init__(self, tournament, timeout=600):
        super().__init__(timeout=timeout)
        self.tournament = tournament
        self.message = None
        self.tabs = {
            "overview": self.create_overview_embed,
            "teams": self.create_teams_embed,
            "rules": self.create_rules_embed,
        }
        if tournament.banner_image:
            # Link buttons must be added at runtime since the url varies.
            self.add_item(
                discord.ui.Button(
                    label="Banner",
                    url=tournament.banner_image,
                    style=discord.ButtonStyle.link,
                ),
            )
        for platform, url in tournament.socials.items():
            self.add_item(
                discord.ui.Button(
                    label=platform.title(),
                    url=url,
                    style=discord.ButtonStyle.link,
                ),
            )

    def _base_embed(self):
        t = self.tournament
        embed = discord.Embed(
            title=("⭐ " if t.featured else "") + t.name,
            color=discord.Color(STATUS_COLORS.get(t.status, 0x6B7280)),
        )
        embed.set_footer(
            text=f"{STATUS_LABELS.get(t.status, t.status)} - id {t.id}",
        )
        return embed

    def create_overview_embed(self):
        t = self.tournament
        embed = self._base_embed()
        embed.description = t.description or None
        embed.add_field(name="Format", value=t.format.replace("-", " ").title())
        embed.add_field(name="Stages", value=STAGE_OPTIONS.get(t.stages, str(t.stages)))
        embed.add_field(name="Teams", value=f"{len(t.teams)}/{t.max_teams}")
        embed.add_field(name="Team Size", value=str(t.team_size))
        embed.add_field(name="Prize Pool", value=t.prize_pool or "None")
        embed.add_field(
            name="Entry Fee",
            value=f"${t.entry_fee:g}" if t.entry_fee else "Free",
        )
        embed.add_field(
            name="Schedule",
            value=(
                f"Registration closes {format_date(t.registration_deadline)}\n"
                f"Starts {format_date(t.start_date)}\n"
                f"Ends {format_date(t.end_date)}"
            ),
            inline=False,
        )
        embed.add_field(
            name="Requirements",
            value=requirement_line(t.requirements),
            inline=False,
        )
        embed.add_field(name="Organizer", value=t.organizer or "Anonymous")
        if t.sponsors:
            embed.add_field(name="Sponsors", value=", ".join(t.sponsors))
        if t.banner_image:
            embed.set_image(url=t.banner_image)
        return embed

    def create_teams_embed(self):
        embed = self._base_embed()
        if not self.tournament.teams:
            embed.description = (
                "No teams registered yet. Check back after "
                f"{format_date(self.tournament.registration_deadline)}"
            )
            return embed
        for team in self.tournament.teams[:25]:
            roster = []
            for player in team.players:
                crown = " 👑" if player.id == team.captain else ""
                roster.append(f"{player.rank.icon} {player.username}{crown}")
            embed.add_field(
                name=team.name,
                value="\n".join(roster) or "No players",
                inline=True,
            )
        return embed

    def create_rules_embed(self):
        embed = self._base_embed()
        embed.description = self.tournament.rules or "No rules posted."
        return embed

    async def show(self, interaction, tab):
        embed = self.tabs[tab]()
        await interaction.response.edit_message(embed=embed, view=self)

    @discord.ui.button(label="Overview", style=discord.ButtonStyle.primary)
    async def overview_button(self, interaction, button):
        await self.show(interaction, "overview")

    @discord.ui.button(label="Teams", style=discord.ButtonStyle.secondary)
    async def teams_button(self, interaction, button):
        await self.show(interaction, "teams")

    @discord.ui.button(label="Rules", style=discord.ButtonStyle.secondary)
    async def rules_button(self, interaction, button):
        await self.show(interaction, "rules")

    async def on_timeout(self):
        for item in self.children:
            if (
                isinstance(
                    item,
                    discord.ui.Button,
                ) and item.style != discord.ButtonStyle.link
            ):
                item.disabled = True
        if self.message:
            with contextlib.suppress(
                discord.HTTPException,
                discord.NotFound,
                discord.Forbidden,
                ):
                await self.message.edit(view=self)
        self.stop()
