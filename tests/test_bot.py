from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
from discord.ext import commands

from cogs.admin import Admin
from cogs.management import Management
from cogs.profile import Profile
from cogs.registration import Registration
from cogs.tournaments import Tournaments
from utils.db_service import ProfileService, TournamentService
from utils.exceptions import (
    InvalidTournamentDataError,
    InvalidTrackerURLError,
    RegistrationError,
    TournamentNotFoundError,
)
from utils.permissions import NotTournamentAdmin, is_tournament_admin
from utils.rank_assignment import SimulatedRankLookup, simulate_player
from utils.ui_components import TournamentDetailView, rank_card_embed

TRACKER = "https://tracker.gg/valorant/profile/riot/{}%23NA1"


@pytest.fixture
def mock_bot():
    bot = MagicMock()
    bot.tournament_service = TournamentService(None)
    bot.profile_service = ProfileService(None)
    bot.rank_lookup = SimulatedRankLookup()
    return bot


@pytest.fixture
def mock_ctx(mock_bot):
    ctx = MagicMock(spec=commands.Context)
    ctx.send = AsyncMock()
    ctx.typing = MagicMock()
    ctx.author.display_name = "Captain"
    ctx.author.id = 1
    ctx.author.roles = []
    ctx.author.guild_permissions.manage_guild = False
    ctx.guild.id = 123456789
    ctx.bot = mock_bot
    return ctx


def sent_embed(ctx):
    _args, kwargs = ctx.send.call_args
    return kwargs["embed"]


@pytest.mark.asyncio
async def test_verify_sends_rank_card(mock_bot, mock_ctx):
    cog = Registration(mock_bot)
    await cog.verify.callback(cog, mock_ctx, "https://tracker.gg/valorant/profile/riot/Name%23123")
    embed = sent_embed(mock_ctx)
    assert embed.description == "**Name#123**"
    assert embed.fields[0].value == "⚪ Silver 1"
    assert embed.fields[1].value == "50"


@pytest.mark.asyncio
async def test_verify_rejects_bad_url(mock_bot, mock_ctx):
    cog = Registration(mock_bot)
    with pytest.raises(InvalidTrackerURLError):
        await cog.verify.callback(cog, mock_ctx, "https://tracker.gg/lol/profile/riot/Name")


@pytest.mark.asyncio
async def test_register_team_success(mock_bot, mock_ctx):
    cog = Registration(mock_bot)
    urls = [TRACKER.format(name) for name in ("Jett", "Sova", "Sage", "Omen", "Raze")]
    await cog.register.callback(cog, mock_ctx, "mock-4", "Duelists Only", *urls)
    tournament = await mock_bot.tournament_service.get_tournament("mock-4")
    team = tournament.teams[-1]
    assert team.name == "Duelists Only"
    assert team.captain_player.username == "Jett#NA1"
    assert team.captain_player.contact == str(mock_ctx.author)
    embed = sent_embed(mock_ctx)
    assert "Duelists Only" in embed.title
    assert "👑" in embed.fields[0].value


@pytest.mark.asyncio
async def test_register_requires_urls(mock_bot, mock_ctx):
    cog = Registration(mock_bot)
    await cog.register.callback(cog, mock_ctx, "mock-4", "Lonely Team")
    args, _kwargs = mock_ctx.send.call_args
    assert "Invalid input" in args[0]


@pytest.mark.asyncio
async def test_register_closed_tournament(mock_bot, mock_ctx):
    cog = Registration(mock_bot)
    urls = [TRACKER.format(name) for name in ("A", "B", "C", "D", "E")]
    with pytest.raises(RegistrationError):
        # mock-3 is upcoming, registration has not opened
        await cog.register.callback(cog, mock_ctx, "mock-3", "Too Early", *urls)


@pytest.mark.asyncio
async def test_list_tournaments_featured_first(mock_bot, mock_ctx):
    cog = Tournaments(mock_bot)
    await cog.list_tournaments.callback(cog, mock_ctx, filters="status:registration region:NA")
    embed = sent_embed(mock_ctx)
    assert embed.fields[0].name == "⭐ Featured"
    assert "Weekend Warriors" in embed.fields[1].value
    assert "Rising Stars" not in embed.fields[1].value


@pytest.mark.asyncio
async def test_list_tournaments_no_matches(mock_bot, mock_ctx):
    cog = Tournaments(mock_bot)
    await cog.list_tournaments.callback(cog, mock_ctx, filters="region:ASIA")
    embed = sent_embed(mock_ctx)
    assert "No tournaments found" in embed.description
    assert embed.fields == []


@pytest.mark.asyncio
async def test_create_featured_requires_admin(mock_bot, mock_ctx):
    cog = Tournaments(mock_bot)
    await cog.create_tournament.callback(
        cog,
        mock_ctx,
        arguments='name="Big Cup" start=2025-03-07T19:00 end=2025-03-08T19:00 '
        "deadline=2025-03-06T19:00 featured=true",
    )
    args, _kwargs = mock_ctx.send.call_args
    assert "Only tournament admins" in args[0]
    assert all(t.name != "Big Cup" for t in mock_bot.tournament_service.demo_tournaments)


@pytest.mark.asyncio
async def test_create_tournament(mock_bot, mock_ctx):
    cog = Tournaments(mock_bot)
    await cog.create_tournament.callback(
        cog,
        mock_ctx,
        arguments='name="Big Cup" start=2025-03-07T19:00 end=2025-03-08T19:00 '
        "deadline=2025-03-06T19:00 region=oce",
    )
    created = mock_bot.tournament_service.demo_tournaments[0]
    assert created.name == "Big Cup"
    assert created.organizer == "Captain"
    assert created.requirements.region == "OCE"
    assert created.featured is False


@pytest.mark.asyncio
async def test_is_tournament_admin(mock_ctx):
    member = mock_ctx.author
    assert not await is_tournament_admin(member, admin_role_ids={42})
    member.roles = [MagicMock(id=42)]
    assert await is_tournament_admin(member, admin_role_ids={42})
    member.roles = []
    member.guild_permissions.manage_guild = True
    assert await is_tournament_admin(member, admin_role_ids=set())


@pytest.mark.asyncio
async def test_is_tournament_admin_from_profile(mock_ctx):
    profiles = ProfileService(None)
    await profiles.ensure_profile(1, "Captain")
    await profiles.update_profile(1, {"is_admin": True})
    assert await is_tournament_admin(mock_ctx.author, profiles, admin_role_ids=set())


@pytest.mark.asyncio
async def test_error_handler_reports_bot_errors(mock_bot, mock_ctx):
    cog = Management(mock_bot)
    error = commands.CommandInvokeError(RegistrationError("Team must have exactly 5 players."))
    await cog.on_command_error(mock_ctx, error)
    args, _kwargs = mock_ctx.send.call_args
    assert "Team must have exactly 5 players." in args[0]


@pytest.mark.asyncio
async def test_error_handler_admin_check(mock_bot, mock_ctx):
    cog = Management(mock_bot)
    await cog.on_command_error(mock_ctx, NotTournamentAdmin("You need tournament admin rights."))
    args, _kwargs = mock_ctx.send.call_args
    assert args[0] == "You need tournament admin rights."


@pytest.mark.asyncio
async def test_error_handler_unexpected(mock_bot, mock_ctx):
    cog = Management(mock_bot)
    await cog.on_command_error(mock_ctx, commands.CommandInvokeError(KeyError("boom")))
    mock_ctx.send.assert_called_with("An unexpected error occurred.")


def test_rank_card_color_matches_rank():
    player = simulate_player("Name#123", TRACKER.format("Name"))
    assert rank_card_embed(player).color == discord.Color(0xC0C0C0)


def sent_text(ctx):
    args, _kwargs = ctx.send.call_args
    return args[0]


# Tournament details


@pytest.mark.asyncio
async def test_show_tournament_sends_detail_view(mock_bot, mock_ctx):
    cog = Tournaments(mock_bot)
    await cog.show_tournament.callback(cog, mock_ctx, "mock-1")
    _args, kwargs = mock_ctx.send.call_args
    assert kwargs["embed"].title == "⭐ Demo Tournament"
    view = kwargs["view"]
    assert isinstance(view, TournamentDetailView)
    assert view.message is mock_ctx.send.return_value


@pytest.mark.asyncio
async def test_show_tournament_unknown_id(mock_bot, mock_ctx):
    cog = Tournaments(mock_bot)
    with pytest.raises(TournamentNotFoundError):
        await cog.show_tournament.callback(cog, mock_ctx, "nope")


# Admin commands


@pytest.mark.asyncio
async def test_edit_tournament_with_timezone_offsets(mock_bot, mock_ctx):
    cog = Admin(mock_bot)
    await cog.edit_tournament.callback(
        cog,
        mock_ctx,
        "mock-1",
        arguments="start=2030-01-01T18:00+02:00 end=2030-01-02T18:00+00:00",
    )
    assert sent_text(mock_ctx) == "✏️ **Demo Tournament** updated."
    tournament = await mock_bot.tournament_service.get_tournament("mock-1")
    assert tournament.start_date == datetime(2030, 1, 1, 16)
    assert tournament.end_date == datetime(2030, 1, 2, 18)


@pytest.mark.asyncio
async def test_edit_tournament_rejects_locked_fields(mock_bot, mock_ctx):
    cog = Admin(mock_bot)
    await cog.edit_tournament.callback(cog, mock_ctx, "mock-1", arguments="max_teams=4")
    assert sent_text(mock_ctx) == "These fields cannot be edited: max_teams"
    tournament = await mock_bot.tournament_service.get_tournament("mock-1")
    assert tournament.max_teams == 16


@pytest.mark.asyncio
async def test_edit_tournament_bad_date(mock_bot, mock_ctx):
    cog = Admin(mock_bot)
    with pytest.raises(InvalidTournamentDataError):
        await cog.edit_tournament.callback(cog, mock_ctx, "mock-1", arguments="start=soon")


@pytest.mark.asyncio
async def test_delete_tournament(mock_bot, mock_ctx):
    cog = Admin(mock_bot)
    await cog.delete_tournament.callback(cog, mock_ctx, "mock-3")
    assert sent_text(mock_ctx) == "🗑️ Tournament `mock-3` deleted."
    with pytest.raises(TournamentNotFoundError):
        await mock_bot.tournament_service.get_tournament("mock-3")


@pytest.mark.asyncio
async def test_feature_toggle(mock_bot, mock_ctx):
    cog = Admin(mock_bot)
    await cog.feature.callback(cog, mock_ctx, "mock-1", "off")
    assert sent_text(mock_ctx) == "⭐ **Demo Tournament** is no longer featured."
    assert not (await mock_bot.tournament_service.get_tournament("mock-1")).featured
    await cog.feature.callback(cog, mock_ctx, "mock-4")
    assert (await mock_bot.tournament_service.get_tournament("mock-4")).featured


@pytest.mark.asyncio
async def test_feature_bad_state(mock_bot, mock_ctx):
    cog = Admin(mock_bot)
    await cog.feature.callback(cog, mock_ctx, "mock-1", "maybe")
    assert sent_text(mock_ctx) == "State must be on or off."


@pytest.mark.asyncio
async def test_admin_commands_require_admin(mock_bot, mock_ctx):
    cog = Admin(mock_bot)
    for command in (cog.edit_tournament, cog.delete_tournament, cog.feature):
        with pytest.raises(NotTournamentAdmin):
            await command.checks[-1](mock_ctx)
    mock_ctx.author.guild_permissions.manage_guild = True
    assert await cog.feature.checks[-1](mock_ctx)


# Profile commands


@pytest.mark.asyncio
async def test_profile_creates_blank_profile(mock_bot, mock_ctx):
    cog = Profile(mock_bot)
    await cog.profile.callback(cog, mock_ctx)
    embed = sent_embed(mock_ctx)
    assert embed.title == "👤 Captain"
    assert "Not linked" in embed.fields[0].value
    assert await mock_bot.profile_service.get_profile(1) is not None


@pytest.mark.asyncio
async def test_profile_of_unknown_member(mock_bot, mock_ctx):
    cog = Profile(mock_bot)
    other = MagicMock()
    other.id = 2
    other.display_name = "Sage"
    await cog.profile.callback(cog, mock_ctx, other)
    assert sent_text(mock_ctx) == "Sage has no profile yet."


@pytest.mark.asyncio
async def test_link_and_unlink_tracker(mock_bot, mock_ctx):
    cog = Profile(mock_bot)
    await cog.linktracker.callback(cog, mock_ctx, TRACKER.format("Name").replace("NA1", "123"))
    embed = sent_embed(mock_ctx)
    assert embed.title == "🔗 Tracker Linked"
    profile = await mock_bot.profile_service.get_profile(1)
    assert profile.valorant_username == "Name#123"
    assert profile.rank.tier_name == "Silver 1"
    assert profile.rr == 50

    await cog.profile.callback(cog, mock_ctx)
    fields = {field.name: field.value for field in sent_embed(mock_ctx).fields}
    assert fields["Rank"] == "⚪ Silver 1"

    await cog.unlinktracker.callback(cog, mock_ctx)
    assert sent_text(mock_ctx) == "Tracker profile unlinked."
    profile = await mock_bot.profile_service.get_profile(1)
    assert profile.tracker_url is None
    assert profile.rank is None


@pytest.mark.asyncio
async def test_unlink_without_tracker(mock_bot, mock_ctx):
    cog = Profile(mock_bot)
    await cog.unlinktracker.callback(cog, mock_ctx)
    assert sent_text(mock_ctx) == "No tracker profile is linked."


@pytest.mark.asyncio
async def test_link_tracker_bad_url(mock_bot, mock_ctx):
    cog = Profile(mock_bot)
    with pytest.raises(InvalidTrackerURLError):
        await cog.linktracker.callback(cog, mock_ctx, "https://example.com/Name")


@pytest.mark.asyncio
async def test_setusername(mock_bot, mock_ctx):
    cog = Profile(mock_bot)
    await cog.setusername.callback(cog, mock_ctx, username="  Night   Owl ")
    assert sent_text(mock_ctx) == "Your profile name is now **Night Owl**."
    assert (await mock_bot.profile_service.get_profile(1)).username == "Night Owl"
    await cog.setusername.callback(cog, mock_ctx, username="x" * 33)
    assert "between 1 and 32" in sent_text(mock_ctx)
