from discord.ext import commands

from utils.config import ADMIN_ROLE_IDS


class NotTournamentAdmin(commands.CheckFailure):
    """Raised when a non admin uses an admin only command."""


async def is_tournament_admin(member, profile_service=None, admin_role_ids=ADMIN_ROLE_IDS):
    """Decides whether a guild member may manage tournaments.

    Admins either have Manage Server, hold one of the configured admin roles,
    or carry the is_admin flag on their stored profile.
    """
    permissions = getattr(member, "guild_permissions", None)
    if permissions is not None and permissions.manage_guild:
        return True
    role_ids = {role.id for role in getattr(member, "roles", [])}
    if role_ids & set(admin_role_ids):
        return True
    if profile_service is not None:
        profile = await profile_service.get_profile(member.id)
        if profile is not None and profile.is_admin:
            return True
    return False


def tournament_admin():
    """Command check wrapper around is_tournament_admin."""
    async def predicate(ctx):
        profile_service = getattr(ctx.bot, "profile_service", None)
        if await is_tournament_admin(ctx.author, profile_service):
            return True
        raise NotTournamentAdmin("You need tournament admin rights for this command.")
    return commands.check(predicate)
