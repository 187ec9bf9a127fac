import discord
from discord.ext import commands

from utils.ui_components import profile_embed, rank_card_embed


class Profile(commands.Cog):
    """Handles account profiles."""

    def __init__(self, bot):
        self.bot = bot

    @commands.cooldown(1, 5, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command()
    async def profile(self, ctx, member: discord.Member = None):
        """Shows your profile, or another member's.

        Usage: !profile [@member]
        """
        member = member or ctx.author
        if member == ctx.author:
            profile = await self.bot.profile_service.ensure_profile(
                member.id,
                member.display_name,
            )
        else:
            profile = await self.bot.profile_service.get_profile(member.id)
            if profile is None:
                return await ctx.send(f"{member.display_name} has no profile yet.")
        await ctx.send(embed=profile_embed(profile, member))

    @commands.cooldown(1, 10, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command()
    async def linktracker(self, ctx, tracker_url: str):
        """Links your tracker.gg profile and stores your verified rank.

        Usage: !linktracker <tracker.gg url>
        """
        await self.bot.profile_service.ensure_profile(
            ctx.author.id,
            ctx.author.display_name,
        )
        async with ctx.typing():
            player = await self.bot.rank_lookup.lookup(tracker_url)
        await self.bot.profile_service.link_tracker(ctx.author.id, player)
        await ctx.send(embed=rank_card_embed(player, title="🔗 Tracker Linked"))

    @commands.cooldown(1, 10, commands.BucketType.user)
    @commands.command()
    async def unlinktracker(self, ctx):
        """Removes the tracker.gg profile and rank from your profile.

        Usage: !unlinktracker
        """
        profile = await self.bot.profile_service.get_profile(ctx.author.id)
        if profile is None or not profile.tracker_url:
            return await ctx.send("No tracker profile is linked.")
        await self.bot.profile_service.unlink_tracker(ctx.author.id)
        await ctx.send("Tracker profile unlinked.")

    @commands.cooldown(1, 10, commands.BucketType.user)
    @commands.command()
    async def setusername(self, ctx, *, username: str):
        """Changes the name shown on your profile.

        Usage: !setusername <name>
        """
        username = " ".join(username.split())
        if not username or len(username) > 32:
            return await ctx.send("Usernames must be between 1 and 32 characters.")
        await self.bot.profile_service.ensure_profile(ctx.author.id, username)
        await self.bot.profile_service.update_profile(
            ctx.author.id,
            {"username": username},
        )
        await ctx.send(f"Your profile name is now **{username}**.")

async def setup(bot):
    await bot.add_cog(Profile(bot))
