"""
Helpers that keep slash command handlers alive when Discord interactions expire.
"""

import logging

import discord

logger = logging.getLogger("crease_bot.utils.interaction_safety")


async def safe_defer(interaction, ephemeral: bool = False) -> bool:
    """
    Defer an interaction response.

    Returns False if the interaction can no longer be answered (expired or
    already acknowledged elsewhere), so the caller should stop.
    """
    try:
        if interaction.response.is_done():
            return True
        await interaction.response.defer(ephemeral=ephemeral)
        return True
    except discord.NotFound:
        logger.warning(f"Interaction {getattr(interaction, 'id', '?')} expired before defer")
        return False
    except discord.HTTPException as exc:
        logger.warning(f"Failed to defer interaction {getattr(interaction, 'id', '?')}: {exc}")
        return False


async def safe_followup(interaction, **kwargs):
    """
    Send a followup message, falling back to the channel if the webhook is gone.

    Ephemeral messages are never reposted to the channel, where everyone
    would see them.

    Returns the sent message, or None if nothing could be sent.
    """
    try:
        return await interaction.followup.send(**kwargs)
    except discord.HTTPException as exc:
        logger.warning(f"Followup failed for interaction {getattr(interaction, 'id', '?')}: {exc}")
        channel = getattr(interaction, "channel", None)
        if channel is None or kwargs.pop("ephemeral", False):
            return None
        try:
            return await channel.send(**kwargs)
        except discord.HTTPException as channel_exc:
            logger.error(f"Channel fallback failed: {channel_exc}", exc_info=True)
            return None
