"""Simulated tracker.gg rank verification.

There is no public tracker.gg API we can call, so a player's rank is derived
from their Riot ID instead. The derivation is a pure function of the name:
the same player always gets the same rank and RR, which keeps demo runs and
tests reproducible. Commands only talk to a ``RankLookup`` so a real lookup
client can replace ``SimulatedRankLookup`` later.
"""
import asyncio
import re
import urllib.parse
import uuid
from abc import ABC, abstractmethod

from utils.constants import (
    DEFAULT_RR_RANGE,
    HIGH_RR_TIERS,
    HIGH_TIER_RR_RANGE,
    RANK_WEIGHTS,
    TOTAL_RANK_WEIGHT,
    VALORANT_RANKS,
)
from utils.exceptions import InvalidTrackerURLError, ProfileLookupError
from utils.logger_config import logger
from utils.models import PlayerProfile

TRACKER_URL_PATTERN = re.compile(
    r"^https?://(www\.)?tracker\.gg/valorant/profile/riot/[^/?]+",
)
PROFILE_SEGMENT_PATTERN = re.compile(r"profile/riot/([^/?]+)")


def _to_int32(value):
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def hash_username(username: str) -> int:
    """Rolling 31x string hash over UTF-16 code units, wrapped to 32 bits."""
    hash_value = 0
    encoded = username.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        hash_value = _to_int32(hash_value * 31 + code_unit)
    return abs(hash_value)


def select_rank(hash_value: int):
    """Picks a rank from the weighted population table."""
    position = (hash_value % 1000) / 1000 * TOTAL_RANK_WEIGHT
    for entry, weight in zip(VALORANT_RANKS, RANK_WEIGHTS):
        position -= weight
        if position <= 0:
            return entry
    return VALORANT_RANKS[-1]


def rr_range(rank):
    if rank.tier in HIGH_RR_TIERS:
        return HIGH_TIER_RR_RANGE
    return DEFAULT_RR_RANGE


def rank_rating(hash_value: int, rank) -> int:
    range_min, range_max = rr_range(rank)
    return (hash_value * 13) % (range_max - range_min) + range_min


def validate_tracker_url(url: str) -> bool:
    if not url:
        return False
    return TRACKER_URL_PATTERN.match(url) is not None


def extract_username_from_url(url: str):
    """Returns the decoded Riot ID in a tracker URL, or None."""
    if not url:
        return None
    match = PROFILE_SEGMENT_PATTERN.search(url)
    if not match:
        return None
    username = urllib.parse.unquote(match.group(1))
    # Double encoded discriminators survive one round of decoding.
    return username.replace("%23", "#")


def new_player_id():
    return f"player_{uuid.uuid4().hex[:12]}"


def simulate_player(username: str, tracker_url: str) -> PlayerProfile:
    hash_value = hash_username(username)
    rank = select_rank(hash_value)
    return PlayerProfile(
        id=new_player_id(),
        username=username,
        tracker_url=tracker_url,
        rank=rank,
        rr=rank_rating(hash_value, rank),
        verified=True,
    )


def fetch_player_data(tracker_url: str):
    """Builds a verified profile from a tracker URL.

    Returns None when the URL carries no ``profile/riot/<name>`` segment.
    """
    username = extract_username_from_url(tracker_url)
    if not username:
        logger.info(f"Tracker URL has no profile segment: {tracker_url!r}")
        return None
    return simulate_player(username, tracker_url)


class RankLookup(ABC):
    """Resolves a tracker profile URL into a verified player."""

    @abstractmethod
    async def lookup(self, tracker_url: str) -> PlayerProfile:
        """Raises InvalidTrackerURLError or ProfileLookupError on failure."""


class SimulatedRankLookup(RankLookup):
    def __init__(self, delay: float = 0.0):
        self.delay = delay

    async def lookup(self, tracker_url: str) -> PlayerProfile:
        if not validate_tracker_url(tracker_url):
            raise InvalidTrackerURLError()
        if self.delay:
            await asyncio.sleep(self.delay)
        player = fetch_player_data(tracker_url)
        if player is None:
            raise ProfileLookupError(f"No player found at {tracker_url}")
        logger.info(
            f"✅ Verified {player.username} as {player.rank.tier_name} ({player.rr} RR)",
        )
        return player
