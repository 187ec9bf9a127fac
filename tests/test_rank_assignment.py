import random
import string
from collections import Counter
from unittest.mock import AsyncMock, patch

import pytest

from utils.constants import RANK_WEIGHTS, VALORANT_RANKS
from utils.exceptions import InvalidTrackerURLError, ProfileLookupError
from utils.rank_assignment import (
    SimulatedRankLookup,
    extract_username_from_url,
    fetch_player_data,
    hash_username,
    rank_rating,
    select_rank,
    simulate_player,
    validate_tracker_url,
)

TRACKER_URL = "https://tracker.gg/valorant/profile/riot/PlayerOne%23NA1"


def test_hash_username_known_values():
    assert hash_username("") == 0
    assert hash_username("a") == 97
    assert hash_username("hello") == 99162322
    assert hash_username("Hello World") == 862545276  # wraps negative, then abs


def test_hash_username_uses_utf16_code_units():
    assert hash_username("😀") == 55357 * 31 + 0xDE00  # surrogate pair
    assert hash_username("a\ud800b") == 1807491  # lone surrogate still hashes


def test_hash_username_stays_in_32_bits():
    value = hash_username("x" * 500)
    assert 0 <= value <= 2**31


def test_select_rank_boundaries():
    assert select_rank(0).tier_name == "Unranked"
    assert select_rank(10).tier_name == "Unranked"
    assert select_rank(11).tier_name == "Iron 1"
    assert select_rank(97).tier_name == "Bronze 1"
    assert select_rank(999).tier_name == "Radiant"
    assert select_rank(1999).tier_name == "Radiant"  # only hash % 1000 matters


def test_rank_rating_ranges():
    bronze = select_rank(97)
    radiant = select_rank(999)
    assert rank_rating(97, bronze) == 61
    assert rank_rating(999, radiant) == 487  # 500 wide range for top tiers


def test_simulate_player_is_deterministic():
    first = simulate_player("PlayerOne", TRACKER_URL)
    second = simulate_player("PlayerOne", TRACKER_URL)
    assert first.rank == second.rank
    assert first.rr == second.rr
    assert first.rank.tier_name == "Gold 1"
    assert first.rr == 21
    assert first.verified is True
    assert first.id != second.id  # ids are unique per verification


def test_rr_range_invariant():
    rng = random.Random(7)
    for _ in range(2000):
        name = "".join(rng.choices(string.ascii_letters + "#", k=rng.randint(1, 16)))
        player = simulate_player(name, TRACKER_URL)
        if player.rank.tier in ("Immortal", "Radiant"):
            assert 0 <= player.rr < 500
        else:
            assert 0 <= player.rr < 100


def test_rank_table_coverage():
    rng = random.Random(42)
    names = set()
    while len(names) < 10000:
        names.add("".join(rng.choices(string.ascii_letters + string.digits, k=10)))
    counts = Counter(select_rank(hash_username(name)) for name in names)
    for entry, weight in zip(VALORANT_RANKS, RANK_WEIGHTS):
        if weight:
            assert counts[entry] > 0, entry.tier_name
    silver = sum(n for rank, n in counts.items() if rank.tier == "Silver")
    iron = sum(n for rank, n in counts.items() if rank.tier == "Iron")
    assert silver > iron


def test_validate_tracker_url_valid():
    assert validate_tracker_url("https://tracker.gg/valorant/profile/riot/Name%23123")
    assert validate_tracker_url("http://www.tracker.gg/valorant/profile/riot/Name")
    assert validate_tracker_url(
        "https://tracker.gg/valorant/profile/riot/Name%23123/overview?season=all",
    )


def test_validate_tracker_url_invalid():
    assert not validate_tracker_url("https://tracker.gg/other/profile/riot/Name")
    assert not validate_tracker_url("ftp://tracker.gg/valorant/profile/riot/Name")
    assert not validate_tracker_url("https://tracker.gg/valorant/profile/riot/")
    assert not validate_tracker_url("https://Tracker.gg/valorant/profile/riot/Name")
    assert not validate_tracker_url("")


def test_extract_username_from_url():
    assert extract_username_from_url(
        "https://tracker.gg/valorant/profile/riot/Name%23123/overview",
    ) == "Name#123"
    assert extract_username_from_url(
        "https://tracker.gg/valorant/profile/riot/Name%2523123",
    ) == "Name#123"  # double encoded discriminator
    assert extract_username_from_url(
        "https://tracker.gg/valorant/profile/riot/Space%20Cadet%23EU",
    ) == "Space Cadet#EU"
    assert extract_username_from_url("https://tracker.gg/valorant/") is None


def test_fetch_player_data():
    url = "https://tracker.gg/valorant/profile/riot/Name%23123"
    player = fetch_player_data(url)
    assert player.username == "Name#123"
    assert player.tracker_url == url
    assert player.rank.tier_name == "Silver 1"
    assert player.rr == 50


def test_fetch_player_data_bad_url():
    assert fetch_player_data("https://example.com/not-a-profile") is None


@pytest.mark.asyncio
async def test_simulated_lookup_success():
    lookup = SimulatedRankLookup()
    player = await lookup.lookup(TRACKER_URL)
    assert player.username == "PlayerOne#NA1"
    assert player.verified


@pytest.mark.asyncio
async def test_simulated_lookup_waits_for_delay():
    lookup = SimulatedRankLookup(delay=1.5)
    with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await lookup.lookup(TRACKER_URL)
    mock_sleep.assert_called_once_with(1.5)


@pytest.mark.asyncio
async def test_simulated_lookup_invalid_url():
    lookup = SimulatedRankLookup()
    with pytest.raises(InvalidTrackerURLError):
        await lookup.lookup("https://tracker.gg/other/profile/riot/Name")


@pytest.mark.asyncio
async def test_simulated_lookup_no_profile():
    lookup = SimulatedRankLookup()
    with patch(
        "utils.rank_assignment.fetch_player_data",
        return_value=None,
    ), pytest.raises(ProfileLookupError):
        await lookup.lookup(TRACKER_URL)


def test_tracker_error_messages_have_one_prefix():
    error = InvalidTrackerURLError("Bad link.")
    assert error.message == "🔗 **Invalid URL:** Bad link."
    assert str(error) == error.message
    assert "Tracker Issue" not in str(ProfileLookupError())
