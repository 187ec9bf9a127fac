from utils.models import RankEntry

# Skill order, lowest first. Index into this tuple is the rank's skill value.
VALORANT_RANKS = (
    RankEntry("Unranked", 0, "Unranked", "#9CA3AF", "❓"),
    RankEntry("Iron", 1, "Iron 1", "#4A4A4A", "⚫"),
    RankEntry("Iron", 2, "Iron 2", "#4A4A4A", "⚫"),
    RankEntry("Iron", 3, "Iron 3", "#4A4A4A", "⚫"),
    RankEntry("Bronze", 1, "Bronze 1", "#CD7F32", "🟤"),
    RankEntry("Bronze", 2, "Bronze 2", "#CD7F32", "🟤"),
    RankEntry("Bronze", 3, "Bronze 3", "#CD7F32", "🟤"),
    RankEntry("Silver", 1, "Silver 1", "#C0C0C0", "⚪"),
    RankEntry("Silver", 2, "Silver 2", "#C0C0C0", "⚪"),
    RankEntry("Silver", 3, "Silver 3", "#C0C0C0", "⚪"),
    RankEntry("Gold", 1, "Gold 1", "#FFD700", "🟡"),
    RankEntry("Gold", 2, "Gold 2", "#FFD700", "🟡"),
    RankEntry("Gold", 3, "Gold 3", "#FFD700", "🟡"),
    RankEntry("Platinum", 1, "Platinum 1", "#00CED1", "🔷"),
    RankEntry("Platinum", 2, "Platinum 2", "#00CED1", "🔷"),
    RankEntry("Platinum", 3, "Platinum 3", "#00CED1", "🔷"),
    RankEntry("Diamond", 1, "Diamond 1", "#B57EDC", "💎"),
    RankEntry("Diamond", 2, "Diamond 2", "#B57EDC", "💎"),
    RankEntry("Diamond", 3, "Diamond 3", "#B57EDC", "💎"),
    RankEntry("Ascendant", 1, "Ascendant 1", "#00FF7F", "🟢"),
    RankEntry("Ascendant", 2, "Ascendant 2", "#00FF7F", "🟢"),
    RankEntry("Ascendant", 3, "Ascendant 3", "#00FF7F", "🟢"),
    RankEntry("Immortal", 1, "Immortal 1", "#FF1744", "🔴"),
    RankEntry("Immortal", 2, "Immortal 2", "#FF1744", "🔴"),
    RankEntry("Immortal", 3, "Immortal 3", "#FF1744", "🔴"),
    RankEntry("Radiant", 1, "Radiant", "#FFFF00", "⭐"),
)

# Population weight per tier, applied to every division of the tier.
TIER_WEIGHTS = {
    "Unranked": 1,
    "Iron": 2,
    "Bronze": 4,
    "Silver": 8,
    "Gold": 6,
    "Platinum": 4,
    "Diamond": 3,
    "Ascendant": 2,
    "Immortal": 1,
    "Radiant": 0.5,
}
RANK_WEIGHTS = tuple(TIER_WEIGHTS[entry.tier] for entry in VALORANT_RANKS)
TOTAL_RANK_WEIGHT = sum(RANK_WEIGHTS)

DEFAULT_RR_RANGE = (0, 100)
HIGH_TIER_RR_RANGE = (0, 500)
HIGH_RR_TIERS = {"Immortal", "Radiant"}

# Filter values
STATUS_ALL = "all"
TOURNAMENT_STATUSES = ("upcoming", "registration", "ongoing", "completed")
REGION_ALL = "all"
REGIONS = ("NA", "EU", "ASIA", "OCE")

TOURNAMENT_FORMATS = ("single-elimination", "double-elimination", "round-robin")
STAGE_OPTIONS = {
    1: "Single elimination bracket",
    2: "Qualifying rounds + Finals",
    3: "Groups + Playoffs + Finals",
}

STATUS_COLORS = {
    "upcoming": 0x3B82F6,
    "registration": 0x22C55E,
    "ongoing": 0xF59E0B,
    "completed": 0x6B7280,
}
STATUS_LABELS = {
    "upcoming": "Upcoming",
    "registration": "Registration Open",
    "ongoing": "Live",
    "completed": "Completed",
}

DEFAULT_GAME = "Valorant"
DEFAULT_MAX_TEAMS = 16
DEFAULT_TEAM_SIZE = 5
