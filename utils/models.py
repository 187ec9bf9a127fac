"""Record types shared by the bot, the services and the core helpers.

Every type maps to and from the flat snake_case dicts stored in Firestore.
``from_record`` is lenient about missing optional keys since documents
written by older versions of the bot may not carry every field.

All datetimes are kept as naive UTC so stored, parsed and generated dates
compare with each other.
"""
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value):
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _parse_datetime(value):
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(value)
    # Firestore timestamps come back timezone aware.
    return to_naive_utc(value)


def _format_datetime(value):
    if value is None:
        return None
    return value.isoformat()


@dataclass(frozen=True)
class RankEntry:
    tier: str
    division: int
    tier_name: str
    color: str
    icon: str

    @property
    def display(self) -> str:
        return f"{self.icon} {self.tier_name}"

    @property
    def color_value(self) -> int:
        return int(self.color.lstrip("#"), 16)


@dataclass
class PlayerProfile:
    id: str
    username: str
    rank: RankEntry
    rr: int
    verified: bool = False
    tracker_url: Optional[str] = None
    contact: Optional[str] = None
    avatar: Optional[str] = None

    def to_record(self, is_captain=False):
        return {
            "id": self.id,
            "username": self.username,
            "valorant_tracker": self.tracker_url,
            "rank_tier": self.rank.tier,
            "rank_division": self.rank.division,
            "rank_name": self.rank.tier_name,
            "rank_color": self.rank.color,
            "rank_icon": self.rank.icon,
            "rr": self.rr,
            "avatar": self.avatar,
            "discord_tag": self.contact,
            "verified": self.verified,
            "is_captain": is_captain,
        }

    @classmethod
    def from_record(cls, record):
        rank = RankEntry(
            tier=record.get("rank_tier", "Unranked"),
            division=record.get("rank_division", 0),
            tier_name=record.get("rank_name", "Unranked"),
            color=record.get("rank_color", "#9CA3AF"),
            icon=record.get("rank_icon", "❓"),
        )
        return cls(
            id=record.get("id", ""),
            username=record.get("username", ""),
            rank=rank,
            rr=record.get("rr", 0),
            verified=record.get("verified", False),
            tracker_url=record.get("valorant_tracker"),
            contact=record.get("discord_tag"),
            avatar=record.get("avatar"),
        )


@dataclass
class Team:
    id: str
    name: str
    players: list
    captain: str
    avatar: Optional[str] = None

    @property
    def captain_player(self):
        for player in self.players:
            if player.id == self.captain:
                return player
        return None

    def to_record(self, tournament_id=None):
        return {
            "id": self.id,
            "tournament_id": tournament_id,
            "name": self.name,
            "captain_id": self.captain,
            "avatar": self.avatar,
            "players": [
                p.to_record(is_captain=p.id == self.captain) for p in self.players
            ],
        }

    @classmethod
    def from_record(cls, record):
        return cls(
            id=record.get("id", ""),
            name=record.get("name", ""),
            players=[
                PlayerProfile.from_record(p) for p in record.get("players") or []
            ],
            captain=record.get("captain_id", ""),
            avatar=record.get("avatar"),
        )


@dataclass
class TournamentRequirements:
    region: Optional[str] = None
    min_rank: Optional[str] = None
    max_rank: Optional[str] = None


@dataclass
class Tournament:
    id: str
    name: str
    description: str
    format: str
    max_teams: int
    team_size: int
    start_date: datetime
    end_date: datetime
    registration_deadline: datetime
    status: str
    organizer: str
    rules: str
    requirements: TournamentRequirements
    featured: bool = False
    game: str = "Valorant"
    stages: int = 1
    prize_pool: Optional[str] = None
    entry_fee: Optional[float] = None
    teams: list = field(default_factory=list)
    # Brackets are not generated; kept so stored documents round-trip.
    bracket: Optional[dict] = None
    banner_image: Optional[str] = None
    sponsors: list = field(default_factory=list)
    socials: dict = field(default_factory=dict)
    created_by: Optional[str] = None

    @property
    def is_full(self) -> bool:
        return len(self.teams) >= self.max_teams

    def to_record(self):
        """Flattens the tournament into a document. Teams are stored separately."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "game": self.game,
            "format": self.format,
            "stages": self.stages,
            "max_teams": self.max_teams,
            "team_size": self.team_size,
            "prize_pool": self.prize_pool,
            "entry_fee": self.entry_fee,
            "start_date": _format_datetime(self.start_date),
            "end_date": _format_datetime(self.end_date),
            "registration_deadline": _format_datetime(self.registration_deadline),
            "status": self.status,
            "organizer": self.organizer,
            "rules": self.rules,
            "min_rank": self.requirements.min_rank,
            "max_rank": self.requirements.max_rank,
            "region": self.requirements.region,
            "featured": self.featured,
            "banner_image": self.banner_image,
            "sponsors": list(self.sponsors),
            "socials": dict(self.socials),
            "user_id": self.created_by,
        }

    @classmethod
    def from_record(cls, record, teams=None):
        if teams is None:
            teams = [Team.from_record(t) for t in record.get("teams") or []]
        return cls(
            id=record.get("id", ""),
            name=record.get("name", ""),
            description=record.get("description", ""),
            game=record.get("game", "Valorant"),
            format=record.get("format", "single-elimination"),
            stages=record.get("stages", 1),
            max_teams=record.get("max_teams", 0),
            team_size=record.get("team_size", 0),
            prize_pool=record.get("prize_pool"),
            entry_fee=record.get("entry_fee"),
            start_date=_parse_datetime(record.get("start_date")),
            end_date=_parse_datetime(record.get("end_date")),
            registration_deadline=_parse_datetime(record.get("registration_deadline")),
            status=record.get("status", "upcoming"),
            organizer=record.get("organizer", ""),
            rules=record.get("rules", ""),
            requirements=TournamentRequirements(
                region=record.get("region"),
                min_rank=record.get("min_rank"),
                max_rank=record.get("max_rank"),
            ),
            teams=teams,
            featured=record.get("featured", False),
            banner_image=record.get("banner_image"),
            sponsors=record.get("sponsors") or [],
            socials=record.get("socials") or {},
            created_by=record.get("user_id"),
        )


@dataclass
class UserProfile:
    id: str
    username: str
    tracker_url: Optional[str] = None
    valorant_username: Optional[str] = None
    rank: Optional[RankEntry] = None
    rr: int = 0
    avatar_url: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_record(self):
        record = {
            "id": self.id,
            "username": self.username,
            "valorant_tracker_url": self.tracker_url,
            "valorant_username": self.valorant_username,
            "rank_tier": None,
            "rank_division": None,
            "rank_name": None,
            "rank_color": None,
            "rank_icon": None,
            "rr": self.rr,
            "avatar_url": self.avatar_url,
            "is_admin": self.is_admin,
            "created_at": _format_datetime(self.created_at),
            "updated_at": _format_datetime(self.updated_at),
        }
        if self.rank is not None:
            rank = asdict(self.rank)
            record.update({
                "rank_tier": rank["tier"],
                "rank_division": rank["division"],
                "rank_name": rank["tier_name"],
                "rank_color": rank["color"],
                "rank_icon": rank["icon"],
            })
        return record

    @classmethod
    def from_record(cls, record):
        rank = None
        if record.get("rank_tier"):
            rank = RankEntry(
                tier=record["rank_tier"],
                division=record.get("rank_division", 0),
                tier_name=record.get("rank_name", record["rank_tier"]),
                color=record.get("rank_color", "#9CA3AF"),
                icon=record.get("rank_icon", "❓"),
            )
        return cls(
            id=record.get("id", ""),
            username=record.get("username", ""),
            tracker_url=record.get("valorant_tracker_url"),
            valorant_username=record.get("valorant_username"),
            rank=rank,
            rr=record.get("rr", 0),
            avatar_url=record.get("avatar_url"),
            is_admin=record.get("is_admin", False),
            created_at=_parse_datetime(record.get("created_at")),
            updated_at=_parse_datetime(record.get("updated_at")),
        )
