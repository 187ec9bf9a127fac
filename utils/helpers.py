# This file is for miscellaneous logic
# If you notice a group of these functions having similar functionality,
# make a separate file for them.
import shlex
from datetime import datetime
from urllib.parse import urlparse

from utils.constants import (
    DEFAULT_MAX_TEAMS,
    DEFAULT_TEAM_SIZE,
    REGIONS,
    STAGE_OPTIONS,
    TOURNAMENT_FORMATS,
    TOURNAMENT_STATUSES,
    VALORANT_RANKS,
)
from utils.exceptions import InvalidTournamentDataError, RegistrationError
from utils.logger_config import logger
from utils.models import to_naive_utc

TRUE_WORDS = {"true", "yes", "on", "1"}
FALSE_WORDS = {"false", "no", "off", "0"}


def rank_index(tier_name):
    """Returns the skill index of a rank name such as "Gold 2", or None."""
    if not tier_name:
        return None
    wanted = " ".join(tier_name.split()).lower()
    for index, entry in enumerate(VALORANT_RANKS):
        if entry.tier_name.lower() == wanted:
            return index
    return None


def parse_region(unclean_region):
    """Parses an unclean_region string.

    Returns the upper case region if it is one we host tournaments in.
    """
    if not unclean_region or "\n" in unclean_region:
        return None
    clean_region = unclean_region.strip().upper()
    if clean_region not in REGIONS:
        return None
    return clean_region


def parse_bool(value):
    lowered = str(value).strip().lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    return None


def meets_rank_requirements(rank, requirements) -> bool:
    """Checks a player's rank against a tournament's min/max rank.

    Requirement names that are not in the rank table are ignored.
    """
    player_index = rank_index(rank.tier_name)
    min_index = rank_index(requirements.min_rank)
    max_index = rank_index(requirements.max_rank)
    if player_index is None:
        return min_index is None and max_index is None
    if min_index is not None and player_index < min_index:
        return False
    return max_index is None or player_index <= max_index


def validate_team_registration(tournament, team_name, players):
    """Raises RegistrationError if the team cannot join the tournament."""
    if tournament.status != "registration":
        raise RegistrationError(f"Registration for {tournament.name} is not open.")
    if tournament.is_full:
        raise RegistrationError(
            f"{tournament.name} is full ({tournament.max_teams} teams).",
        )
    if not team_name or not team_name.strip():
        raise RegistrationError("Please enter a team name.")
    taken = {team.name.lower() for team in tournament.teams}
    if team_name.strip().lower() in taken:
        raise RegistrationError(f"A team named {team_name} is already registered.")
    if len(players) != tournament.team_size:
        raise RegistrationError(
            f"Team must have exactly {tournament.team_size} players.",
        )
    usernames = [p.username.lower() for p in players]
    if len(set(usernames)) != len(usernames):
        raise RegistrationError("The same player is listed more than once.")
    for player in players:
        if not player.verified:
            raise RegistrationError(f"{player.username} is not verified.")
        if not meets_rank_requirements(player.rank, tournament.requirements):
            raise RegistrationError(
                f"Player rank {player.rank.tier_name} doesn't meet tournament "
                "requirements.",
            )


def check_schedule(tournament) -> bool:
    """Logs a warning when deadline <= start <= end does not hold.

    Stored tournaments are not rejected for this; organizers are trusted.
    """
    deadline = tournament.registration_deadline
    start = tournament.start_date
    end = tournament.end_date
    if None in (deadline, start, end):
        return True
    ordered = deadline <= start <= end
    if not ordered:
        logger.warning(
            f"⚠️ Tournament {tournament.id} has out of order dates: "
            f"deadline={deadline} start={start} end={end}",
        )
    return ordered


def check_captain(team) -> bool:
    """Logs a warning when the captain id is not one of the team's players."""
    if team.captain_player is None:
        logger.warning(f"⚠️ Team {team.id} captain {team.captain} is not on the team")
        return False
    return True


def parse_key_value_args(text):
    """Splits ``name="Cup Night" region=NA`` into a dict.

    Keys are lower cased, quoting follows shell rules.
    """
    try:
        tokens = shlex.split(text or "")
    except ValueError as e:
        raise InvalidTournamentDataError(f"Could not parse arguments: {e}") from e
    parsed = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or not key:
            raise InvalidTournamentDataError(
                f"Expected key=value, got '{token}'.",
            )
        parsed[key.strip().lower()] = value.strip()
    return parsed


def _parse_date(fields, key):
    raw = fields.get(key)
    if not raw:
        raise InvalidTournamentDataError(f"Missing required field '{key}'.")
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as e:
        raise InvalidTournamentDataError(
            f"'{key}' must be an ISO date like 2025-02-15T18:00.",
        ) from e
    return to_naive_utc(parsed)


def _parse_int(fields, key, default, minimum=1):
    raw = fields.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidTournamentDataError(f"'{key}' must be a whole number.") from e
    if value < minimum:
        raise InvalidTournamentDataError(f"'{key}' must be at least {minimum}.")
    return value


def _parse_url(key, raw):
    """Discord rejects embeds and link buttons whose url has no http(s) scheme."""
    if not raw:
        return None
    parts = urlparse(raw)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidTournamentDataError(
            f"'{key}' must be a full link starting with https://.",
        )
    return raw


def _parse_rank_name(fields, key):
    raw = fields.get(key)
    if not raw:
        return None
    index = rank_index(raw)
    if index is None:
        raise InvalidTournamentDataError(f"Unknown rank '{raw}' for '{key}'.")
    return VALORANT_RANKS[index].tier_name


def parse_tournament_fields(fields, partial=False):
    """Validates ``!createtournament`` / ``!edittournament`` arguments.

    With ``partial`` only the supplied keys are parsed and returned, which is
    what editing needs. Otherwise name and the three dates are required and
    defaults fill in the rest.
    """
    parsed = {}

    def wanted(key):
        return not partial or key in fields

    if wanted("name"):
        name = fields.get("name", "").strip()
        if not name:
            raise InvalidTournamentDataError("Missing required field 'name'.")
        parsed["name"] = name
    if wanted("description"):
        parsed["description"] = fields.get("description", "")
    if wanted("rules"):
        parsed["rules"] = fields.get("rules", "Standard competitive rules apply.")
    for key in ("start", "end", "deadline"):
        if wanted(key):
            parsed[key] = _parse_date(fields, key)
    if wanted("format"):
        fmt = fields.get("format", TOURNAMENT_FORMATS[0]).lower()
        if fmt not in TOURNAMENT_FORMATS:
            raise InvalidTournamentDataError(
                f"Format must be one of: {', '.join(TOURNAMENT_FORMATS)}.",
            )
        parsed["format"] = fmt
    if wanted("status"):
        status = fields.get("status", "upcoming").lower()
        if status not in TOURNAMENT_STATUSES:
            raise InvalidTournamentDataError(
                f"Status must be one of: {', '.join(TOURNAMENT_STATUSES)}.",
            )
        parsed["status"] = status
    if wanted("region"):
        region = parse_region(fields.get("region", "NA"))
        if region is None:
            raise InvalidTournamentDataError(
                f"Region must be one of: {', '.join(REGIONS)}.",
            )
        parsed["region"] = region
    if wanted("stages"):
        stages = _parse_int(fields, "stages", 1)
        if stages not in STAGE_OPTIONS:
            raise InvalidTournamentDataError("Stages must be 1, 2 or 3.")
        parsed["stages"] = stages
    if wanted("max_teams"):
        parsed["max_teams"] = _parse_int(fields, "max_teams", DEFAULT_MAX_TEAMS, 2)
    if wanted("team_size"):
        parsed["team_size"] = _parse_int(fields, "team_size", DEFAULT_TEAM_SIZE)
    for key in ("min_rank", "max_rank"):
        if wanted(key):
            parsed[key] = _parse_rank_name(fields, key)
    if wanted("prize_pool"):
        parsed["prize_pool"] = fields.get("prize_pool") or None
    if wanted("entry_fee"):
        raw_fee = fields.get("entry_fee")
        try:
            parsed["entry_fee"] = float(raw_fee) if raw_fee else None
        except ValueError as e:
            raise InvalidTournamentDataError("'entry_fee' must be a number.") from e
    if wanted("banner"):
        parsed["banner"] = _parse_url("banner", fields.get("banner"))
    if wanted("sponsors"):
        parsed["sponsors"] = [
            s.strip() for s in fields.get("sponsors", "").split(",") if s.strip()
        ]
    if wanted("featured"):
        featured = parse_bool(fields.get("featured", "false"))
        if featured is None:
            raise InvalidTournamentDataError("'featured' must be true or false.")
        parsed["featured"] = featured
    socials = {
        key.split(".", 1)[1]: _parse_url(key, value)
        for key, value in fields.items()
        if key.startswith("social.") and value
    }
    if socials or not partial:
        parsed["socials"] = socials
    return parsed
