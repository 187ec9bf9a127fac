import re
from dataclasses import dataclass, field

from utils.constants import REGION_ALL, REGIONS, STATUS_ALL, TOURNAMENT_STATUSES
from utils.exceptions import InvalidFilterError


@dataclass
class FilterResult:
    featured: list = field(default_factory=list)
    regular: list = field(default_factory=list)

    def __len__(self):
        return len(self.featured) + len(self.regular)


def _matches_query(tournament, query):
    if not query:
        return True
    needle = query.lower()
    name = (getattr(tournament, "name", None) or "").lower()
    description = (getattr(tournament, "description", None) or "").lower()
    return needle in name or needle in description


def _tournament_region(tournament):
    requirements = getattr(tournament, "requirements", None)
    return getattr(requirements, "region", None)


def matches(tournament, query="", status=STATUS_ALL, region=REGION_ALL) -> bool:
    if not _matches_query(tournament, query):
        return False
    if status != STATUS_ALL and getattr(tournament, "status", None) != status:
        return False
    return region == REGION_ALL or _tournament_region(tournament) == region


def filter_tournaments(
    tournaments,
    query="",
    status=STATUS_ALL,
    region=REGION_ALL,
) -> FilterResult:
    """Splits the matching tournaments into featured and regular groups.

    Input order is kept in both groups. Records with missing fields never
    raise; they just fail any concrete filter that needs the field.
    """
    result = FilterResult()
    for tournament in tournaments or ():
        if not matches(tournament, query, status, region):
            continue
        if getattr(tournament, "featured", False):
            result.featured.append(tournament)
        else:
            result.regular.append(tournament)
    return result


# A double quoted phrase, or a single word
FILTER_TOKEN_PATTERN = re.compile(r'"([^"]*)"|(\S+)')


def parse_filter_args(text):
    """Parses ``!tournaments`` arguments into (query, status, region).

    ``status:<value>`` and ``region:<value>`` tokens set the filters, every
    other word is part of the free text query. Unquoted words are joined by
    single spaces. A double quoted phrase is searched for exactly as written,
    so ``"status:foo"`` or ``"Cup  Night"`` can still be looked up.
    """
    status = STATUS_ALL
    region = REGION_ALL
    words = []
    for match in FILTER_TOKEN_PATTERN.finditer(text or ""):
        phrase, token = match.groups()
        if phrase is not None:
            if phrase:
                words.append(phrase)
            continue
        key, sep, value = token.partition(":")
        key = key.lower()
        if sep and key == "status":
            status = value.lower()
            if status != STATUS_ALL and status not in TOURNAMENT_STATUSES:
                raise InvalidFilterError(
                    f"Unknown status '{value}'. Use one of: "
                    f"{', '.join((STATUS_ALL, *TOURNAMENT_STATUSES))}.",
                )
        elif sep and key == "region":
            region = value.upper() if value.lower() != REGION_ALL else REGION_ALL
            if region != REGION_ALL and region not in REGIONS:
                raise InvalidFilterError(
                    f"Unknown region '{value}'. Use one of: "
                    f"{', '.join((REGION_ALL, *REGIONS))}.",
                )
        else:
            words.append(token)
    return " ".join(words), status, region
