"""Tournaments shown when no Firestore backend is reachable (demo mode)."""
from datetime import timedelta

from utils.models import Tournament, TournamentRequirements, utcnow

DEMO_BANNER = "https://images.pexels.com/photos/442576/pexels-photo-442576.jpeg"


def _days(now, days, hour=0):
    return (now + timedelta(days=days)).replace(
        hour=hour, minute=0, second=0, microsecond=0,
    )


def generate_sample_tournaments(now=None):
    """Builds a fresh list of demo tournaments, scheduled relative to ``now``."""
    now = now or utcnow()
    return [
        Tournament(
            id="mock-1",
            name="Demo Tournament",
            description="This is a demo tournament. Configure Firestore to create "
            "real tournaments.",
            format="single-elimination",
            max_teams=16,
            team_size=5,
            prize_pool="$1,000",
            entry_fee=0,
            registration_deadline=_days(now, 6, 23),
            start_date=_days(now, 7, 18),
            end_date=_days(now, 8, 22),
            status="registration",
            organizer="Demo Organizer",
            rules="Standard competitive rules apply.",
            requirements=TournamentRequirements(region="NA"),
            featured=True,
            banner_image=DEMO_BANNER,
            sponsors=["Demo Sponsor"],
            socials={"twitter": "https://twitter.com/demo"},
        ),
        Tournament(
            id="mock-2",
            name="Valorant Champions Cup",
            description="Elite tournament for high-ranked players only. Prove your "
            "skills against the best!",
            format="single-elimination",
            max_teams=16,
            team_size=5,
            prize_pool="$5,000",
            entry_fee=25,
            registration_deadline=_days(now, 9, 23),
            start_date=_days(now, 10, 18),
            end_date=_days(now, 11, 22),
            status="registration",
            organizer="ValorantPro",
            rules="Standard competitive rules apply. No cheating, toxicity, or "
            "account sharing.",
            requirements=TournamentRequirements(region="NA", min_rank="Diamond 1"),
            featured=True,
            banner_image=DEMO_BANNER,
        ),
        Tournament(
            id="mock-3",
            name="Rising Stars Tournament",
            description="Tournament for up-and-coming players. Bronze to Gold ranks "
            "welcome!",
            format="double-elimination",
            max_teams=32,
            team_size=5,
            prize_pool="$1,500",
            registration_deadline=_days(now, 14, 23),
            start_date=_days(now, 15, 19),
            end_date=_days(now, 18, 21),
            status="upcoming",
            organizer="RisingStar Gaming",
            rules="Fair play tournament for developing players.",
            requirements=TournamentRequirements(region="EU", max_rank="Gold 3"),
            featured=False,
        ),
        Tournament(
            id="mock-4",
            name="Weekend Warriors",
            description="Casual weekend tournament for all skill levels. Fun and "
            "competitive!",
            format="round-robin",
            max_teams=8,
            team_size=5,
            prize_pool="$500",
            registration_deadline=_days(now, 4, 23),
            start_date=_days(now, 5, 14),
            end_date=_days(now, 6, 18),
            status="registration",
            organizer="Weekend Gaming",
            rules="Relaxed tournament atmosphere with standard competitive rules.",
            requirements=TournamentRequirements(region="NA"),
            featured=False,
        ),
    ]
