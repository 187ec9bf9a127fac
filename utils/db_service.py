import uuid
from dataclasses import replace

from firebase_admin import firestore

from database import TEAMS_SUBCOLLECTION, TOURNAMENTS_COLLECTION, USER_PROFILES_COLLECTION
from utils.exceptions import DatabaseError, TournamentNotFoundError
from utils.helpers import check_captain, check_schedule, validate_team_registration
from utils.logger_config import logger
from utils.models import Team, Tournament, UserProfile, to_naive_utc, utcnow
from utils.sample_data import generate_sample_tournaments

EDITABLE_TOURNAMENT_FIELDS = {
    "name",
    "description",
    "rules",
    "start_date",
    "end_date",
    "registration_deadline",
    "status",
    "featured",
}
DATE_FIELDS = ("start_date", "end_date", "registration_deadline")


def _with_utc_dates(tournament, **changes):
    for key in DATE_FIELDS:
        value = changes.get(key, getattr(tournament, key))
        changes[key] = to_naive_utc(value)
    return replace(tournament, **changes)


class TournamentService:
    """Service layer for tournament and team Firestore operations.

    With no Firestore client the service runs in demo mode on an in-memory
    copy of the sample tournaments.
    """

    def __init__(self, db):
        self.db = db
        self.demo_tournaments = generate_sample_tournaments()

    @property
    def demo_mode(self) -> bool:
        return self.db is None

    def _collection(self):
        return self.db.collection(TOURNAMENTS_COLLECTION)

    def _find_demo(self, tournament_id):
        for tournament in self.demo_tournaments:
            if tournament.id == tournament_id:
                return tournament
        raise TournamentNotFoundError(f"No tournament with id {tournament_id}.")

    def _load_teams(self, doc_ref):
        teams = []
        for team_doc in doc_ref.collection(TEAMS_SUBCOLLECTION).stream():
            record = team_doc.to_dict()
            record.setdefault("id", team_doc.id)
            teams.append(Team.from_record(record))
        return teams

    def _from_document(self, doc):
        record = doc.to_dict()
        record["id"] = doc.id
        return Tournament.from_record(record, teams=self._load_teams(doc.reference))

    # Reads

    async def get_tournaments(self):
        """Returns every tournament, newest first."""
        if self.demo_mode:
            return list(self.demo_tournaments)
        try:
            docs = (
                self._collection()
                .order_by("created_at", direction=firestore.Query.DESCENDING)
                .stream()
            )
            return [self._from_document(doc) for doc in docs]
        except Exception as e:
            logger.warning(f"⚠️ Firestore unavailable, showing sample data: {e}")
            return list(self.demo_tournaments)

    async def get_tournament(self, tournament_id):
        if self.demo_mode:
            return self._find_demo(tournament_id)
        try:
            doc = self._collection().document(tournament_id).get()
        except Exception as e:
            logger.warning(f"⚠️ Firestore unavailable, checking sample data: {e}")
            return self._find_demo(tournament_id)
        if not doc.exists:
            raise TournamentNotFoundError(f"No tournament with id {tournament_id}.")
        return self._from_document(doc)

    # Writes

    async def create_tournament(self, tournament):
        """Stores a new tournament and returns it with its assigned id.

        Falls back to an in-memory tournament if Firestore rejects the write.
        """
        tournament = _with_utc_dates(tournament)
        check_schedule(tournament)
        if not self.demo_mode:
            try:
                doc_ref = self._collection().document()
                record = tournament.to_record()
                record["id"] = doc_ref.id
                record["created_at"] = firestore.SERVER_TIMESTAMP
                record["updated_at"] = firestore.SERVER_TIMESTAMP
                doc_ref.set(record)
                logger.info(f"✅ Created tournament {doc_ref.id}: {tournament.name}")
                return replace(tournament, id=doc_ref.id, teams=[], bracket=None)
            except Exception as e:
                logger.warning(
                    f"⚠️ Database operation failed, creating mock tournament: {e}",
                )
        created = replace(
            tournament,
            id=f"mock_{uuid.uuid4().hex[:8]}",
            teams=[],
            bracket=None,
        )
        self.demo_tournaments.insert(0, created)
        return created

    async def register_team(self, tournament_id, team_name, players, avatar=None):
        """Validates and stores a team. The first player is the captain."""
        tournament = await self.get_tournament(tournament_id)
        validate_team_registration(tournament, team_name, players)
        team = Team(
            id=f"team_{uuid.uuid4().hex[:12]}",
            name=team_name.strip(),
            players=list(players),
            captain=players[0].id,
            avatar=avatar,
        )
        check_captain(team)
        if self.demo_mode:
            tournament.teams.append(team)
            return team
        doc_ref = self._collection().document(tournament_id)
        try:
            team_ref = doc_ref.collection(TEAMS_SUBCOLLECTION).document(team.id)
            record = team.to_record(tournament_id)
            record["created_at"] = firestore.SERVER_TIMESTAMP
            team_ref.set(record)
        except Exception as e:
            logger.exception(f"❌ ERROR: registering team {team.name}: {e}")
            raise DatabaseError(f"Failed to register team {team.name}.") from e
        logger.info(f"✅ Registered team {team.name} for tournament {tournament_id}")
        return team

    async def update_tournament(self, tournament_id, changes):
        """Applies edits limited to the fields organizers may change."""
        unknown = set(changes) - EDITABLE_TOURNAMENT_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be edited: {sorted(unknown)}")
        tournament = await self.get_tournament(tournament_id)
        updated = _with_utc_dates(tournament, **changes)
        check_schedule(updated)
        if self.demo_mode:
            index = self.demo_tournaments.index(tournament)
            self.demo_tournaments[index] = updated
            return updated
        record = updated.to_record()
        payload = {key: record[key] for key in changes}
        payload["updated_at"] = firestore.SERVER_TIMESTAMP
        try:
            self._collection().document(tournament_id).update(payload)
        except Exception as e:
            logger.exception(f"❌ ERROR: updating tournament {tournament_id}: {e}")
            raise DatabaseError(f"Failed to update tournament {tournament_id}.") from e
        return updated

    async def set_featured(self, tournament_id, featured=True):
        return await self.update_tournament(tournament_id, {"featured": featured})

    async def delete_tournament(self, tournament_id):
        if self.demo_mode:
            self.demo_tournaments.remove(self._find_demo(tournament_id))
            return
        doc_ref = self._collection().document(tournament_id)
        try:
            doc = doc_ref.get()
            if not doc.exists:
                raise TournamentNotFoundError(f"No tournament with id {tournament_id}.")
            # Firestore does not cascade deletes to subcollections.
            for team_doc in doc_ref.collection(TEAMS_SUBCOLLECTION).stream():
                team_doc.reference.delete()
            doc_ref.delete()
        except TournamentNotFoundError:
            raise
        except Exception as e:
            logger.exception(f"❌ ERROR: deleting tournament {tournament_id}: {e}")
            raise DatabaseError(f"Failed to delete tournament {tournament_id}.") from e
        logger.info(f"🗑️ Deleted tournament {tournament_id}")


class ProfileService:
    """Service layer for account profiles, keyed by Discord user id."""

    def __init__(self, db):
        self.db = db
        self.demo_profiles = {}

    @property
    def demo_mode(self) -> bool:
        return self.db is None

    def _document(self, user_id):
        return self.db.collection(USER_PROFILES_COLLECTION).document(str(user_id))

    async def get_profile(self, user_id):
        if self.demo_mode:
            record = self.demo_profiles.get(str(user_id))
            return UserProfile.from_record(record) if record else None
        try:
            doc = self._document(user_id).get()
        except Exception as e:
            logger.error(f"Error fetching profile {user_id}: {e}")
            return None
        if not doc.exists:
            return None
        return UserProfile.from_record(doc.to_dict())

    async def ensure_profile(self, user_id, username):
        """Returns the user's profile, creating a blank one on first use."""
        profile = await self.get_profile(user_id)
        if profile is not None:
            return profile
        now = utcnow()
        profile = UserProfile(
            id=str(user_id),
            username=username,
            created_at=now,
            updated_at=now,
        )
        await self._write(user_id, profile.to_record(), merge=False)
        return profile

    async def update_profile(self, user_id, updates):
        """Merges raw record fields into the stored profile and returns it."""
        updates = dict(updates)
        updates["updated_at"] = utcnow().isoformat()
        await self._write(user_id, updates, merge=True)
        profile = await self.get_profile(user_id)
        if profile is None:
            raise DatabaseError(f"Profile {user_id} could not be read back.")
        return profile

    async def link_tracker(self, user_id, player):
        return await self.update_profile(user_id, {
            "valorant_tracker_url": player.tracker_url,
            "valorant_username": player.username,
            "rank_tier": player.rank.tier,
            "rank_division": player.rank.division,
            "rank_name": player.rank.tier_name,
            "rank_color": player.rank.color,
            "rank_icon": player.rank.icon,
            "rr": player.rr,
        })

    async def unlink_tracker(self, user_id):
        return await self.update_profile(user_id, {
            "valorant_tracker_url": None,
            "valorant_username": None,
            "rank_tier": None,
            "rank_division": None,
            "rank_name": None,
            "rank_color": None,
            "rank_icon": None,
            "rr": 0,
        })

    async def _write(self, user_id, payload, merge):
        if self.demo_mode:
            key = str(user_id)
            if merge:
                self.demo_profiles.setdefault(key, {"id": key}).update(payload)
            else:
                self.demo_profiles[key] = dict(payload)
            return
        try:
            self._document(user_id).set(payload, merge=merge)
        except Exception as e:
            logger.exception(f"❌ ERROR: writing profile {user_id}: {e}")
            raise DatabaseError(f"Profile update failed for {user_id}.") from e
