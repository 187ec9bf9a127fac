class TournamentBotError(Exception):
    """Base exception for all bot errors."""
    def __init__(self, message: str = "An unexpected error occurred."):
        # The base exception has no prefix to add, so it takes the message as is.
        self.message = message
        super().__init__(self.message)

class TrackerError(TournamentBotError):
    """Base exception for all tracker profile related errors."""
    def __init__(self, detail: str = "The tracker profile could not be read."):
        prefix = "📡 **Tracker Issue:**"
        self.message = f"{prefix} {detail}"
        super().__init__(self.message)

class InvalidTrackerURLError(TrackerError):
    """Raised when a URL does not point at a tracker.gg Valorant profile."""
    def __init__(
        self,
        detail: str = "Please use a tracker.gg URL "
        "(e.g. https://tracker.gg/valorant/profile/riot/username%23tag).",
    ):
        prefix = "🔗 **Invalid URL:**"
        self.message = f"{prefix} {detail}"
        TournamentBotError.__init__(self, self.message)

class ProfileLookupError(TrackerError):
    """Raised when a well formed tracker URL yields no player profile."""
    def __init__(self, detail: str = "Player not found."):
        prefix = "🔍 **Search Error:**"
        self.message = f"{prefix} {detail}"
        TournamentBotError.__init__(self, self.message)

class TournamentNotFoundError(TournamentBotError):
    """Raised when a tournament id does not exist."""
    def __init__(self, detail: str = "Tournament not found."):
        prefix = "🏆 **Tournament Error:**"
        self.message = f"{prefix} {detail}"
        super().__init__(self.message)

class RegistrationError(TournamentBotError):
    """Raised when a team cannot be registered for a tournament."""
    def __init__(self, detail: str = "Team registration failed."):
        prefix = "📝 **Registration Error:**"
        self.message = f"{prefix} {detail}"
        super().__init__(self.message)

class InvalidFilterError(TournamentBotError):
    """Raised when a listing filter has an unknown status or region."""
    def __init__(self, detail: str = "Unknown filter value."):
        prefix = "🔎 **Filter Error:**"
        self.message = f"{prefix} {detail}"
        super().__init__(self.message)

class InvalidTournamentDataError(TournamentBotError):
    """Raised when tournament creation or edit arguments are malformed."""
    def __init__(self, detail: str = "Invalid tournament data."):
        prefix = "🛠️ **Tournament Data Error:**"
        self.message = f"{prefix} {detail}"
        super().__init__(self.message)

class DatabaseError(TournamentBotError):
    """Base exception for all database related errors."""
    def __init__(self, detail: str = "Failed to update database records."):
        prefix = "💾 **Database Error:**"
        self.message = f"{prefix} {detail}"
        super().__init__(self.message)
