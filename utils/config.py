import os

from dotenv import load_dotenv

load_dotenv()

# Secrets

DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")
FIREBASE_CREDENTIALS_BASE64 = os.getenv("FIREBASE_CREDENTIALS_BASE64")
SENTRY_DSN = os.getenv("SENTRY_DSN")

# Runtime

ENV = os.getenv("ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
BOT_PREFIX = os.getenv("BOT_PREFIX", "!")


def parse_role_ids(raw):
    """Parses a comma separated list of Discord role ids.

    Blank entries and anything that is not an integer are ignored.
    """
    if not raw:
        return frozenset()
    role_ids = set()
    for part in raw.split(","):
        part = part.strip()
        if part.isdigit():
            role_ids.add(int(part))
    return frozenset(role_ids)


ADMIN_ROLE_IDS = parse_role_ids(os.getenv("ADMIN_ROLE_IDS"))

# Seconds the simulated tracker lookup waits before answering.
VERIFY_DELAY_SECONDS = float(os.getenv("VERIFY_DELAY_SECONDS", "1.5"))
