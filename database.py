import base64
import json

import firebase_admin
from firebase_admin import credentials, firestore

from utils.config import FIREBASE_CREDENTIALS_BASE64
from utils.logger_config import logger

# Configuration

TOURNAMENTS_COLLECTION = "tournaments"
TEAMS_SUBCOLLECTION = "teams"
USER_PROFILES_COLLECTION = "user_profiles"


def decode_credentials(b64_creds):
    b64_creds = b64_creds.strip()
    missing_padding = len(b64_creds) % 4
    if missing_padding:
        b64_creds += "=" * (4 - missing_padding)
    json_str = base64.b64decode(b64_creds).decode("utf-8")
    return json.loads(json_str)


def database_startup(b64_creds=FIREBASE_CREDENTIALS_BASE64):
    """Returns a Firestore client, or None to run the bot in demo mode."""
    if firebase_admin._apps:
        return firestore.client()
    if not b64_creds:
        logger.warning(
            "⚠️ No Firebase credentials found. Running in demo mode with sample data.",
        )
        return None
    try:
        cred = credentials.Certificate(decode_credentials(b64_creds))
        firebase_admin.initialize_app(cred)
        logger.info("✅ Firebase initialized successfully!")
        return firestore.client()
    except Exception as e:
        logger.exception(f"❌ ERROR: initializing Firebase, falling back to demo mode: {e}")
        return None
