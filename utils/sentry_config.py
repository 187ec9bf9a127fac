import logging

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from utils.config import ENV, SENTRY_DSN

logger = logging.getLogger(__name__)


def setup_sentry(dsn=SENTRY_DSN, environment=ENV):
    if sentry_sdk.get_client().is_active():
        return
    if not dsn:
        logger.warning("⚠️ SENTRY_DSN not found. Sentry is DISABLED.")
        return
    sentry_logging = LoggingIntegration(
        level=logging.INFO,
        event_level=logging.ERROR,
    )
    try:
        sentry_sdk.init(
            dsn=dsn,
            integrations=[sentry_logging],
            traces_sample_rate=1.0 if environment != "production" else 0.2,
            send_default_pii=False,
            attach_stacktrace=True,
            environment=environment,
        )
        logger.info(f"✅ Sentry tracking initialized in {environment} mode.")
    except Exception as e:
        logger.error(f"❌ Failed to initialize Sentry: {e}")
