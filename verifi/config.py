"""
Configuration module for Verifi.

Environment variables are read once at import time.
"""

import logging
import os

from .signing import SignatureScheme, StructuralScheme, get_scheme

logger = logging.getLogger(__name__)

# ============================================================
# Environment Configuration
# ============================================================

ENV = os.getenv("VERIFI_ENV", "dev")  # dev|stage|prod

# structural|secp256k1|ed25519
SIGNATURE_SCHEME = os.getenv("VERIFI_SIGNATURE_SCHEME", "structural")

# Logging
LOG_LEVEL = os.getenv("VERIFI_LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("VERIFI_LOG_JSON", "true").lower() in ("1", "true", "yes")
LOG_FILE = os.getenv("VERIFI_LOG_FILE") or None


# ============================================================
# Feature Flags
# ============================================================

def is_production() -> bool:
    """Check if running in production mode."""
    return ENV == "prod"


def is_debug() -> bool:
    """Check if debug mode is enabled."""
    return os.getenv("VERIFI_DEBUG", "").lower() in ("1", "true", "yes")


def default_scheme() -> SignatureScheme:
    """Build the configured signature scheme."""
    scheme = get_scheme(SIGNATURE_SCHEME)
    if is_production() and scheme.name == StructuralScheme.name:
        logger.warning(
            "Structural signature scheme selected in production; "
            "signatures are not cryptographically verified"
        )
    return scheme
