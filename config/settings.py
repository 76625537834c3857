"""
Configuration Settings for the Community Client

This module centralizes all configuration settings for the community client,
including environment variables, API endpoints, and application constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from utils.exceptions import ConfigurationError

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(dotenv_path=os.path.join(APP_ROOT, '.env'))

# =============================================================================
# Community API Settings
# =============================================================================

API_BASE_URL = os.getenv("COMMUNITY_API_URL", "http://localhost:3000")
SITE_ORIGIN = os.getenv("COMMUNITY_SITE_ORIGIN", API_BASE_URL)

# Identity sent in the x-user-id header until a real auth provider is wired in
ACTING_USER_ID = os.getenv("COMMUNITY_USER_ID", "demo-user")
USER_ID_HEADER = "x-user-id"

REQUEST_TIMEOUT = float(os.getenv("COMMUNITY_REQUEST_TIMEOUT", "10"))   # Seconds per request

# =============================================================================
# Interaction Settings
# =============================================================================

COPY_CONFIRMATION_SECONDS = 2        # How long "Copied to clipboard!" stays visible
MAX_RECIPE_PHOTOS = 5                # Photos accepted per recipe
EMPTY_COMMENTS_PLACEHOLDER = "No comments yet. Be the first to comment!"
DELETE_RECIPE_CONFIRMATION = "Are you sure you want to delete this recipe? This action cannot be undone."

# Share targets
TWITTER_INTENT_URL = "https://twitter.com/intent/tweet"
FACEBOOK_SHARER_URL = "https://www.facebook.com/sharer/sharer.php"

# Success stories
DEFAULT_STORY_SORT = "likes"
STORY_SORT_OPTIONS = ["likes", "recent", "comments"]
FILTER_ALL = "all"


# =============================================================================
# Configuration Validation
# =============================================================================

def validate_settings():
    """
    Validate that all required settings are properly configured.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    errors = []

    url_settings = [
        ("COMMUNITY_API_URL", API_BASE_URL),
        ("COMMUNITY_SITE_ORIGIN", SITE_ORIGIN),
    ]

    for var_name, var_value in url_settings:
        if not var_value:
            errors.append(f"Missing required environment variable: {var_name}")
        elif not var_value.startswith(("http://", "https://")):
            errors.append(f"{var_name} must be an http(s) URL, got {var_value!r}")

    if not ACTING_USER_ID or not ACTING_USER_ID.strip():
        errors.append("COMMUNITY_USER_ID must not be empty")

    if REQUEST_TIMEOUT <= 0:
        errors.append(f"COMMUNITY_REQUEST_TIMEOUT must be positive, got {REQUEST_TIMEOUT}")

    numeric_validations = [
        ("COPY_CONFIRMATION_SECONDS", COPY_CONFIRMATION_SECONDS, 0, 60),
        ("MAX_RECIPE_PHOTOS", MAX_RECIPE_PHOTOS, 1, 50),
    ]

    for name, value, min_val, max_val in numeric_validations:
        if value < min_val or value > max_val:
            errors.append(f"{name} must be between {min_val} and {max_val}, got {value}")

    if DEFAULT_STORY_SORT not in STORY_SORT_OPTIONS:
        errors.append(f"DEFAULT_STORY_SORT must be one of {STORY_SORT_OPTIONS}, got {DEFAULT_STORY_SORT}")

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def get_config_summary() -> dict:
    """
    Returns a summary of current configuration.
    Useful for logging startup state.
    """
    return {
        "api": {
            "base_url": API_BASE_URL,
            "site_origin": SITE_ORIGIN,
            "timeout": REQUEST_TIMEOUT,
        },
        "acting_user": ACTING_USER_ID,
        "interaction": {
            "copy_confirmation_seconds": COPY_CONFIRMATION_SECONDS,
            "max_recipe_photos": MAX_RECIPE_PHOTOS,
            "default_story_sort": DEFAULT_STORY_SORT,
        },
    }
