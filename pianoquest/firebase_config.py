"""
Firebase client configuration for PianoQuest.

The defaults below are placeholders. Real values come from the Firebase Console
(Project settings > Your apps > Web app) and are injected at runtime from
firebase_config.json or FIREBASE_* environment variables, so no project
credentials need to live in the source tree.

Only client-side Firebase config belongs here, never service account keys.
"""
import json
import logging
import os
from pathlib import Path
from typing import Optional, Dict, Any, List, Iterable

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

# Firebase web config (placeholders - replace via firebase_config.json or env)
FIREBASE_CONFIG = {
    "apiKey": "your-api-key-here",
    "authDomain": "your-project-id.firebaseapp.com",
    "projectId": "your-project-id",
    "storageBucket": "your-project-id.appspot.com",
    "messagingSenderId": "your-sender-id",
    "appId": "your-app-id",
}

REQUIRED_KEYS = (
    "apiKey",
    "authDomain",
    "projectId",
    "storageBucket",
    "messagingSenderId",
    "appId",
)

# Passed through when present, never required
OPTIONAL_KEYS = ("databaseURL", "measurementId")

ENV_VARS = {
    "apiKey": "FIREBASE_API_KEY",
    "authDomain": "FIREBASE_AUTH_DOMAIN",
    "projectId": "FIREBASE_PROJECT_ID",
    "storageBucket": "FIREBASE_STORAGE_BUCKET",
    "messagingSenderId": "FIREBASE_MESSAGING_SENDER_ID",
    "appId": "FIREBASE_APP_ID",
    "databaseURL": "FIREBASE_DATABASE_URL",
    "measurementId": "FIREBASE_MEASUREMENT_ID",
}

PLACEHOLDER_VALUES = frozenset(FIREBASE_CONFIG.values())
PLACEHOLDER_PREFIX = "your-"

CONFIG_FILENAME = "firebase_config.json"
CONFIG_PATH_ENV = "PIANOQUEST_FIREBASE_CONFIG"


class FirebaseConfigError(ValueError):
    """Raised when the Firebase configuration record is incomplete or unreadable."""

    def __init__(self, message: str, keys: Optional[List[str]] = None):
        super().__init__(message)
        self.keys = list(keys or [])


def get_firebase_config() -> dict:
    """Return the default Firebase configuration."""
    return FIREBASE_CONFIG.copy()


def validate_config(config: Dict[str, Any]) -> Dict[str, str]:
    """
    Check that every required key is present and holds a non-empty string.

    Placeholder values pass; use find_placeholder_fields() to detect them.
    Unknown keys are dropped so the initializer only sees Firebase fields.

    Returns:
        A new dict containing the required keys and any optional keys supplied.

    Raises:
        FirebaseConfigError: If keys are missing or empty.
    """
    if not isinstance(config, dict):
        raise FirebaseConfigError(
            f"Firebase config must be a mapping, got {type(config).__name__}"
        )

    missing = [key for key in REQUIRED_KEYS if key not in config]
    empty = [
        key for key in REQUIRED_KEYS
        if key in config and (not isinstance(config[key], str) or not config[key].strip())
    ]
    empty += [
        key for key in OPTIONAL_KEYS
        if config.get(key) and not isinstance(config[key], str)
    ]
    if missing or empty:
        parts = []
        if missing:
            parts.append(f"missing: {', '.join(missing)}")
        if empty:
            parts.append(f"empty or not a string: {', '.join(empty)}")
        raise FirebaseConfigError(
            "Invalid Firebase config (" + "; ".join(parts) + ")",
            keys=missing + empty,
        )

    unknown = [key for key in config if key not in REQUIRED_KEYS and key not in OPTIONAL_KEYS]
    if unknown:
        logger.warning("Ignoring unknown Firebase config keys: %s", ", ".join(sorted(unknown)))

    clean = {key: config[key] for key in REQUIRED_KEYS}
    for key in OPTIONAL_KEYS:
        if config.get(key):
            clean[key] = config[key]
    return clean


def find_placeholder_fields(config: Dict[str, Any]) -> List[str]:
    """Return the keys that still hold the shipped placeholder values."""
    fields = []
    for key, value in config.items():
        if not isinstance(value, str):
            continue
        if value in PLACEHOLDER_VALUES or PLACEHOLDER_PREFIX in value:
            fields.append(key)
    return fields


def is_placeholder_config(config: Dict[str, Any]) -> bool:
    return bool(find_placeholder_fields(config))


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load a Firebase config JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Firebase config not found at {path}. "
            f"Copy firebase_config.example.json to {CONFIG_FILENAME} and fill in "
            "the values from the Firebase Console."
        )

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FirebaseConfigError(f"Firebase config at {path} is not valid UTF-8 JSON: {e}") from e

    if not isinstance(data, dict):
        raise FirebaseConfigError(f"Firebase config at {path} must contain a JSON object")
    return data


def find_config_file(extra_locations: Optional[Iterable[Path]] = None) -> Optional[Path]:
    """
    Look for firebase_config.json in the usual places.

    Order: $PIANOQUEST_FIREBASE_CONFIG, any extra locations, the working
    directory, then the project root.
    """
    config_locations = []
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        config_locations.append(Path(env_path).expanduser())
    if extra_locations:
        config_locations.extend(Path(p) for p in extra_locations)
    config_locations.extend([
        Path.cwd() / CONFIG_FILENAME,
        Path(__file__).parent.parent / CONFIG_FILENAME,  # project root
    ])

    for path in config_locations:
        if path.is_file():
            return path
    return None


def get_env_overrides() -> Dict[str, str]:
    """Return the config values set through FIREBASE_* environment variables."""
    overrides = {}
    for key, var in ENV_VARS.items():
        value = os.getenv(var)
        if value:
            overrides[key] = value
    return overrides


def load_firebase_config(config_path: Optional[Path] = None, use_env: bool = True) -> Dict[str, str]:
    """
    Build the effective Firebase config.

    Layers, lowest precedence first: placeholder defaults, the JSON config
    file, then FIREBASE_* environment variables (a .env file is loaded first
    but never overrides variables already set).

    Args:
        config_path: Explicit config file. Must exist when given. If None, the
            first file found by find_config_file() is used, if any.
        use_env: Apply environment variable overrides.
    """
    config: Dict[str, Any] = get_firebase_config()

    if config_path is None:
        config_path = find_config_file()
    if config_path is not None:
        logger.debug("Loading Firebase config from %s", config_path)
        config.update(load_config_file(config_path))

    if use_env:
        # search from the working directory, not from this module's install location
        load_dotenv(find_dotenv(usecwd=True))
        overrides = get_env_overrides()
        if overrides:
            logger.debug("Firebase config overridden from environment: %s", ", ".join(sorted(overrides)))
        config.update(overrides)

    config = validate_config(config)

    placeholders = find_placeholder_fields(config)
    if placeholders:
        logger.warning(
            "Firebase config still uses placeholder values for: %s. "
            "Set them in %s or the FIREBASE_* environment variables.",
            ", ".join(placeholders), CONFIG_FILENAME,
        )
    return config


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """Mask a secret for display, keeping only the first few characters."""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return value[:visible] + "..."
