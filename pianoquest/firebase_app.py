"""Firebase initialization for PianoQuest.

``app`` is the client handle built once at import time from the effective
config (see firebase_config.load_firebase_config). Other modules use it as::

    from pianoquest.firebase_app import app
    db = app.database()
"""
import logging
from pathlib import Path
from typing import Optional, Dict, Any

import pyrebase
import firebase_admin
from firebase_admin import credentials

from pianoquest.firebase_config import load_firebase_config, validate_config

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "https://{project_id}-default-rtdb.firebaseio.com"

_app = None


def _with_database_url(config: Dict[str, str]) -> Dict[str, str]:
    """Pyrebase requires databaseURL; derive the default RTDB URL when absent."""
    if config.get("databaseURL"):
        return config
    config = dict(config)
    config["databaseURL"] = DEFAULT_DATABASE_URL.format(project_id=config["projectId"])
    return config


def initialize_firebase(config: Optional[Dict[str, Any]] = None):
    """
    Initialize the Firebase client SDK.

    Args:
        config: Firebase web config. If None, it is loaded from
            firebase_config.json and the FIREBASE_* environment variables.

    Returns:
        The handle returned by pyrebase.initialize_app, unchanged.
    """
    if config is None:
        config = load_firebase_config()
    else:
        config = validate_config(config)

    config = _with_database_url(config)
    try:
        firebase = pyrebase.initialize_app(config)
    except Exception as e:
        logger.error("Error initializing Firebase for project %s: %s", config["projectId"], e)
        raise

    logger.info("Firebase initialized for project %s", config["projectId"])
    return firebase


def get_app():
    """Return the shared Firebase handle, initializing it on first use."""
    global _app
    if _app is None:
        _app = initialize_firebase()
    return _app


def reset_app() -> None:
    """Forget the shared handle so the next get_app() re-reads the config."""
    global _app
    _app = None


def initialize_admin_app(admin_key_path, config: Optional[Dict[str, Any]] = None, name: Optional[str] = None):
    """
    Initialize the Firebase Admin SDK with a service account key.

    For server-side tooling only; the client app never ships the admin key.
    An app already registered under the same name is returned as-is.
    """
    if isinstance(admin_key_path, str):
        admin_key_path = Path(admin_key_path)

    app_name = name or firebase_admin._DEFAULT_APP_NAME
    if app_name in firebase_admin._apps:
        return firebase_admin.get_app(app_name)

    if not admin_key_path.exists():
        raise FileNotFoundError(
            f"Admin key file not found: {admin_key_path}\n"
            "Please download the service account key from Firebase Console."
        )

    if config is None:
        config = load_firebase_config()
    else:
        config = validate_config(config)
    config = _with_database_url(config)

    options = {
        'databaseURL': config['databaseURL'],
        'projectId': config['projectId'],
        'storageBucket': config['storageBucket'],
    }
    cred = credentials.Certificate(str(admin_key_path))
    admin_app = firebase_admin.initialize_app(cred, options, name=app_name)
    logger.info("Firebase Admin SDK initialized for project %s", config['projectId'])
    return admin_app


app = get_app()
