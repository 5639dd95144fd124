"""Shared helpers for the test suite."""
import os

REAL_CONFIG = {
    "apiKey": "AIzaSyTestKey0123456789",
    "authDomain": "pianoquest-test.firebaseapp.com",
    "projectId": "pianoquest-test",
    "storageBucket": "pianoquest-test.appspot.com",
    "messagingSenderId": "123456789012",
    "appId": "1:123456789012:web:abcdef0123456789",
}


def clean_environ():
    """os.environ without any Firebase-related variables."""
    return {
        key: value for key, value in os.environ.items()
        if not key.startswith("FIREBASE_") and key != "PIANOQUEST_FIREBASE_CONFIG"
    }
