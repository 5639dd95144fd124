"""PianoQuest Firebase client bootstrap."""

__version__ = "1.0.0"
