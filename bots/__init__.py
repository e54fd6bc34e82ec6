"""Computer-player strategies for Hearts."""

from .base import Difficulty, PlayView
from .dispatch import select_lead, select_follow, select_pass, select_play, select_slough

__all__ = [
    "Difficulty",
    "PlayView",
    "select_lead",
    "select_follow",
    "select_slough",
    "select_pass",
    "select_play",
]
