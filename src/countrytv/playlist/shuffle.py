"""Playback ordering helpers."""

import random
from typing import Optional

from .models import Song


def playable_songs(songs: list[Song]) -> list[Song]:
    """Songs the player can actually load (non-empty video id)."""
    return [s for s in songs if s.youtube_id]


def shuffle_songs(songs: list[Song], rng: Optional[random.Random] = None) -> list[Song]:
    """Fisher-Yates shuffle of a copy of songs."""
    rng = rng or random.Random()
    shuffled = list(songs)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
