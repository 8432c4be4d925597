"""
Human-readable identifiers for emission runs.
"""

import random
import secrets

ADJECTIVES = [
    "bold", "brave", "calm", "cool", "dark", "deep", "fast", "glad",
    "gold", "keen", "kind", "light", "loud", "lucky", "mild", "neat",
    "proud", "pure", "quick", "safe", "sharp", "soft", "steady", "swift",
    "true", "warm", "wild", "wise", "young",
]

NOUNS = [
    "bell", "bird", "chime", "clock", "cloud", "dial", "dove", "fox",
    "gear", "hawk", "hour", "lion", "moon", "owl", "pulse", "rain",
    "river", "sand", "spring", "star", "sun", "tick", "tide", "wave",
    "wind", "wolf",
]


def generate_run_id() -> str:
    """Generate an id like 'quick-tide-3fa2'.

    The hex suffix keeps ids distinct when many runs share a process.
    """
    return f"{random.choice(ADJECTIVES)}-{random.choice(NOUNS)}-{secrets.token_hex(2)}"
