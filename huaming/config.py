#!/usr/bin/env python3
"""
Configuration Management
========================
Loads engine settings from a .env file and the process environment.
Provides the gender profiles understood by the name engine.
"""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from .settings import get_setting, resolve_path


# =============================================================================
# Gender Profiles
# =============================================================================
# The three gender tags the knowledge base is organised by. Anything else is
# treated as neutral by the engine.

GENDER_PROFILES = {
    "masculine": {
        "aliases": ["male", "m", "boy"],
        "description": "Characters of ambition, strength and scholarship",
    },
    "feminine": {
        "aliases": ["female", "f", "girl"],
        "description": "Characters of elegance, grace and precious jade",
    },
    "neutral": {
        "aliases": ["n", "any", "unisex"],
        "description": "Characters of peace, brightness and virtue",
    },
}


def list_genders() -> dict:
    """List the gender profiles with descriptions."""
    return {
        name: {
            "aliases": list(p["aliases"]),
            "description": p["description"],
        }
        for name, p in GENDER_PROFILES.items()
    }


def gender_choices() -> list:
    """All accepted gender spellings, canonical names first."""
    choices = list(GENDER_PROFILES)
    for profile in GENDER_PROFILES.values():
        choices.extend(profile["aliases"])
    return choices


def resolve_gender(value) -> str:
    """
    Map a gender spelling or alias to its canonical profile name.

    Unknown or empty values resolve to "neutral".
    """
    if value is None:
        return "neutral"
    key = str(value).strip().lower()
    if key in GENDER_PROFILES:
        return key
    for name, profile in GENDER_PROFILES.items():
        if key in profile["aliases"]:
            return name
    return "neutral"


# =============================================================================
# Application Configuration
# =============================================================================

@dataclass
class Config:
    """Application configuration"""
    seed: Optional[int] = None
    lexicon_dir: Optional[Path] = None
    default_gender: str = "neutral"
    log_level: str = "WARNING"

    @property
    def is_seeded(self) -> bool:
        return self.seed is not None

    @property
    def has_custom_lexicon(self) -> bool:
        return self.lexicon_dir is not None


def load_env(env_path: Path = None) -> dict:
    """Load environment variables from .env file."""
    if env_path is None:
        # Look for .env in the project root
        env_path = Path(__file__).parent.parent / '.env'

    env_vars = {}
    if env_path.exists():
        for line in env_path.read_text(encoding='utf-8').splitlines():
            line = line.strip()
            if '=' in line and not line.startswith('#'):
                key, value = line.split('=', 1)
                env_vars[key.strip()] = value.strip()
                os.environ.setdefault(key.strip(), value.strip())

    return env_vars


def _parse_seed(value: Optional[str]) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"HUAMING_SEED must be an integer, got '{value}'")


def get_config(env_path: Path = None) -> Config:
    """Get configuration from environment."""
    env = load_env(env_path)

    def lookup(key: str) -> Optional[str]:
        return env.get(key) or os.environ.get(key)

    lexicon_dir = lookup('HUAMING_LEXICON_DIR')
    return Config(
        seed=_parse_seed(lookup('HUAMING_SEED')),
        lexicon_dir=resolve_path(lexicon_dir) if lexicon_dir else None,
        default_gender=lookup('HUAMING_DEFAULT_GENDER') or get_setting('engine.default_gender', 'neutral'),
        log_level=(lookup('HUAMING_LOG_LEVEL') or get_setting('logging.level', 'WARNING')).upper(),
    )


# Singleton config
_config = None

def config() -> Config:
    """Get the singleton config instance."""
    global _config
    if _config is None:
        _config = get_config()
    return _config
