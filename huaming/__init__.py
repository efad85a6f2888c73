#!/usr/bin/env python3
"""
HuaMing - Chinese Name Suggestions for Latin-Script Names
=========================================================

An offline, rule-based engine that turns a name such as "Emily" into
culturally grounded two-character Chinese given names, each with a
reading, a combined meaning and a cultural explanation.

Quick Start
-----------
    from huaming import translate

    for suggestion in translate("Emily", "feminine"):
        print(suggestion.chinese_name, suggestion.pinyin)
        print(suggestion.meaning)

    # Reproducible output
    suggestions = translate("John", "masculine", seed=42)

    # Response dicts in the shape the web gateway returns
    payload = [s.to_dict() for s in suggestions]

Modules
-------
    huaming.generators        - Lexicon, segmenter, selector, synthesizer
    huaming.meaning_generator - Template-based explanations
    huaming.config            - .env configuration and gender profiles
    huaming.settings          - YAML application settings

CLI Usage
---------
    python -m huaming translate "Emily" --gender feminine
    python -m huaming segment "John"
    python -m huaming describe 明 华
"""

__version__ = "0.2.0"
__author__ = "HuaMing"

from typing import List

# =============================================================================
# Submodule Imports
# =============================================================================

from . import generators
from . import config
from . import settings

# =============================================================================
# Generator Imports
# =============================================================================

from .generators import (
    Gender,
    Position,
    CharacterEntry,
    Annotation,
    NO_ANNOTATION,
    CharacterLexicon,
    get_lexicon,
    TrueRandom,
    SeededRandom,
    get_rng,
    PhoneticSegmenter,
    CompatibilityFilter,
    ToneAnalyzer,
    CandidateSelector,
    SUGGESTION_COUNT,
    CharacterBreakdown,
    NameSuggestion,
    NameSynthesizer,
)
from .meaning_generator import AnnotationComposer, PairDescription

# =============================================================================
# Config Imports
# =============================================================================

from .config import (
    Config,
    get_config,
    load_env,
    GENDER_PROFILES,
    list_genders,
    resolve_gender,
)


def translate(english_name: str, gender: str = None, seed: int = None) -> List[NameSuggestion]:
    """
    Generate three Chinese name suggestions.

    Gender aliases ("male", "f", ...) are accepted. Missing arguments fall
    back to the environment configuration (HUAMING_DEFAULT_GENDER,
    HUAMING_SEED, HUAMING_LEXICON_DIR).
    """
    cfg = config.config()
    gender = resolve_gender(gender if gender is not None else cfg.default_gender)
    synthesizer = NameSynthesizer(
        seed=seed if seed is not None else cfg.seed,
        data_dir=cfg.lexicon_dir,
    )
    return synthesizer.translate(english_name, gender)


__all__ = [
    '__version__',
    'translate',
    # Generators
    'Gender',
    'Position',
    'CharacterEntry',
    'Annotation',
    'NO_ANNOTATION',
    'CharacterLexicon',
    'get_lexicon',
    'TrueRandom',
    'SeededRandom',
    'get_rng',
    'PhoneticSegmenter',
    'CompatibilityFilter',
    'ToneAnalyzer',
    'CandidateSelector',
    'SUGGESTION_COUNT',
    'CharacterBreakdown',
    'NameSuggestion',
    'NameSynthesizer',
    'AnnotationComposer',
    'PairDescription',
    # Config
    'Config',
    'get_config',
    'load_env',
    'GENDER_PROFILES',
    'list_genders',
    'resolve_gender',
]
