#!/usr/bin/env python3
"""
Chinese Name Generators
=======================
Rule-based generation of Chinese given names:
- Lexicon: character knowledge base loaded from YAML
- Components: phonetic segmenter, candidate selector, compatibility filter,
  tone analyzer
- NameSynthesizer: orchestrates the components into three suggestions
"""

from .lexicon import (
    Gender,
    Position,
    CharacterEntry,
    Annotation,
    NO_ANNOTATION,
    RecommendedPair,
    CharacterLexicon,
    get_lexicon,
)
from .entropy import (
    TrueRandom,
    SeededRandom,
    get_rng,
)
from .base_generator import (
    ToneInfo,
    PhoneticSegmenter,
    CompatibilityFilter,
    ToneAnalyzer,
    CandidateSelector,
)
from .chinese_generator import (
    SUGGESTION_COUNT,
    CharacterBreakdown,
    NameSuggestion,
    NameSynthesizer,
    translate,
)

__all__ = [
    # Lexicon
    'Gender',
    'Position',
    'CharacterEntry',
    'Annotation',
    'NO_ANNOTATION',
    'RecommendedPair',
    'CharacterLexicon',
    'get_lexicon',
    # Randomness
    'TrueRandom',
    'SeededRandom',
    'get_rng',
    # Components
    'ToneInfo',
    'PhoneticSegmenter',
    'CompatibilityFilter',
    'ToneAnalyzer',
    'CandidateSelector',
    # Synthesis
    'SUGGESTION_COUNT',
    'CharacterBreakdown',
    'NameSuggestion',
    'NameSynthesizer',
    'translate',
]
