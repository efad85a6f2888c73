#!/usr/bin/env python3
"""
Chinese Name Generator
======================
Rule-based synthesis of Chinese given names from Latin-script names.

Pipeline per request:
1. Lowercase and segment the input into phonetic tokens
2. Draw a first character from the transliterations of the first token
   plus the gender's first-position pool
3. Draw a second character from recommended partners plus the gender's
   last-position pool, never forming a forbidden pair
4. Compose meaning, cultural context and per-character notes

Three suggestions are sampled independently per request. They are not
de-duplicated, so two of them can coincide.

Usage:
    gen = NameSynthesizer(seed=7)
    for suggestion in gen.translate("Emily", "feminine"):
        print(suggestion.chinese_name, suggestion.pinyin)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional

from .base_generator import (
    PhoneticSegmenter,
    CompatibilityFilter,
    ToneAnalyzer,
    CandidateSelector,
)
from .entropy import get_rng
from .lexicon import CharacterLexicon, Gender, get_lexicon, load_templates
from ..meaning_generator import AnnotationComposer

logger = logging.getLogger(__name__)

# Suggestions returned per request
SUGGESTION_COUNT = 3


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CharacterBreakdown:
    """One character of a suggestion."""
    character: str
    pinyin: str
    meaning: str
    description: str


@dataclass
class NameSuggestion:
    """A suggested two-character Chinese given name."""
    chinese_name: str
    pinyin: str
    meaning: str
    cultural_reference: str
    characters: List[CharacterBreakdown] = field(default_factory=list)
    tone_pattern: str = ""
    tone_harmony: str = ""
    recommended: bool = False
    gender: str = Gender.NEUTRAL.value
    method: str = "rules"

    def to_dict(self) -> Dict[str, Any]:
        """Response shape shared with the AI provider path."""
        return {
            'chineseName': self.chinese_name,
            'pinyin': self.pinyin,
            'meaning': self.meaning,
            'culturalReference': self.cultural_reference,
            'characters': [
                {'character': c.character, 'pinyin': c.pinyin, 'meaning': c.meaning}
                for c in self.characters
            ],
            'culturalContext': {
                'overall': self.cultural_reference,
                'individual': [c.description for c in self.characters],
            },
            'tonePattern': self.tone_pattern,
            'toneHarmony': self.tone_harmony,
            'recommended': self.recommended,
            'gender': self.gender,
            'method': self.method,
        }


# =============================================================================
# Name Synthesizer
# =============================================================================

class NameSynthesizer:
    """
    Generates Chinese name suggestions for a Latin-script name.

    The lexicon, segmenter, compatibility filter and composer are read-only
    after construction, so one synthesizer can serve concurrent callers.
    The random source is the only mutable state: when none is injected a
    fresh one is created for every `translate` call.

    Parameters
    ----------
    lexicon : CharacterLexicon, optional
        Knowledge base; built from `data_dir` (or the bundled data) when omitted
    rng : object, optional
        Random source shared by every call (caller handles thread safety)
    seed : int, optional
        Seed for the per-call random source; each call replays the same draws
    data_dir : Path, optional
        Alternate directory holding the lexicon YAML files
    """

    def __init__(self,
                 lexicon: CharacterLexicon = None,
                 rng=None,
                 seed: int = None,
                 data_dir: Path = None):
        self._lexicon = lexicon or get_lexicon(data_dir)
        self._rng = rng
        self._seed = seed
        self._segmenter = PhoneticSegmenter(self._lexicon)
        self._compatibility = CompatibilityFilter(self._lexicon)
        self._tones = ToneAnalyzer(self._lexicon)
        self._composer = AnnotationComposer(self._lexicon, load_templates(data_dir))

    @property
    def lexicon(self) -> CharacterLexicon:
        return self._lexicon

    @property
    def segmenter(self) -> PhoneticSegmenter:
        return self._segmenter

    @property
    def composer(self) -> AnnotationComposer:
        return self._composer

    def selector(self, rng=None) -> CandidateSelector:
        """Candidate selector drawing from `rng` (or this synthesizer's source)."""
        return CandidateSelector(
            self._lexicon,
            rng or self._rng or get_rng(self._seed),
            self._compatibility,
        )

    def translate(self, english_name: str, gender=Gender.NEUTRAL) -> List[NameSuggestion]:
        """
        Generate exactly three name suggestions.

        Parameters
        ----------
        english_name : str
            Latin-script name; may be empty
        gender : Gender or str
            masculine, feminine or neutral; anything else is treated as neutral

        Returns
        -------
        list[NameSuggestion]
            Three independently sampled suggestions
        """
        gender = Gender.coerce(gender)
        tokens = self._segmenter.segment(english_name.lower())
        first_token: Optional[str] = tokens[0] if tokens else None
        second_token: Optional[str] = tokens[1] if len(tokens) > 1 else first_token

        logger.debug(f"Segmented {english_name!r} into {tokens}")

        selector = self.selector()
        suggestions = []
        for _ in range(SUGGESTION_COUNT):
            suggestions.append(self._suggest(selector, first_token, second_token, gender))
        return suggestions

    def _suggest(self,
                 selector: CandidateSelector,
                 first_token: Optional[str],
                 second_token: Optional[str],
                 gender: Gender) -> NameSuggestion:
        first = selector.select_first(first_token, gender)
        second = selector.select_second(second_token, gender, first)

        description = self._composer.describe_pair(first, second)
        tone_info = self._tones.analyze(first, second)
        fields = [self._composer.character_fields(entry) for entry in (first, second)]

        return NameSuggestion(
            chinese_name=first.glyph + second.glyph,
            pinyin=f"{fields[0].reading} {fields[1].reading}",
            meaning=description.meaning,
            cultural_reference=description.cultural_context,
            characters=[
                CharacterBreakdown(
                    character=entry.glyph,
                    pinyin=values.reading,
                    meaning=values.meaning,
                    description=self._composer.describe_character(entry),
                )
                for entry, values in zip((first, second), fields)
            ],
            tone_pattern=tone_info.pattern,
            tone_harmony=tone_info.harmony,
            recommended=self._lexicon.find_recommended(first.glyph, second.glyph) is not None,
            gender=gender.value,
        )


def translate(english_name: str, gender=Gender.NEUTRAL, seed: int = None) -> List[NameSuggestion]:
    """Generate three suggestions with the bundled knowledge base."""
    return NameSynthesizer(seed=seed).translate(english_name, gender)


__all__ = [
    'SUGGESTION_COUNT',
    'CharacterBreakdown',
    'NameSuggestion',
    'NameSynthesizer',
    'translate',
]
