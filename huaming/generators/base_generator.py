#!/usr/bin/env python3
"""
Name Generation Components
==========================
Building blocks shared by the Chinese name generator:
- Phonetic segmentation of Latin-script names
- Compatibility filtering of character pairs
- Tone pattern analysis
- Candidate character selection
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple, Optional, Iterable

from pypinyin import Style, pinyin
from pypinyin.contrib.tone_convert import to_tone3

from .entropy import get_rng
from .lexicon import (
    CharacterLexicon,
    CharacterEntry,
    Gender,
    Position,
    get_lexicon,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class ToneInfo:
    """Tone analysis of a two-character name."""
    tones: Tuple[int, ...]
    pattern: str   # e.g. "2-4"
    harmony: str   # 'good', 'avoid' or 'neutral'


def _ordered_union(*groups: Iterable[str]) -> Tuple[str, ...]:
    """Concatenate glyph groups, dropping repeats but keeping first-seen order."""
    merged = {}
    for group in groups:
        for glyph in group:
            merged.setdefault(glyph, None)
    return tuple(merged)


# =============================================================================
# Phonetic Segmenter
# =============================================================================

class PhoneticSegmenter:
    """
    Splits a lowercased name into syllable-like tokens.

    Scans left to right; a recognised digraph is emitted as one token,
    anything else one character at a time.
    """

    def __init__(self, lexicon: CharacterLexicon = None, digraphs: Iterable[str] = None):
        if digraphs is None:
            digraphs = (lexicon or get_lexicon()).digraphs
        self._digraphs = frozenset(d.lower() for d in digraphs)

    @property
    def digraphs(self):
        return self._digraphs

    def segment(self, name: str) -> List[str]:
        """
        Segment a name into tokens.

        >>> PhoneticSegmenter().segment("john")
        ['jo', 'h', 'n']
        """
        tokens = []
        position = 0
        while position < len(name):
            pair = name[position:position + 2]
            if len(pair) == 2 and pair in self._digraphs:
                tokens.append(pair)
                position += 2
                continue
            tokens.append(name[position])
            position += 1
        return tokens


# =============================================================================
# Compatibility Filter
# =============================================================================

class CompatibilityFilter:
    """Looks up characters that must not follow a given leading character."""

    def __init__(self, lexicon: CharacterLexicon = None):
        self._lexicon = lexicon or get_lexicon()

    def forbidden_followers(self, leading_glyph: str) -> frozenset:
        """All glyphs forbidden immediately after `leading_glyph`."""
        return self._lexicon.forbidden_followers(leading_glyph)

    def is_allowed(self, first: str, second: str) -> bool:
        """True unless (first, second) is a forbidden pair."""
        return second not in self.forbidden_followers(first)


# =============================================================================
# Tone Analyzer
# =============================================================================

class ToneAnalyzer:
    """
    Classifies the tone sequence of a name against the tone pattern table.

    A pattern listed as good (e.g. 2-4) reads smoothly; repeating the same
    tone (e.g. 3-3) is listed as one to avoid. Everything else is neutral.
    """

    def __init__(self, lexicon: CharacterLexicon = None):
        self._lexicon = lexicon or get_lexicon()

    def tone_of(self, entry: CharacterEntry) -> int:
        """Tone number 1-4 of an entry, 5 for the neutral tone."""
        if entry.reading:
            numbered = to_tone3(entry.reading, neutral_tone_with_five=True)
        else:
            numbered = pinyin(entry.glyph, style=Style.TONE3, neutral_tone_with_five=True)[0][0]
        if numbered and numbered[-1].isdigit():
            return int(numbered[-1])
        return 5

    def analyze(self, *entries: CharacterEntry) -> ToneInfo:
        tones = tuple(self.tone_of(entry) for entry in entries)
        harmony = 'neutral'
        for label, sequences in self._lexicon.tone_patterns.items():
            if tones in sequences:
                harmony = label
                break
        return ToneInfo(
            tones=tones,
            pattern='-'.join(str(t) for t in tones),
            harmony=harmony,
        )


# =============================================================================
# Candidate Selector
# =============================================================================

class CandidateSelector:
    """
    Chooses the characters of a two-character given name.

    The first character comes from the transliteration matches of a token
    together with the gender's first-position pool. The second comes from
    the recommended partners of the first together with the gender's
    last-position pool, minus anything forbidden after the first.
    Selection is uniform over the de-duplicated candidate set.

    Parameters
    ----------
    lexicon : CharacterLexicon, optional
        Knowledge base (shared default when omitted)
    rng : object, optional
        Random source with a `choice(seq)` method (fresh TrueRandom when omitted)
    compatibility : CompatibilityFilter, optional
        Forbidden-pair lookup
    """

    def __init__(self,
                 lexicon: CharacterLexicon = None,
                 rng=None,
                 compatibility: CompatibilityFilter = None):
        self._lexicon = lexicon or get_lexicon()
        self._rng = rng or get_rng()
        self._compatibility = compatibility or CompatibilityFilter(self._lexicon)

    def first_candidates(self, token: Optional[str], gender) -> Tuple[str, ...]:
        """Candidate glyphs for the first character."""
        gender = Gender.coerce(gender)
        return _ordered_union(
            self._lexicon.transliterations(token),
            self._lexicon.pool_glyphs(Position.FIRST, gender),
        )

    def second_candidates(self, gender, first_glyph: str) -> Tuple[str, ...]:
        """Candidate glyphs for the second character after `first_glyph`."""
        gender = Gender.coerce(gender)
        forbidden = self._compatibility.forbidden_followers(first_glyph)
        recommended = (pair.second for pair in self._lexicon.recommended_pairs(first_glyph, gender))
        merged = _ordered_union(recommended, self._lexicon.pool_glyphs(Position.LAST, gender))
        return tuple(glyph for glyph in merged if glyph not in forbidden)

    def select_first(self, token: Optional[str], gender) -> CharacterEntry:
        """Draw the first character for a token."""
        gender = Gender.coerce(gender)
        candidates = self.first_candidates(token, gender)
        if candidates:
            glyph = self._rng.choice(candidates)
        else:
            glyph = self._lexicon.default_glyph(gender)
            logger.debug(f"No first-character candidates for token {token!r}, using default '{glyph}'")
        return self._lexicon.resolve(glyph, Position.FIRST)

    def select_second(self, token: Optional[str], gender, first_entry: CharacterEntry) -> CharacterEntry:
        """Draw the second character to follow `first_entry`."""
        gender = Gender.coerce(gender)
        candidates = self.second_candidates(gender, first_entry.glyph)
        if candidates:
            glyph = self._rng.choice(candidates)
        else:
            glyph = self._fallback_glyph(gender, first_entry.glyph)
            logger.debug(
                f"No second-character candidates after '{first_entry.glyph}' "
                f"(token {token!r}), using default '{glyph}'"
            )
        return self._lexicon.resolve(glyph, Position.LAST)

    def _fallback_glyph(self, gender: Gender, first_glyph: str) -> str:
        """Default glyph for the gender, skipping any that are forbidden here."""
        forbidden = self._compatibility.forbidden_followers(first_glyph)
        others = [g for g in Gender if g is not gender]
        defaults = [self._lexicon.default_glyph(g) for g in [gender] + others]
        pooled = [
            glyph
            for position in (Position.LAST, Position.FIRST, Position.MIDDLE)
            for g in Gender
            for glyph in self._lexicon.pool_glyphs(position, g)
        ]
        for glyph in _ordered_union(defaults, pooled):
            if glyph not in forbidden:
                return glyph
        # CharacterLexicon rejects data where this can happen
        raise ValueError(f"No glyph may follow '{first_glyph}'")


__all__ = [
    'ToneInfo',
    'PhoneticSegmenter',
    'CompatibilityFilter',
    'ToneAnalyzer',
    'CandidateSelector',
]
