#!/usr/bin/env python3
"""
Character Lexicon
=================
Loads the character knowledge base from YAML files and indexes it for
constant-time lookup by phonetic fragment, by (position, gender) pool and
by glyph.

Data files (all in this directory unless another data directory is given):
- characters.yaml     position pools, cultural annotations, per-gender defaults
- transliteration.yaml digraph set and fragment -> glyph table
- combinations.yaml   forbidden pairs, recommended pairs, tone patterns
- templates.yaml      explanation templates and missing-field placeholders

Usage:
    from huaming.generators.lexicon import get_lexicon, Gender, Position

    lexicon = get_lexicon()
    lexicon.transliterations('jo')            # ('乔', '焦', '娇', '佼')
    lexicon.pool_glyphs(Position.FIRST, Gender.FEMININE)
    lexicon.annotation('明').meaning          # 'bright, clear, intelligent'
"""

import copy
import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Tuple, Optional, Any, FrozenSet

import pypinyin
import yaml

logger = logging.getLogger(__name__)

LEXICON_DIR = Path(__file__).parent


# =============================================================================
# Enums and Data Classes
# =============================================================================

class Gender(str, Enum):
    """Gender affinity of a character."""
    MASCULINE = "masculine"
    FEMININE = "feminine"
    NEUTRAL = "neutral"

    @classmethod
    def coerce(cls, value) -> "Gender":
        """Convert a tag to a Gender, falling back to neutral for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.debug(f"Unrecognized gender {value!r}, using neutral pool")
            return cls.NEUTRAL


class Position(str, Enum):
    """Position affinity of a character within a given name."""
    FIRST = "first"
    MIDDLE = "middle"
    LAST = "last"


@dataclass(frozen=True)
class CharacterEntry:
    """A single glyph with its reading and cultural metadata."""
    glyph: str
    reading: Optional[str] = None
    meaning: Optional[str] = None
    cultural_note: Optional[str] = None
    personality: Optional[str] = None
    usage: Optional[str] = None
    gender: Gender = Gender.NEUTRAL
    position: Position = Position.FIRST


@dataclass(frozen=True)
class Annotation:
    """Cultural annotation of a glyph."""
    meaning: Optional[str] = None
    cultural_note: Optional[str] = None
    personality: Optional[str] = None
    combinations: Tuple[str, ...] = ()
    available: bool = True


# Marker returned for glyphs missing from the annotation table
NO_ANNOTATION = Annotation(available=False)


@dataclass(frozen=True)
class RecommendedPair:
    """A vetted two-character combination."""
    first: str
    second: str
    meaning: str
    cultural_note: str
    gender: Gender


# =============================================================================
# Config Loaders
# =============================================================================

@lru_cache(maxsize=16)
def _parse_yaml(directory: Path, filename: str) -> Dict:
    """Parse a YAML file from a lexicon data directory (once per file)."""
    filepath = Path(directory) / filename
    if not filepath.exists():
        raise ValueError(f"Missing lexicon data file: {filepath}")
    with open(filepath, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _load_yaml(directory: Path, filename: str) -> Dict:
    """Private copy of a parsed data file; the cached parse is never handed out."""
    return copy.deepcopy(_parse_yaml(directory, filename))


def load_characters(data_dir: Path = None) -> Dict:
    """Load character pools, annotations and defaults."""
    return _load_yaml(Path(data_dir or LEXICON_DIR), 'characters.yaml')


def load_transliteration(data_dir: Path = None) -> Dict:
    """Load the digraph set and transliteration table."""
    return _load_yaml(Path(data_dir or LEXICON_DIR), 'transliteration.yaml')


def load_combinations(data_dir: Path = None) -> Dict:
    """Load forbidden/recommended pairs and tone patterns."""
    return _load_yaml(Path(data_dir or LEXICON_DIR), 'combinations.yaml')


def load_templates(data_dir: Path = None) -> Dict:
    """Load explanation templates."""
    return _load_yaml(Path(data_dir or LEXICON_DIR), 'templates.yaml')


def _require_cfg(cfg: Dict[str, Any], key: str, context: str):
    value = cfg.get(key) if isinstance(cfg, dict) else None
    if value is None:
        raise ValueError(f"{context}.{key} must be set in the lexicon data")
    return value


def _check_glyph(glyph: Any, context: str) -> str:
    if not isinstance(glyph, str) or len(glyph) != 1:
        raise ValueError(f"{context}: expected a single character, got {glyph!r}")
    return glyph


def pinyin_reading(glyph: str) -> Optional[str]:
    """Tone-marked reading of a glyph, or None for non-Han characters."""
    result = pypinyin.pinyin(glyph, style=pypinyin.Style.TONE)
    if not result or not result[0]:
        return None
    reading = result[0][0]
    return None if reading == glyph else reading


# =============================================================================
# Character Lexicon
# =============================================================================

class CharacterLexicon:
    """
    Read-only index over the character knowledge base.

    All tables are built once in the constructor and exposed through
    tuples, frozensets and read-only mappings.
    """

    def __init__(self, characters: Dict, transliteration: Dict, combinations: Dict):
        self._build_pools(_require_cfg(characters, 'pools', 'characters'))
        self._build_annotations(characters.get('annotations') or {})
        self._build_defaults(_require_cfg(characters, 'defaults', 'characters'))
        self._build_transliteration(transliteration)
        self._build_combinations(combinations)
        self._check_fallbacks()

    @classmethod
    def from_directory(cls, data_dir: Path = None) -> "CharacterLexicon":
        """Build a lexicon from the YAML files in a data directory."""
        return cls(
            load_characters(data_dir),
            load_transliteration(data_dir),
            load_combinations(data_dir),
        )

    # -------------------------------------------------------------------------
    # Index construction
    # -------------------------------------------------------------------------

    def _build_pools(self, pools: Dict):
        index: Dict[Tuple[Position, Gender], Tuple[CharacterEntry, ...]] = {}
        by_glyph: Dict[str, CharacterEntry] = {}
        readings: Dict[str, str] = {}

        # Iterate in position order so glyph metadata prefers the first pool
        for position in Position:
            genders = pools.get(position.value) or {}
            for gender_key, raw_entries in genders.items():
                try:
                    gender = Gender(gender_key)
                except ValueError:
                    raise ValueError(f"characters.pools.{position.value}: unknown gender '{gender_key}'")
                context = f"characters.pools.{position.value}.{gender.value}"
                seen = set()
                entries = []
                for raw in raw_entries or []:
                    glyph = _check_glyph(_require_cfg(raw, 'glyph', context), context)
                    if glyph in seen:
                        raise ValueError(f"{context}: duplicate glyph '{glyph}'")
                    seen.add(glyph)
                    entry = CharacterEntry(
                        glyph=glyph,
                        reading=raw.get('reading'),
                        meaning=raw.get('meaning'),
                        cultural_note=raw.get('culture'),
                        personality=raw.get('personality'),
                        usage=raw.get('usage'),
                        gender=gender,
                        position=position,
                    )
                    entries.append(entry)
                    by_glyph.setdefault(glyph, entry)
                    if entry.reading:
                        readings.setdefault(glyph, entry.reading)
                index[(position, gender)] = tuple(entries)

        unknown = set(pools) - {p.value for p in Position}
        if unknown:
            raise ValueError(f"characters.pools: unknown position(s) {sorted(unknown)}")

        self._pools = MappingProxyType(index)
        self._entries = MappingProxyType(by_glyph)
        self._readings = readings

    def _build_annotations(self, table: Dict):
        annotations: Dict[str, Annotation] = {}

        # Pool glosses first, explicit annotation table entries override them
        for entry in self._entries.values():
            if entry.meaning or entry.cultural_note or entry.personality:
                annotations[entry.glyph] = Annotation(
                    meaning=entry.meaning,
                    cultural_note=entry.cultural_note,
                    personality=entry.personality,
                )

        for glyph, raw in table.items():
            _check_glyph(glyph, 'characters.annotations')
            raw = raw or {}
            annotations[glyph] = Annotation(
                meaning=raw.get('meaning'),
                cultural_note=raw.get('culture'),
                personality=raw.get('personality'),
                combinations=tuple(raw.get('combinations') or ()),
            )
            if raw.get('reading'):
                self._readings.setdefault(glyph, raw['reading'])

        self._annotations = MappingProxyType(annotations)
        self._readings = MappingProxyType(self._readings)

    def _build_defaults(self, defaults: Dict):
        resolved = {}
        for gender in Gender:
            glyph = _require_cfg(defaults, gender.value, 'characters.defaults')
            resolved[gender] = _check_glyph(glyph, 'characters.defaults')
        self._defaults = MappingProxyType(resolved)

    def _build_transliteration(self, transliteration: Dict):
        digraphs = set()
        for digraph in _require_cfg(transliteration, 'digraphs', 'transliteration'):
            if not isinstance(digraph, str) or len(digraph) != 2:
                # YAML turns a bare `on` into True; it has to be quoted
                raise ValueError(f"transliteration.digraphs: expected two letters, got {digraph!r}")
            digraphs.add(digraph.lower())
        self._digraphs = frozenset(digraphs)

        fragments = {}
        for fragment, glyphs in _require_cfg(transliteration, 'fragments', 'transliteration').items():
            if not isinstance(fragment, str):
                raise ValueError(f"transliteration.fragments: key {fragment!r} must be a quoted string")
            context = f"transliteration.fragments.{fragment}"
            # Ordered de-duplication
            unique = dict.fromkeys(_check_glyph(g, context) for g in glyphs or [])
            fragments[fragment.lower()] = tuple(unique)
        self._fragments = MappingProxyType(fragments)

    def _build_combinations(self, combinations: Dict):
        forbidden: Dict[str, set] = {}
        for pair in combinations.get('forbidden') or []:
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                raise ValueError(f"combinations.forbidden: expected a pair, got {pair!r}")
            first = _check_glyph(pair[0], 'combinations.forbidden')
            second = _check_glyph(pair[1], 'combinations.forbidden')
            forbidden.setdefault(first, set()).add(second)
        self._forbidden = MappingProxyType({k: frozenset(v) for k, v in forbidden.items()})

        recommended: Dict[Gender, Dict[str, List[RecommendedPair]]] = {}
        for gender_key, pairs in (combinations.get('recommended') or {}).items():
            gender = Gender(gender_key)
            context = f"combinations.recommended.{gender.value}"
            by_first = recommended.setdefault(gender, {})
            for raw in pairs or []:
                chars = _require_cfg(raw, 'chars', context)
                if len(chars) != 2:
                    raise ValueError(f"{context}: expected two chars, got {chars!r}")
                pair = RecommendedPair(
                    first=_check_glyph(chars[0], context),
                    second=_check_glyph(chars[1], context),
                    meaning=raw.get('meaning', ''),
                    cultural_note=raw.get('culture', ''),
                    gender=gender,
                )
                by_first.setdefault(pair.first, []).append(pair)
        self._recommended = MappingProxyType({
            gender: MappingProxyType({k: tuple(v) for k, v in by_first.items()})
            for gender, by_first in recommended.items()
        })

        patterns = {}
        for label, sequences in (combinations.get('tone_patterns') or {}).items():
            patterns[label] = frozenset(tuple(int(t) for t in seq) for seq in sequences or [])
        self._tone_patterns = MappingProxyType(patterns)

    def _check_fallbacks(self):
        # Every leading glyph must leave at least one default or pooled glyph to follow it
        safe = set(self._defaults.values()) | set(self._entries)
        for leading, followers in self._forbidden.items():
            if safe <= followers:
                raise ValueError(
                    f"combinations.forbidden: no default or pooled glyph may follow '{leading}'"
                )

    # -------------------------------------------------------------------------
    # Phonetic lookups
    # -------------------------------------------------------------------------

    @property
    def digraphs(self) -> FrozenSet[str]:
        """Two-letter clusters treated as single tokens."""
        return self._digraphs

    def transliterations(self, fragment: Optional[str]) -> Tuple[str, ...]:
        """Glyphs approximating a Latin fragment (empty when unknown)."""
        if not fragment:
            return ()
        return self._fragments.get(fragment.lower(), ())

    def fragments(self) -> List[str]:
        """All fragments with transliteration entries."""
        return sorted(self._fragments)

    # -------------------------------------------------------------------------
    # Pool lookups
    # -------------------------------------------------------------------------

    def pool(self, position: Position, gender) -> Tuple[CharacterEntry, ...]:
        """
        Entries for a (position, gender) pool.

        Falls back to the neutral pool when the gender has no entries there.
        """
        position = Position(position)
        gender = Gender.coerce(gender)
        entries = self._pools.get((position, gender), ())
        if not entries and gender is not Gender.NEUTRAL:
            logger.debug(f"No {gender.value} pool at position '{position.value}', using neutral pool")
            entries = self._pools.get((position, Gender.NEUTRAL), ())
        return entries

    def pool_glyphs(self, position: Position, gender) -> Tuple[str, ...]:
        """Glyphs of a (position, gender) pool, with neutral fallback."""
        return tuple(entry.glyph for entry in self.pool(position, gender))

    def default_glyph(self, gender) -> str:
        """Glyph used when a candidate set is empty."""
        return self._defaults[Gender.coerce(gender)]

    # -------------------------------------------------------------------------
    # Glyph lookups
    # -------------------------------------------------------------------------

    def annotation(self, glyph: str) -> Annotation:
        """Cultural annotation of a glyph, or NO_ANNOTATION when absent."""
        annotation = self._annotations.get(glyph)
        if annotation is None:
            logger.debug(f"No annotation for glyph '{glyph}'")
            return NO_ANNOTATION
        return annotation

    def reading(self, glyph: str) -> Optional[str]:
        """Reading of a glyph from the lexicon, else from pypinyin."""
        reading = self._readings.get(glyph)
        if reading:
            return reading
        return pinyin_reading(glyph)

    def resolve(self, glyph: str, position: Position = Position.FIRST) -> CharacterEntry:
        """
        Build a CharacterEntry for any glyph.

        Pool metadata (usage, gender) is kept when the glyph is pooled; the
        meaning, cultural note and personality come from the annotation
        table. Unannotated fields are left as None.
        """
        pooled = self._entries.get(glyph)
        annotation = self.annotation(glyph)
        return CharacterEntry(
            glyph=glyph,
            reading=self.reading(glyph),
            meaning=annotation.meaning,
            cultural_note=annotation.cultural_note,
            personality=annotation.personality,
            usage=pooled.usage if pooled else 'transliteration',
            gender=pooled.gender if pooled else Gender.NEUTRAL,
            position=Position(position),
        )

    # -------------------------------------------------------------------------
    # Combination lookups
    # -------------------------------------------------------------------------

    def forbidden_followers(self, glyph: str) -> FrozenSet[str]:
        """Glyphs that must never directly follow `glyph`."""
        return self._forbidden.get(glyph, frozenset())

    def recommended_pairs(self, glyph: str, gender) -> Tuple[RecommendedPair, ...]:
        """
        Recommended pairs led by `glyph` for a gender.

        Genders without a recommendation list use the neutral list.
        """
        gender = Gender.coerce(gender)
        by_first = self._recommended.get(gender)
        if by_first is None:
            by_first = self._recommended.get(Gender.NEUTRAL, {})
        return by_first.get(glyph, ())

    def find_recommended(self, first: str, second: str) -> Optional[RecommendedPair]:
        """The recommended pair (first, second) under any gender, if vetted."""
        for by_first in self._recommended.values():
            for pair in by_first.get(first, ()):
                if pair.second == second:
                    return pair
        return None

    @property
    def tone_patterns(self):
        """Tone pattern label -> set of (tone, tone) sequences."""
        return self._tone_patterns

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def stats(self) -> Dict[str, Any]:
        """Size of each table."""
        return {
            'pools': {
                f"{position.value}.{gender.value}": len(entries)
                for (position, gender), entries in self._pools.items()
            },
            'glyphs': len(self._entries),
            'annotations': len(self._annotations),
            'fragments': len(self._fragments),
            'digraphs': len(self._digraphs),
            'forbidden_pairs': sum(len(v) for v in self._forbidden.values()),
            'recommended_pairs': sum(
                len(pairs) for by_first in self._recommended.values() for pairs in by_first.values()
            ),
        }


@lru_cache(maxsize=4)
def get_lexicon(data_dir: Path = None) -> CharacterLexicon:
    """Shared lexicon for a data directory, built once per process."""
    return CharacterLexicon.from_directory(data_dir)


__all__ = [
    'Gender',
    'Position',
    'CharacterEntry',
    'Annotation',
    'NO_ANNOTATION',
    'RecommendedPair',
    'CharacterLexicon',
    'get_lexicon',
    'pinyin_reading',
    'load_characters',
    'load_transliteration',
    'load_combinations',
    'load_templates',
    'LEXICON_DIR',
]
