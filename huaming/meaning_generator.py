#!/usr/bin/env python3
"""
Name Meaning Generator
======================

Composes human-readable explanations of Chinese names from templates.
Combines each character's gloss, cultural note and personality trait into a
single-character description, and both characters into a combined meaning
and cultural context.

Usage:
    composer = AnnotationComposer()
    composer.describe_character(entry)
    description = composer.describe_pair(first_entry, second_entry)
    print(description.meaning)
    print(description.cultural_context)
"""

import logging
from dataclasses import dataclass, fields, asdict
from string import Formatter
from typing import Dict, Optional

from .generators.lexicon import CharacterEntry, CharacterLexicon, get_lexicon, load_templates

logger = logging.getLogger(__name__)


# =============================================================================
# Template Fields
# =============================================================================

@dataclass(frozen=True)
class CharacterFields:
    """Slots of the single-character template."""
    glyph: str
    reading: str
    meaning: str
    cultural_note: str
    personality: str


@dataclass(frozen=True)
class PairFields:
    """Slots of the combination and cultural-context templates."""
    name: str
    first_glyph: str
    first_meaning: str
    first_cultural_note: str
    second_glyph: str
    second_meaning: str
    second_cultural_note: str
    overall_meaning: str
    cultural_value: str
    personality_traits: str


@dataclass(frozen=True)
class RecommendedFields:
    """Slots of the recommended-pair suffix."""
    pair_meaning: str
    pair_culture: str


@dataclass
class PairDescription:
    """Combined explanation of a two-character name."""
    meaning: str
    cultural_context: str


def template_slots(template: str) -> set:
    """Names of the {slots} used in a template."""
    return {name for _, name, _, _ in Formatter().parse(template) if name is not None}


def check_template(template: str, slots_type, context: str) -> str:
    """Reject templates that use slots `slots_type` does not provide."""
    if not isinstance(template, str):
        raise ValueError(f"{context} must be a string")
    allowed = {f.name for f in fields(slots_type)}
    unknown = template_slots(template) - allowed
    if unknown:
        raise ValueError(f"{context} uses unknown slot(s) {sorted(unknown)}; allowed: {sorted(allowed)}")
    return template


def render_template(template: str, values) -> str:
    """
    Fill a template from a fields dataclass.

    Substitution is a single pass: braces inside substituted values are
    copied through untouched.
    """
    return template.format_map(asdict(values))


# =============================================================================
# Annotation Composer
# =============================================================================

class AnnotationComposer:
    """
    Renders explanations for single characters and character pairs.

    Missing fields are shown with the placeholders from templates.yaml
    instead of being dropped.
    """

    def __init__(self, lexicon: CharacterLexicon = None, templates: Dict = None):
        self._lexicon = lexicon or get_lexicon()
        templates = templates if templates is not None else load_templates()

        self._single = check_template(
            self._require(templates, 'single_character'), CharacterFields, 'templates.single_character')
        self._combination = check_template(
            self._require(templates, 'combination'), PairFields, 'templates.combination')
        self._context = check_template(
            self._require(templates, 'cultural_context'), PairFields, 'templates.cultural_context')
        self._recommended = check_template(
            templates.get('recommended_suffix', ''), RecommendedFields, 'templates.recommended_suffix')

        placeholders = self._require(templates, 'placeholders')
        self._placeholders = {
            key: str(self._require(placeholders, key, 'templates.placeholders'))
            for key in ('reading', 'meaning', 'cultural_note', 'personality')
        }

    @staticmethod
    def _require(cfg: Dict, key: str, context: str = 'templates'):
        value = cfg.get(key) if isinstance(cfg, dict) else None
        if value is None:
            raise ValueError(f"{context}.{key} must be set in templates.yaml")
        return value

    def _field(self, value: Optional[str], slot: str) -> str:
        return value if value else self._placeholders[slot]

    def character_fields(self, entry: CharacterEntry) -> CharacterFields:
        """Template fields of an entry with placeholders filled in."""
        return CharacterFields(
            glyph=entry.glyph,
            reading=self._field(entry.reading, 'reading'),
            meaning=self._field(entry.meaning, 'meaning'),
            cultural_note=self._field(entry.cultural_note, 'cultural_note'),
            personality=self._field(entry.personality, 'personality'),
        )

    def describe_character(self, entry: CharacterEntry) -> str:
        """Explain one character."""
        return render_template(self._single, self.character_fields(entry))

    def describe_pair(self, first: CharacterEntry, second: CharacterEntry) -> PairDescription:
        """Explain a two-character name as a whole."""
        one = self.character_fields(first)
        two = self.character_fields(second)
        values = PairFields(
            name=first.glyph + second.glyph,
            first_glyph=one.glyph,
            first_meaning=one.meaning,
            first_cultural_note=one.cultural_note,
            second_glyph=two.glyph,
            second_meaning=two.meaning,
            second_cultural_note=two.cultural_note,
            overall_meaning=f"{one.meaning} and {two.meaning}",
            cultural_value=f"{one.cultural_note} combined with {two.cultural_note}",
            personality_traits=f"{one.personality} and {two.personality}",
        )
        meaning = render_template(self._combination, values)

        pair = self._lexicon.find_recommended(first.glyph, second.glyph)
        if pair is not None and self._recommended:
            logger.debug(f"'{values.name}' is a recommended pairing")
            meaning += render_template(
                self._recommended,
                RecommendedFields(pair_meaning=pair.meaning, pair_culture=pair.cultural_note),
            )

        return PairDescription(
            meaning=meaning,
            cultural_context=render_template(self._context, values),
        )


__all__ = [
    'AnnotationComposer',
    'PairDescription',
    'CharacterFields',
    'PairFields',
    'RecommendedFields',
    'render_template',
    'check_template',
    'template_slots',
]
