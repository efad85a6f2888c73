"""
Tests for Chinese Name Generator
================================
Tests for NameSynthesizer in huaming/generators/chinese_generator.py and the
package-level translate() entry point.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import huaming
from scripted_rng import FixedSequence
from huaming.generators import (
    Gender,
    NameSynthesizer,
    Position,
    SUGGESTION_COUNT,
    get_lexicon,
    translate,
)
from huaming.generators.lexicon import load_templates

NAMES = ["Emily", "John", "Thea", "Christopher", "Anna", "Xavier", "Joan", "Mark"]


class TestSuggestionCount:
    """Every request yields exactly three suggestions."""

    @pytest.mark.parametrize("name", NAMES + ["", "Q"])
    @pytest.mark.parametrize("gender", ["masculine", "feminine", "neutral"])
    def test_three_suggestions(self, name, gender):
        suggestions = NameSynthesizer(seed=1).translate(name, gender)
        assert len(suggestions) == SUGGESTION_COUNT == 3

    def test_two_character_names(self):
        for suggestion in NameSynthesizer(seed=2).translate("Emily", "feminine"):
            assert len(suggestion.chinese_name) == 2
            assert len(suggestion.characters) == 2
            assert len(suggestion.pinyin.split(' ')) == 2


class TestInvariants:
    """Properties that hold for every draw."""

    @pytest.fixture
    def lexicon(self):
        return get_lexicon()

    @pytest.mark.parametrize("name,gender", [("Thea", "feminine"), ("Mark", "masculine"), ("Anna", "neutral")])
    def test_no_forbidden_pairs(self, lexicon, name, gender):
        for seed in range(60):
            for suggestion in NameSynthesizer(seed=seed).translate(name, gender):
                first, second = suggestion.chinese_name
                assert second not in lexicon.forbidden_followers(first)

    def test_masculine_first_character(self, lexicon):
        """Masculine first characters come from transliterations or masculine pools only."""
        allowed = set(lexicon.transliterations('jo')) | set(
            lexicon.pool_glyphs(Position.FIRST, Gender.MASCULINE))
        feminine_only = set(lexicon.pool_glyphs(Position.FIRST, Gender.FEMININE)) - allowed
        for seed in range(60):
            for suggestion in NameSynthesizer(seed=seed).translate("John", "masculine"):
                assert suggestion.chinese_name[0] in allowed
                assert suggestion.chinese_name[0] not in feminine_only

    def test_empty_name_uses_pool(self, lexicon):
        neutral_first = set(lexicon.pool_glyphs(Position.FIRST, Gender.NEUTRAL))
        for seed in range(20):
            for suggestion in NameSynthesizer(seed=seed).translate("", "neutral"):
                assert suggestion.chinese_name[0] in neutral_first


class TestDeterminism:
    """Seeded and scripted random sources."""

    def test_seed_reproducible(self):
        assert NameSynthesizer(seed=5).translate("John", "masculine") == \
            NameSynthesizer(seed=5).translate("John", "masculine")

    def test_seed_replayed_per_call(self):
        synthesizer = NameSynthesizer(seed=9)
        assert synthesizer.translate("Emily", "feminine") == synthesizer.translate("Emily", "feminine")

    def test_fixed_sequence(self):
        """Index 0 everywhere picks the first transliteration and first pool glyph."""
        suggestions = NameSynthesizer(rng=FixedSequence([0])).translate("john", "masculine")
        assert [s.chinese_name for s in suggestions] == ['乔杰', '乔杰', '乔杰']
        assert suggestions[0].pinyin == 'qiáo jié'

    def test_case_insensitive(self):
        upper = NameSynthesizer(rng=FixedSequence([0])).translate("JOHN", "masculine")
        lower = NameSynthesizer(rng=FixedSequence([0])).translate("john", "masculine")
        assert upper == lower

    def test_shared_rng_advances(self):
        """An injected source is shared across calls and keeps advancing."""
        rng = FixedSequence([0, 1])
        synthesizer = NameSynthesizer(rng=rng)
        synthesizer.translate("john", "masculine")
        assert len(rng.calls) == 6


class TestSuggestionContent:
    """Meaning, context and breakdown of a suggestion."""

    @pytest.fixture
    def recommended(self):
        # 志 is index 4 of the 'jo' masculine candidates, 华 index 0 after it
        return NameSynthesizer(rng=FixedSequence([4, 0])).translate("john", "masculine")[0]

    @pytest.fixture
    def transliterated(self):
        return NameSynthesizer(rng=FixedSequence([0])).translate("john", "masculine")[0]

    def test_recommended_pair(self, recommended):
        assert recommended.chinese_name == '志华'
        assert recommended.recommended
        assert 'Recognised pairing: Ambitious and magnificent' in recommended.meaning

    def test_tone_analysis(self, recommended):
        assert recommended.tone_pattern == '4-2'
        assert recommended.tone_harmony == 'good'

    def test_placeholders_in_context(self, transliterated):
        assert not transliterated.recommended
        assert 'no cultural note available' in transliterated.cultural_reference
        assert 'Represents exceptional ability' in transliterated.cultural_reference

    def test_character_breakdown(self, transliterated):
        first, second = transliterated.characters
        assert first.character == '乔'
        assert first.pinyin == 'qiáo'
        assert first.meaning == 'unknown meaning'
        assert second.character == '杰'
        assert second.meaning == 'outstanding, extraordinary'
        assert second.description.startswith('杰(jié)')

    def test_method_and_gender(self, transliterated):
        assert transliterated.method == 'rules'
        assert transliterated.gender == 'masculine'

    def test_templates_unaffected_by_caller_edits(self):
        """Editing loaded templates does not change later synthesizers."""
        load_templates()['combination'] = 'CHANGED {name}'
        suggestion = NameSynthesizer(seed=1).translate("John", "masculine")[0]
        assert suggestion.meaning.startswith('The name ')

    def test_unknown_gender(self):
        suggestions = NameSynthesizer(seed=1).translate("Emily", "robot")
        assert all(s.gender == 'neutral' for s in suggestions)


class TestToDict:
    """Serialized response shape."""

    @pytest.fixture
    def data(self):
        return NameSynthesizer(rng=FixedSequence([4, 0])).translate("john", "masculine")[0].to_dict()

    def test_keys(self, data):
        for key in ['chineseName', 'pinyin', 'meaning', 'culturalReference', 'characters', 'culturalContext']:
            assert key in data

    def test_characters(self, data):
        assert data['chineseName'] == '志华'
        assert [c['character'] for c in data['characters']] == ['志', '华']
        assert set(data['characters'][0]) == {'character', 'pinyin', 'meaning'}

    def test_cultural_context(self, data):
        assert data['culturalContext']['overall'] == data['culturalReference']
        assert len(data['culturalContext']['individual']) == 2

    def test_extra_fields(self, data):
        assert data['tonePattern'] == '4-2'
        assert data['recommended'] is True
        assert data['method'] == 'rules'


class TestEntryPoints:
    """Module and package level helpers."""

    def test_generators_translate(self):
        assert len(translate("Anna", "feminine", seed=1)) == 3

    def test_package_translate_alias(self):
        """Gender aliases such as 'female' are accepted."""
        suggestions = huaming.translate("Anna", "female", seed=1)
        assert len(suggestions) == 3
        assert all(s.gender == 'feminine' for s in suggestions)

    def test_version(self):
        assert huaming.__version__
