"""
Tests for Phonetic Segmentation
===============================
Tests for PhoneticSegmenter in huaming/generators/base_generator.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from huaming.generators.base_generator import PhoneticSegmenter


class TestSegmentExamples:
    """Segmentation with the bundled digraph set."""

    @pytest.fixture
    def segmenter(self):
        return PhoneticSegmenter()

    def test_emily_has_no_digraphs(self, segmenter):
        """No adjacent pair of 'emily' is a digraph."""
        assert segmenter.segment("emily") == ['e', 'm', 'i', 'l', 'y']

    def test_john_starts_with_jo(self, segmenter):
        """'jo' is a digraph, the rest is split letter by letter."""
        assert segmenter.segment("john") == ['jo', 'h', 'n']

    def test_empty_name(self, segmenter):
        """Empty input yields no tokens."""
        assert segmenter.segment("") == []

    def test_single_letter(self, segmenter):
        assert segmenter.segment("a") == ['a']

    def test_consonant_clusters(self, segmenter):
        """'ch' and 'ph' come out whole."""
        assert segmenter.segment("christopher") == ['ch', 'r', 'i', 's', 't', 'o', 'ph', 'e', 'r']

    def test_vowel_n_rhyme(self, segmenter):
        """'an' is consumed before 'na' can be considered."""
        assert segmenter.segment("anna") == ['an', 'n', 'a']

    def test_consecutive_digraphs(self, segmenter):
        assert segmenter.segment("joan") == ['jo', 'an']

    def test_quoted_on_digraph(self, segmenter):
        """'on' survives YAML loading as a string."""
        assert segmenter.segment("on") == ['on']

    def test_spaces_are_tokens(self, segmenter):
        assert segmenter.segment("jo an") == ['jo', ' ', 'an']


class TestSegmentProperties:
    """Purity and determinism."""

    @pytest.fixture
    def segmenter(self):
        return PhoneticSegmenter()

    @pytest.mark.parametrize("name", ["emily", "john", "theodore", "whitney", "", "xavier"])
    def test_deterministic(self, segmenter, name):
        """Identical input always yields identical output."""
        assert segmenter.segment(name) == segmenter.segment(name)

    @pytest.mark.parametrize("name", ["emily", "john", "theodore", "shannon"])
    def test_tokens_reassemble_input(self, segmenter, name):
        """Segmentation never drops or adds characters."""
        assert ''.join(segmenter.segment(name)) == name

    def test_returns_new_list(self, segmenter):
        first = segmenter.segment("john")
        first.append('x')
        assert segmenter.segment("john") == ['jo', 'h', 'n']

    def test_independent_instances_agree(self):
        assert PhoneticSegmenter().segment("phoebe") == PhoneticSegmenter().segment("phoebe")


class TestCustomDigraphs:
    """Segmenter with an explicit digraph set."""

    def test_custom_digraphs(self):
        segmenter = PhoneticSegmenter(digraphs=['ab'])
        assert segmenter.segment("abcab") == ['ab', 'c', 'ab']

    def test_no_digraphs(self):
        segmenter = PhoneticSegmenter(digraphs=[])
        assert segmenter.segment("john") == ['j', 'o', 'h', 'n']

    def test_digraphs_are_lowercased(self):
        segmenter = PhoneticSegmenter(digraphs=['JO'])
        assert 'jo' in segmenter.digraphs
        assert segmenter.segment("john") == ['jo', 'h', 'n']
