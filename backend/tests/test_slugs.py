"""
MiniNote Backend - Slug and Id Unit Tests
==========================================

What:  Tests for the slug grammar and random id generation.
Why:   Slugs become file names; the grammar is the first line of defence
       for the note root.
"""

import pytest

from mininote.services.slugs import ID_ALPHABET, generate_id, validate_slug


class TestValidateSlug:
    """Tests for validate_slug()."""

    @pytest.mark.parametrize(
        "slug",
        ["a", "abc", "Note_1", "with-dash", "A" * 64, "0", "_", "-"],
    )
    def test_accepts_grammar(self, slug):
        assert validate_slug(slug) is True

    @pytest.mark.parametrize(
        "slug",
        [
            "",
            "a" * 65,
            "has space",
            "dot.txt",
            "../etc",
            "a/b",
            "a\\b",
            "abc\n",
            "ümlaut",
            "semi;colon",
        ],
    )
    def test_rejects_everything_else(self, slug):
        assert validate_slug(slug) is False

    def test_rejects_non_strings(self):
        assert validate_slug(None) is False
        assert validate_slug(123) is False


class TestGenerateId:
    """Tests for generate_id()."""

    def test_alphabet_has_27_unambiguous_characters(self):
        assert len(ID_ALPHABET) == 27
        assert len(set(ID_ALPHABET)) == 27
        for ambiguous in "01ilov":
            assert ambiguous not in ID_ALPHABET

    def test_default_length_is_five(self):
        assert len(generate_id()) == 5

    def test_generate_five_uses_only_alphabet(self):
        for _ in range(200):
            note_id = generate_id(5)
            assert len(note_id) == 5
            assert set(note_id) <= set(ID_ALPHABET)

    def test_generated_ids_are_valid_slugs(self):
        assert validate_slug(generate_id(64))

    def test_ids_vary(self):
        assert len({generate_id(8) for _ in range(50)}) > 1

    @pytest.mark.parametrize("length", [0, -3])
    def test_rejects_non_positive_length(self, length):
        with pytest.raises(ValueError):
            generate_id(length)
