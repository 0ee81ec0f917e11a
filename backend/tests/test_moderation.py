"""Tests for comment auto-moderation (pure, no DB dependency)."""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from newsportal.config import DEFAULT_BLOCKED_WORDS, settings
from newsportal.services.moderation import ModerationPolicy, policy_from_settings


@pytest.fixture
def policy():
    return ModerationPolicy(DEFAULT_BLOCKED_WORDS)


class TestScenarios:
    """Reference comments and their expected initial approval."""

    def test_profanity_is_held(self, policy):
        assert policy.is_approved("anjing kamu jelek") is False

    def test_polite_comment_is_approved(self, policy):
        assert policy.is_approved("Artikel yang bagus, terima kasih") is True

    def test_link_is_held(self, policy):
        assert policy.is_approved("cek link ini https://spam.com") is False

    def test_short_comment_is_held(self, policy):
        assert policy.is_approved("ok") is False


class TestDenylist:
    """Blocked words match as case-insensitive substrings."""

    @pytest.mark.parametrize("word", DEFAULT_BLOCKED_WORDS)
    def test_every_default_word_blocks(self, policy, word):
        assert policy.is_approved(f"komentar {word} di sini") is False

    def test_mixed_case_matches(self, policy):
        assert policy.is_approved("Dasar AnJiNg liar") is False

    def test_substring_inside_word_matches(self, policy):
        """Matching is not word-boundary aware."""
        assert policy.is_approved("anjingnya lucu sekali") is False

    def test_injected_denylist_replaces_default(self):
        custom = ModerationPolicy(["kucing"])
        assert custom.is_approved("kucing oranye itu") is False
        assert custom.is_approved("anjing tetangga menggonggong") is True

    def test_empty_denylist_blocks_nothing_by_word(self):
        assert ModerationPolicy([]).is_approved("anjing kamu jelek") is True


class TestSpamHeuristics:
    """Links, short texts and long alphanumeric runs."""

    def test_plain_http_link_is_held(self, policy):
        assert policy.is_approved("lihat http://contoh.id sekarang") is False

    def test_uppercase_link_is_held(self, policy):
        assert policy.is_approved("lihat HTTPS://contoh.id sekarang") is False

    def test_https_word_without_scheme_separator_passes(self, policy):
        assert policy.is_approved("Situs ini sudah pakai https dengan aman") is True

    def test_length_five_passes(self, policy):
        assert policy.is_approved("bagus") is True

    def test_length_four_is_held(self, policy):
        assert policy.is_approved("oke!") is False

    def test_empty_string_is_held(self, policy):
        assert policy.is_approved("") is False

    def test_29_char_run_passes(self, policy):
        assert policy.is_approved("kode saya " + "a1" * 14 + "b") is True

    def test_30_char_run_is_held(self, policy):
        assert policy.is_approved("kode saya " + "a1" * 15) is False

    def test_punctuation_breaks_a_run(self, policy):
        text = "x" * 20 + "-" + "y" * 20
        assert policy.is_approved(text) is True

    def test_underscore_breaks_a_run(self, policy):
        text = "x" * 20 + "_" + "y" * 20
        assert policy.is_approved(text) is True


class TestEvaluate:
    """The detailed result reports every reason a comment was held."""

    def test_clean_comment_has_no_reasons(self, policy):
        result = policy.evaluate("Artikel yang bagus, terima kasih")
        assert result.approved is True
        assert result.reasons == []

    def test_multiple_reasons_collected(self, policy):
        result = policy.evaluate("bangsat https://x.id " + "z" * 30)
        assert result.approved is False
        assert result.reasons == ["blocked_word", "link", "alnum_run"]

    def test_too_short_reason(self, policy):
        assert policy.evaluate("hai").reasons == ["too_short"]

    def test_thresholds_are_configurable(self):
        strict = ModerationPolicy([], min_length=10, max_alnum_run=8)
        assert strict.evaluate("pendek").reasons == ["too_short"]
        assert strict.evaluate("kata yang ada di sini").reasons == []
        assert strict.evaluate("kalimat berisi abcdefgh").reasons == ["alnum_run"]


class TestPolicyFromSettings:
    """The deployment policy follows the MODERATION_* settings."""

    def test_uses_configured_values(self):
        policy = policy_from_settings(settings)
        assert policy.min_length == settings.MODERATION_MIN_LENGTH
        assert policy.max_alnum_run == settings.MODERATION_MAX_ALNUM_RUN
        assert set(policy.blocked_words) == {w.lower() for w in settings.MODERATION_BLOCKED_WORDS}

    def test_blocked_words_are_immutable(self):
        words = ["kasar"]
        policy = ModerationPolicy(words)
        words.append("santun")
        assert policy.blocked_words == ("kasar",)
        assert isinstance(policy.blocked_words, tuple)
