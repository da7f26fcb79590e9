"""
Unit tests for language profiles.

Tests heading detection, rule-based classification, signal term lookup and
the read-only profile registry.
"""

import pytest

from legal_engine.services.errors import UnsupportedLanguageError
from legal_engine.services.language_profiles import (
    CLAUSE_TYPE_PRIORITY,
    OTHER_CLAUSE_TYPE,
    LanguageProfileRegistry,
    kanji_to_int,
    normalize_section_number,
)


class TestHeadingDetection:
    """Tests for section heading patterns."""

    def test_detect_article_roman_numerals(self, en_profile):
        assert en_profile.detect_heading("ARTICLE IV: Payment Terms") == ("article", "IV")

    def test_detect_section_multi_level(self, en_profile):
        assert en_profile.detect_heading("Section 12.10 Scope") == ("section", "12.10")

    def test_detect_numbered_multi_level(self, en_profile):
        assert en_profile.detect_heading("12.10 Scope of Services") == ("numbered", "12.10")

    def test_detect_numbered_single_level(self, en_profile):
        assert en_profile.detect_heading("3. Fees") == ("numbered", "3")
        assert en_profile.detect_heading("3) Fees") == ("numbered", "3")

    def test_detect_lettered(self, en_profile):
        assert en_profile.detect_heading("(a) the Services") == ("lettered", None)
        assert en_profile.detect_heading("(iv) any Deliverables") == ("lettered", None)

    def test_detect_definitions_and_exhibits(self, en_profile):
        assert en_profile.detect_heading("WHEREAS, the parties wish")[0] == "definitions"
        assert en_profile.detect_heading("EXHIBIT A")[0] == "exhibit"

    def test_plain_text_is_not_heading(self, en_profile):
        assert en_profile.detect_heading("The parties agree as follows.") is None
        assert en_profile.detect_heading("2025 was a good year") is None
        assert en_profile.detect_heading("   ") is None

    def test_japanese_article(self, profiles):
        assert profiles["ja"].detect_heading("第3条(解除)") == ("article", "3")

    def test_german_paragraph_sign(self, profiles):
        assert profiles["de"].detect_heading("§ 5 Haftung") == ("section", "5")

    def test_french_article(self, profiles):
        assert profiles["fr"].detect_heading("Article 2 - Résiliation") == ("article", "2")

    def test_japanese_kanji_article(self, profiles):
        assert profiles["ja"].detect_heading("第十二条（解除）") == ("article", "12")


class TestHeadingRemainder:
    """Tests for splitting a heading line into marker and remainder."""

    def test_inline_section(self, en_profile):
        heading = en_profile.match_heading("Section 2. Liability shall be unlimited.")

        assert heading.marker == "Section 2"
        assert heading.number == "2"
        assert heading.remainder == "Liability shall be unlimited."

    def test_numbered_title(self, en_profile):
        heading = en_profile.match_heading("3. Fees")
        assert (heading.marker, heading.remainder) == ("3.", "Fees")

    def test_japanese_inline_article(self, profiles):
        heading = profiles["ja"].match_heading("第1条 乙は損害を賠償する。")
        assert (heading.marker, heading.remainder) == ("第1条", "乙は損害を賠償する。")

    @pytest.mark.parametrize("remainder", ["", "PAYMENT TERMS", "Limitation of Liability", "Scope"])
    def test_titles(self, en_profile, remainder):
        assert en_profile.is_title(remainder) is True

    @pytest.mark.parametrize("remainder", [
        "Liability shall be unlimited.",
        "pay all fees when due",
        "The Provider may, at its sole discretion, suspend the Services at any time",
        "Definitions:",
    ])
    def test_clause_text(self, en_profile, remainder):
        assert en_profile.is_title(remainder) is False

    def test_other_language_titles(self, profiles):
        assert profiles["fr"].is_title("Droit applicable") is True
        assert profiles["ja"].is_title("(秘密保持)") is True
        assert profiles["ja"].is_title("乙は損害を賠償する。") is False


class TestSectionNumberNormalization:
    @pytest.mark.parametrize("numeral,expected", [
        ("一", 1), ("十", 10), ("十二", 12), ("二十三", 23), ("百五", 105), ("一〇", 10),
    ])
    def test_kanji_to_int(self, numeral, expected):
        assert kanji_to_int(numeral) == expected

    def test_normalize_section_number(self):
        assert normalize_section_number("三") == "3"
        assert normalize_section_number("2.1.") == "2.1"
        assert normalize_section_number("IV") == "IV"


class TestClassification:
    """Tests for ordered clause rules."""

    def test_rules_follow_priority_order(self, profiles):
        for profile in profiles.values():
            order = [rule.clause_type for rule in profile.clause_rules]
            assert order == [t for t in CLAUSE_TYPE_PRIORITY if t in order]

    def test_classify_indemnification(self, en_profile):
        clause_type, confidence = en_profile.classify("Each party shall indemnify the other.")
        assert clause_type == "Indemnification"
        assert confidence >= 1.0

    def test_first_matching_rule_wins(self, en_profile):
        clause_type, _ = en_profile.classify("The indemnifying party's liability is limited.")
        assert clause_type == "Indemnification"

    def test_classify_payment(self, en_profile):
        assert en_profile.classify("Payment is due within 30 days.")[0] == "Payment"

    def test_weak_signal_below_threshold(self, en_profile):
        assert en_profile.classify("Submitted to the court.") == (OTHER_CLAUSE_TYPE, 0.0)

    def test_unmatched_text_is_other(self, en_profile):
        assert en_profile.classify("The weather is pleasant.") == (OTHER_CLAUSE_TYPE, 0.0)

    def test_word_boundaries(self, en_profile):
        # "Prepaid" must not trigger the Payment rule
        assert en_profile.classify("Prepaid widgets arrive weekly.")[0] == OTHER_CLAUSE_TYPE

    def test_japanese_classification(self, profiles):
        assert profiles["ja"].classify("乙は、甲に生じた損害を賠償する責任を負う。")[0] == "Liability"

    def test_german_classification(self, profiles):
        assert profiles["de"].classify("Die Kündigung des Vertrags ist jederzeit möglich.")[0] == "Termination"

    def test_french_classification(self, profiles):
        assert profiles["fr"].classify("Le présent contrat est régi par le droit français.")[0] == "Jurisdiction"


class TestFindTerms:
    def test_distinct_lowercased_terms(self, en_profile):
        terms = en_profile.find_terms(
            en_profile.ambiguous_terms,
            "Reasonable and reasonable efforts, delivered promptly."
        )
        assert terms == ["reasonable", "promptly"]

    def test_no_terms(self, en_profile):
        assert en_profile.find_terms(en_profile.unlimited_liability, "Fees are fixed.") == []


class TestDocumentTypeMarkers:
    def test_english_markers(self, en_profile):
        assert en_profile.detect_document_type("MUTUAL NON-DISCLOSURE AGREEMENT") == "nda"
        assert en_profile.detect_document_type("Privacy Policy") == "privacy_policy"
        assert en_profile.detect_document_type("Terms of Service") == "terms"
        assert en_profile.detect_document_type("Software License Agreement") == "license"
        assert en_profile.detect_document_type("Consulting Agreement") is None


class TestRegistry:
    """Tests for the read-only profile registry."""

    def test_supported_languages(self, profiles):
        assert profiles.supported_languages == ["en", "ja", "de", "fr"]

    def test_get_profile(self, profiles):
        assert profiles.get_profile("de").code == "de"

    def test_unknown_language(self, profiles):
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            profiles.get_profile("xx")
        assert exc_info.value.language == "xx"
        assert exc_info.value.error_code == "UnsupportedLanguage"

    def test_registry_is_read_only(self, profiles):
        with pytest.raises(TypeError):
            profiles["xx"] = profiles["en"]

    def test_registry_from_profiles(self, en_profile):
        registry = LanguageProfileRegistry([en_profile])
        assert list(registry) == ["en"]
        assert len(registry) == 1

    @pytest.mark.parametrize("text,expected", [
        ("本契約は日本法に準拠する。", "ja"),
        ("Der Vertrag ist mit der Frist von drei Monaten kündbar und die Haftung ist begrenzt.", "de"),
        ("Le contrat est conclu pour une durée de deux ans et les parties sont liées par le présent accord.", "fr"),
        ("This Agreement shall be binding on the parties and their successors.", "en"),
        ("12345 67890", "en"),
    ])
    def test_detect_language(self, profiles, text, expected):
        assert profiles.detect_language(text) == expected
