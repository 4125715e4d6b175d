"""Tests for MPN suffix grammar, search variations and equivalence."""

import pytest
from mpn_mcp.mpn import (
    NormalizedMPN,
    clean_token,
    get_package_suffix,
    get_search_variations,
    is_equivalent_mpn,
    normalize,
    strip_package_suffix,
)


SUFFIXED = [
    ("MAX3483EESA+", "MAX3483EESA", "+"),
    ("MAX485ESA+", "MAX485ESA", "+"),
    ("MAX3483EESA+T", "MAX3483EESA", "+T"),
    ("LTC2053HMS8#PBF", "LTC2053HMS8", "#PBF"),
    ("LT1117CST#PBF", "LT1117CST", "#PBF"),
    ("LT1117CST#TR", "LT1117CST", "#TR"),
    ("LTC2053HMS8#TRPBF", "LTC2053HMS8", "#TRPBF"),
    ("LTC2053HMS8#TRMPBF", "LTC2053HMS8", "#TRMPBF"),
    ("TJA1050T/CM,118", "TJA1050T", "/CM,118"),
    ("MCP2551-I/SN", "MCP2551-I", "/SN"),
    ("NC7WZ04,315", "NC7WZ04", ",315"),
    ("LM358N /NOPB", "LM358N", " /NOPB"),
    ("MAX485ESA +T", "MAX485ESA", " +T"),
]

UNSUFFIXED = ["ADS1115IDGSR", "STM32F103C8T6", "LM358N", "NC7WZ04G", "IRFP460"]


class TestStripPackageSuffix:
    """Test delimiter-anchored suffix removal."""

    @pytest.mark.parametrize("mpn,base,suffix", SUFFIXED)
    def test_strips_suffix(self, mpn, base, suffix):
        assert strip_package_suffix(mpn) == base

    @pytest.mark.parametrize("mpn", UNSUFFIXED)
    def test_trailing_letter_is_not_a_suffix(self, mpn):
        assert strip_package_suffix(mpn) == mpn

    @pytest.mark.parametrize("mpn", [None, "", "   "])
    def test_blank(self, mpn):
        assert strip_package_suffix(mpn) == ""

    def test_trims_whitespace(self):
        assert strip_package_suffix("  TEST  ") == "TEST"
        assert strip_package_suffix("  MAX3483EESA+  ") == "MAX3483EESA"

    def test_unknown_hash_code_kept(self):
        assert strip_package_suffix("ABC123#XYZ") == "ABC123#XYZ"

    def test_delimiter_alone_is_kept(self):
        assert strip_package_suffix("+") == "+"


class TestGetPackageSuffix:
    """Test suffix extraction."""

    @pytest.mark.parametrize("mpn,base,suffix", SUFFIXED)
    def test_returns_delimiter_and_payload(self, mpn, base, suffix):
        assert get_package_suffix(mpn) == suffix

    @pytest.mark.parametrize("mpn", UNSUFFIXED + [None, "", "   "])
    def test_none_without_delimiter(self, mpn):
        assert get_package_suffix(mpn) is None

    def test_trimmed_input(self):
        assert get_package_suffix("  MAX3483EESA+  ") == "+"

    @pytest.mark.parametrize("mpn", [m for m, _, _ in SUFFIXED] + UNSUFFIXED + ["  LM358N  "])
    def test_round_trip(self, mpn):
        assert strip_package_suffix(mpn) + (get_package_suffix(mpn) or "") == mpn.strip()


class TestNormalizedMPN:
    """Test the parsed view."""

    def test_parse_with_suffix(self):
        parsed = NormalizedMPN.parse(" TJA1050T/CM,118 ")
        assert parsed.original == "TJA1050T/CM,118"
        assert parsed.base == "TJA1050T"
        assert parsed.suffix == "/CM,118"
        assert parsed.has_suffix

    def test_parse_without_suffix(self):
        parsed = NormalizedMPN.parse("LM358N")
        assert parsed == NormalizedMPN(original="LM358N", base="LM358N", suffix=None)
        assert not parsed.has_suffix

    def test_parse_blank(self):
        assert NormalizedMPN.parse(None) == NormalizedMPN(original="", base="", suffix=None)

    def test_frozen(self):
        parsed = NormalizedMPN.parse("LM358N")
        with pytest.raises(AttributeError):
            parsed.base = "LM358"


class TestSearchVariations:
    """Test lookup variation ordering."""

    def test_with_suffix(self):
        assert get_search_variations("LTC2053HMS8#PBF") == ["LTC2053HMS8#PBF", "LTC2053HMS8"]

    def test_without_suffix(self):
        assert get_search_variations("STM32F103C8T6") == ["STM32F103C8T6"]

    @pytest.mark.parametrize("mpn", [None, "", "  "])
    def test_blank(self, mpn):
        assert get_search_variations(mpn) == []

    @pytest.mark.parametrize("mpn", [m for m, _, _ in SUFFIXED] + UNSUFFIXED)
    def test_original_first_and_length(self, mpn):
        variations = get_search_variations(f" {mpn} ")
        assert variations[0] == mpn
        assert len(variations) == (1 if get_package_suffix(mpn) is None else 2)
        assert len(set(variations)) == len(variations)


class TestEquivalence:
    """Test suffix-insensitive equivalence."""

    @pytest.mark.parametrize("a,b", [
        ("TJA1050T/CM,118", "TJA1050T"),
        ("MAX3483EESA+", "MAX3483EESA"),
        ("LTC2053HMS8#PBF", "LTC2053HMS8#TR"),
        ("LTC2053HMS8#PBF", "LTC2053HMS8#TRPBF"),
        ("ltc2053hms8#pbf", "LTC2053HMS8"),
        ("NC7WZ04,315", "NC7WZ04"),
        ("LM358N /NOPB", "LM358N"),
        ("LM358N /NOPB", "LM358N/NOPB"),
    ])
    def test_equivalent(self, a, b):
        assert is_equivalent_mpn(a, b)
        assert is_equivalent_mpn(b, a)

    @pytest.mark.parametrize("a,b", [
        ("NC7WZ485M8X", "NC7WZ240"),
        ("MAX3483EESA", "MAX3485EESA"),
        ("LM358", "LM324"),
        ("TXT315AT", "TPS51125A"),
        ("LM358N", "LM358"),
    ])
    def test_not_equivalent(self, a, b):
        assert not is_equivalent_mpn(a, b)
        assert not is_equivalent_mpn(b, a)

    @pytest.mark.parametrize("a,b", [(None, "LM358"), ("LM358", None), ("", ""), ("  ", "  "), (None, None)])
    def test_blank_never_equivalent(self, a, b):
        assert not is_equivalent_mpn(a, b)

    @pytest.mark.parametrize("mpn", [m for m, _, _ in SUFFIXED] + UNSUFFIXED)
    def test_reflexive(self, mpn):
        assert is_equivalent_mpn(mpn, mpn)


class TestNormalize:
    """Test alphanumeric normalization and free-text token cleanup."""

    @pytest.mark.parametrize("mpn,expected", [
        ("lm358-n", "LM358N"),
        (" MAX3483EESA+ ", "MAX3483EESA"),
        ("TJA1050T/CM,118", "TJA1050TCM118"),
        (None, ""),
        ("   ", ""),
    ])
    def test_normalize(self, mpn, expected):
        assert normalize(mpn) == expected

    @pytest.mark.parametrize("word,expected", [
        ("P/N:LM358N", "LM358N"),
        ("mpn:irf540n", "IRF540N"),
        ("PN:NE555", "NE555"),
        ("PART-LM7805CT", "LM7805CT"),
        ("REF:DS18B20", "DS18B20"),
        ("ITEM-RL207", "RL207"),
        ("IC-LM324", "LM324"),
        ("mpn=IRF540N", "IRF540N"),
        ("NE555-SMD", "NE555"),
        ("1N4007-THT", "1N4007"),
        ("L7805CV-ROHS", "L7805CV"),
        ("", ""),
        (None, ""),
    ])
    def test_clean_token(self, word, expected):
        assert clean_token(word) == expected
