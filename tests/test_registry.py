"""Tests for the pattern registry."""

import re

import pytest
from mpn_mcp.registry import PatternRegistry, RegistryFrozenError
from mpn_mcp.types import ComponentType


@pytest.fixture
def registry():
    reg = PatternRegistry()
    reg.register(ComponentType.OPAMP_TI, r"LM358.*")
    reg.register(ComponentType.OPAMP_TI, r"TL07[1-4].*")
    reg.register(ComponentType.MOSFET_ST, re.compile(r"STP\d+N.*"))
    return reg


class TestMatches:
    """Test the multi-entry matching path."""

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_absent_text(self, registry, text):
        assert registry.matches(text, ComponentType.OPAMP_TI) is False

    def test_absent_kind(self, registry):
        assert registry.matches("LM358N", None) is False

    def test_unregistered_kind(self, registry):
        assert registry.matches("LM358N", ComponentType.RTC_MAXIM) is False

    def test_every_entry_is_consulted(self, registry):
        assert registry.matches("LM358N", ComponentType.OPAMP_TI)
        assert registry.matches("TL072CP", ComponentType.OPAMP_TI)

    @pytest.mark.parametrize("text", ["stp55nf06", "STP55NF06", "StP55nF06", "  STP55NF06 "])
    def test_case_and_whitespace_folded(self, registry, text):
        assert registry.matches(text, ComponentType.MOSFET_ST)

    def test_compiled_pattern_made_case_insensitive(self, registry):
        entry = registry.entries(ComponentType.MOSFET_ST)[0]
        assert entry.pattern.flags & re.IGNORECASE

    def test_full_string_match(self, registry):
        assert not registry.matches("XLM358", ComponentType.OPAMP_TI)


class TestFirstPattern:
    """Test the single-entry introspection accessor."""

    def test_returns_only_first_registered(self, registry):
        first = registry.first_pattern(ComponentType.OPAMP_TI)
        assert first.fullmatch("LM358N")
        # TL072 is only reachable through matches()
        assert first.fullmatch("TL072CP") is None
        assert registry.matches("TL072CP", ComponentType.OPAMP_TI)

    def test_missing_kind(self, registry):
        assert registry.first_pattern(ComponentType.RTC_MAXIM) is None
        assert registry.first_pattern(None) is None


class TestLifecycle:
    """Test registration order, introspection and freezing."""

    def test_no_deduplication(self):
        reg = PatternRegistry()
        reg.register(ComponentType.OPAMP_TI, r"LM358.*")
        reg.register(ComponentType.OPAMP_TI, r"LM358.*")
        assert len(reg.entries(ComponentType.OPAMP_TI)) == 2
        assert len(reg) == 2

    def test_order_is_global_registration_index(self, registry):
        orders = [e.order for e in registry.entries(ComponentType.OPAMP_TI)]
        assert orders == [0, 1]
        assert registry.entries(ComponentType.MOSFET_ST)[0].order == 2

    def test_kinds_and_contains(self, registry):
        assert registry.kinds() == {ComponentType.OPAMP_TI, ComponentType.MOSFET_ST}
        assert ComponentType.OPAMP_TI in registry
        assert ComponentType.RTC_MAXIM not in registry

    def test_register_rejects_non_kind(self):
        with pytest.raises(TypeError):
            PatternRegistry().register("OPAMP", r"LM358.*")

    def test_frozen_registry_rejects_registration(self, registry):
        assert registry.freeze() is registry
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(ComponentType.OPAMP_TI, r"LM324.*")
        # still readable
        assert registry.matches("LM358N", ComponentType.OPAMP_TI)

    def test_frozen_error_is_runtime_error(self):
        assert issubclass(RegistryFrozenError, RuntimeError)
