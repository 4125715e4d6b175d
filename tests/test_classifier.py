"""Tests for classifier dispatch across handlers."""

import threading

import pytest
from mpn_mcp.classifier import Classifier, build_registry, get_classifier, reset_classifier
from mpn_mcp.handlers import InfineonHandler, STHandler, TIHandler, default_handlers
from mpn_mcp.types import ComponentType


T = ComponentType


@pytest.fixture(scope="module")
def classifier():
    return Classifier()


class TestBuildRegistry:
    """Test registry construction."""

    def test_registry_is_frozen(self):
        registry = build_registry(default_handlers())
        assert registry.frozen
        assert len(registry) == sum(len(h.PATTERNS) for h in default_handlers())

    def test_handlers_registered_in_name_order(self):
        registry = build_registry([TIHandler(), InfineonHandler()])
        first_ti = registry.entries(T.VOLTAGE_REGULATOR_LINEAR_TI)[0].order
        last_infineon = max(e.order for kind in InfineonHandler().specialized_types for e in registry.entries(kind))
        assert last_infineon < first_ti


class TestClassifier:
    """Test type detection and handler dispatch."""

    @pytest.mark.parametrize("mpn,kind", [
        ("IRFP460", T.MOSFET_INFINEON),
        ("STM32F103C8T6", T.MICROCONTROLLER_ST),
        ("MAX3483EESA+", T.INTERFACE_IC_MAXIM),
        ("RL207", T.DIODE_ONSEMI),
        ("LM358N", T.OPAMP_TI),
        ("lm35dz", T.TEMPERATURE_SENSOR_TI),
    ])
    def test_determine_type_is_most_specific(self, classifier, mpn, kind):
        assert classifier.determine_type(mpn) is kind

    @pytest.mark.parametrize("mpn", [None, "", "  ", "HELLO", "NE555P"])
    def test_unrecognised(self, classifier, mpn):
        assert classifier.determine_type(mpn) is None
        assert classifier.find_handler(mpn) is None
        assert classifier.matching_types(mpn) == frozenset()
        assert classifier.extract_package_code(mpn) == ""
        assert classifier.extract_series(mpn) == ""
        assert classifier.is_official_replacement(mpn, "LM358N") is False

    def test_matches_type_generic_and_specialized(self, classifier):
        assert classifier.matches_type("STM32F103C8T6", T.MICROCONTROLLER)
        assert classifier.matches_type("STM32F103C8T6", T.MICROCONTROLLER_ST)
        assert not classifier.matches_type("STM32F103C8T6", T.MOSFET)
        assert not classifier.matches_type("STM32F103C8T6", None)

    def test_matching_types(self, classifier):
        assert classifier.matching_types("IRFP460") == {T.MOSFET_INFINEON, T.MOSFET}

    def test_find_handler(self, classifier):
        assert isinstance(classifier.find_handler("L7805CV"), STHandler)
        assert isinstance(classifier.find_handler("LM7805CT"), TIHandler)

    def test_handlers_for_type(self, classifier):
        names = {h.name for h in classifier.handlers_for_type(T.MOSFET)}
        assert names == {"Infineon", "onsemi", "STMicroelectronics"}
        assert [h.name for h in classifier.handlers_for_type(T.MOSFET_ST)] == ["STMicroelectronics"]
        assert classifier.handlers_for_type(None) == ()

    def test_extraction_dispatch(self, classifier):
        assert classifier.extract_series("IRFP460") == "IRFP"
        assert classifier.extract_package_code("MAX3483EESA+") == "SOIC-8"
        assert classifier.extract_package_code("STM32F103C8T6") == "LQFP"

    def test_replacement_decided_by_first_part(self, classifier):
        assert classifier.is_official_replacement("RL207", "RL204")
        assert not classifier.is_official_replacement("RL204", "RL207")
        assert classifier.is_official_replacement("L7805CV", "LM7805CT")

    def test_restricted_handler_set(self):
        only_ti = Classifier([TIHandler()])
        assert only_ti.determine_type("LM358N") is T.OPAMP_TI
        assert only_ti.determine_type("IRFP460") is None


class TestIndependence:
    """Separately built classifiers share no state."""

    def test_independent_registries(self):
        a, b = Classifier(), Classifier()
        assert a.registry is not b.registry
        for mpn in ("IRFP460", "STM32F103C8T6", "LM358N", "RL207", "DS18B20"):
            assert a.determine_type(mpn) is b.determine_type(mpn)
            assert a.extract_package_code(mpn) == b.extract_package_code(mpn)

    def test_default_classifier_is_shared(self):
        reset_classifier()
        try:
            assert get_classifier() is get_classifier()
        finally:
            reset_classifier()

    def test_default_classifier_built_once_across_threads(self):
        reset_classifier()
        seen = []

        def worker():
            seen.append(get_classifier())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        try:
            assert len({id(c) for c in seen}) == 1
        finally:
            reset_classifier()


class TestFindMPNInText:
    """Test MPN extraction from free text."""

    @pytest.mark.parametrize("text,expected", [
        ("Use P/N:LM358N or similar", "LM358N"),
        ("dual op-amp, mpn=lm358dr", "LM358DR"),
        ("Regulator L7805CV-ROHS 5V", "L7805CV"),
        ("R1; R2 | MAX3483EESA+", "MAX3483EESA+"),
        ("10k resistor IRFP460 mosfet", "IRFP460"),
    ])
    def test_found(self, classifier, text, expected):
        assert classifier.find_mpn_in_text(text) == expected

    @pytest.mark.parametrize("text", [None, "", "10k resistor 0603"])
    def test_not_found(self, classifier, text):
        assert classifier.find_mpn_in_text(text) is None
