"""STMicroelectronics microcontrollers, power MOSFETs and L78/L79 regulators."""

import re
from types import MappingProxyType

from ..types import ComponentType
from .base import ManufacturerHandler, base_part, fold
from .second_source import LINEAR_REGULATORS


# STM32F103 C 8 T 6: line, pin count, flash size, package, temperature range
_STM_ORDER_CODE = re.compile(r"^(STM32[A-Z]\d{3}|STM8[A-Z]\d{3})([A-Z])([0-9A-Z])([A-Z])(\d)")
_STM_SERIES = re.compile(r"^STM32[A-Z]\d{3}|^STM8[A-Z]")
_ST_MOSFET = re.compile(r"^ST[BDFPW](\d+)([NP])")
_SUPERTEX_MOSFET = re.compile(r"^V([NP])\d+")
_REGULATOR = re.compile(r"^L7[89][LM]?\d{2}")


class STHandler(ManufacturerHandler):
    """ST parts.

    STM32/STM8 packages come from a fixed position in the order code. L78/L79
    regulator suffixes with no mapping are returned verbatim.
    """

    name = "STMicroelectronics"

    PATTERNS = (
        (ComponentType.MICROCONTROLLER_ST, r"STM32[FLHGWUC]\d{3}.*"),
        (ComponentType.MICROCONTROLLER_ST, r"STM8[SLA]\d*.*"),
        (ComponentType.MOSFET_ST, r"ST[BDFPW]\d+[NP].*"),
        (ComponentType.MOSFET_ST, r"V[NP]\d+.*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_ST, r"L7[89][LM]?\d{2}.*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_ST, r"LD1117.*"),
    )

    SERIES_PREFIXES = (
        "STP", "STF", "STD", "STB", "STW", "VN", "VP",
        "L78", "L78L", "L78M", "L79", "L79L", "L79M", "LD1117",
    )

    # Package letter in an STM32/STM8 order code
    MCU_PACKAGE_LETTERS = MappingProxyType({
        "T": "LQFP",
        "H": "BGA",
        "U": "VFQFPN",
        "Y": "WLCSP",
        "P": "TSSOP",
    })

    PREFIX_PACKAGES = MappingProxyType({
        "STF": "TO-220FP",
        "STP": "TO-220",
        "STD": "DPAK",
        "STB": "D2PAK",
        "STW": "TO-247",
    })

    # L78/L79 suffix after the voltage code, without the A/B/C grade letter
    REGULATOR_SUFFIXES = MappingProxyType({
        "CV": "TO-220",
        "V": "TO-220",
        "CT": "TO-220",
        "T": "TO-220",
        "CP": "TO-220FP",
        "P": "TO-220FP",
        "CD2T": "D2PAK",
        "D2T": "D2PAK",
        "CDT": "DPAK",
        "DT": "DPAK",
        "CZ": "TO-92",
        "Z": "TO-92",
        "CD": "SOIC-8",
        "D": "SOIC-8",
    })

    CROSS_REFERENCES = LINEAR_REGULATORS

    def extract_series(self, mpn: str | None) -> str:
        text = fold(mpn)
        match = _STM_SERIES.match(text)
        if match:
            return match.group(0)
        return super().extract_series(text)

    def extract_package_code(self, mpn: str | None) -> str:
        part = base_part(mpn)
        if not part:
            return ""

        order = _STM_ORDER_CODE.match(part)
        if order:
            return self.MCU_PACKAGE_LETTERS.get(order.group(4), "")
        if part.startswith("STM"):
            return ""

        regulator = _REGULATOR.match(part)
        if regulator:
            return self._regulator_package(part[regulator.end():])

        series = self.extract_series(part)
        if series in self.PREFIX_PACKAGES:
            return self.PREFIX_PACKAGES[series]
        return super().extract_package_code(part)

    def _regulator_package(self, suffix: str) -> str:
        if suffix.endswith("TR"):
            suffix = suffix[:-2].rstrip("-")
        if not suffix:
            return ""
        if suffix in self.REGULATOR_SUFFIXES:
            return self.REGULATOR_SUFFIXES[suffix]
        if suffix[0] in "ABC" and suffix[1:] in self.REGULATOR_SUFFIXES:
            return self.REGULATOR_SUFFIXES[suffix[1:]]
        return suffix

    @staticmethod
    def channel(mpn: str | None) -> str:
        """'N' or 'P' for a MOSFET, '' when the part carries no channel marker."""
        part = base_part(mpn)
        match = _ST_MOSFET.match(part) or _SUPERTEX_MOSFET.match(part)
        if not match:
            return ""
        return match.group(match.lastindex)

    def core_number(self, mpn: str | None) -> str:
        """STM32F103C8T6 -> STM32F103C8, STP55NF06 -> 55NF06, L7805CV -> L7805"""
        part = base_part(mpn)
        order = _STM_ORDER_CODE.match(part)
        if order:
            return order.group(1) + order.group(2) + order.group(3)
        regulator = _REGULATOR.match(part)
        if regulator:
            return regulator.group(0)
        if _ST_MOSFET.match(part):
            # prefix only selects the package: STP55NF06 and STD55NF06 share a die
            return part[3:]
        return super().core_number(part)

    def compatible(self, part1: str, part2: str) -> bool:
        channel1, channel2 = self.channel(part1), self.channel(part2)
        if channel1 and channel2 and channel1 != channel2:
            return False
        return super().compatible(part1, part2)
