"""Texas Instruments regulators, op-amps, temperature sensors, MCUs and logic."""

import re
from types import MappingProxyType

from ..types import ComponentType
from .base import ManufacturerHandler, base_part
from .second_source import LINEAR_REGULATORS


# Output current of the adjustable LM317 family, amps. LM317L and LM317M are
# the 100 mA and 500 mA grades of the same die.
ADJUSTABLE_REGULATOR_CURRENT = MappingProxyType({
    "LM317L": 0.1,
    "LM317M": 0.5,
    "LM317": 1.5,
    "LM350": 3.0,
    "LM338": 5.0,
})

_ADJUSTABLE = re.compile(r"^LM(?:317[LM]?|350|338)(?!\d)")
# MSP430G2553 I PW 20 R: temperature grade, package, pin count, reel
_MSP430_ORDER_CODE = re.compile(r"^MSP430[A-Z]+\d+([A-Z]+?)(\d*)R?$")


class TIHandler(ManufacturerHandler):
    """TI parts.

    Package codes are TI's order suffixes (LM358DR -> SOIC). A trailing R
    (reel) or leading C/I temperature grade is ignored when looking the code
    up. Unknown codes give ''.
    """

    name = "Texas Instruments"

    PATTERNS = (
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_TI, r"(?:LM|UA)7[89]\d{2}.*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_TI, r"LM(?:317|350|338)(?!\d).*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_TI, r"LM1117.*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_TI, r"TPS7[0-9A-Z]\d+.*"),
        (ComponentType.OPAMP_TI, r"LM358.*"),
        (ComponentType.OPAMP_TI, r"LM324.*"),
        (ComponentType.OPAMP_TI, r"LM2904.*"),
        (ComponentType.OPAMP_TI, r"LM741.*"),
        (ComponentType.OPAMP_TI, r"TL0[78][1-4].*"),
        (ComponentType.OPAMP_TI, r"OPA\d+.*"),
        (ComponentType.TEMPERATURE_SENSOR_TI, r"LM35(?:[A-Z].*)?"),
        (ComponentType.TEMPERATURE_SENSOR_TI, r"LM75(?:[A-Z].*)?"),
        (ComponentType.TEMPERATURE_SENSOR_TI, r"TMP\d+.*"),
        (ComponentType.MICROCONTROLLER_TI, r"MSP430[A-Z]+\d+.*"),
        (ComponentType.MICROCONTROLLER_TI, r"TM4C\d+.*"),
        (ComponentType.LOGIC_IC_TI, r"SN74[A-Z]*\d+.*"),
        (ComponentType.LOGIC_IC_TI, r"CD4\d{3}.*"),
    )

    SERIES_PREFIXES = (
        "LM", "LM78", "LM79", "UA78", "UA79", "LM317", "LM350", "LM338", "LM1117", "TPS7",
        "LM358", "LM324", "LM2904", "LM741", "TL07", "TL08", "OPA",
        "LM35", "LM75", "TMP",
        "MSP430", "TM4C",
        "SN74", "CD4",
    )

    PACKAGE_CODES = MappingProxyType({
        "DGK": "MSOP",
        "DBV": "SOT-23",
        "DCY": "SOT-223",
        "KCS": "TO-220",
        "KCT": "TO-220",
        "KTT": "D2PAK",
        "LP": "TO-92",
        "Z": "TO-92",
        "DZ": "TO-92",
        "CZ": "TO-92",
        "PA": "DIP",
        "BE": "DIP",
        "LZ": "TO-92",
        "MDT": "DPAK",
    })

    # TI lone-letter order codes: LM358N, LM358P, LM358D, LM317T, LM338K
    SINGLE_LETTER_CODES = frozenset({"N", "P", "D", "T", "K"})

    CORE_PATTERN = re.compile(
        r"^(?:MSP430[A-Z]+\d+|TM4C\d+[A-Z]+\d+|SN74[A-Z]*\d+|\d*[A-Z]+\d+(?:[A-Z]\d+)?)"
    )

    CROSS_REFERENCES = LINEAR_REGULATORS

    def lookup_package_code(self, code: str) -> str:
        code = code.upper()
        candidates = [code]
        if len(code) > 1 and code.endswith("R"):
            candidates.append(code[:-1])
        if len(code) > 1 and code[0] in "CI":
            candidates.append(code[1:])
        for candidate in candidates:
            package = super().lookup_package_code(candidate)
            if package:
                return package
        return ""

    def extract_package_code(self, mpn: str | None) -> str:
        """MSP430 order codes carry a pin count: MSP430G2553IPW20R -> TSSOP-20."""
        part = base_part(mpn)
        order = _MSP430_ORDER_CODE.match(part)
        if order:
            package = self.lookup_package_code(order.group(1))
            if package and order.group(2):
                return f"{package}-{order.group(2)}"
            return package
        return super().extract_package_code(part)

    def output_current(self, mpn: str | None) -> float | None:
        """Rated output current of an LM317(L/M)/LM350/LM338, None for other parts."""
        match = _ADJUSTABLE.match(base_part(mpn))
        return ADJUSTABLE_REGULATOR_CURRENT[match.group(0)] if match else None

    def compatible(self, part1: str, part2: str) -> bool:
        current1, current2 = self.output_current(part1), self.output_current(part2)
        if current1 is not None or current2 is not None:
            return self.rating_dominates(current1, current2)
        return super().compatible(part1, part2)
