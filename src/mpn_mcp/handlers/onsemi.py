"""onsemi (ON Semiconductor, including Fairchild) discretes, regulators and op-amps."""

import re
from types import MappingProxyType

from ..types import ComponentType
from .base import ManufacturerHandler, base_part
from .second_source import LINEAR_REGULATORS


# 1N4001..1N4007 and RL201..RL207 share the same last-digit voltage ladder
RECTIFIER_VOLTAGES = MappingProxyType({
    "1": 50,
    "2": 100,
    "3": 200,
    "4": 400,
    "5": 600,
    "6": 800,
    "7": 1000,
})

_RECTIFIER = re.compile(r"^(RL20|1N400)([1-7])(?![0-9])")
_REGULATOR = re.compile(r"^MC7[89][LM]?\d{2}")
# MC33269DT-5.0G, NCP1117ST33T3G: package letters come before the output voltage
_LDO = re.compile(r"^(?:MC33269|NCP11\d{2})([A-Z]+)")
# Pb-free "G" and reel tails on onsemi order codes: MC7805BD2TR4G -> MC7805BD2T,
# MBR0520LT1G -> MBR0520L
_ONSEMI_ORDERING = re.compile(r"(?:R\d|RK|T\d)?G$")


class OnSemiHandler(ManufacturerHandler):
    """onsemi rectifiers, Schottky and zener diodes, MC78/MC79 regulators,
    MOSFETs, small-signal BJTs and op-amps.

    RL20x and 1N400x rectifiers follow a voltage ladder: a higher-voltage part
    replaces a lower one, never the other way round.
    """

    name = "onsemi"

    PATTERNS = (
        (ComponentType.DIODE_ONSEMI, r"RL20[1-7].*"),
        (ComponentType.DIODE_ONSEMI, r"1N400[1-7].*"),
        (ComponentType.DIODE_ONSEMI, r"1N47\d{2}.*"),
        (ComponentType.DIODE_ONSEMI, r"1N52\d{2}.*"),
        (ComponentType.DIODE_ONSEMI, r"MURS?\d+.*"),
        (ComponentType.DIODE_ONSEMI, r"MBRS?\d+.*"),
        (ComponentType.DIODE_ONSEMI, r"RHRP\d+.*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_ONSEMI, r"MC7[89][LM]?\d{2}.*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_ONSEMI, r"MC33269.*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_ONSEMI, r"NCP11\d{2}.*"),
        (ComponentType.MOSFET_ONSEMI, r"NT[DPR]\d+.*"),
        (ComponentType.MOSFET_ONSEMI, r"F[QD]P\d+.*"),
        (ComponentType.TRANSISTOR_ONSEMI, r"2N\d{4}.*"),
        (ComponentType.TRANSISTOR_ONSEMI, r"MMBT\d+.*"),
        (ComponentType.TRANSISTOR_ONSEMI, r"MPS[AH]\d+.*"),
        (ComponentType.OPAMP_ONSEMI, r"MC1458.*"),
        (ComponentType.OPAMP_ONSEMI, r"MC3403.*"),
        (ComponentType.OPAMP_ONSEMI, r"MC3307[89].*"),
        (ComponentType.OPAMP_ONSEMI, r"MC3317[24].*"),
    )

    SERIES_PREFIXES = (
        "RL20", "1N400", "1N47", "1N52",
        "MUR", "MURS", "MBR", "MBRS", "RHRP",
        "MC78", "MC79", "MC78L", "MC78M", "MC79L", "MC79M", "MC33", "MC34", "MC14", "NCP",
        "NTD", "NTP", "NTR", "FQP", "FDP",
        "2N", "MMBT", "MPSA", "MPSH",
    )

    PREFIX_PACKAGES = MappingProxyType({
        "RL20": "DO-41",
        "1N400": "DO-41",
        "1N47": "DO-41",
        "1N52": "DO-35",
        "MURS": "SMB",
        "MBRS": "SMB",
        "RHRP": "TO-220",
        "NTD": "DPAK",
        "NTP": "TO-220",
        "FQP": "TO-220",
        "FDP": "TO-220",
        "NTR": "SOT-23",
        "2N": "TO-92",
        "MMBT": "SOT-23",
        "MPSA": "TO-92",
        "MPSH": "TO-92",
    })

    # Regulator order codes, after the voltage digits (MC78xx) or the part
    # number (MC33269, NCP11xx)
    PACKAGE_CODES = MappingProxyType({
        "CT": "TO-220",
        "BT": "TO-220",
        "T": "TO-220",
        "ACT": "TO-220",
        "DT": "DPAK",
        "BDT": "DPAK",
        "CDT": "DPAK",
        "D2T": "D2PAK",
        "BD2T": "D2PAK",
        "CD2T": "D2PAK",
        "ST": "SOT-223",
        "P": "DIP",
        "D": "SOIC",
    })

    CROSS_REFERENCES = LINEAR_REGULATORS

    def extract_package_code(self, mpn: str | None) -> str:
        part = base_part(mpn)
        if not part:
            return ""
        regulator = _REGULATOR.match(part)
        if regulator:
            code = _ONSEMI_ORDERING.sub("", part[regulator.end():])
            return self.lookup_package_code(code) if code else ""
        ldo = _LDO.match(part)
        if ldo:
            return self.PACKAGE_CODES.get(ldo.group(1), "")
        series = self.extract_series(part)
        if series in self.PREFIX_PACKAGES:
            return self.PREFIX_PACKAGES[series]
        return super().extract_package_code(_ONSEMI_ORDERING.sub("", part))

    def core_number(self, mpn: str | None) -> str:
        part = base_part(mpn)
        regulator = _REGULATOR.match(part)
        if regulator:
            return regulator.group(0)
        return super().core_number(part)

    def rectifier_voltage(self, mpn: str | None) -> int | None:
        """Reverse voltage rating of an RL20x/1N400x rectifier, None for anything else."""
        match = _RECTIFIER.match(base_part(mpn))
        return RECTIFIER_VOLTAGES[match.group(2)] if match else None

    def compatible(self, part1: str, part2: str) -> bool:
        rect1 = _RECTIFIER.match(part1)
        rect2 = _RECTIFIER.match(part2)
        if rect1 or rect2:
            if not (rect1 and rect2) or rect1.group(1) != rect2.group(1):
                return False
            return self.rating_dominates(self.rectifier_voltage(part1), self.rectifier_voltage(part2))
        return super().compatible(part1, part2)
