"""Infineon, including the International Rectifier IRF/IRL/IRG lines."""

import re
from types import MappingProxyType

from ..types import ComponentType
from .base import ManufacturerHandler, base_part, fold


# IR lead-free and tape-and-reel tails: IRF540NSTRLPBF -> IRF540NS
_IR_ORDERING = re.compile(r"(?:TRL|TRR|TR)?PBF$|TR[LR]?$")
_TRAILING_LETTERS = re.compile(r"\d([A-Z]+)$")
_XMC_SERIES = re.compile(r"^XMC\d{4}")


class InfineonHandler(ManufacturerHandler):
    """IRF/IRL MOSFETs, IGBTs, IFX linear regulators and XMC microcontrollers.

    Package codes for IRF/IRL/IRG parts come from the last letter of the part.
    A letter with no mapping is returned as-is rather than dropped.
    """

    name = "Infineon"

    PATTERNS = (
        (ComponentType.MOSFET_INFINEON, r"IRF[A-Z]*\d+.*"),
        (ComponentType.MOSFET_INFINEON, r"IRL[A-Z]*\d+.*"),
        (ComponentType.MOSFET_INFINEON, r"IP[PDB]\d+N\d+.*"),
        (ComponentType.MOSFET_INFINEON, r"BSC\d+N\d+.*"),
        (ComponentType.IGBT_INFINEON, r"IK[PWDB]\d+N\d+.*"),
        (ComponentType.IGBT_INFINEON, r"IGW\d+N\d+.*"),
        (ComponentType.IGBT_INFINEON, r"IRG[A-Z]*\d+.*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_INFINEON, r"IFX\d+.*"),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_INFINEON, r"TLE42\d+.*"),
        (ComponentType.MICROCONTROLLER_INFINEON, r"XMC\d{4}.*"),
    )

    SERIES_PREFIXES = (
        "IRF", "IRFZ", "IRFP", "IRFB", "IRFR", "IRFU",
        "IRL", "IRLZ", "IRLB", "IRLML",
        "IRG", "IPP", "IPD", "IPB", "BSC",
        "IKP", "IKW", "IKD", "IKB", "IGW",
        "IFX", "TLE",
    )

    # Last letter of an IRF/IRL part
    MOSFET_PACKAGE_LETTERS = MappingProxyType({
        "N": "TO-220",
        "L": "TO-262",
        "S": "D2PAK",
        "U": "IPAK",
        "P": "TO-247",
        "B": "TO-263",
        "E": "TO-220AB",
    })

    # Last letter of an IRG part
    IGBT_PACKAGE_LETTERS = MappingProxyType({
        "N": "TO-220",
        "P": "TO-247",
        "H": "TO-247HV",
        "S": "D2PAK",
    })

    # Sub-series whose package is fixed by the prefix
    PREFIX_PACKAGES = MappingProxyType({
        "IRFP": "TO-247",
        "IRFB": "TO-220AB",
        "IRFR": "DPAK",
        "IRFU": "IPAK",
        "IRLB": "TO-220AB",
        "IRLML": "SOT-23",
        "IPP": "TO-220",
        "IPD": "DPAK",
        "IPB": "D2PAK",
        "BSC": "TDSON-8",
        "IKP": "TO-220",
        "IKW": "TO-247",
        "IKD": "DPAK",
        "IKB": "D2PAK",
        "IGW": "TO-247",
    })

    # Letter after the hyphen of an XMC order code: XMC1100-T038X0064
    XMC_PACKAGE_LETTERS = MappingProxyType({
        "T": "TSSOP",
        "Q": "VQFN",
        "F": "LQFP",
        "E": "LFBGA",
    })

    def extract_package_code(self, mpn: str | None) -> str:
        part = base_part(mpn)
        if not part:
            return ""

        if part.startswith("XMC"):
            _, _, order = part.partition("-")
            return self.XMC_PACKAGE_LETTERS.get(order[:1], "")

        series = self.extract_series(part)
        if series in ("IRF", "IRL", "IRFZ", "IRLZ", "IRG"):
            letters = self._package_letters(part)
            if not letters:
                return ""
            letter = letters[-1]
            table = self.IGBT_PACKAGE_LETTERS if series == "IRG" else self.MOSFET_PACKAGE_LETTERS
            return table.get(letter, letter)

        if series in self.PREFIX_PACKAGES:
            return self.PREFIX_PACKAGES[series]
        return super().extract_package_code(part)

    def extract_series(self, mpn: str | None) -> str:
        text = fold(mpn)
        match = _XMC_SERIES.match(text)
        if match:
            return match.group(0)
        return super().extract_series(text)

    def core_number(self, mpn: str | None) -> str:
        """IRF540NSTRLPBF -> IRF540, IKW40N120H3 -> IKW40N120H3, XMC1100-T038X0064 -> XMC1100-T038X0064"""
        part = base_part(mpn)
        if not part or part.startswith("XMC"):
            return part
        part = _IR_ORDERING.sub("", part)
        match = _TRAILING_LETTERS.search(part)
        if match:
            part = part[: match.start(1)]
        return part

    @staticmethod
    def _package_letters(part: str) -> str:
        part = _IR_ORDERING.sub("", part)
        match = _TRAILING_LETTERS.search(part)
        return match.group(1) if match else ""
