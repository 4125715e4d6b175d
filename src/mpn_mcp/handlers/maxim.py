"""Maxim Integrated (now Analog Devices) MAX and DS parts."""

import re
from types import MappingProxyType

from ..types import ComponentType
from .base import ManufacturerHandler, base_part, fold


_MAX_SERIES = re.compile(r"^MAX\d+")
_DS_SERIES = re.compile(r"^DS\d+(?:[A-Z]\d+)?")
_MAX_ORDER_CODE = re.compile(r"^MAX\d+[A-Z]*?([A-Z])([A-Z]{2})$")


class MaximHandler(ManufacturerHandler):
    """MAX interface/regulator/sensor ICs and DS sensors, RTCs and memories.

    MAX order codes end in temperature grade + two-letter package code
    (MAX3483EESA: E grade, SA = SOIC-8). Codes outside the table give ''.
    Parts within one series differ only by grade and package, so any two
    members of a series replace each other.
    """

    name = "Maxim Integrated"

    PATTERNS = (
        (ComponentType.TEMPERATURE_SENSOR_MAXIM, r"DS18[BS]?\d{2}.*"),
        (ComponentType.TEMPERATURE_SENSOR_MAXIM, r"DS1[67]\d{2}.*"),
        (ComponentType.TEMPERATURE_SENSOR_MAXIM, r"MAX6\d{3}.*"),
        (ComponentType.TEMPERATURE_SENSOR_MAXIM, r"MAX318\d{2}.*"),
        (ComponentType.RTC_MAXIM, r"DS1[23]\d{2}.*"),
        (ComponentType.RTC_MAXIM, r"DS32\d{2}.*"),
        (ComponentType.MEMORY_MAXIM, r"DS28[A-Z]*\d+.*"),
        (ComponentType.MEMORY_MAXIM, r"DS24\d{2}.*"),
        (ComponentType.INTERFACE_IC_MAXIM, r"MAX2\d{2}(?!\d).*"),
        (ComponentType.INTERFACE_IC_MAXIM, r"MAX3\d{2,3}(?!\d).*"),
        (ComponentType.INTERFACE_IC_MAXIM, r"MAX4[89]\d(?!\d).*"),
        (ComponentType.VOLTAGE_REGULATOR_MAXIM, r"MAX17\d{2,3}.*"),
        (ComponentType.VOLTAGE_REGULATOR_MAXIM, r"MAX8\d{3}.*"),
    )

    SERIES_PREFIXES = ("MAX", "DS")

    # Two-letter package code at the end of a MAX order code
    PACKAGE_CODES = MappingProxyType({
        "SA": "SOIC-8",
        "SD": "SOIC-14",
        "SE": "SOIC-16",
        "WE": "SOIC-16W",
        "PA": "DIP-8",
        "PD": "DIP-14",
        "PE": "DIP-16",
        "UA": "µMAX-8",
        "UB": "µMAX-10",
        "UE": "TSSOP-16",
        "EE": "QSOP-16",
        "TA": "TDFN-8",
    })

    # Letters after the DS part number
    DS_PACKAGE_CODES = MappingProxyType({
        "Z": "SOIC-8",
        "ZN": "SOIC-8",
        "U": "µSOP-8",
        "S": "SOIC-16",
        "SN": "SOIC-16",
    })

    def extract_series(self, mpn: str | None) -> str:
        """MAX3483EESA+ -> MAX3483, DS18B20-PAR -> DS18B20"""
        text = fold(mpn)
        match = _MAX_SERIES.match(text) or _DS_SERIES.match(text)
        if match:
            return match.group(0)
        return super().extract_series(text)

    def extract_package_code(self, mpn: str | None) -> str:
        part = base_part(mpn)
        if not part:
            return ""

        order = _MAX_ORDER_CODE.match(part)
        if order:
            return self.PACKAGE_CODES.get(order.group(2), "")

        series = _DS_SERIES.match(part)
        if series:
            letters = part[series.end():].split("-", 1)[0]
            if not letters:
                # bare DS18B20 and DS18B20-PAR ship in TO-92
                return "TO-92" if part.startswith("DS18") else ""
            return self.DS_PACKAGE_CODES.get(letters, "")
        return ""

    def core_number(self, mpn: str | None) -> str:
        return self.extract_series(base_part(mpn))
