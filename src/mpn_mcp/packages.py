"""Package suffix codes shared across manufacturers, and package grouping."""

from types import MappingProxyType

# Suffix code -> package name. Vendor handlers fall back to this table when
# they have no family-specific mapping.
STANDARD_CODES = MappingProxyType({
    # DIP
    "N": "DIP", "P": "DIP", "PU": "PDIP",
    # Microchip/Atmel style
    "AU": "TQFP", "MU": "QFN", "SU": "SOIC", "XU": "TSSOP", "CU": "WLCSP",
    # Small outline
    "D": "SOIC", "M": "SOIC", "R": "SOIC", "DR": "SOIC", "DW": "SOIC-Wide",
    "PW": "TSSOP", "DT": "TSSOP", "PT": "TSSOP",
    "DGK": "MSOP",
    "DBV": "SOT-23",
    "MP": "SOT-223", "U": "SOT-223",
    "DRL": "SOT-553",
    "DRV": "SON",
    # Power
    "T": "TO-220", "T3": "TO-220", "CT": "TO-220",
    "TA": "TO-220F", "FP": "TO-220F",
    "K": "TO-3", "H": "TO-39",
    "KC": "TO-252", "KV": "TO-252",
    "TU": "TO-251", "F": "TO-251",
    "S": "D2PAK", "L": "DPAK",
    # Diodes
    "RL": "DO-41", "G": "DO-35",
    # Generic mounting codes
    "SMD": "SMD", "THT": "THT",
})

POWER_PACKAGES = frozenset({
    "TO-220", "TO-220F", "TO-220FP", "TO-220AB", "TO-247", "TO-247HV", "TO-3", "TO-3P",
    "TO-252", "TO-251", "TO-262", "TO-263", "DPAK", "D2PAK", "IPAK",
})

# Small-outline IC packages that share footprint families closely enough to be swapped
LEADED_IC_PACKAGES = frozenset({"DIP", "SOIC", "TSSOP", "MSOP"})

# Prefix patterns, checked in the order given (longest first where they overlap)
THROUGH_HOLE_PREFIXES = (
    "PDIP", "DIP", "THT", "TO-92", "TO-220", "TO-247", "TO-251", "TO-262",
    "TO-39", "TO-3", "IPAK", "DO-41", "DO-35", "DO-201", "DO-15",
)
SMD_PREFIXES = (
    "SOIC", "SOT", "SOD", "SON", "TSSOP", "MSOP", "QSOP", "µMAX", "UMAX",
    "TQFP", "LQFP", "QFN", "VFQFPN", "VQFN", "WLCSP", "BGA", "SMD",
    "TO-252", "TO-263", "DPAK", "D2PAK", "SMA", "SMB", "SMC",
)
_SMD_PREFIXES_FOLDED = tuple(p.upper() for p in SMD_PREFIXES)


def _fold(value: str | None) -> str:
    return value.strip().upper() if value else ""


def is_known_code(code: str | None) -> bool:
    return _fold(code) in STANDARD_CODES


def resolve_code(code: str | None) -> str:
    """'PW' -> 'TSSOP'. Unknown or blank codes resolve to ''."""
    return STANDARD_CODES.get(_fold(code), "")


def is_power_package(package: str | None) -> bool:
    return _fold(package) in POWER_PACKAGES


def is_through_hole(package: str | None) -> bool:
    pkg = _fold(package)
    if not pkg:
        return False
    # DPAK/D2PAK are surface mount even though they look like TO-220 derivatives
    if pkg.startswith(("TO-252", "TO-263")):
        return False
    return pkg.startswith(THROUGH_HOLE_PREFIXES)


def is_surface_mount(package: str | None) -> bool:
    pkg = _fold(package)
    if not pkg:
        return False
    return pkg.startswith(_SMD_PREFIXES_FOLDED)


def mounting_style(package: str | None) -> str:
    """Return "smd", "through_hole" or "not_sure"."""
    if is_surface_mount(package):
        return "smd"
    if is_through_hole(package):
        return "through_hole"
    return "not_sure"


def are_compatible(package_a: str | None, package_b: str | None) -> bool:
    """Whether two package names can stand in for each other on a replacement check.

    Same package, both power packages, or both leaded IC packages.
    """
    a, b = _fold(package_a), _fold(package_b)
    if not a or not b:
        return False
    if a == b:
        return True
    if a in POWER_PACKAGES and b in POWER_PACKAGES:
        return True
    return a in LEADED_IC_PACKAGES and b in LEADED_IC_PACKAGES
