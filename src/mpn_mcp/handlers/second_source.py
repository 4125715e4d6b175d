"""Vendor-to-vendor second-source groups.

Every member of a group is the same die function sold under another vendor's
prefix. Polarity never crosses groups: a 78xx is never a 79xx.
"""

# Output voltage codes common to every vendor's 78xx/79xx line
VOLTAGE_CODES = ("05", "06", "08", "09", "10", "12", "15", "18", "24")

POSITIVE_REGULATOR_PREFIXES = ("LM78", "MC78", "L78", "UA78")
NEGATIVE_REGULATOR_PREFIXES = ("LM79", "MC79", "L79", "UA79")


def _groups(prefixes: tuple[str, ...]) -> tuple[frozenset[str], ...]:
    return tuple(frozenset(prefix + code for prefix in prefixes) for code in VOLTAGE_CODES)


REGULATOR_78XX = _groups(POSITIVE_REGULATOR_PREFIXES)
REGULATOR_79XX = _groups(NEGATIVE_REGULATOR_PREFIXES)

LINEAR_REGULATORS = REGULATOR_78XX + REGULATOR_79XX
