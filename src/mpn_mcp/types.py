"""Component type taxonomy.

Generic kinds (MOSFET, VOLTAGE_REGULATOR, ...) are roots. Manufacturer-specific
kinds specialize exactly one generic kind through PARENT_TYPES, which is fixed
at import time and validated before anything can use it.
"""

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class ComponentType(Enum):
    """Node in the classification taxonomy. Value is the display identifier."""

    # Generic kinds
    DIODE = "DIODE"
    TRANSISTOR = "TRANSISTOR"
    MOSFET = "MOSFET"
    IGBT = "IGBT"
    IC = "IC"
    LOGIC_IC = "LOGIC_IC"
    INTERFACE_IC = "INTERFACE_IC"
    MICROCONTROLLER = "MICROCONTROLLER"
    OPAMP = "OPAMP"
    VOLTAGE_REGULATOR = "VOLTAGE_REGULATOR"
    TEMPERATURE_SENSOR = "TEMPERATURE_SENSOR"
    RTC = "RTC"
    MEMORY = "MEMORY"

    # Infineon (incl. International Rectifier)
    MOSFET_INFINEON = "MOSFET:Infineon"
    IGBT_INFINEON = "IGBT:Infineon"
    VOLTAGE_REGULATOR_LINEAR_INFINEON = "VOLTAGE_REGULATOR:Infineon linear"
    MICROCONTROLLER_INFINEON = "MICROCONTROLLER:Infineon"

    # onsemi
    DIODE_ONSEMI = "DIODE:onsemi"
    TRANSISTOR_ONSEMI = "TRANSISTOR:onsemi"
    MOSFET_ONSEMI = "MOSFET:onsemi"
    OPAMP_ONSEMI = "OPAMP:onsemi"
    VOLTAGE_REGULATOR_LINEAR_ONSEMI = "VOLTAGE_REGULATOR:onsemi linear"

    # STMicroelectronics
    MICROCONTROLLER_ST = "MICROCONTROLLER:ST"
    MOSFET_ST = "MOSFET:ST"
    VOLTAGE_REGULATOR_LINEAR_ST = "VOLTAGE_REGULATOR:ST linear"

    # Maxim Integrated
    INTERFACE_IC_MAXIM = "INTERFACE_IC:Maxim"
    TEMPERATURE_SENSOR_MAXIM = "TEMPERATURE_SENSOR:Maxim"
    RTC_MAXIM = "RTC:Maxim"
    VOLTAGE_REGULATOR_MAXIM = "VOLTAGE_REGULATOR:Maxim"
    MEMORY_MAXIM = "MEMORY:Maxim"

    # Texas Instruments
    VOLTAGE_REGULATOR_LINEAR_TI = "VOLTAGE_REGULATOR:TI linear"
    OPAMP_TI = "OPAMP:TI"
    TEMPERATURE_SENSOR_TI = "TEMPERATURE_SENSOR:TI"
    MICROCONTROLLER_TI = "MICROCONTROLLER:TI"
    LOGIC_IC_TI = "LOGIC_IC:TI"

    def __str__(self) -> str:
        return self.value


_T = ComponentType

# Specialized kind -> its generic ancestor
_PARENTS: dict[ComponentType, ComponentType] = {
    _T.MOSFET_INFINEON: _T.MOSFET,
    _T.IGBT_INFINEON: _T.IGBT,
    _T.VOLTAGE_REGULATOR_LINEAR_INFINEON: _T.VOLTAGE_REGULATOR,
    _T.MICROCONTROLLER_INFINEON: _T.MICROCONTROLLER,
    _T.DIODE_ONSEMI: _T.DIODE,
    _T.TRANSISTOR_ONSEMI: _T.TRANSISTOR,
    _T.MOSFET_ONSEMI: _T.MOSFET,
    _T.OPAMP_ONSEMI: _T.OPAMP,
    _T.VOLTAGE_REGULATOR_LINEAR_ONSEMI: _T.VOLTAGE_REGULATOR,
    _T.MICROCONTROLLER_ST: _T.MICROCONTROLLER,
    _T.MOSFET_ST: _T.MOSFET,
    _T.VOLTAGE_REGULATOR_LINEAR_ST: _T.VOLTAGE_REGULATOR,
    _T.INTERFACE_IC_MAXIM: _T.INTERFACE_IC,
    _T.TEMPERATURE_SENSOR_MAXIM: _T.TEMPERATURE_SENSOR,
    _T.RTC_MAXIM: _T.RTC,
    _T.VOLTAGE_REGULATOR_MAXIM: _T.VOLTAGE_REGULATOR,
    _T.MEMORY_MAXIM: _T.MEMORY,
    _T.VOLTAGE_REGULATOR_LINEAR_TI: _T.VOLTAGE_REGULATOR,
    _T.OPAMP_TI: _T.OPAMP,
    _T.TEMPERATURE_SENSOR_TI: _T.TEMPERATURE_SENSOR,
    _T.MICROCONTROLLER_TI: _T.MICROCONTROLLER,
    _T.LOGIC_IC_TI: _T.LOGIC_IC,
}


def _validate_hierarchy(parents: Mapping[ComponentType, ComponentType]) -> None:
    """Reject cycles and specialized-of-specialized chains."""
    for child, parent in parents.items():
        if child is parent:
            raise ValueError(f"{child} cannot specialize itself")
        if parent in parents:
            raise ValueError(f"{child} specializes {parent}, which is not a generic kind")
        seen = {child}
        current = parent
        while current in parents:
            if current in seen:
                raise ValueError(f"Cycle in type hierarchy at {current}")
            seen.add(current)
            current = parents[current]


_validate_hierarchy(_PARENTS)

PARENT_TYPES: Mapping[ComponentType, ComponentType] = MappingProxyType(_PARENTS)

# Generic kind -> specialized kinds, in declaration order
_CHILDREN: dict[ComponentType, tuple[ComponentType, ...]] = {}
for _child, _parent in _PARENTS.items():
    _CHILDREN[_parent] = _CHILDREN.get(_parent, ()) + (_child,)
CHILD_TYPES: Mapping[ComponentType, tuple[ComponentType, ...]] = MappingProxyType(_CHILDREN)


def parent_type(kind: ComponentType | None) -> ComponentType | None:
    """Generic ancestor of a specialized kind, None for generic kinds."""
    if kind is None:
        return None
    return PARENT_TYPES.get(kind)


def base_type(kind: ComponentType | None) -> ComponentType | None:
    """Root of the kind's chain (the kind itself when generic)."""
    if kind is None:
        return None
    while kind in PARENT_TYPES:
        kind = PARENT_TYPES[kind]
    return kind


def is_specialized(kind: ComponentType | None) -> bool:
    return kind is not None and kind in PARENT_TYPES


def specializations(kind: ComponentType | None) -> tuple[ComponentType, ...]:
    """Specialized kinds whose generic ancestor is `kind`."""
    if kind is None:
        return ()
    return CHILD_TYPES.get(kind, ())


def supported_kinds(*kinds: ComponentType | Iterable[ComponentType]) -> frozenset[ComponentType]:
    """Build a read-only kind set, closing it over generic ancestors.

    All handler `supported_types` go through this constructor so the result
    is always immutable and duplicate-free.
    """
    result: set[ComponentType] = set()
    for item in kinds:
        group = (item,) if isinstance(item, ComponentType) else tuple(item)
        for kind in group:
            if not isinstance(kind, ComponentType):
                raise TypeError(f"Expected ComponentType, got {kind!r}")
            result.add(kind)
            ancestor = parent_type(kind)
            while ancestor is not None:
                result.add(ancestor)
                ancestor = parent_type(ancestor)
    return frozenset(result)
