"""Manufacturer handler families."""

from .base import ManufacturerHandler
from .infineon import InfineonHandler
from .maxim import MaximHandler
from .onsemi import OnSemiHandler
from .st import STHandler
from .ti import TIHandler

HANDLER_CLASSES: tuple[type[ManufacturerHandler], ...] = (
    InfineonHandler,
    MaximHandler,
    OnSemiHandler,
    STHandler,
    TIHandler,
)


def default_handlers() -> tuple[ManufacturerHandler, ...]:
    """Fresh instances of every shipped handler, sorted by class name."""
    return tuple(cls() for cls in sorted(HANDLER_CLASSES, key=lambda cls: cls.__name__))


__all__ = [
    "HANDLER_CLASSES",
    "InfineonHandler",
    "ManufacturerHandler",
    "MaximHandler",
    "OnSemiHandler",
    "STHandler",
    "TIHandler",
    "default_handlers",
]
