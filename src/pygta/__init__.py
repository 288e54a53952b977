"""pygta - In-memory entity synchronization store for the GTA client."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygta")
except PackageNotFoundError:
    __version__ = "0+local"
from pygta.config import StoreConfig
from pygta.exceptions import GtaError, GtaInvalidActionError
from pygta.models import (
    Element,
    GtaPeriode,
    GtaRecord,
    Login,
    PersonnelDeclaration,
    Pointage,
    Semaine,
    Structure,
)
from pygta.state.events import StateSection, StoreCommand, StoreEvent
from pygta.state.store import GtaStore, LoadResult, StoreState

__all__ = [
    "__version__",
    "Element",
    "GtaError",
    "GtaInvalidActionError",
    "GtaPeriode",
    "GtaRecord",
    "GtaStore",
    "LoadResult",
    "Login",
    "PersonnelDeclaration",
    "Pointage",
    "Semaine",
    "StateSection",
    "StoreCommand",
    "StoreConfig",
    "StoreEvent",
    "StoreState",
    "Structure",
]
