"""Record models held by the pygta store."""

from pygta.models._base import GtaRecord, RecordId, coerce_record
from pygta.models.element import Element
from pygta.models.login import Login
from pygta.models.personnel import GtaPeriode, PersonnelDeclaration
from pygta.models.pointage import Pointage
from pygta.models.semaine import Semaine
from pygta.models.structure import Structure

__all__ = [
    "Element",
    "GtaPeriode",
    "GtaRecord",
    "Login",
    "PersonnelDeclaration",
    "Pointage",
    "RecordId",
    "Semaine",
    "Structure",
    "coerce_record",
]
