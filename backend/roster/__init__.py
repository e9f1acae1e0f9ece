"""Roster records and shift window normalization."""

from .types import (
    QualificationType,
    QualificationRecord,
    WorkerRole,
    EmploymentType,
    ShiftStatus,
    WorkerRecord,
    ShiftRecord,
    Room,
    Centre,
)
from .normalizer import NormalizedShift, normalize_shift

__all__ = [
    "QualificationType",
    "QualificationRecord",
    "WorkerRole",
    "EmploymentType",
    "ShiftStatus",
    "WorkerRecord",
    "ShiftRecord",
    "Room",
    "Centre",
    "NormalizedShift",
    "normalize_shift",
]
