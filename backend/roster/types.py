"""Shared roster records consumed by the compliance, fatigue and leave engines."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from utils.time import parse_iso_date


class QualificationType(str, Enum):
    """Qualification types recognised for ratio and role coverage."""
    DIPLOMA_ECE = "diploma_ece"
    CERTIFICATE_III = "certificate_iii"
    FIRST_AID = "first_aid"
    FOOD_SAFETY = "food_safety"
    WORKING_WITH_CHILDREN = "working_with_children"
    BACHELOR_ECE = "bachelor_ece"
    MASTERS_ECE = "masters_ece"


class WorkerRole(str, Enum):
    LEAD_EDUCATOR = "lead_educator"
    EDUCATOR = "educator"
    ASSISTANT = "assistant"
    COOK = "cook"
    ADMIN = "admin"


class EmploymentType(str, Enum):
    PERMANENT = "permanent"
    CASUAL = "casual"
    AGENCY = "agency"


class ShiftStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"


@dataclass(frozen=True)
class QualificationRecord:
    """A qualification held by a worker."""
    type: QualificationType
    name: str = ""
    expiry_date: Optional[date] = None

    def is_expired(self, as_of: date) -> bool:
        """Expired when the expiry date has passed as of the reference date."""
        if self.expiry_date is None:
            return False
        return self.expiry_date < as_of

    def is_expiring_soon(self, as_of: date, within_days: int = 30) -> bool:
        if self.expiry_date is None or self.is_expired(as_of):
            return False
        return self.expiry_date <= as_of + timedelta(days=within_days)


@dataclass(frozen=True)
class WorkerRecord:
    """Compliance-related worker information."""
    id: str
    name: str
    role: WorkerRole = WorkerRole.EDUCATOR
    employment_type: EmploymentType = EmploymentType.PERMANENT
    qualifications: tuple[QualificationRecord, ...] = ()
    max_hours_per_week: float = 38.0
    hourly_rate: float = 0.0

    def active_qualifications(self, as_of: date) -> list[QualificationType]:
        return [q.type for q in self.qualifications if not q.is_expired(as_of)]


@dataclass(frozen=True)
class ShiftRecord:
    """A rostered shift as supplied by the roster store."""
    id: str
    worker_id: str
    room_id: str
    centre_id: str
    date: str  # ISO date string
    start_time: str  # HH:MM format
    end_time: str  # HH:MM format
    break_minutes: int = 0
    status: ShiftStatus = ShiftStatus.DRAFT

    @property
    def shift_date(self) -> date:
        return parse_iso_date(self.date)

    @property
    def time_span(self) -> str:
        return f"{self.start_time}-{self.end_time}"


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    centre_id: str
    age_group: str
    capacity: int
    required_ratio: float  # children per educator


@dataclass(frozen=True)
class Centre:
    id: str
    name: str
    rooms: tuple[Room, ...] = field(default_factory=tuple)

    def get_room(self, room_id: str) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None
