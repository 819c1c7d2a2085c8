from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role, provided by the authentication collaborator."""

    MANAGER = "MANAGER"
    STAFF = "STAFF"


class TaskStatus(str, Enum):
    COMPLETED = "COMPLETED"
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class TaskScope(str, Enum):
    """Granularity at which a task definition is expected once per day."""

    PER_FLAT = "PER_FLAT"
    PER_FLOOR = "PER_FLOOR"
    PER_BLOCK = "PER_BLOCK"
    COMMON = "COMMON"


class TaskCategory(str, Enum):
    GARBAGE = "GARBAGE"
    BROOMING = "BROOMING"
    MOPPING = "MOPPING"
    STAIRCASE = "STAIRCASE"
    GLASS = "GLASS"
    DRIVEWAY = "DRIVEWAY"
    OTHER = "OTHER"


class Frequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"


class PunchType(str, Enum):
    IN = "IN"
    OUT = "OUT"


class DutyState(str, Enum):
    OFF_DUTY = "OFF_DUTY"
    ON_DUTY = "ON_DUTY"


class Urgency(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class SupplyStatus(str, Enum):
    """Supply request lifecycle; only approve/reject move it off OPEN."""

    OPEN = "OPEN"
    FULFILLED = "FULFILLED"
    REJECTED = "REJECTED"
