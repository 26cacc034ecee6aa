"""
Admission state machine.

NOT_ADMITTED -> IN_PROGRESS -> ADMITTED | REJECTED

Automatic recomputation derives the status from eligibility and test
completion. ADMITTED and REJECTED are terminal for automatic
recomputation; only an administrative override moves a candidate out of
them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .eligibility import Eligibility


class AdmissionStatus(str, Enum):
    NOT_ADMITTED = "NOT_ADMITTED"
    IN_PROGRESS = "IN_PROGRESS"
    ADMITTED = "ADMITTED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({AdmissionStatus.ADMITTED, AdmissionStatus.REJECTED})


class StatusOrigin(str, Enum):
    AUTOMATIC = "AUTOMATIC"
    OVERRIDE = "OVERRIDE"


@dataclass(frozen=True)
class AutomaticRecompute:
    derived_status: AdmissionStatus
    origin = StatusOrigin.AUTOMATIC


@dataclass(frozen=True)
class AdministrativeOverride:
    status: AdmissionStatus
    actor: Optional[str] = None
    reason: str = ""
    origin = StatusOrigin.OVERRIDE


StatusEvent = Union[AutomaticRecompute, AdministrativeOverride]


def derive_admission_status(has_completed_tests: bool, eligibility: Eligibility) -> AdmissionStatus:
    if not has_completed_tests:
        return AdmissionStatus.NOT_ADMITTED
    if not eligibility.meets_utme or not eligibility.meets_olevel:
        return AdmissionStatus.REJECTED
    if eligibility.meets_final:
        return AdmissionStatus.ADMITTED
    return AdmissionStatus.IN_PROGRESS


def apply_status_event(current: Union[AdmissionStatus, str], event: StatusEvent) -> AdmissionStatus:
    """Status a candidate ends up with after `event` is applied to `current`."""
    current = AdmissionStatus(current)
    if isinstance(event, AdministrativeOverride):
        return AdmissionStatus(event.status)
    if current.is_terminal:
        return current
    return AdmissionStatus(event.derived_status)
