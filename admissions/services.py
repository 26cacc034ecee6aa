"""
Recomputation and override services.

Every write to a candidate's derived fields (O'Level aggregate and
percentage, exam percentage, final score, admission status) goes through
this module. Each write is one read-modify-write unit: the candidate row
is locked, every input is read, the engine derives the new values, and a
single version-checked UPDATE stores them.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from cores.models import AuditLog, PlatformSetting

from .engine import (
    AdministrativeOverride,
    AdmissionStatus,
    AutomaticRecompute,
    CandidateAssessment,
    CandidateScores,
    ConcurrentUpdateError,
    DuplicateSubjectError,
    MissingDepartmentError,
    StatusOrigin,
    UnknownGradeError,
    aggregate_olevel,
    apply_status_event,
    assess_candidate,
    check_registration_eligibility,
    recommend_departments,
    score_exam,
    summarize_recommendations,
)
from .engine.grading import normalize_grade
from .models import AdmissionDecision, Candidate, Department, GradingRule, OLevelResult

logger = logging.getLogger(__name__)


@dataclass
class RecomputeOutcome:
    candidate: Candidate
    assessment: CandidateAssessment
    previous_status: AdmissionStatus
    status: AdmissionStatus

    @property
    def status_changed(self):
        return self.previous_status != self.status


@dataclass
class RecomputeFailure:
    candidate_id: int
    error: str
    message: str


@dataclass
class BatchRecomputeSummary:
    processed: int = 0
    succeeded: int = 0
    failures: List[RecomputeFailure] = field(default_factory=list)

    @property
    def failed(self):
        return len(self.failures)


def load_grading_table():
    return GradingRule.load_table()


def active_departments():
    return [d.as_rules() for d in Department.objects.filter(status=Department.Status.ACTIVE).order_by('id')]


def lock_candidate(candidate_id):
    # No select_related: FOR UPDATE cannot cover the nullable side of an outer join
    return Candidate.objects.select_for_update().get(pk=candidate_id)


def department_rules(candidate):
    if candidate.department_id is None:
        raise MissingDepartmentError(f"Candidate {candidate.pk} has no department")
    return candidate.department.as_rules()


def attempt_results(candidate):
    return [a.as_result() for a in candidate.test_attempts.select_related('examination')]


def assess(candidate, table=None):
    """Derive every score and the automatic status for `candidate` from stored inputs."""
    return assess_candidate(
        utme_score=candidate.utme_score,
        results=candidate.subject_grades(),
        attempts=attempt_results(candidate),
        department=department_rules(candidate),
        table=table or load_grading_table(),
    )


def candidate_for_display(candidate_id):
    return (
        Candidate.objects
        .select_related('department')
        .prefetch_related('olevel_results__grading_rule')
        .get(pk=candidate_id)
    )


def candidate_scores(candidate, table=None):
    """Department-independent scores, computed live rather than read from stored fields."""
    olevel = aggregate_olevel(candidate.subject_grades(), table or load_grading_table())
    exam = score_exam(attempt_results(candidate))
    return CandidateScores(
        utme_score=candidate.utme_score,
        olevel_aggregate=olevel.aggregate,
        olevel_percentage=olevel.percentage,
        exam_percentage=exam.percentage,
    )


def write_derived_fields(candidate, expected_version, **fields):
    fields['updated_at'] = timezone.now()
    updated = Candidate.objects.filter(pk=candidate.pk, version=expected_version).update(
        version=F('version') + 1,
        **fields,
    )
    if not updated:
        raise ConcurrentUpdateError(candidate.pk, expected_version)

    for name, value in fields.items():
        setattr(candidate, name, value)
    candidate.version = expected_version + 1


def recompute_candidate(candidate_id, table=None) -> RecomputeOutcome:
    """
    Recompute all derived fields of one candidate and apply the automatic
    status transition.

    Raises UnknownGradeError / MissingDepartmentError without writing
    anything, and ConcurrentUpdateError when the version check fails.
    """
    with transaction.atomic():
        candidate = lock_candidate(candidate_id)
        expected_version = candidate.version
        previous = AdmissionStatus(candidate.admission_status)

        assessment = assess(candidate, table)
        status = apply_status_event(previous, AutomaticRecompute(assessment.derived_status))
        origin = candidate.status_origin if previous.is_terminal else StatusOrigin.AUTOMATIC.value

        write_derived_fields(
            candidate,
            expected_version,
            olevel_aggregate=assessment.olevel_aggregate,
            olevel_percentage=assessment.olevel_percentage,
            exam_percentage=assessment.exam_percentage,
            final_score=assessment.final_score,
            admission_status=status.value,
            status_origin=origin,
        )

        if status != previous:
            AdmissionDecision.objects.create(
                candidate=candidate,
                origin=StatusOrigin.AUTOMATIC.value,
                previous_status=previous.value,
                status=status.value,
                derived_status=assessment.derived_status.value,
                final_score=assessment.final_score,
            )
        elif previous.is_terminal and assessment.derived_status != previous:
            logger.info(
                "Candidate %s stays %s; recomputed status would be %s",
                candidate.pk, previous.value, assessment.derived_status.value,
            )

    logger.info(
        "Recomputed candidate %s: olevel=%s (%s%%) exam=%s%% final=%s status=%s",
        candidate.pk, assessment.olevel_aggregate, assessment.olevel_percentage,
        assessment.exam_percentage, assessment.final_score, status.value,
    )
    return RecomputeOutcome(candidate=candidate, assessment=assessment, previous_status=previous, status=status)


def override_admission_status(candidate_id, status, actor=None, reason=''):
    """Administrative accept/reject: sets the status directly, bypassing the automatic rule."""
    event = AdministrativeOverride(
        status=AdmissionStatus(status),
        actor=getattr(actor, 'email', None),
        reason=reason,
    )
    with transaction.atomic():
        candidate = lock_candidate(candidate_id)
        previous = AdmissionStatus(candidate.admission_status)
        new_status = apply_status_event(previous, event)

        write_derived_fields(
            candidate,
            candidate.version,
            admission_status=new_status.value,
            status_origin=StatusOrigin.OVERRIDE.value,
        )
        AdmissionDecision.objects.create(
            candidate=candidate,
            origin=StatusOrigin.OVERRIDE.value,
            previous_status=previous.value,
            status=new_status.value,
            final_score=candidate.final_score,
            actor=actor if getattr(actor, 'is_authenticated', False) else None,
            reason=reason,
        )
        AuditLog.record(
            actor, 'OVERRIDE', 'Candidate', candidate.pk,
            details=f"Admission status {previous.value} -> {new_status.value}. {reason}".strip(),
        )

    logger.info("Candidate %s status overridden %s -> %s by %s", candidate.pk, previous.value, new_status.value, event.actor)
    return candidate


def recalculate_candidates(candidate_ids: Optional[Iterable[int]] = None, actor=None) -> BatchRecomputeSummary:
    """
    Recompute many candidates, one transaction each.

    A failing candidate is logged and reported in the summary; the rest of
    the batch carries on.
    """
    if candidate_ids is None:
        candidate_ids = Candidate.objects.order_by('id').values_list('id', flat=True)
    candidate_ids = list(candidate_ids)

    summary = BatchRecomputeSummary()
    for candidate_id in candidate_ids:
        summary.processed += 1
        try:
            recompute_candidate(candidate_id)
        except Exception as exc:
            logger.exception("Recalculation failed for candidate %s", candidate_id)
            summary.failures.append(
                RecomputeFailure(candidate_id=candidate_id, error=type(exc).__name__, message=str(exc))
            )
        else:
            summary.succeeded += 1

    AuditLog.record(
        actor, 'RECALCULATE', 'Candidate',
        details=f"Recalculated {summary.succeeded}/{summary.processed} candidates; {summary.failed} failed",
    )
    logger.info("Batch recalculation: %s processed, %s failed", summary.processed, summary.failed)
    return summary


def replace_olevel_results(candidate_id, results, actor=None):
    """
    Replace a candidate's O'Level results and recompute.

    `results` is an iterable of SubjectGrade. Every grade must match a
    grading rule and each subject may appear once; otherwise nothing is
    changed.
    """
    rules = {rule.grade: rule for rule in GradingRule.objects.all()}
    rows = []
    seen = set()
    for result in results:
        subject = result.subject.strip()
        if subject.lower() in seen:
            raise DuplicateSubjectError(subject)
        seen.add(subject.lower())

        grade = normalize_grade(result.grade)
        if grade not in rules:
            raise UnknownGradeError(grade, subject)
        rows.append((subject, rules[grade]))

    with transaction.atomic():
        candidate = lock_candidate(candidate_id)
        candidate.olevel_results.all().delete()
        OLevelResult.objects.bulk_create([
            OLevelResult(candidate=candidate, subject=subject, grade=rule.grade, grading_rule=rule)
            for subject, rule in rows
        ])
        outcome = recompute_candidate(candidate.pk)
        AuditLog.record(
            actor, 'RESULTS', 'Candidate', candidate.pk,
            details=f"Replaced O'Level results ({len(rows)} subjects)",
        )
    return outcome


def recommendations_for(candidate, margin=None):
    if margin is None:
        margin = PlatformSetting.load().recommendation_margin
    verdicts = recommend_departments(
        candidate_scores(candidate),
        active_departments(),
        margin=margin,
        current_department_id=candidate.department_id,
    )
    return verdicts, summarize_recommendations(verdicts)


def check_eligibility(utme_score, results, department):
    platform = PlatformSetting.load()
    return check_registration_eligibility(
        utme_score=utme_score,
        results=results,
        department=department.as_rules(),
        table=load_grading_table(),
        departments=active_departments(),
        max_alternatives=platform.max_alternative_departments,
    )
