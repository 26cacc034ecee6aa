import logging

from django.db.models import Count
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status, views
from rest_framework.response import Response

from .engine import AdmissionEngineError, AdmissionStatus, ConcurrentUpdateError
from .models import Candidate, Department
from .permissions import IsAdmissionOfficer, IsCandidate
from .serializers import (
    AdmissionDecisionSerializer,
    BatchRecalculateSerializer,
    CandidateResultSerializer,
    DepartmentRequirementSerializer,
    DepartmentVerdictSerializer,
    EligibilityCheckSerializer,
    OLevelResultsUpdateSerializer,
    StatusOverrideSerializer,
    recompute_data,
    registration_check_data,
)
from . import services

logger = logging.getLogger(__name__)


def engine_error_response(exc):
    logger.warning("Request failed: %s", exc)
    if isinstance(exc, ConcurrentUpdateError):
        return Response(
            {"error": str(exc), "retryable": True},
            status=status.HTTP_409_CONFLICT,
        )
    return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


# --- PUBLIC VIEWS ---

class PublicDepartmentListView(generics.ListAPIView):
    """Active departments with their cutoffs and weights."""
    permission_classes = [permissions.AllowAny]
    serializer_class = DepartmentRequirementSerializer
    queryset = Department.objects.filter(status=Department.Status.ACTIVE).order_by('name')


class EligibilityCheckView(views.APIView):
    """
    Pre-registration check of the UTME and O'Level bars for one department.
    Suggests alternative departments when the applicant falls short.
    """
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = EligibilityCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            check = services.check_eligibility(
                utme_score=data['utme_score'],
                results=data['olevel_results'],
                department=data['department_id'],
            )
        except AdmissionEngineError as e:
            return engine_error_response(e)
        return Response(registration_check_data(check))


# --- CANDIDATE VIEWS ---

class CandidateResultView(views.APIView):
    """Stored scores and status, plus the requirements checked against live scores."""
    permission_classes = [IsCandidate]

    def get(self, request):
        candidate = services.candidate_for_display(request.user.candidate.pk)
        data = CandidateResultSerializer(candidate).data
        try:
            assessment = services.assess(candidate)
        except AdmissionEngineError as e:
            return engine_error_response(e)
        data['requirements'] = assessment.eligibility.as_dict()
        return Response(data)


class CandidateRecalculateView(views.APIView):
    permission_classes = [IsCandidate]

    def post(self, request):
        try:
            outcome = services.recompute_candidate(request.user.candidate.pk)
        except AdmissionEngineError as e:
            return engine_error_response(e)
        return Response(recompute_data(outcome))


class RecommendationView(views.APIView):
    """Ranks every active department for the logged-in candidate. Read-only."""
    permission_classes = [IsCandidate]

    def get(self, request):
        candidate = services.candidate_for_display(request.user.candidate.pk)
        try:
            verdicts, summary = services.recommendations_for(candidate)
        except AdmissionEngineError as e:
            return engine_error_response(e)

        recommendations = DepartmentVerdictSerializer(verdicts, many=True).data
        best = DepartmentVerdictSerializer(summary.best).data if summary.best else None
        return Response({
            "current_department": candidate.department.name if candidate.department else None,
            "current_status": candidate.admission_status,
            "recommendations": recommendations,
            "best_recommendation": best,
            "summary": {
                "total_departments": summary.total_departments,
                "eligible_departments": summary.eligible_departments,
                "highly_recommended": summary.highly_recommended,
            },
        })


# --- ADMIN VIEWS ---

class AdminCandidateRecalculateView(views.APIView):
    permission_classes = [IsAdmissionOfficer]

    def post(self, request, candidate_id):
        candidate = get_object_or_404(Candidate, pk=candidate_id)
        try:
            outcome = services.recompute_candidate(candidate.pk)
        except AdmissionEngineError as e:
            return engine_error_response(e)
        return Response(recompute_data(outcome))


class AdminBatchRecalculateView(views.APIView):
    """Recalculate many (default: all) candidates. Individual failures do not stop the batch."""
    permission_classes = [IsAdmissionOfficer]

    def post(self, request):
        serializer = BatchRecalculateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        summary = services.recalculate_candidates(
            serializer.validated_data.get('candidate_ids'),
            actor=request.user,
        )
        return Response({
            "processed": summary.processed,
            "succeeded": summary.succeeded,
            "failed": summary.failed,
            "failures": [
                {"candidate_id": f.candidate_id, "error": f.error, "message": f.message}
                for f in summary.failures
            ],
        })


class AdminStatusOverrideView(views.APIView):
    """Admin accept/reject: sets the admission status directly."""
    permission_classes = [IsAdmissionOfficer]

    def post(self, request, candidate_id):
        candidate = get_object_or_404(Candidate, pk=candidate_id)
        serializer = StatusOverrideSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            candidate = services.override_admission_status(
                candidate.pk,
                serializer.validated_data['status'],
                actor=request.user,
                reason=serializer.validated_data['reason'],
            )
        except AdmissionEngineError as e:
            return engine_error_response(e)
        return Response(CandidateResultSerializer(candidate).data)


class AdminOLevelResultsView(views.APIView):
    """Replaces a candidate's O'Level results and returns the recomputed scores."""
    permission_classes = [IsAdmissionOfficer]

    def put(self, request, candidate_id):
        candidate = get_object_or_404(Candidate, pk=candidate_id)
        serializer = OLevelResultsUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            outcome = services.replace_olevel_results(
                candidate.pk,
                serializer.validated_data['olevel_results'],
                actor=request.user,
            )
        except AdmissionEngineError as e:
            return engine_error_response(e)
        return Response(recompute_data(outcome))


class AdminDecisionHistoryView(generics.ListAPIView):
    permission_classes = [IsAdmissionOfficer]
    serializer_class = AdmissionDecisionSerializer

    def get_queryset(self):
        candidate = get_object_or_404(Candidate, pk=self.kwargs['candidate_id'])
        return candidate.decisions.select_related('actor')


class AdmissionStatsView(views.APIView):
    """Returns candidate counts per admission status for the admin dashboard."""
    permission_classes = [IsAdmissionOfficer]

    def get(self, request):
        counts = {s.value: 0 for s in AdmissionStatus}
        for row in Candidate.objects.values('admission_status').annotate(total=Count('id')):
            counts[row['admission_status']] = row['total']

        return Response({
            "total_candidates": sum(counts.values()),
            "total_departments": Department.objects.filter(status=Department.Status.ACTIVE).count(),
            "by_status": counts,
        })
