from django.shortcuts import get_object_or_404
from rest_framework import generics, status, views
from rest_framework.response import Response

from admissions.engine import AdmissionEngineError
from admissions.models import Candidate
from admissions.permissions import IsAdmissionOfficer, IsCandidate
from admissions.views import engine_error_response
from .models import TestAttempt
from .serializers import (
    ActiveTestAttemptSerializer,
    AssignTestsSerializer,
    TestAttemptSerializer,
    TestSubmissionSerializer,
)
from . import services


# --- CANDIDATE VIEWS ---

class CandidateTestListView(generics.ListAPIView):
    """List all test attempts for the logged-in candidate (Lightweight)."""
    permission_classes = [IsCandidate]
    serializer_class = TestAttemptSerializer

    def get_queryset(self):
        return (
            TestAttempt.objects
            .filter(candidate=self.request.user.candidate)
            .select_related('examination__department')
        )


class TestAttemptDetailView(generics.RetrieveAPIView):
    """Allow candidate to retrieve a specific attempt (Heavy - Includes Questions)."""
    permission_classes = [IsCandidate]
    serializer_class = ActiveTestAttemptSerializer

    def get_object(self):
        return get_object_or_404(TestAttempt, id=self.kwargs['pk'], candidate=self.request.user.candidate)


class StartTestView(views.APIView):
    permission_classes = [IsCandidate]

    def post(self, request, pk):
        candidate = request.user.candidate
        get_object_or_404(TestAttempt, id=pk, candidate=candidate)

        try:
            attempt = services.start_test(pk, candidate)
        except services.TestSubmissionError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ActiveTestAttemptSerializer(attempt).data)


class SubmitTestView(views.APIView):
    """
    Candidate submits answers.
    Grades the attempt immediately and recalculates the admission result.
    """
    permission_classes = [IsCandidate]

    def post(self, request, pk):
        candidate = request.user.candidate
        get_object_or_404(TestAttempt, id=pk, candidate=candidate)

        serializer = TestSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            attempt, submission, outcome = services.submit_test(
                pk, candidate, serializer.validated_data['answers']
            )
        except services.TestSubmissionError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except AdmissionEngineError as e:
            return engine_error_response(e)

        return Response({
            "status": attempt.status,
            "score": submission.score,
            "total_marks": submission.total_marks,
            "percentage": submission.percentage,
            "final_score": outcome.assessment.final_score,
            "admission_status": outcome.status.value,
        })


# --- ADMIN VIEWS ---

class AdminAssignTestsView(views.APIView):
    """
    Assign departmental tests to one candidate, or to every candidate
    that has none yet when no candidate_id is given.
    """
    permission_classes = [IsAdmissionOfficer]

    def post(self, request):
        serializer = AssignTestsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        candidate_id = serializer.validated_data.get('candidate_id')

        if candidate_id is None:
            assigned = services.assign_tests_to_candidates_without_tests(actor=request.user)
            return Response({
                "candidates": len(assigned),
                "tests_assigned": sum(assigned.values()),
            })

        candidate = get_object_or_404(Candidate, pk=candidate_id)
        try:
            attempts = services.assign_departmental_tests(candidate.pk)
        except services.TestAssignmentError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except AdmissionEngineError as e:
            return engine_error_response(e)

        return Response({
            "candidates": 1,
            "tests_assigned": len(attempts),
            "attempts": TestAttemptSerializer(attempts, many=True).data,
        }, status=status.HTTP_201_CREATED if attempts else status.HTTP_200_OK)
