from django.urls import path

from .views import (
    AdminBatchRecalculateView,
    AdminCandidateRecalculateView,
    AdminDecisionHistoryView,
    AdminOLevelResultsView,
    AdminStatusOverrideView,
    AdmissionStatsView,
    CandidateRecalculateView,
    CandidateResultView,
    EligibilityCheckView,
    PublicDepartmentListView,
    RecommendationView,
)

urlpatterns = [
    # Public
    path('public/departments/', PublicDepartmentListView.as_view(), name='public-departments'),
    path('eligibility/check/', EligibilityCheckView.as_view(), name='eligibility-check'),

    # Candidate
    path('candidate/result/', CandidateResultView.as_view(), name='candidate-result'),
    path('candidate/recalculate/', CandidateRecalculateView.as_view(), name='candidate-recalculate'),
    path('candidate/recommendations/', RecommendationView.as_view(), name='candidate-recommendations'),

    # Admin
    path('admin/candidates/recalculate/', AdminBatchRecalculateView.as_view(), name='admin-batch-recalculate'),
    path('admin/candidates/<int:candidate_id>/recalculate/', AdminCandidateRecalculateView.as_view(), name='admin-candidate-recalculate'),
    path('admin/candidates/<int:candidate_id>/override/', AdminStatusOverrideView.as_view(), name='admin-status-override'),
    path('admin/candidates/<int:candidate_id>/decisions/', AdminDecisionHistoryView.as_view(), name='admin-decision-history'),
    path('admin/candidates/<int:candidate_id>/olevel-results/', AdminOLevelResultsView.as_view(), name='admin-olevel-results'),
    path('admin/stats/', AdmissionStatsView.as_view(), name='admin-stats'),
]
