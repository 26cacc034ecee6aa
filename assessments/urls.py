from django.urls import path
from .views import AdminAssignTestsView, CandidateTestListView, StartTestView, SubmitTestView, TestAttemptDetailView

urlpatterns = [
    # Candidate test flow
    path('candidate/tests/', CandidateTestListView.as_view(), name='candidate-tests'),
    path('candidate/tests/<int:pk>/', TestAttemptDetailView.as_view(), name='test-attempt-detail'),
    path('candidate/tests/<int:pk>/start/', StartTestView.as_view(), name='start-test'),
    path('candidate/tests/<int:pk>/submit/', SubmitTestView.as_view(), name='submit-test'),

    # Admin
    path('admin/assign-tests/', AdminAssignTestsView.as_view(), name='admin-assign-tests'),
]
