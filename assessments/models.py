# assessments/models.py
from django.db import models

from admissions.engine import AttemptResult
from admissions.models import Candidate
from exams.models import Examination, Question


class TestAttempt(models.Model):
    """A candidate's single attempt at one departmental examination."""

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        IN_PROGRESS = "IN_PROGRESS", "In Progress"
        SUBMITTED = "SUBMITTED", "Submitted"
        COMPLETED = "COMPLETED", "Completed"

    TERMINAL_STATUSES = (Status.SUBMITTED, Status.COMPLETED)

    candidate = models.ForeignKey(Candidate, on_delete=models.PROTECT, related_name='test_attempts')
    examination = models.ForeignKey(Examination, on_delete=models.CASCADE, related_name='attempts')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)

    score = models.PositiveIntegerField(null=True, blank=True)  # null until graded
    total_marks = models.PositiveIntegerField()  # examination total when assigned

    assigned_at = models.DateTimeField(auto_now_add=True)
    start_time = models.DateTimeField(null=True, blank=True)
    end_time = models.DateTimeField(null=True, blank=True)  # When they submitted

    class Meta:
        unique_together = ('candidate', 'examination')
        ordering = ['assigned_at', 'id']

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    def as_result(self):
        # Percentages use the examination's current total, not the snapshot
        return AttemptResult(status=self.status, score=self.score, total_marks=self.examination.total_marks)

    def __str__(self):
        return f"{self.candidate} - {self.examination.title}"


class TestAnswer(models.Model):
    attempt = models.ForeignKey(TestAttempt, related_name='answers', on_delete=models.CASCADE)
    question = models.ForeignKey(Question, on_delete=models.CASCADE)

    selected_answer = models.PositiveSmallIntegerField()
    is_correct = models.BooleanField(default=False)
    marks_obtained = models.PositiveIntegerField(default=0)

    class Meta:
        unique_together = ('attempt', 'question')
