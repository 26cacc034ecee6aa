# admission_platform/exams/models.py
from django.core.exceptions import ValidationError
from django.db import models

from admissions.engine import QuestionKey


class Examination(models.Model):
    """A department's computer-based screening test."""
    department = models.ForeignKey('admissions.Department', on_delete=models.CASCADE, related_name='examinations')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    total_marks = models.PositiveIntegerField()
    passing_marks = models.PositiveIntegerField(default=0)
    duration_minutes = models.PositiveIntegerField()

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def answer_key(self):
        return [question.as_key() for question in self.questions.all()]

    def __str__(self):
        return self.title


class Question(models.Model):
    examination = models.ForeignKey(Examination, related_name='questions', on_delete=models.CASCADE)

    text = models.TextField()
    # Option texts in display order; answers are option indexes
    options = models.JSONField(default=list)
    correct_answer = models.PositiveSmallIntegerField(help_text="Index of the correct option")
    marks = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ['id']

    def clean(self):
        super().clean()
        if not isinstance(self.options, list) or len(self.options) < 2:
            raise ValidationError({'options': "A question needs at least two options."})
        if self.correct_answer is not None and self.correct_answer >= len(self.options):
            raise ValidationError({'correct_answer': "Correct answer must index one of the options."})

    def as_key(self):
        return QuestionKey(question_id=self.pk, correct_answer=self.correct_answer, marks=self.marks)

    def __str__(self):
        return f"{self.text[:50]}..."
