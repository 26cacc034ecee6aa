# admission_platform/admissions/models.py
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator
from django.db import models

from .engine import AdmissionStatus, DepartmentRules, GradingTable, StatusOrigin, SubjectGrade

ADMISSION_STATUS_CHOICES = [(s.value, s.value.replace('_', ' ').title()) for s in AdmissionStatus]
STATUS_ORIGIN_CHOICES = [(o.value, o.value.title()) for o in StatusOrigin]


class GradingRule(models.Model):
    """One row of the O'Level grading table, e.g. A1 -> 9."""
    grade = models.CharField(max_length=5, unique=True)
    marks = models.PositiveSmallIntegerField(validators=[MaxValueValidator(9)])

    class Meta:
        ordering = ['-marks', 'grade']

    def save(self, *args, **kwargs):
        self.grade = self.grade.strip().upper()
        super().save(*args, **kwargs)

    @classmethod
    def load_table(cls):
        return GradingTable({rule.grade: rule.marks for rule in cls.objects.all()})

    def __str__(self):
        return f"{self.grade} ({self.marks})"


class Department(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "ACTIVE", "Active"
        INACTIVE = "INACTIVE", "Inactive"

    name = models.CharField(max_length=150)
    code = models.CharField(max_length=20, unique=True)
    description = models.TextField(blank=True)

    # Cutoffs
    utme_cutoff_mark = models.PositiveSmallIntegerField(validators=[MaxValueValidator(400)])
    olevel_cutoff_aggregate = models.PositiveSmallIntegerField()
    final_cutoff_mark = models.PositiveSmallIntegerField(validators=[MaxValueValidator(100)])

    # Weights of the final score. New departments start at 70/30.
    exam_percentage = models.PositiveSmallIntegerField(default=70, validators=[MaxValueValidator(100)])
    olevel_percentage = models.PositiveSmallIntegerField(default=30, validators=[MaxValueValidator(100)])

    status = models.CharField(max_length=10, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']

    def clean(self):
        super().clean()
        if self.exam_percentage is not None and self.olevel_percentage is not None:
            if self.exam_percentage + self.olevel_percentage != 100:
                raise ValidationError({
                    'olevel_percentage': "Exam and O'Level weights must add up to 100."
                })

    def as_rules(self):
        return DepartmentRules(
            id=self.pk,
            name=self.name,
            code=self.code,
            utme_cutoff_mark=self.utme_cutoff_mark,
            olevel_cutoff_aggregate=self.olevel_cutoff_aggregate,
            final_cutoff_mark=self.final_cutoff_mark,
            exam_percentage=self.exam_percentage,
            olevel_percentage=self.olevel_percentage,
            status=self.status,
        )

    def __str__(self):
        return f"{self.code} - {self.name}"


class Candidate(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        null=True, blank=True, related_name='candidate'
    )
    full_name = models.CharField(max_length=255)
    utme_score = models.PositiveSmallIntegerField(validators=[MaxValueValidator(400)])
    department = models.ForeignKey(
        Department, on_delete=models.PROTECT,
        null=True, blank=True, related_name='candidates'
    )

    # Derived fields: written only by admissions.services
    olevel_aggregate = models.PositiveSmallIntegerField(default=0)
    olevel_percentage = models.PositiveSmallIntegerField(default=0)
    exam_percentage = models.PositiveSmallIntegerField(default=0)
    final_score = models.PositiveSmallIntegerField(null=True, blank=True)
    admission_status = models.CharField(
        max_length=20, choices=ADMISSION_STATUS_CHOICES,
        default=AdmissionStatus.NOT_ADMITTED.value, db_index=True
    )
    status_origin = models.CharField(
        max_length=20, choices=STATUS_ORIGIN_CHOICES, default=StatusOrigin.AUTOMATIC.value
    )

    # Bumped on every derived-field write; guards against lost updates
    version = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def subject_grades(self):
        return [result.as_subject_grade() for result in self.olevel_results.all()]

    def __str__(self):
        return self.full_name


class OLevelResult(models.Model):
    candidate = models.ForeignKey(Candidate, on_delete=models.CASCADE, related_name='olevel_results')
    subject = models.CharField(max_length=100)
    grade = models.CharField(max_length=5)
    # Snapshot link to the rule the grade matched at entry time
    grading_rule = models.ForeignKey(GradingRule, on_delete=models.PROTECT, related_name='results')

    class Meta:
        unique_together = ('candidate', 'subject')

    def save(self, *args, **kwargs):
        if self.grading_rule_id is not None:
            self.grade = self.grading_rule.grade
        self.grade = self.grade.strip().upper()
        super().save(*args, **kwargs)

    def as_subject_grade(self):
        return SubjectGrade(subject=self.subject, grade=self.grade)

    def __str__(self):
        return f"{self.candidate} - {self.subject}: {self.grade}"


class AdmissionDecision(models.Model):
    """Append-only history of every admission status write."""
    candidate = models.ForeignKey(Candidate, on_delete=models.CASCADE, related_name='decisions')
    origin = models.CharField(max_length=20, choices=STATUS_ORIGIN_CHOICES)
    previous_status = models.CharField(max_length=20, choices=ADMISSION_STATUS_CHOICES)
    status = models.CharField(max_length=20, choices=ADMISSION_STATUS_CHOICES)
    derived_status = models.CharField(max_length=20, choices=ADMISSION_STATUS_CHOICES, blank=True)
    final_score = models.PositiveSmallIntegerField(null=True, blank=True)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='admission_decisions'
    )
    reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.candidate}: {self.previous_status} -> {self.status} ({self.origin})"
