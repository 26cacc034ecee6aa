from django.db import models
from django.core.cache import cache
from django.core.validators import MaxValueValidator
from django.conf import settings

class PlatformSetting(models.Model):
    CACHE_KEY = 'platform_settings'

    # --- General ---
    site_name = models.CharField(max_length=100, default="Admission Screening Portal")
    support_email = models.EmailField(default="admissions@example.edu.ng")

    # --- Recommendation & Weight Defaults ---
    recommendation_margin = models.PositiveIntegerField(
        default=10,
        help_text="Points above a department's final cutoff for a HIGHLY_RECOMMENDED verdict"
    )
    default_exam_weight = models.PositiveIntegerField(
        default=70, validators=[MaxValueValidator(100)],
        help_text="Exam weight given to new departments"
    )
    default_olevel_weight = models.PositiveIntegerField(
        default=30, validators=[MaxValueValidator(100)],
        help_text="O'Level weight given to new departments"
    )
    max_alternative_departments = models.PositiveIntegerField(
        default=5,
        help_text="Alternatives suggested by the pre-registration eligibility check"
    )

    def save(self, *args, **kwargs):
        self.pk = 1  # Singleton pattern
        super().save(*args, **kwargs)
        cache.set(self.CACHE_KEY, self)

    def delete(self, *args, **kwargs):
        pass

    @classmethod
    def load(cls):
        obj = cache.get(cls.CACHE_KEY)
        if obj is None:
            defaults = {
                'recommendation_margin': settings.ADMISSION_ENGINE['RECOMMENDATION_MARGIN'],
                'max_alternative_departments': settings.ADMISSION_ENGINE['MAX_ALTERNATIVES'],
            }
            obj, created = cls.objects.get_or_create(pk=1, defaults=defaults)
            cache.set(cls.CACHE_KEY, obj)
        return obj

    def __str__(self):
        return "Platform Settings"


class AuditLog(models.Model):
    ACTION_CHOICES = [
        ('OVERRIDE', 'Admission Status Override'),
        ('RECALCULATE', 'Scores Recalculated'),
        ('ASSIGN_TESTS', 'Tests Assigned'),
        ('SETTINGS', 'Settings Changed'),
        ('RESULTS', "O'Level Results Replaced"),
    ]

    actor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='audit_logs')
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    target_model = models.CharField(max_length=50, help_text="e.g., Candidate, Department, PlatformSetting")
    target_object_id = models.CharField(max_length=100, blank=True, null=True)
    details = models.TextField(blank=True, help_text="Description of changes")
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-timestamp']

    @classmethod
    def record(cls, actor, action, target_model, target_object_id=None, details=''):
        # Management commands and background callers have no user
        if actor is not None and not getattr(actor, 'is_authenticated', False):
            actor = None
        return cls.objects.create(
            actor=actor,
            action=action,
            target_model=target_model,
            target_object_id=str(target_object_id) if target_object_id is not None else None,
            details=details,
        )

    def __str__(self):
        return f"{self.actor} - {self.action} - {self.timestamp}"
