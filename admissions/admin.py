import logging

from django.contrib import admin, messages

from cores.models import PlatformSetting
from .engine import AdmissionEngineError
from .models import AdmissionDecision, Candidate, Department, GradingRule, OLevelResult
from . import services

logger = logging.getLogger(__name__)


@admin.register(GradingRule)
class GradingRuleAdmin(admin.ModelAdmin):
    list_display = ('grade', 'marks')


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = (
        'code', 'name', 'utme_cutoff_mark', 'olevel_cutoff_aggregate', 'final_cutoff_mark',
        'exam_percentage', 'olevel_percentage', 'status',
    )
    list_filter = ('status',)
    search_fields = ('code', 'name')

    def get_changeform_initial_data(self, request):
        initial = super().get_changeform_initial_data(request)
        platform = PlatformSetting.load()
        initial.setdefault('exam_percentage', platform.default_exam_weight)
        initial.setdefault('olevel_percentage', platform.default_olevel_weight)
        return initial


class OLevelResultInline(admin.TabularInline):
    model = OLevelResult
    fields = ('subject', 'grading_rule')
    extra = 0


class AdmissionDecisionInline(admin.TabularInline):
    model = AdmissionDecision
    fk_name = 'candidate'
    extra = 0
    can_delete = False
    readonly_fields = ('origin', 'previous_status', 'status', 'derived_status', 'final_score', 'actor', 'reason', 'created_at')

    def has_add_permission(self, request, obj=None):
        return False


@admin.action(description="Recalculate scores for selected candidates")
def recalculate_selected(modeladmin, request, queryset):
    summary = services.recalculate_candidates(queryset.values_list('id', flat=True), actor=request.user)
    level = messages.WARNING if summary.failed else messages.SUCCESS
    modeladmin.message_user(
        request, f"Recalculated {summary.succeeded} of {summary.processed} candidate(s); {summary.failed} failed.", level
    )


@admin.register(Candidate)
class CandidateAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'department', 'utme_score', 'olevel_aggregate', 'final_score', 'admission_status')
    list_filter = ('admission_status', 'department')
    search_fields = ('full_name', 'user__email')
    readonly_fields = (
        'olevel_aggregate', 'olevel_percentage', 'exam_percentage', 'final_score',
        'admission_status', 'status_origin', 'version',
    )
    inlines = [OLevelResultInline, AdmissionDecisionInline]
    actions = [recalculate_selected]

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        # Results are edited inline, so derived fields can only be refreshed once they are saved
        try:
            services.recompute_candidate(form.instance.pk)
        except AdmissionEngineError as e:
            logger.warning("Could not recompute candidate %s after admin edit: %s", form.instance.pk, e)
            self.message_user(request, f"Scores not recalculated: {e}", messages.WARNING)
