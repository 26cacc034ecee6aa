from rest_framework import serializers

from .engine import AdmissionStatus, SubjectGrade
from .models import AdmissionDecision, Candidate, Department, OLevelResult

# --- Helper Serializers ---

class DepartmentRequirementSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = [
            'id', 'name', 'code', 'description',
            'utme_cutoff_mark', 'olevel_cutoff_aggregate', 'final_cutoff_mark',
            'exam_percentage', 'olevel_percentage',
        ]


class SubjectGradeSerializer(serializers.Serializer):
    subject = serializers.CharField(max_length=100)
    grade = serializers.CharField(max_length=5)

    def validate_grade(self, value):
        return value.strip().upper()


class OLevelResultSerializer(serializers.ModelSerializer):
    marks = serializers.IntegerField(source='grading_rule.marks', read_only=True)

    class Meta:
        model = OLevelResult
        fields = ['subject', 'grade', 'marks']

# --- Eligibility Check (pre-registration) ---

class EligibilityCheckSerializer(serializers.Serializer):
    utme_score = serializers.IntegerField(min_value=0, max_value=400)
    olevel_results = SubjectGradeSerializer(many=True)
    department_id = serializers.IntegerField()

    def validate_olevel_results(self, value):
        if len(value) < 5:
            raise serializers.ValidationError("At least five O'Level results are required.")
        subjects = [item['subject'].strip().lower() for item in value]
        if len(set(subjects)) != len(subjects):
            raise serializers.ValidationError("Each subject may appear only once.")
        return [SubjectGrade(subject=item['subject'], grade=item['grade']) for item in value]

    def validate_department_id(self, value):
        try:
            return Department.objects.get(pk=value, status=Department.Status.ACTIVE)
        except Department.DoesNotExist:
            raise serializers.ValidationError("Department not found.")


def registration_check_data(check):
    return {
        'eligible': check.eligible,
        'utme': {
            'required': check.department.utme_cutoff_mark,
            'achieved': check.utme_score,
            'passed': check.meets_utme,
        },
        'olevel': {
            'required': check.department.olevel_cutoff_aggregate,
            'achieved': check.olevel_aggregate,
            'passed': check.meets_olevel,
        },
        'department': check.department.name,
        'alternatives': [
            {
                'id': alt.id,
                'name': alt.name,
                'utme_required': alt.utme_cutoff_mark,
                'olevel_required': alt.olevel_cutoff_aggregate,
            }
            for alt in check.alternatives
        ],
        'message': check.message,
    }

# --- Candidate Result ---

class CandidateResultSerializer(serializers.ModelSerializer):
    department = DepartmentRequirementSerializer(read_only=True)
    olevel_results = OLevelResultSerializer(many=True, read_only=True)

    class Meta:
        model = Candidate
        fields = [
            'id', 'full_name', 'utme_score', 'department', 'olevel_results',
            'olevel_aggregate', 'olevel_percentage', 'exam_percentage', 'final_score',
            'admission_status', 'status_origin', 'updated_at',
        ]
        read_only_fields = fields


# --- O'Level Results (admin edit) ---

class OLevelResultsUpdateSerializer(serializers.Serializer):
    olevel_results = SubjectGradeSerializer(many=True, allow_empty=False)

    def validate_olevel_results(self, value):
        return [SubjectGrade(subject=item['subject'], grade=item['grade']) for item in value]


def recompute_data(outcome):
    assessment = outcome.assessment
    return {
        'candidate_id': outcome.candidate.pk,
        'olevel_aggregate': assessment.olevel_aggregate,
        'olevel_percentage': assessment.olevel_percentage,
        'exam': {
            'obtained': assessment.exam.obtained,
            'total': assessment.exam.total,
            'percentage': assessment.exam.percentage,
        },
        'final_score': assessment.final_score,
        'requirements': assessment.eligibility.as_dict(),
        'derived_status': assessment.derived_status.value,
        'previous_status': outcome.previous_status.value,
        'admission_status': outcome.status.value,
    }

# --- Recommendations ---

class DepartmentVerdictSerializer(serializers.Serializer):
    department = serializers.SerializerMethodField()
    scores = serializers.SerializerMethodField()
    requirements = serializers.SerializerMethodField()
    eligibility = serializers.SerializerMethodField()
    recommendation = serializers.CharField()
    priority = serializers.IntegerField()
    is_current_department = serializers.BooleanField()

    def get_department(self, obj):
        return {'id': obj.department.id, 'name': obj.department.name, 'code': obj.department.code}

    def get_scores(self, obj):
        return {
            'final_score': obj.final_score,
            'exam_percentage': obj.exam_percentage,
            'olevel_percentage': obj.olevel_percentage,
        }

    def get_requirements(self, obj):
        data = {
            'utme_cutoff': obj.department.utme_cutoff_mark,
            'olevel_cutoff': obj.department.olevel_cutoff_aggregate,
            'final_cutoff': obj.department.final_cutoff_mark,
        }
        data.update(obj.requirements.as_dict())
        return data

    def get_eligibility(self, obj):
        return obj.eligibility.value

# --- Administration ---

class StatusOverrideSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s.value for s in AdmissionStatus])
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class BatchRecalculateSerializer(serializers.Serializer):
    candidate_ids = serializers.ListField(child=serializers.IntegerField(), required=False, allow_empty=False)


class AdmissionDecisionSerializer(serializers.ModelSerializer):
    actor_email = serializers.CharField(source='actor.email', read_only=True, default=None)

    class Meta:
        model = AdmissionDecision
        fields = [
            'id', 'origin', 'previous_status', 'status', 'derived_status',
            'final_score', 'actor_email', 'reason', 'created_at',
        ]
