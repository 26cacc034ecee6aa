# admission_platform/exams/serializers.py
from rest_framework import serializers
from .models import Examination, Question


class CandidateQuestionSerializer(serializers.ModelSerializer):
    """Question as shown to a candidate sitting the test: never includes the answer."""

    class Meta:
        model = Question
        fields = ['id', 'text', 'options', 'marks']


class ExaminationListSerializer(serializers.ModelSerializer):
    department = serializers.CharField(source='department.name', read_only=True)

    class Meta:
        model = Examination
        fields = ['id', 'title', 'department', 'total_marks', 'passing_marks', 'duration_minutes']


class ExaminationDetailSerializer(ExaminationListSerializer):
    """Detailed view for candidates"""
    questions = CandidateQuestionSerializer(many=True, read_only=True)

    class Meta(ExaminationListSerializer.Meta):
        fields = ExaminationListSerializer.Meta.fields + ['description', 'questions']
