from rest_framework import serializers

from exams.serializers import ExaminationDetailSerializer, ExaminationListSerializer
from .models import TestAnswer, TestAttempt


class TestAnswerSerializer(serializers.ModelSerializer):
    class Meta:
        model = TestAnswer
        fields = ['question', 'selected_answer']


class TestAttemptSerializer(serializers.ModelSerializer):
    """Lightweight serializer for lists / dashboard history."""
    examination = ExaminationListSerializer(read_only=True)

    class Meta:
        model = TestAttempt
        fields = ['id', 'examination', 'status', 'score', 'total_marks', 'assigned_at', 'start_time', 'end_time']
        read_only_fields = fields


class ActiveTestAttemptSerializer(TestAttemptSerializer):
    """Heavy serializer for taking the test. Includes QUESTIONS and saved answers."""
    examination = ExaminationDetailSerializer(read_only=True)
    answers = TestAnswerSerializer(many=True, read_only=True)

    class Meta(TestAttemptSerializer.Meta):
        fields = TestAttemptSerializer.Meta.fields + ['answers']
        read_only_fields = fields


class TestSubmissionSerializer(serializers.Serializer):
    # {"<question_id>": <option index>, ...}
    answers = serializers.DictField(child=serializers.IntegerField(min_value=0), allow_empty=True)

    def validate_answers(self, value):
        selections = {}
        for key, selected in value.items():
            try:
                selections[int(key)] = selected
            except (TypeError, ValueError):
                raise serializers.ValidationError(f"Invalid question id: {key}")
        return selections


class AssignTestsSerializer(serializers.Serializer):
    candidate_id = serializers.IntegerField(required=False)
