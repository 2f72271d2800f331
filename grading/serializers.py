from rest_framework import serializers

from .models import AssignmentAnswer, AssignmentSubmission, QuizAnswer, QuizSubmission


# ----------------- REQUEST PAYLOADS -----------------
class QuizAnswerInputSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    option_id = serializers.IntegerField(required=False, allow_null=True)
    text = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SubmitQuizSerializer(serializers.Serializer):
    answers = QuizAnswerInputSerializer(many=True, allow_empty=False)


class AssignmentAnswerInputSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    text = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SubmitAssignmentSerializer(serializers.Serializer):
    answers = AssignmentAnswerInputSerializer(many=True, allow_empty=False)


class GradeAnswerInputSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    # Range is checked by the grader against the live question points.
    marks_awarded = serializers.FloatField()
    feedback = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class GradeSubmissionSerializer(serializers.Serializer):
    answers = GradeAnswerInputSerializer(many=True)
    overall_feedback = serializers.CharField(required=False, allow_blank=True, allow_null=True)


# ----------------- READ MODELS -----------------
class QuizAnswerSerializer(serializers.ModelSerializer):
    question_prompt = serializers.CharField(source='question.prompt', read_only=True)
    question_points = serializers.IntegerField(source='question.points', read_only=True)

    class Meta:
        model = QuizAnswer
        fields = [
            'id', 'question', 'question_prompt', 'question_points', 'selected_option',
            'answer_text', 'is_correct', 'points_awarded', 'feedback',
        ]


class QuizSubmissionSerializer(serializers.ModelSerializer):
    answers = QuizAnswerSerializer(many=True, read_only=True)

    class Meta:
        model = QuizSubmission
        fields = [
            'id', 'quiz', 'status', 'total_grade', 'percentage', 'feedback', 'is_late',
            'submitted_at', 'graded_at', 'answers',
        ]


class AssignmentAnswerSerializer(serializers.ModelSerializer):
    question_prompt = serializers.CharField(source='question.prompt', read_only=True)
    question_points = serializers.IntegerField(source='question.points', read_only=True)

    class Meta:
        model = AssignmentAnswer
        fields = [
            'id', 'question', 'question_prompt', 'question_points', 'answer_text',
            'points_awarded', 'feedback',
        ]


class AssignmentSubmissionSerializer(serializers.ModelSerializer):
    answers = AssignmentAnswerSerializer(many=True, read_only=True)

    class Meta:
        model = AssignmentSubmission
        fields = [
            'id', 'assignment', 'status', 'total_grade', 'percentage', 'feedback', 'is_late',
            'submitted_at', 'graded_at', 'graded_by', 'answers',
        ]
