from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import GradingError
from .serializers import (
    AssignmentSubmissionSerializer,
    GradeSubmissionSerializer,
    QuizSubmissionSerializer,
    SubmitAssignmentSerializer,
    SubmitQuizSerializer,
)
from .services import (
    get_assignment_submission,
    get_quiz_submission,
    grade_assignment,
    regrade_assignment,
    submit_assignment,
    submit_quiz,
)


def error_response(exc):
    return Response(exc.as_dict(), status=exc.status_code)


def invalid_payload_response(serializer):
    return Response({
        "success": False,
        "error": "ValidationError",
        "message": "Invalid request payload.",
        "errors": serializer.errors,
    }, status=status.HTTP_400_BAD_REQUEST)


class SubmitQuizView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, quiz_id):
        """
        Submit answers for a quiz. Body: {
            "answers": [{"question_id": int, "option_id": int (optional), "text": str (optional)}]
        }
        """
        serializer = SubmitQuizSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload_response(serializer)
        try:
            result = submit_quiz(request.user, quiz_id, serializer.validated_data['answers'])
        except GradingError as exc:
            return error_response(exc)
        return Response({
            "success": True,
            "message": "Quiz submitted successfully.",
            "data": result.as_dict(),
        }, status=status.HTTP_201_CREATED)


class QuizSubmissionView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, quiz_id):
        try:
            submission = get_quiz_submission(request.user, quiz_id)
        except GradingError as exc:
            return error_response(exc)
        return Response({
            "success": True,
            "message": "Submission retrieved successfully.",
            "data": QuizSubmissionSerializer(submission).data,
        })


class SubmitAssignmentView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, assignment_id):
        """
        Hand in an assignment. Body: {
            "answers": [{"question_id": int, "text": str (optional)}]
        }
        """
        serializer = SubmitAssignmentSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload_response(serializer)
        try:
            result = submit_assignment(request.user, assignment_id, serializer.validated_data['answers'])
        except GradingError as exc:
            return error_response(exc)
        return Response({
            "success": True,
            "message": "Assignment submitted successfully.",
            "data": result.as_dict(),
        }, status=status.HTTP_201_CREATED)


class AssignmentSubmissionView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, assignment_id):
        try:
            submission = get_assignment_submission(request.user, assignment_id)
        except GradingError as exc:
            return error_response(exc)
        return Response({
            "success": True,
            "message": "Submission retrieved successfully.",
            "data": AssignmentSubmissionSerializer(submission).data,
        })


class GradeAssignmentSubmissionView(APIView):
    """
    POST grades a submission for the first time, PATCH re-grades it.
    Body: {
        "answers": [{"question_id": int, "marks_awarded": number, "feedback": str (optional)}],
        "overall_feedback": str (optional)
    }
    """
    permission_classes = [permissions.IsAuthenticated, permissions.IsAdminUser]

    def post(self, request, submission_id):
        return self._grade(request, submission_id, grade_assignment, "Submission graded successfully.")

    def patch(self, request, submission_id):
        return self._grade(request, submission_id, regrade_assignment, "Submission re-graded successfully.")

    def _grade(self, request, submission_id, grader, message):
        serializer = GradeSubmissionSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload_response(serializer)
        data = serializer.validated_data
        try:
            result = grader(
                submission_id,
                data['answers'],
                overall_feedback=data.get('overall_feedback'),
                grader=request.user,
            )
        except GradingError as exc:
            return error_response(exc)
        return Response({
            "success": True,
            "message": message,
            "data": result.as_dict(),
        })
