from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from courses.services.certificate_service import get_certificate_data
from courses.services.progress_service import get_series_progress, mark_lesson_completed
from grading.exceptions import GradingError


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_lesson_completed_view(request, lesson_id):
    """Mark a lesson as completed for the authenticated user."""
    try:
        progress = mark_lesson_completed(request.user, lesson_id)
    except GradingError as exc:
        return Response(exc.as_dict(), status=exc.status_code)
    return Response({
        "success": True,
        "message": "Lesson marked as completed successfully.",
        "data": {
            "lesson_id": progress.lesson_id,
            "is_completed": progress.is_completed,
            "completed_at": progress.completed_at,
        }
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_series_progress_view(request, series_id):
    """
    Progress of the authenticated user across every course of a series.
    Numbers are eventually consistent with the latest grading events.
    """
    try:
        data = get_series_progress(request.user, series_id)
    except GradingError as exc:
        return Response(exc.as_dict(), status=exc.status_code)
    return Response({
        "success": True,
        "message": "Series progress retrieved successfully.",
        "data": data,
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_certificate_view(request, series_id):
    """Certificate data for a completed series; refused until the series is complete."""
    try:
        data = get_certificate_data(request.user, series_id)
    except GradingError as exc:
        return Response(exc.as_dict(), status=exc.status_code)
    return Response({
        "success": True,
        "message": "Certificate data retrieved successfully.",
        "data": data,
    }, status=status.HTTP_200_OK)
