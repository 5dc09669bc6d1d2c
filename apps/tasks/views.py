from django.conf import settings
from rest_framework import generics, status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    CompleteTaskInputSerializer,
    TaskBoardEntrySerializer,
    UserTaskSerializer,
)
from .services import (
    get_task_board,
    list_completed_tasks,
    complete_task,
    TaskNotFoundError,
    UserPackageNotFoundError,
    PackageExpiredError,
    ScreenshotRequiredError,
    DailyLimitReachedError,
    TaskAlreadyCompletedError,
)


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class CompleteTaskResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    user_task = UserTaskSerializer()
    wallet_balance = drf_serializers.DecimalField(max_digits=12, decimal_places=2)


class TaskHistoryPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


# Domain errors -> HTTP status
ERROR_STATUS = {
    UserPackageNotFoundError: status.HTTP_404_NOT_FOUND,
    TaskNotFoundError: status.HTTP_404_NOT_FOUND,
    PackageExpiredError: status.HTTP_400_BAD_REQUEST,
    ScreenshotRequiredError: status.HTTP_400_BAD_REQUEST,
    DailyLimitReachedError: status.HTTP_400_BAD_REQUEST,
    TaskAlreadyCompletedError: status.HTTP_409_CONFLICT,
}


@extend_schema(
    responses={200: TaskBoardEntrySerializer(many=True)},
    description="Today's tasks for each active package.",
    tags=['tasks'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def task_board(request):
    """Get today's task board."""
    board = get_task_board(user=request.user)
    return Response(TaskBoardEntrySerializer(board, many=True).data)


@extend_schema(
    request={'multipart/form-data': CompleteTaskInputSerializer},
    parameters=[
        OpenApiParameter(
            'Idempotency-Key', str, OpenApiParameter.HEADER,
            description="Repeat a submission safely; the reward is credited once",
        ),
    ],
    responses={
        200: CompleteTaskResponseSerializer,
        201: CompleteTaskResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Submit a task screenshot and receive the reward.",
    tags=['tasks'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def complete(request, task_id):
    """Complete a task."""
    serializer = CompleteTaskInputSerializer(data=request.data, context={'request': request})
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        user_task, created = complete_task(
            user=request.user,
            task_id=task_id,
            user_package_id=data['user_package'],
            screenshot=data.get('screenshot'),
            idempotency_key=data['idempotency_key'],
        )
    except tuple(ERROR_STATUS) as e:
        return Response({'error': str(e)}, status=ERROR_STATUS[type(e)])

    request.user.refresh_from_db(fields=['wallet_balance'])

    return Response({
        'message': (
            f'Task completed! You earned {user_task.reward_earned} {settings.CURRENCY}'
            if created else 'Task already submitted'
        ),
        'user_task': UserTaskSerializer(user_task, context={'request': request}).data,
        'wallet_balance': request.user.wallet_balance,
    }, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


@extend_schema(tags=['tasks'])
class TaskHistoryView(generics.ListAPIView):
    """
    Completed tasks, newest first.

    GET /api/tasks/history/
    """
    serializer_class = UserTaskSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = TaskHistoryPagination

    def get_queryset(self):
        return list_completed_tasks(user=self.request.user)
