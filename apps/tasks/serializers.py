from rest_framework import serializers
from .models import Task, UserTask

IDEMPOTENCY_KEY_MAX_LENGTH = UserTask._meta.get_field('idempotency_key').max_length


# =============================================================================
# Input Serializers
# =============================================================================

class CompleteTaskInputSerializer(serializers.Serializer):
    """
    Validate a task submission.

    Fields:
        user_package (UUID): Owned package the task counts against
        screenshot (file): Proof of completion
        idempotency_key (str): Optional client key for safe retries

    An ``Idempotency-Key`` request header, when the view passes the request
    in the context, takes precedence over the form field and is held to
    the same length limit.
    """

    user_package = serializers.UUIDField()
    screenshot = serializers.FileField(required=False, allow_null=True)
    idempotency_key = serializers.CharField(
        max_length=IDEMPOTENCY_KEY_MAX_LENGTH, required=False, allow_blank=True
    )

    def validate(self, attrs):
        request = self.context.get('request')
        header_key = request.headers.get('Idempotency-Key') if request else None

        if header_key:
            if len(header_key) > IDEMPOTENCY_KEY_MAX_LENGTH:
                raise serializers.ValidationError({
                    'idempotency_key': (
                        f"Idempotency-Key must be at most "
                        f"{IDEMPOTENCY_KEY_MAX_LENGTH} characters"
                    )
                })
            attrs['idempotency_key'] = header_key

        attrs['idempotency_key'] = attrs.get('idempotency_key') or None
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class TaskSerializer(serializers.ModelSerializer):

    class Meta:
        model = Task
        fields = ['id', 'title', 'description', 'link', 'reward_amount', 'order']
        read_only_fields = fields


class BoardTaskSerializer(TaskSerializer):
    """Task with today's completion flag for the board."""

    completed_today = serializers.SerializerMethodField()

    class Meta(TaskSerializer.Meta):
        fields = TaskSerializer.Meta.fields + ['completed_today']
        read_only_fields = fields

    def get_completed_today(self, obj):
        return obj.id in self.context.get('completed_task_ids', set())


class TaskBoardEntrySerializer(serializers.Serializer):
    """One owned package and its tasks for today."""

    user_package_id = serializers.UUIDField(source='user_package.id')
    package_name = serializers.CharField(source='user_package.package.name')
    expiry_date = serializers.DateTimeField(source='user_package.expiry_date')
    done_today = serializers.IntegerField()
    daily_tasks = serializers.IntegerField()
    can_complete = serializers.BooleanField()
    tasks = serializers.SerializerMethodField()

    def get_tasks(self, obj):
        return BoardTaskSerializer(
            obj['tasks'],
            many=True,
            context={'completed_task_ids': obj['completed_task_ids']}
        ).data


class UserTaskSerializer(serializers.ModelSerializer):
    """A completed task."""

    task = TaskSerializer(read_only=True)
    package_name = serializers.CharField(source='user_package.package.name', read_only=True)

    class Meta:
        model = UserTask
        fields = [
            'id',
            'task',
            'user_package',
            'package_name',
            'reward_earned',
            'screenshot',
            'completed_at',
            'completed_on',
        ]
        read_only_fields = fields
