from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import DashboardSerializer
from .services import get_dashboard


@extend_schema(
    responses={200: DashboardSerializer},
    description="Balance, active packages, lifetime earnings and recent transactions.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Get the signed-in user's dashboard."""
    data = get_dashboard(user=request.user)
    return Response(DashboardSerializer(data, context={'today': timezone.localdate()}).data)
