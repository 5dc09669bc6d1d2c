from django.utils import timezone
from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.wallet.services import InsufficientBalanceError, InvalidAmountError
from .serializers import PackageSerializer, UserPackageSerializer
from .services import (
    list_active_packages,
    get_package,
    get_user_packages,
    purchase_package,
    PackageNotFoundError,
    PackageAlreadyOwnedError,
)


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class PurchaseResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    user_package = UserPackageSerializer()
    wallet_balance = drf_serializers.DecimalField(max_digits=12, decimal_places=2)


class PackageViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Investment package catalog.

    list: Packages for sale, cheapest first (public)
    retrieve: One package (public)
    mine: The caller's active packages
    purchase: Buy a package with the wallet balance
    """

    serializer_class = PackageSerializer
    permission_classes = [AllowAny]
    pagination_class = None
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    def get_permissions(self):
        if self.action in ['mine', 'purchase']:
            return [IsAuthenticated()]
        return super().get_permissions()

    def get_queryset(self):
        return list_active_packages()

    @extend_schema(
        responses={200: PackageSerializer, 404: ErrorResponseSerializer},
        tags=['packages'],
    )
    def retrieve(self, request, pk=None):
        try:
            package = get_package(package_id=pk)
        except PackageNotFoundError:
            return Response({'error': 'Package not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(PackageSerializer(package).data)

    @extend_schema(
        responses={200: UserPackageSerializer(many=True)},
        description="The current user's active, unexpired packages.",
        tags=['packages'],
    )
    @action(detail=False, methods=['get'])
    def mine(self, request):
        user_packages = get_user_packages(user=request.user)
        serializer = UserPackageSerializer(
            user_packages,
            many=True,
            context={'today': timezone.localdate()}
        )
        return Response(serializer.data)

    @extend_schema(
        request=None,
        responses={
            201: PurchaseResponseSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        description="Buy a package. The price is debited from the wallet and "
                    "the referrer, if any, receives their bonus.",
        tags=['packages'],
    )
    @action(detail=True, methods=['post'])
    def purchase(self, request, pk=None):
        try:
            user_package = purchase_package(user=request.user, package_id=pk)
        except PackageNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except PackageAlreadyOwnedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except (InsufficientBalanceError, InvalidAmountError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        request.user.refresh_from_db(fields=['wallet_balance'])

        return Response({
            'message': f'{user_package.package.name} purchased successfully',
            'user_package': UserPackageSerializer(user_package).data,
            'wallet_balance': request.user.wallet_balance,
        }, status=status.HTTP_201_CREATED)
