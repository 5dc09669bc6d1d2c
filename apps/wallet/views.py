from django.conf import settings
from rest_framework import viewsets, generics, mixins, status, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Deposit, Withdrawal
from .permissions import IsStaffReviewer
from .serializers import (
    DepositInputSerializer,
    WithdrawalInputSerializer,
    WithdrawalQuoteInputSerializer,
    ReviewInputSerializer,
    TransactionSerializer,
    DepositSerializer,
    WithdrawalSerializer,
    WalletSummarySerializer,
    DepositInstructionsSerializer,
    WithdrawalQuoteSerializer,
)
from .services import (
    submit_deposit,
    approve_deposit,
    reject_deposit,
    request_withdrawal,
    approve_withdrawal,
    mark_withdrawal_paid,
    reject_withdrawal,
    calculate_withdrawal_fee,
    get_wallet_summary,
    get_deposit_instructions,
    InvalidAmountError,
    InsufficientBalanceError,
    ScreenshotRequiredError,
    DepositNotFoundError,
    WithdrawalNotFoundError,
    PendingWithdrawalExistsError,
    InvalidStateTransitionError,
    InsufficientPermissionsError,
)


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class WalletPagination(PageNumberPagination):
    """Custom pagination for wallet history."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


# Domain errors -> HTTP status
ERROR_STATUS = {
    InvalidAmountError: status.HTTP_400_BAD_REQUEST,
    InsufficientBalanceError: status.HTTP_400_BAD_REQUEST,
    ScreenshotRequiredError: status.HTTP_400_BAD_REQUEST,
    DepositNotFoundError: status.HTTP_404_NOT_FOUND,
    WithdrawalNotFoundError: status.HTTP_404_NOT_FOUND,
    PendingWithdrawalExistsError: status.HTTP_409_CONFLICT,
    InvalidStateTransitionError: status.HTTP_409_CONFLICT,
    InsufficientPermissionsError: status.HTTP_403_FORBIDDEN,
}

WALLET_ERRORS = tuple(ERROR_STATUS)


def error_response(exc):
    return Response({'error': str(exc)}, status=ERROR_STATUS[type(exc)])


@extend_schema(
    responses={200: WalletSummarySerializer},
    description="Wallet balance with recent deposits, withdrawals and ledger entries.",
    tags=['wallet'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def wallet_summary(request):
    """Get the wallet overview."""
    summary = get_wallet_summary(user=request.user)
    return Response(WalletSummarySerializer(summary, context={'request': request}).data)


@extend_schema(
    responses={200: DepositInstructionsSerializer},
    description="Company bank accounts to deposit to, and preset deposit amounts.",
    tags=['wallet'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def deposit_bank_accounts(request):
    """Get deposit instructions."""
    return Response(DepositInstructionsSerializer(get_deposit_instructions()).data)


@extend_schema(tags=['wallet'])
class TransactionListView(generics.ListAPIView):
    """
    The user's ledger, newest first.

    GET /api/wallet/transactions/
    """
    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = WalletPagination

    def get_queryset(self):
        return self.request.user.transactions.all()


class ReviewActionsMixin:
    """approve / reject actions shared by deposits and withdrawals."""

    review_actions = ()
    id_argument = None

    def get_permissions(self):
        if self.action in self.review_actions:
            return [IsAuthenticated(), IsStaffReviewer()]
        return super().get_permissions()

    def _review(self, request, pk, service):
        serializer = ReviewInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            obj = service(
                **{self.id_argument: pk},
                reviewer=request.user,
                note=serializer.validated_data.get('note', ''),
            )
        except WALLET_ERRORS as e:
            return error_response(e)

        return Response(self.get_serializer(obj).data)


@extend_schema(tags=['wallet'])
class DepositViewSet(ReviewActionsMixin,
                     mixins.ListModelMixin,
                     viewsets.GenericViewSet):
    """
    Deposit requests.

    list: The caller's deposits
    create: Submit a deposit with a payment screenshot (multipart)
    approve / reject: Staff review
    """

    serializer_class = DepositSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = WalletPagination
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    lookup_value_regex = r"[0-9a-fA-F-]{36}"
    review_actions = ['approve', 'reject']
    id_argument = 'deposit_id'

    def get_queryset(self):
        return Deposit.objects.filter(user=self.request.user)

    @extend_schema(
        request={'multipart/form-data': DepositInputSerializer},
        responses={201: DepositSerializer, 400: ErrorResponseSerializer},
    )
    def create(self, request):
        serializer = DepositInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            deposit = submit_deposit(
                user=request.user,
                amount=serializer.validated_data['amount'],
                screenshot=serializer.validated_data.get('screenshot'),
            )
        except WALLET_ERRORS as e:
            return error_response(e)

        return Response(
            self.get_serializer(deposit).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=ReviewInputSerializer,
        responses={200: DepositSerializer, 403: ErrorResponseSerializer,
                   404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """Approve a pending deposit and credit the wallet."""
        return self._review(request, pk, approve_deposit)

    @extend_schema(
        request=ReviewInputSerializer,
        responses={200: DepositSerializer, 403: ErrorResponseSerializer,
                   404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """Reject a pending deposit. No money moves."""
        return self._review(request, pk, reject_deposit)


@extend_schema(tags=['wallet'])
class WithdrawalViewSet(ReviewActionsMixin,
                        mixins.ListModelMixin,
                        viewsets.GenericViewSet):
    """
    Withdrawal requests.

    list: The caller's withdrawals
    create: Request a withdrawal; the amount is held from the wallet
    quote: Fee and net payout for an amount
    approve / mark_paid / reject: Staff review
    """

    serializer_class = WithdrawalSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = WalletPagination
    lookup_value_regex = r"[0-9a-fA-F-]{36}"
    review_actions = ['approve', 'mark_paid', 'reject']
    id_argument = 'withdrawal_id'

    def get_queryset(self):
        return Withdrawal.objects.filter(user=self.request.user)

    @extend_schema(
        request=WithdrawalInputSerializer,
        responses={201: WithdrawalSerializer, 400: ErrorResponseSerializer,
                   409: ErrorResponseSerializer},
    )
    def create(self, request):
        serializer = WithdrawalInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            withdrawal = request_withdrawal(
                user=request.user,
                amount=serializer.validated_data['amount'],
            )
        except WALLET_ERRORS as e:
            return error_response(e)

        return Response(
            self.get_serializer(withdrawal).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        parameters=[OpenApiParameter('amount', str, required=True)],
        responses={200: WithdrawalQuoteSerializer},
    )
    @action(detail=False, methods=['get'])
    def quote(self, request):
        """Preview the fee and net payout before requesting."""
        serializer = WithdrawalQuoteInputSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        amount = serializer.validated_data['amount']
        fee, net_amount = calculate_withdrawal_fee(amount)

        return Response(WithdrawalQuoteSerializer({
            'amount': amount,
            'fee': fee,
            'net_amount': net_amount,
            'fee_rate': settings.WITHDRAWAL_FEE_RATE,
            'minimum': settings.MIN_WITHDRAWAL_AMOUNT,
            'currency': settings.CURRENCY,
        }).data)

    @extend_schema(
        request=ReviewInputSerializer,
        responses={200: WithdrawalSerializer, 403: ErrorResponseSerializer,
                   404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        return self._review(request, pk, approve_withdrawal)

    @extend_schema(
        request=ReviewInputSerializer,
        responses={200: WithdrawalSerializer, 403: ErrorResponseSerializer,
                   404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def mark_paid(self, request, pk=None):
        """Record that the net amount was transferred."""
        return self._review(request, pk, mark_withdrawal_paid)

    @extend_schema(
        request=ReviewInputSerializer,
        responses={200: WithdrawalSerializer, 403: ErrorResponseSerializer,
                   404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """Reject the request and refund the full amount."""
        return self._review(request, pk, reject_withdrawal)
