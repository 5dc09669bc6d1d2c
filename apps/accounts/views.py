import logging

from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    UserSerializer,
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserUpdateSerializer,
    BankAccountSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    get_bank_account,
    save_bank_account,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
)

logger = logging.getLogger(__name__)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token to discard", required=False)


class BankAccountResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    bank_account = BankAccountSerializer()


def _auth_response(user, message, status_code=status.HTTP_200_OK):
    refresh = RefreshToken.for_user(user)
    return Response({
        'message': message,
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    }, status=status_code)


@extend_schema(
    request=UserRegistrationSerializer,
    parameters=[
        OpenApiParameter('ref', str, description="Referral code from a share link"),
    ],
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register with phone number and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data
    referral_code = data.get('referral_code') or request.query_params.get('ref')

    try:
        user = register_user(
            phone=data['phone'],
            password=data['password'],
            full_name=data['full_name'],
            referral_code=referral_code or None,
        )
    except UserRegistrationError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return _auth_response(user, 'Registration successful', status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with phone and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with phone and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return _auth_response(user, 'Login successful')


@extend_schema(
    request=LogoutRequestSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Logout. The client discards its tokens; a supplied refresh token is validated.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout the current user."""
    refresh_token = request.data.get('refresh')
    if refresh_token:
        try:
            RefreshToken(refresh_token)
        except TokenError:
            return Response({
                'error': 'Invalid token'
            }, status=status.HTTP_400_BAD_REQUEST)

    logger.info("User %s logged out", request.user.pk)
    return Response({
        'message': 'Logout successful'
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current user's profile, balance and referral code.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=UserUpdateSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update the current user's full name.",
    tags=['auth'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    """Update user profile."""
    user = request.user
    serializer = UserUpdateSerializer(user, data=request.data, partial=True)

    if serializer.is_valid():
        serializer.save()
        return Response(UserSerializer(user).data)

    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    methods=['GET'],
    responses={200: BankAccountSerializer, 404: ErrorResponseSerializer},
    description="Get the saved payout bank account.",
    tags=['auth'],
)
@extend_schema(
    methods=['PUT'],
    request=BankAccountSerializer,
    responses={
        200: BankAccountResponseSerializer,
        201: BankAccountResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Save the payout bank account, replacing any existing one.",
    tags=['auth'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def bank_account(request):
    """Get or upsert the user's bank account."""
    if request.method == 'GET':
        account = get_bank_account(user=request.user)
        if account is None:
            return Response(
                {'error': 'No bank account saved'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(BankAccountSerializer(account).data)

    serializer = BankAccountSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    account, created = save_bank_account(
        user=request.user,
        **serializer.validated_data
    )

    return Response({
        'message': (
            'Bank info saved successfully.' if created
            else 'Bank info updated successfully.'
        ),
        'bank_account': BankAccountSerializer(account).data,
    }, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)
