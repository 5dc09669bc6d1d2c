from django.http import HttpResponse
from rest_framework import generics
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema

from .serializers import ReferralOverviewSerializer, ReferralEarningSerializer
from .services import (
    get_referral_overview,
    list_referral_earnings,
    build_referral_link,
    generate_referral_qr,
)


class ReferralEarningPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    responses={200: ReferralOverviewSerializer},
    description="Referral code, share link, totals and invited users.",
    tags=['referrals'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def referral_overview(request):
    """Get the referral program overview."""
    overview = get_referral_overview(user=request.user)
    return Response(ReferralOverviewSerializer(overview).data)


@extend_schema(tags=['referrals'])
class ReferralEarningListView(generics.ListAPIView):
    """
    Bonuses earned from referred users' purchases.

    GET /api/referrals/earnings/
    """
    serializer_class = ReferralEarningSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ReferralEarningPagination

    def get_queryset(self):
        return list_referral_earnings(user=self.request.user)


@extend_schema(
    responses={(200, 'image/png'): OpenApiTypes.BINARY},
    description="QR code of the referral share link.",
    tags=['referrals'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def referral_qr_code(request):
    """Get the share link as a PNG QR code."""
    link = build_referral_link(request.user.referral_code)
    return HttpResponse(generate_referral_qr(link), content_type='image/png')
