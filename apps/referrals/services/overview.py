"""Referral program read-side queries and share link helpers."""

from io import BytesIO
from urllib.parse import urlencode

from django.conf import settings
from django.db.models import Sum, QuerySet

import qrcode

from apps.accounts.models import User
from apps.referrals.models import Referral, ReferralEarning
from apps.wallet.services import to_money


def build_referral_link(referral_code: str) -> str:
    """Sign-up URL that pre-fills ``referral_code``."""
    base = settings.FRONTEND_URL.rstrip('/')
    return f"{base}/register?{urlencode({'ref': referral_code})}"


def get_referral_overview(*, user: User) -> dict:
    """
    Everything the referrals page shows.

    Returns:
        dict with keys: referral_code, referral_link, total_referrals,
        total_bonus, referrals (list of Referral with ``referred`` loaded)
    """
    referrals = list(
        Referral.objects
        .filter(referrer=user)
        .select_related('referred')
        .order_by('-created_at')
    )
    total_bonus = sum((r.bonus_amount for r in referrals), to_money(0))

    return {
        'referral_code': user.referral_code,
        'referral_link': build_referral_link(user.referral_code),
        'total_referrals': len(referrals),
        'total_bonus': total_bonus,
        'referrals': referrals,
    }


def list_referral_earnings(*, user: User) -> QuerySet:
    """Bonuses credited to ``user``, newest first."""
    return (
        ReferralEarning.objects
        .filter(referrer=user)
        .select_related('referred')
        .order_by('-created_at')
    )


def total_referral_earnings(*, user: User):
    total = ReferralEarning.objects.filter(referrer=user).aggregate(total=Sum('amount'))['total']
    return to_money(total or 0)


def generate_referral_qr(referral_link: str) -> bytes:
    """
    Render the share link as a PNG QR code.

    Uses error correction level M, the same trade-off between size and
    reliability as printed payment codes.
    """
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(referral_link)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()
