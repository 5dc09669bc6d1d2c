from django.urls import path
from . import views

app_name = 'referrals'

urlpatterns = [
    path('', views.referral_overview, name='overview'),
    path('earnings/', views.ReferralEarningListView.as_view(), name='earnings'),
    path('qr/', views.referral_qr_code, name='qr-code'),
]
