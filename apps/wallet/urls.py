from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'wallet'

router = SimpleRouter()
router.register(r'deposits', views.DepositViewSet, basename='deposit')
router.register(r'withdrawals', views.WithdrawalViewSet, basename='withdrawal')

urlpatterns = [
    # GET  /api/wallet/                               - Balance and recent activity
    # GET  /api/wallet/transactions/                  - Ledger
    # GET  /api/wallet/bank-accounts/                 - Where to send deposits
    path('', views.wallet_summary, name='summary'),
    path('transactions/', views.TransactionListView.as_view(), name='transactions'),
    path('bank-accounts/', views.deposit_bank_accounts, name='bank-accounts'),

    # GET/POST /api/wallet/deposits/                  - List / submit deposits
    # POST     /api/wallet/deposits/{id}/approve/     - Staff
    # POST     /api/wallet/deposits/{id}/reject/      - Staff
    # GET/POST /api/wallet/withdrawals/               - List / request withdrawals
    # GET      /api/wallet/withdrawals/quote/?amount= - Fee preview
    # POST     /api/wallet/withdrawals/{id}/approve|mark_paid|reject/ - Staff
    path('', include(router.urls)),
]
