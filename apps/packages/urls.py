from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'packages'

router = SimpleRouter()
router.register(r'', views.PackageViewSet, basename='package')

urlpatterns = [
    # GET  /api/packages/                 - Packages for sale
    # GET  /api/packages/{id}/            - Package details
    # GET  /api/packages/mine/            - My active packages
    # POST /api/packages/{id}/purchase/   - Buy a package
    path('', include(router.urls)),
]
