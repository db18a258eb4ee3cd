from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'moderation'

router = SimpleRouter()
router.register(r'', views.PriceModerationViewSet, basename='reports')

urlpatterns = [
    # GET  /api/admin/price-reports/pending/            - Oldest pending reports
    # GET  /api/admin/price-reports/queue/              - Grouped pending queue
    # POST /api/admin/price-reports/approved-summary/   - Accepted price summaries
    # GET  /api/admin/price-reports/by-place/           - Reports for one venue
    # POST /api/admin/price-reports/upsert-approved/    - Moderator price entry
    # POST /api/admin/price-reports/reconcile/          - Auto-approve matching pending reports
    # POST /api/admin/price-reports/approve/            - Approve report IDs
    # POST /api/admin/price-reports/reject/             - Reject report IDs
    # GET  /api/admin/price-reports/{id}/batch/         - Preview same-price group
    # POST /api/admin/price-reports/{id}/approve/       - Approve report with its group
    # POST /api/admin/price-reports/{id}/reject/        - Reject report with its group
    path('', include(router.urls)),
]
