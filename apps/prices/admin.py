from django.contrib import admin, messages
from django.utils.html import format_html

from apps.prices.models import PriceReport, ReportStatus
from apps.prices.services import approve_reports, reject_reports, reconcile_pending


STATUS_COLORS = {
    ReportStatus.PENDING: '#E5C49A',
    ReportStatus.APPROVED: '#6B8E5E',
    ReportStatus.REJECTED: '#B85C5C',
}


@admin.register(PriceReport)
class PriceReportAdmin(admin.ModelAdmin):
    """
    Admin interface for price reports.

    Bulk approve and reject go through the same moderation service as
    the API, one report at a time.
    """

    list_display = [
        'venue',
        'product_size',
        'price_display',
        'membership',
        'status_badge',
        'submitted_by',
        'moderated_by',
        'created_at'
    ]
    list_filter = [
        'status',
        'membership',
        'product_size__product__category',
        'created_at'
    ]
    search_fields = [
        'venue__name',
        'venue__google_place_id',
        'product_size__product__name',
        'product_size__product__brand',
        'notes'
    ]
    list_select_related = ['venue', 'product_size__product', 'submitted_by', 'moderated_by']
    raw_id_fields = ['venue', 'product_size', 'submitted_by', 'moderated_by']
    readonly_fields = [
        'status',
        'moderated_by',
        'moderated_at',
        'moderation_note',
        'created_at',
        'updated_at'
    ]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Report', {
            'fields': (
                'venue',
                'product_size',
                'price_cents',
                'membership',
                'observed_at',
                'notes',
                'submitted_by'
            )
        }),
        ('Moderation', {
            'fields': (
                'status',
                'moderated_by',
                'moderated_at',
                'moderation_note'
            )
        }),
        ('Timestamps', {
            'fields': (
                'created_at',
                'updated_at'
            ),
            'classes': ('collapse',)
        }),
    )

    actions = ['approve_selected', 'reject_selected', 'reconcile_all']

    def price_display(self, obj):
        return f"${obj.price_cents / 100:.2f}"
    price_display.short_description = 'Price'
    price_display.admin_order_field = 'price_cents'

    def status_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#ccc'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def _report_batch(self, request, result, verb):
        if result.succeeded:
            self.message_user(request, f'{verb} {len(result.succeeded)} report(s).')
        for outcome in result.outcomes:
            if not outcome.ok:
                self.message_user(request, f'{outcome.report_id}: {outcome.error}', level=messages.WARNING)

    @admin.action(description='Approve selected reports')
    def approve_selected(self, request, queryset):
        result = approve_reports(
            report_ids=list(queryset.values_list('id', flat=True)),
            moderator=request.user,
        )
        self._report_batch(request, result, 'Approved')

    @admin.action(description='Reject selected reports')
    def reject_selected(self, request, queryset):
        result = reject_reports(
            report_ids=list(queryset.values_list('id', flat=True)),
            moderator=request.user,
        )
        self._report_batch(request, result, 'Rejected')

    @admin.action(description='Auto-approve pending reports matching accepted prices')
    def reconcile_all(self, request, queryset):
        result = reconcile_pending()
        self.message_user(
            request,
            f'Examined {result.examined} pending report(s), auto-approved {len(result.approved_ids)}.'
        )
