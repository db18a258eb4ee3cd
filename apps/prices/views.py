import logging

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status, viewsets
from rest_framework.decorators import api_view, action, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, inline_serializer
from rest_framework import serializers as drf_serializers

from apps.venues.services import EnsureEntityError
from .permissions import IsModerator
from .serializers import (
    PriceReportSerializer,
    SubmittedReportSerializer,
    PriceSubmissionSerializer,
    PlacePricesRequestSerializer,
    PlacePriceSerializer,
    ApprovedSummaryRequestSerializer,
    GroupSummarySerializer,
    PendingGroupSerializer,
    ReportIdsSerializer,
    BatchConfirmSerializer,
    BatchResultSerializer,
    BatchPreviewSerializer,
    ReconcileResultSerializer,
)
from .services import (
    build_grouping_key,
    submit_price_report,
    create_approved_report,
    get_place_prices,
    get_pending_reports,
    get_pending_queue,
    get_approved_summaries,
    get_reports_for_place,
    reconcile_pending,
    approve_reports,
    reject_reports,
    preview_batch,
    approve_matching,
    reject_matching,
    InvalidSubmissionError,
    ReportNotFoundError,
)

logger = logging.getLogger(__name__)

RETRY_MESSAGE = 'Could not save right now, please try again'
LOAD_RETRY_MESSAGE = 'Could not load prices right now, please try again'


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


def _unavailable():
    return Response({'error': RETRY_MESSAGE}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


def _load_failed():
    return Response({'error': LOAD_RETRY_MESSAGE}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


def _limit_param(request, default):
    """Read ?limit=, clamped to 1..default."""
    try:
        limit = int(request.query_params.get('limit', default))
    except (TypeError, ValueError):
        return default
    return min(max(limit, 1), default)


# =============================================================================
# Public endpoints
# =============================================================================

@extend_schema(
    request=PriceSubmissionSerializer,
    responses={
        201: SubmittedReportSerializer,
        400: ErrorResponseSerializer,
        503: ErrorResponseSerializer,
    },
    description=(
        "Submit an observed price. Guests may submit. The report is approved "
        "immediately when it matches the accepted price, otherwise it is pending."
    ),
    tags=['price-reports'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def submit_price(request):
    """Submit a price report."""
    serializer = PriceSubmissionSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    submitted_by = request.user if request.user.is_authenticated else None

    try:
        report = submit_price_report(submitted_by=submitted_by, **serializer.validated_data)
    except InvalidSubmissionError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except (EnsureEntityError, DatabaseError):
        logger.exception("Price submission failed")
        return _unavailable()

    return Response(SubmittedReportSerializer(report).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=PlacePricesRequestSerializer,
    responses={200: inline_serializer(
        name='PlacePricesResponse',
        fields={'results': PlacePriceSerializer(many=True)},
    )},
    description="Latest approved price per place, optionally filtered by product, size and membership.",
    tags=['price-reports'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def place_prices(request):
    """Latest approved prices for map markers."""
    serializer = PlacePricesRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        results = get_place_prices(
            place_ids=serializer.validated_data['place_ids'],
            filters=serializer.validated_data['filter'],
        )
    except DatabaseError:
        logger.exception("Place price lookup failed")
        return _load_failed()
    return Response({'results': results})


# =============================================================================
# Moderator endpoints
# =============================================================================

class PriceModerationViewSet(viewsets.ViewSet):
    """
    Moderation of price reports.

    pending: Oldest pending reports
    queue: Pending reports grouped by venue and product size
    approved_summary: Accepted price summaries for groups
    by_place: Every report for a venue
    upsert_approved: Enter an approved price directly
    reconcile: Auto-approve pending reports matching accepted prices
    approve_ids / reject_ids: Moderate explicit report IDs
    batch / approve_batch / reject_batch: Moderate a report with its same-price group
    """

    permission_classes = [IsAuthenticated, IsModerator]
    lookup_value_regex = '[0-9a-fA-F-]{32,36}'

    @extend_schema(
        parameters=[OpenApiParameter(name='limit', type=int)],
        responses={200: PriceReportSerializer(many=True)},
        tags=['moderation'],
    )
    @action(detail=False, methods=['get'])
    def pending(self, request):
        """Pending reports, oldest first."""
        limit = _limit_param(request, settings.PENDING_QUEUE_LIMIT)
        try:
            reports = list(get_pending_reports(limit=limit))
        except DatabaseError:
            logger.exception("Pending report lookup failed")
            return _load_failed()
        return Response({'results': PriceReportSerializer(reports, many=True).data})

    @extend_schema(
        parameters=[OpenApiParameter(name='limit', type=int)],
        responses={200: PendingGroupSerializer(many=True)},
        tags=['moderation'],
    )
    @action(detail=False, methods=['get'])
    def queue(self, request):
        """Pending reports grouped for bulk moderation."""
        limit = _limit_param(request, settings.PENDING_QUEUE_LIMIT)
        try:
            groups = get_pending_queue(limit=limit)
        except DatabaseError:
            logger.exception("Pending queue lookup failed")
            return _load_failed()
        return Response({'results': PendingGroupSerializer(groups, many=True).data})

    @extend_schema(
        request=ApprovedSummaryRequestSerializer,
        responses={200: GroupSummarySerializer(many=True)},
        tags=['moderation'],
    )
    @action(detail=False, methods=['post'], url_path='approved-summary')
    def approved_summary(self, request):
        """Accepted price summaries for a list of groups."""
        serializer = ApprovedSummaryRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        keys = []
        for group in serializer.validated_data['groups']:
            key = build_grouping_key(
                group['place_id'],
                group.get('category'),
                group.get('brand'),
                group.get('name'),
                group.get('mixer'),
                group.get('size_label'),
                group.get('ml'),
            )
            if key is not None and key not in keys:
                keys.append(key)

        summaries = get_approved_summaries(
            keys=keys,
            member=serializer.validated_data['membership'],
        )
        results = [
            {'key': key.serialize(), 'group': key.to_dict(), **summaries[key].to_dict()}
            for key in keys
        ]
        return Response({'results': results})

    @extend_schema(
        parameters=[OpenApiParameter(name='place_id', type=str, required=True)],
        responses={200: PriceReportSerializer(many=True)},
        tags=['moderation'],
    )
    @action(detail=False, methods=['get'], url_path='by-place')
    def by_place(self, request):
        """Every report for one venue, newest first."""
        place_id = request.query_params.get('place_id', '')
        if not place_id:
            return Response({'results': []})
        try:
            reports = get_reports_for_place(place_id=place_id)
        except DatabaseError:
            logger.exception("Report lookup failed for place %s", place_id)
            return _load_failed()
        return Response({'results': PriceReportSerializer(reports, many=True).data})

    @extend_schema(
        request=PriceSubmissionSerializer,
        responses={201: PriceReportSerializer, 400: ErrorResponseSerializer, 503: ErrorResponseSerializer},
        tags=['moderation'],
    )
    @action(detail=False, methods=['post'], url_path='upsert-approved')
    def upsert_approved(self, request):
        """Enter a price as a moderator; it is stored approved."""
        serializer = PriceSubmissionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            report = create_approved_report(moderator=request.user, **serializer.validated_data)
        except InvalidSubmissionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (EnsureEntityError, DatabaseError):
            logger.exception("Moderator price entry failed")
            return _unavailable()

        return Response(PriceReportSerializer(report).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: ReconcileResultSerializer}, tags=['moderation'])
    @action(detail=False, methods=['post'])
    def reconcile(self, request):
        """Auto-approve pending reports that match their accepted price."""
        try:
            result = reconcile_pending()
        except DatabaseError:
            logger.exception("Reconcile failed")
            return _unavailable()
        return Response(result.to_dict())

    @extend_schema(request=ReportIdsSerializer, responses={200: BatchResultSerializer}, tags=['moderation'])
    @action(detail=False, methods=['post'], url_path='approve')
    def approve_ids(self, request):
        """Approve explicit report IDs; outcomes are reported per ID."""
        serializer = ReportIdsSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = approve_reports(
            report_ids=serializer.validated_data['ids'],
            moderator=request.user,
            note=serializer.validated_data.get('note'),
        )
        return Response(result.to_dict())

    @extend_schema(request=ReportIdsSerializer, responses={200: BatchResultSerializer}, tags=['moderation'])
    @action(detail=False, methods=['post'], url_path='reject')
    def reject_ids(self, request):
        """Reject explicit report IDs; outcomes are reported per ID."""
        serializer = ReportIdsSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = reject_reports(
            report_ids=serializer.validated_data['ids'],
            moderator=request.user,
            note=serializer.validated_data.get('note'),
        )
        return Response(result.to_dict())

    @extend_schema(responses={200: BatchPreviewSerializer, 404: ErrorResponseSerializer}, tags=['moderation'])
    @action(detail=True, methods=['get'])
    def batch(self, request, pk=None):
        """Preview the same-price group a report would be moderated with."""
        try:
            preview = preview_batch(report_id=pk)
        except ReportNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response({'confirmed': False, **preview.to_dict()})

    @extend_schema(
        request=BatchConfirmSerializer,
        responses={200: BatchResultSerializer, 404: ErrorResponseSerializer},
        description="Without `confirm: true` only the batch preview is returned.",
        tags=['moderation'],
    )
    @action(detail=True, methods=['post'], url_path='approve')
    def approve_batch(self, request, pk=None):
        """Approve a report together with its pending same-price group."""
        return self._moderate_batch(request, pk, approve_matching)

    @extend_schema(
        request=BatchConfirmSerializer,
        responses={200: BatchResultSerializer, 404: ErrorResponseSerializer},
        description="Without `confirm: true` only the batch preview is returned.",
        tags=['moderation'],
    )
    @action(detail=True, methods=['post'], url_path='reject')
    def reject_batch(self, request, pk=None):
        """Reject a report together with its pending same-price group."""
        return self._moderate_batch(request, pk, reject_matching)

    def _moderate_batch(self, request, pk, moderate):
        serializer = BatchConfirmSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            if not serializer.validated_data['confirm']:
                preview = preview_batch(report_id=pk)
                return Response({'confirmed': False, **preview.to_dict()})

            preview, result = moderate(
                report_id=pk,
                moderator=request.user,
                note=serializer.validated_data.get('note'),
            )
        except ReportNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'confirmed': True, **preview.to_dict(), **result.to_dict()})
