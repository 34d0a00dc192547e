"""
Feed Stock & Usage Views

GET  /feed-inventory/stock/dashboard/          - Stock dashboard (empty figures when the backend is down)
POST /feed-inventory/stock/<id>/deduct/        - Deduct {quantityUsed} from one stock item
GET  /feed-inventory/usage/                    - Recent usage entries
POST /feed-inventory/usage/                    - Record a day's usage
GET  /feed-inventory/usage/analytics/          - Usage analytics {feedType, startDate, endDate, period}
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import FarmApiError, RecordValidationError
from records.views import RecordPageMixin

from .serializers import UsageAnalyticsQuerySerializer
from .services import (
    FEED_PAGE,
    deduct_stock,
    load_dashboard,
    load_recent_usage,
    load_usage_analytics,
    record_usage,
)


class FeedStockDashboardView(RecordPageMixin, APIView):
    page = FEED_PAGE

    def get(self, request):
        return Response(load_dashboard())


class FeedStockDeductView(RecordPageMixin, APIView):
    page = FEED_PAGE

    def post(self, request, stock_id):
        try:
            stock = deduct_stock(stock_id, request.data.get('quantityUsed'))
        except FarmApiError as e:
            return self.alert(e)

        return Response({
            'success': True,
            'message': 'Usage deducted successfully',
            'stock': stock,
            'dashboard': load_dashboard(),
        })


class FeedUsageView(RecordPageMixin, APIView):
    page = FEED_PAGE

    def get(self, request):
        usage = load_recent_usage()
        return Response({'usage': usage, 'count': len(usage)})

    def post(self, request):
        fields = request.data.get('fields') or {}
        if not isinstance(fields, dict):
            return self.alert(RecordValidationError('fields must be an object'))

        try:
            recorded = record_usage(fields)
        except FarmApiError as e:
            return self.alert(e)

        return Response({
            'success': True,
            'message': 'Feed usage recorded successfully',
            **recorded,
            'dashboard': load_dashboard(),
        }, status=status.HTTP_201_CREATED)


class FeedUsageAnalyticsView(RecordPageMixin, APIView):
    page = FEED_PAGE

    def get(self, request):
        query = UsageAnalyticsQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response({
                'success': False,
                'error': 'Invalid analytics query',
                'fields': query.errors,
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response(load_usage_analytics(query.validated_data))
