"""
Page Shell Views

GET /              - Home dashboard: production summary and navigation
GET /navigation/   - Sidebar entries
GET /about/        - About page content
GET /services/     - Services page content
GET /search/?q=    - Search production, sales, feed and tasks
GET /health/       - Console status plus upstream API health
"""

import logging

from django.conf import settings
from django.utils import timezone
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.api_client import FarmApiClient
from core.exceptions import FarmApiError

from .services import NAVIGATION, STATIC_PAGES, load_home_summary, search_collections

logger = logging.getLogger(__name__)


class HomeView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            'title': 'Abeyarathna Egg Farm',
            'navigation': NAVIGATION,
            'summary': load_home_summary(request),
        })


class NavigationView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'navigation': NAVIGATION})


class StaticPageView(APIView):
    permission_classes = [AllowAny]
    slug = None

    def get(self, request):
        return Response({**STATIC_PAGES[self.slug], 'navigation': NAVIGATION})


class SearchView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        query = request.query_params.get('q', '')
        results = search_collections(request, query)
        return Response({
            'query': query,
            'results': results,
            'total': sum(len(hits) for hits in results.values()),
        })


class HealthView(APIView):
    """Never fails: an unreachable upstream is reported, not raised."""

    permission_classes = [AllowAny]

    def get(self, request):
        try:
            upstream = FarmApiClient().health()
            upstream_status = upstream.get('status', 'OK')
        except FarmApiError as e:
            logger.warning(f"Upstream health check failed: {e.message}")
            upstream = {'message': e.message, 'code': e.code}
            upstream_status = 'unreachable'

        return Response({
            'status': 'OK',
            'timestamp': timezone.now().isoformat(),
            'debug': settings.DEBUG,
            'upstream': {
                'url': settings.FARM_API_BASE_URL,
                'status': upstream_status,
                'detail': upstream,
            },
        })
