"""
Contact Views

POST /contact/       - Relay the contact form to the farm backend
GET  /contact/test/  - Relay the backend's mail configuration check
"""
import logging

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny

from core.api_client import FarmApiClient
from core.exceptions import FarmApiError, HttpError

from .serializers import ContactFormSubmitSerializer

logger = logging.getLogger(__name__)


def upstream_status(error: FarmApiError) -> int:
    if isinstance(error, HttpError) and 400 <= error.status_code < 500:
        return error.status_code
    return status.HTTP_502_BAD_GATEWAY


class ContactFormSubmitView(APIView):
    """
    Public endpoint for contact form submissions.

    No authentication required.
    """

    permission_classes = [AllowAny]

    def post(self, request):
        """Submit a contact form."""
        serializer = ContactFormSubmitSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(
                {
                    'success': False,
                    'error': 'Validation failed',
                    'fields': serializer.errors
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            result = FarmApiClient().send_contact(dict(serializer.validated_data))
        except FarmApiError as e:
            logger.error(f"Contact relay failed: {e.message}")
            return Response(
                {'success': False, 'error': e.message, 'code': e.code},
                status=upstream_status(e)
            )

        logger.info(f"Contact message relayed for {serializer.validated_data['email']}")
        return Response(
            {
                'success': True,
                'message': result.get('message') or "Your message has been sent. We'll get back to you soon.",
            },
            status=status.HTTP_201_CREATED
        )


class ContactConfigTestView(APIView):
    """Checks that the backend's mail relay is configured."""

    permission_classes = [AllowAny]

    def get(self, request):
        try:
            result = FarmApiClient().test_contact()
        except FarmApiError as e:
            logger.error(f"Contact configuration test failed: {e.message}")
            return Response(
                {'success': False, 'error': e.message, 'code': e.code},
                status=upstream_status(e)
            )
        return Response(result)
