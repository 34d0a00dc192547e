"""
Tests for the contact form relay.
"""
from rest_framework import status

URL = '/contact/'

VALID = {
    'name': '<b>Nadeesha</b> Silva',
    'email': 'Nadeesha@Example.com',
    'subject': 'Bulk order',
    'message': 'Can you deliver 20 trays every Monday?',
}


class TestContactFormSubmit:

    def test_relays_sanitized_payload(self, api_client, farm_api):
        farm_api.on('POST', '/contact', {'success': True, 'message': 'Message sent successfully'})

        response = api_client.post(URL, VALID)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['message'] == 'Message sent successfully'
        method, path, body = farm_api.calls[0]
        assert body['name'] == 'Nadeesha Silva'
        assert body['email'] == 'nadeesha@example.com'

    def test_invalid_email_is_not_relayed(self, api_client, farm_api):
        response = api_client.post(URL, {**VALID, 'email': 'not-an-email'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'email' in response.data['fields']
        assert farm_api.calls == []

    def test_subject_is_optional(self, api_client, farm_api):
        farm_api.on('POST', '/contact', {'success': True})
        payload = {k: v for k, v in VALID.items() if k != 'subject'}

        response = api_client.post(URL, payload)

        assert response.status_code == status.HTTP_201_CREATED

    def test_upstream_failure_surfaces_message(self, api_client, farm_api):
        farm_api.on('POST', '/contact', {'success': False, 'message': 'Email service not configured'},
                    status_code=500)

        response = api_client.post(URL, VALID)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['error'] == 'Email service not configured'

    def test_unreachable_backend(self, api_client, farm_api):
        farm_api.fail('POST', '/contact')

        response = api_client.post(URL, VALID)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['code'] == 'CONNECTION_ERROR'


class TestContactConfigTest:

    def test_relays_result(self, api_client, farm_api):
        farm_api.on('GET', '/contact/test', {'success': True, 'message': 'Email configuration is valid'})

        response = api_client.get(f'{URL}test/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Email configuration is valid'
