import secrets
import uuid

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from onboarding.models import Submission


class SubmissionApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def vendor_payload(self, **overrides):
        payload = {
            'entity_type': 'vendor',
            'company_name': 'Acme Corp',
            'contact_name': 'Jane Doe',
            'email': 'jane@acme.io',
            'phone': '+1 555 0100',
            'tax_id': '12-3456789',
            'address': '1 Main St',
            'city': 'Springfield',
            'country': 'US',
            'industry': 'Technology',
            'annual_revenue': '$1M - $10M',
            'employee_count': '51-200',
            'business_type': 'Corporation',
            'website': 'https://acme.io',
            'service_type': 'Cloud Services',
            'compliance_certifications': ['SOC 2', 'ISO 27001'],
            'has_encryption': 'Yes',
            'has_access_control': 'Yes',
            'has_logging': 'Yes',
            'has_network_security': 'Yes',
        }
        payload.update(overrides)
        return payload

    def create(self, **overrides):
        response = self.client.post('/api/submissions', self.vendor_payload(**overrides), format='json')
        self.assertEqual(response.status_code, 201)
        return response.data

    def test_health_endpoint(self):
        response = self.client.get('/api/health')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], 'ok')

    def test_assess_endpoint_previews_without_saving(self):
        response = self.client.post(
            '/api/assess',
            {'entity_type': 'vendor', 'include_breakdown': True},
            format='json',
        )

        self.assertEqual(response.status_code, 200)
        assessment = response.data['assessment']
        self.assertEqual(assessment['score'], 50)
        self.assertEqual(assessment['level'], 'medium')
        self.assertEqual(assessment['status'], 'review')
        self.assertEqual(
            [factor['type'] for factor in assessment['factors']],
            ['missing_fields', 'vendor_specific', 'compliance', 'business_info'],
        )
        self.assertEqual(len(assessment['factors'][0]['fields']), 9)
        self.assertNotIn('fields', assessment['factors'][1])
        self.assertEqual(len(response.data['breakdown']), 8)
        self.assertEqual(response.data['duplicates'], [])
        self.assertFalse(Submission.objects.exists())

    def test_assess_endpoint_reports_duplicates_except_for_the_edited_record(self):
        created = self.create()

        preview = self.client.post('/api/assess', {'email': 'JANE@ACME.IO'}, format='json')
        self.assertEqual(
            preview.data['duplicates'],
            [{'type': 'email', 'existing_id': created['id'], 'message': 'Email already exists in system'}],
        )

        editing = self.client.post(
            '/api/assess',
            {'email': 'jane@acme.io', 'submission_id': created['id']},
            format='json',
        )
        self.assertEqual(editing.data['duplicates'], [])

    def test_create_submission(self):
        data = self.create(has_encryption='No')

        self.assertEqual(data['risk_score'], 8)
        self.assertEqual(data['risk_level'], 'low')
        self.assertEqual(data['status'], 'approved')
        self.assertEqual(data['risk_factors'][0]['message'], 'Missing Encryption control')
        self.assertTrue(Submission.objects.filter(pk=data['id']).exists())

    def test_create_requires_entity_type(self):
        payload = self.vendor_payload()
        payload.pop('entity_type')

        response = self.client.post('/api/submissions', payload, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertIn('entity_type', response.data)

    def test_create_rejects_unknown_control_answer(self):
        response = self.client.post('/api/submissions', self.vendor_payload(has_logging='Maybe'), format='json')

        self.assertEqual(response.status_code, 400)
        self.assertIn('has_logging', response.data)

    def test_list_filters_by_status_and_sorts_by_risk(self):
        self.create()
        risky = self.create(
            email='risky@mailinator.com',
            has_encryption='No',
            has_logging='No',
            tax_id='',
            phone='',
            service_type='',
            compliance_certifications=[],
        )

        response = self.client.get('/api/submissions', {'sort': 'risk-high'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['results'][0]['id'], risky['id'])

        approved = self.client.get('/api/submissions', {'status': 'approved'})
        self.assertEqual(len(approved.data['results']), 1)
        self.assertNotEqual(approved.data['results'][0]['id'], risky['id'])

    def test_detail_returns_404_for_unknown_submission(self):
        response = self.client.get(f'/api/submissions/{uuid.uuid4()}')

        self.assertEqual(response.status_code, 404)

    def test_patch_reassesses_submission(self):
        created = self.create()

        response = self.client.patch(
            f"/api/submissions/{created['id']}",
            {'compliance_certifications': ['SOC 2']},
            format='json',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['risk_score'], 8)
        self.assertEqual(response.data['risk_factors'][0]['type'], 'compliance')

    def test_patch_requires_a_field(self):
        created = self.create()

        response = self.client.patch(f"/api/submissions/{created['id']}", {}, format='json')

        self.assertEqual(response.status_code, 400)

    def test_status_override(self):
        created = self.create()

        response = self.client.post(
            f"/api/submissions/{created['id']}/status",
            {'status': 'flagged'},
            format='json',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], 'flagged')
        self.assertTrue(response.data['status_overridden'])
        self.assertEqual(response.data['risk_score'], 0)

    def test_delete_submission(self):
        created = self.create()

        first = self.client.delete(f"/api/submissions/{created['id']}")
        second = self.client.delete(f"/api/submissions/{created['id']}")

        self.assertEqual(first.status_code, 204)
        self.assertEqual(second.status_code, 404)

    def test_document_upload(self):
        created = self.create()
        document = SimpleUploadedFile('soc2-report.pdf', b'%PDF-1.4 test', content_type='application/pdf')

        response = self.client.post(
            f"/api/submissions/{created['id']}/document",
            {'document': document},
            format='multipart',
        )

        self.assertEqual(response.status_code, 200)
        submission = Submission.objects.get(pk=created['id'])
        self.assertTrue(submission.document.name.endswith('.pdf'))

    def test_statistics_endpoint(self):
        self.create()
        self.create(entity_type='client', client_tier='', email='c@client.io', tax_id='99')

        response = self.client.get('/api/statistics')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['total'], 2)
        self.assertEqual(response.data['by_entity_type'], {'vendor': 1, 'client': 1})
        self.assertEqual(response.data['average_risk_score'], 3)

    def test_api_token_required_when_configured(self):
        api_token = secrets.token_urlsafe(24)
        with override_settings(API_AUTH_TOKEN=api_token):
            unauthorized = self.client.get('/api/submissions')
            self.assertEqual(unauthorized.status_code, 403)

            authorized = self.client.get('/api/submissions', HTTP_X_API_TOKEN=api_token)
            self.assertEqual(authorized.status_code, 200)

            bearer = self.client.get('/api/submissions', HTTP_AUTHORIZATION=f'Bearer {api_token}')
            self.assertEqual(bearer.status_code, 200)
