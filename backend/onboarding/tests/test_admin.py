import json

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from onboarding.models import APPLICATION_FIELDS, Submission
from onboarding.services import create_submission, override_status


def _compliant_vendor():
    return create_submission(
        {
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
        },
    )


class SubmissionAdminTests(TestCase):
    def setUp(self):
        user = get_user_model().objects.create_superuser('reviewer', 'reviewer@example.com', 'password')
        self.client.force_login(user)

    def change_form_data(self, submission, **overrides):
        data = {name: getattr(submission, name) for name in APPLICATION_FIELDS}
        data['compliance_certifications'] = json.dumps(submission.compliance_certifications)
        data['status'] = submission.status
        data.update(overrides)
        return data

    def post_change(self, submission, **overrides):
        response = self.client.post(
            reverse('admin:onboarding_submission_change', args=[submission.pk]),
            self.change_form_data(submission, **overrides),
        )
        self.assertEqual(response.status_code, 302)
        submission.refresh_from_db()
        return submission

    def test_application_edit_reassesses_and_clears_override(self):
        submission = _compliant_vendor()
        submission = override_status(submission.pk, 'flagged')

        submission = self.post_change(submission, has_encryption='No')

        self.assertEqual(submission.risk_score, 8)
        self.assertEqual(submission.status, 'approved')
        self.assertFalse(submission.status_overridden)
        self.assertEqual(submission.risk_factors[0]['message'], 'Missing Encryption control')

    def test_status_only_edit_is_kept_as_override(self):
        submission = _compliant_vendor()

        submission = self.post_change(submission, status='review')

        self.assertEqual(submission.status, 'review')
        self.assertTrue(submission.status_overridden)
        self.assertEqual(submission.risk_score, 0)

    def test_application_and_status_edit_keeps_chosen_status(self):
        submission = _compliant_vendor()

        submission = self.post_change(submission, has_encryption='No', status='flagged')

        self.assertEqual(submission.risk_score, 8)
        self.assertEqual(submission.risk_level, 'low')
        self.assertEqual(submission.status, 'flagged')
        self.assertTrue(submission.status_overridden)

    def test_change_form_shows_score_breakdown(self):
        submission = create_submission({'entity_type': 'vendor'})

        response = self.client.get(reverse('admin:onboarding_submission_change', args=[submission.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Missing Required Fields: 20')
        self.assertContains(response, 'Compliance Certifications: 15')

    def test_reassess_action_refreshes_scores(self):
        submission = create_submission({'entity_type': 'client', 'client_tier': 'SMB'})
        Submission.objects.filter(pk=submission.pk).update(risk_score=99, status='flagged', status_overridden=True)

        response = self.client.post(
            reverse('admin:onboarding_submission_changelist'),
            {'action': 'reassess_selected', '_selected_action': [str(submission.pk)]},
        )

        self.assertEqual(response.status_code, 302)
        submission.refresh_from_db()
        self.assertEqual(submission.risk_score, 30)
        self.assertEqual(submission.status, 'approved')
        self.assertFalse(submission.status_overridden)

    def test_changelist_renders(self):
        create_submission({'entity_type': 'vendor', 'company_name': 'Acme Corp'})

        response = self.client.get(reverse('admin:onboarding_submission_changelist'))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Acme Corp')
