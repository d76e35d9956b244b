import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from onboarding.risk_engine.types import ApplicationRecord


class EntityType(models.TextChoices):
    VENDOR = 'vendor', 'Vendor'
    CLIENT = 'client', 'Client'


class ControlAnswer(models.TextChoices):
    YES = 'Yes', 'Yes'
    NO = 'No', 'No'
    PARTIAL = 'Partial', 'Partial'


class RiskLevel(models.TextChoices):
    LOW = 'low', 'Low'
    MEDIUM = 'medium', 'Medium'
    HIGH = 'high', 'High'


class SubmissionStatus(models.TextChoices):
    APPROVED = 'approved', 'Approved'
    REVIEW = 'review', 'Review'
    FLAGGED = 'flagged', 'Flagged'


class FactorSeverity(models.TextChoices):
    LOW = 'low', 'Low'
    MEDIUM = 'medium', 'Medium'
    HIGH = 'high', 'High'


class DuplicateType(models.TextChoices):
    EMAIL = 'email', 'Email'
    TAX_ID = 'taxId', 'Tax ID'


class Submission(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    entity_type = models.CharField(max_length=16, choices=EntityType.choices, db_index=True)

    company_name = models.CharField(max_length=255, blank=True)
    contact_name = models.CharField(max_length=255, blank=True)
    email = models.CharField(max_length=254, blank=True, db_index=True)
    phone = models.CharField(max_length=64, blank=True)
    tax_id = models.CharField(max_length=64, blank=True, db_index=True)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=128, blank=True)
    state = models.CharField(max_length=128, blank=True)
    zip_code = models.CharField(max_length=32, blank=True)
    country = models.CharField(max_length=128, blank=True)
    industry = models.CharField(max_length=128, blank=True)
    website = models.CharField(max_length=255, blank=True)

    annual_revenue = models.CharField(max_length=64, blank=True)
    employee_count = models.CharField(max_length=64, blank=True)
    business_type = models.CharField(max_length=64, blank=True)

    service_type = models.CharField(max_length=128, blank=True)
    contract_value = models.CharField(max_length=64, blank=True)
    compliance_certifications = models.JSONField(default=list, blank=True)

    client_tier = models.CharField(max_length=64, blank=True)
    expected_volume = models.CharField(max_length=128, blank=True)
    payment_terms = models.CharField(max_length=64, blank=True)

    has_encryption = models.CharField(max_length=8, choices=ControlAnswer.choices, blank=True)
    has_access_control = models.CharField(max_length=8, choices=ControlAnswer.choices, blank=True)
    has_logging = models.CharField(max_length=8, choices=ControlAnswer.choices, blank=True)
    has_network_security = models.CharField(max_length=8, choices=ControlAnswer.choices, blank=True)

    description = models.TextField(blank=True)
    document = models.FileField(upload_to='submissions/%Y/%m/', blank=True)

    risk_score = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    risk_level = models.CharField(max_length=16, choices=RiskLevel.choices, default=RiskLevel.MEDIUM)
    status = models.CharField(
        max_length=16,
        choices=SubmissionStatus.choices,
        default=SubmissionStatus.REVIEW,
        db_index=True,
    )
    status_overridden = models.BooleanField(default=False)
    risk_factors = models.JSONField(default=list, blank=True)
    duplicate_warnings = models.JSONField(default=list, blank=True)
    assessed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['risk_score'], name='submission_risk_score_idx'),
        ]

    def __str__(self) -> str:
        return f'{self.company_name or "(unnamed)"} [{self.entity_type}]'

    def to_application_record(self) -> ApplicationRecord:
        values = {name: getattr(self, name) for name in APPLICATION_FIELDS}
        values['compliance_certifications'] = self.compliance_certifications or []
        values['record_id'] = str(self.pk) if self.pk else ''
        return ApplicationRecord.from_mapping(values)


APPLICATION_FIELDS = (
    'entity_type',
    'company_name',
    'contact_name',
    'email',
    'phone',
    'tax_id',
    'address',
    'city',
    'state',
    'zip_code',
    'country',
    'industry',
    'website',
    'annual_revenue',
    'employee_count',
    'business_type',
    'service_type',
    'contract_value',
    'compliance_certifications',
    'client_tier',
    'expected_volume',
    'payment_terms',
    'has_encryption',
    'has_access_control',
    'has_logging',
    'has_network_security',
    'description',
)
