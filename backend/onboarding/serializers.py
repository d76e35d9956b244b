from django.conf import settings
from rest_framework import serializers

from onboarding.models import ControlAnswer, EntityType, Submission, SubmissionStatus

MAX_CERTIFICATIONS = 20


def _text(max_length: int = 255) -> serializers.CharField:
    return serializers.CharField(max_length=max_length, required=False, allow_blank=True)


def _control_answer() -> serializers.ChoiceField:
    return serializers.ChoiceField(choices=ControlAnswer.choices, required=False, allow_blank=True)


class ApplicationInputSerializer(serializers.Serializer):
    # Blank values reach the risk engine, which scores them.
    entity_type = serializers.ChoiceField(choices=EntityType.choices, required=False, allow_blank=True)

    company_name = _text()
    contact_name = _text()
    email = _text(254)
    phone = _text(64)
    tax_id = _text(64)
    address = _text()
    city = _text(128)
    state = _text(128)
    zip_code = _text(32)
    country = _text(128)
    industry = _text(128)
    website = _text()

    annual_revenue = _text(64)
    employee_count = _text(64)
    business_type = _text(64)

    service_type = _text(128)
    contract_value = _text(64)
    compliance_certifications = serializers.ListField(
        child=serializers.CharField(max_length=64),
        required=False,
        max_length=MAX_CERTIFICATIONS,
    )

    client_tier = _text(64)
    expected_volume = _text(128)
    payment_terms = _text(64)

    has_encryption = _control_answer()
    has_access_control = _control_answer()
    has_logging = _control_answer()
    has_network_security = _control_answer()

    description = serializers.CharField(max_length=5000, required=False, allow_blank=True)


class SubmissionCreateSerializer(ApplicationInputSerializer):
    entity_type = serializers.ChoiceField(choices=EntityType.choices)


class SubmissionUpdateSerializer(ApplicationInputSerializer):
    entity_type = serializers.ChoiceField(choices=EntityType.choices, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('At least one application field is required.')
        return attrs


class AssessRequestSerializer(ApplicationInputSerializer):
    submission_id = serializers.UUIDField(required=False)
    include_breakdown = serializers.BooleanField(required=False, default=False)


class StatusOverrideSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=SubmissionStatus.choices)


class DocumentUploadSerializer(serializers.Serializer):
    document = serializers.FileField(max_length=255)

    def validate_document(self, value):
        max_bytes = int(getattr(settings, 'ONBOARDING_MAX_DOCUMENT_BYTES', 5 * 1024 * 1024))
        if value.size > max_bytes:
            raise serializers.ValidationError('document is too large.')
        return value


class SubmissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Submission
        fields = [
            'id',
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
            'document',
            'risk_score',
            'risk_level',
            'status',
            'status_overridden',
            'risk_factors',
            'duplicate_warnings',
            'assessed_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SubmissionListSerializer(serializers.ModelSerializer):
    duplicate_count = serializers.SerializerMethodField()

    class Meta:
        model = Submission
        fields = [
            'id',
            'entity_type',
            'company_name',
            'email',
            'risk_score',
            'risk_level',
            'status',
            'status_overridden',
            'duplicate_count',
            'created_at',
        ]

    def get_duplicate_count(self, obj: Submission) -> int:
        return len(obj.duplicate_warnings or [])
