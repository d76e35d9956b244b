from onboarding.models import EntityType, FactorSeverity
from onboarding.risk_engine.rules.base import BaseRiskRule

NO_CERTIFICATION_POINTS = 15
LIMITED_CERTIFICATION_POINTS = 7.5
MIN_CERTIFICATIONS = 2


def distinct_certifications(values) -> set[str]:
    return {str(item).strip() for item in values or () if str(item).strip()}


class ComplianceCertificationsRule(BaseRiskRule):
    name = 'Compliance Certifications'
    version = 1

    def run(self, record):
        # Clients are not asked for certifications.
        if record.entity_type != EntityType.VENDOR:
            return self.output()

        count = len(distinct_certifications(record.compliance_certifications))
        if count == 0:
            return self.output(
                points=NO_CERTIFICATION_POINTS,
                factors=[self.factor('compliance', FactorSeverity.HIGH, 'No compliance certifications provided')],
            )

        if count < MIN_CERTIFICATIONS:
            return self.output(
                points=LIMITED_CERTIFICATION_POINTS,
                factors=[self.factor('compliance', FactorSeverity.MEDIUM, 'Limited compliance certifications')],
            )

        return self.output()
