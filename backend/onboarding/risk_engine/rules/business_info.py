from onboarding.models import FactorSeverity
from onboarding.risk_engine.rules.base import BaseRiskRule

BUSINESS_FIELDS = ('annual_revenue', 'employee_count', 'business_type', 'website')
MAX_POINTS = 10
INCOMPLETE_THRESHOLD = 2


class BusinessInformationRule(BaseRiskRule):
    name = 'Business Information Completeness'
    version = 1

    def run(self, record):
        missing = [name for name in BUSINESS_FIELDS if not getattr(record, name)]
        points = len(missing) / len(BUSINESS_FIELDS) * MAX_POINTS

        factors = []
        if len(missing) > INCOMPLETE_THRESHOLD:
            factors.append(self.factor('business_info', FactorSeverity.MEDIUM, 'Incomplete business information'))

        return self.output(points=points, factors=factors)
