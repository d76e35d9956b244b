from onboarding.models import FactorSeverity
from onboarding.risk_engine.rules.base import BaseRiskRule, is_blank

REQUIRED_FIELDS = (
    'company_name',
    'contact_name',
    'email',
    'phone',
    'tax_id',
    'address',
    'city',
    'country',
    'industry',
)
MAX_POINTS = 20


class MissingFieldsRule(BaseRiskRule):
    name = 'Missing Required Fields'
    version = 1

    def run(self, record):
        missing = [name for name in REQUIRED_FIELDS if is_blank(getattr(record, name))]
        points = len(missing) / len(REQUIRED_FIELDS) * MAX_POINTS

        if not missing:
            return self.output(points=points)

        return self.output(
            points=points,
            factors=[
                self.factor(
                    'missing_fields',
                    FactorSeverity.HIGH if len(missing) > 3 else FactorSeverity.MEDIUM,
                    f'Missing {len(missing)} required field(s)',
                    fields=missing,
                ),
            ],
        )
