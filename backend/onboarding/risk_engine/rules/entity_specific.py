from onboarding.models import EntityType, FactorSeverity
from onboarding.risk_engine.rules.base import BaseRiskRule

MISSING_FIELD_POINTS = 5


class EntitySpecificFieldRule(BaseRiskRule):
    name = 'Entity-Specific Field'
    version = 1

    def run(self, record):
        if record.entity_type == EntityType.VENDOR and not record.service_type:
            return self.output(
                points=MISSING_FIELD_POINTS,
                factors=[self.factor('vendor_specific', FactorSeverity.MEDIUM, 'Vendor service type not specified')],
            )

        if record.entity_type == EntityType.CLIENT and not record.client_tier:
            return self.output(
                points=MISSING_FIELD_POINTS,
                factors=[self.factor('client_specific', FactorSeverity.MEDIUM, 'Client tier not specified')],
            )

        return self.output()
