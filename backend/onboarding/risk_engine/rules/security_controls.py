from onboarding.models import ControlAnswer, FactorSeverity
from onboarding.risk_engine.rules.base import BaseRiskRule

SECURITY_CONTROLS = (
    ('has_encryption', 7.5),
    ('has_access_control', 7.5),
    ('has_logging', 7.5),
    ('has_network_security', 7.5),
)


def control_label(field_name: str) -> str:
    """``has_access_control`` -> ``Access Control``."""
    words = field_name.split('_')
    if words and words[0] == 'has':
        words = words[1:]
    return ' '.join(word.capitalize() for word in words if word)


class SecurityControlsRule(BaseRiskRule):
    name = 'Security Controls'
    version = 1

    def run(self, record):
        points = 0.0
        factors = []
        for field_name, weight in SECURITY_CONTROLS:
            value = getattr(record, field_name)
            if value == ControlAnswer.NO:
                points += weight
                factors.append(
                    self.factor('security', FactorSeverity.HIGH, f'Missing {control_label(field_name)} control'),
                )
            elif value == ControlAnswer.PARTIAL:
                points += weight * 0.5

        return self.output(points=points, factors=factors)
