from onboarding.models import FactorSeverity
from onboarding.risk_engine.rules.base import BaseRiskRule

DISPOSABLE_EMAIL_DOMAINS = (
    'tempmail.com',
    'guerrillamail.com',
    '10minutemail.com',
    'mailinator.com',
)
SUSPICIOUS_DOMAIN_POINTS = 5


def email_domain(email: str) -> str:
    _, separator, domain = (email or '').rpartition('@')
    return domain if separator else ''


class EmailDomainRule(BaseRiskRule):
    name = 'Email Domain Check'
    version = 1

    def run(self, record):
        if not record.email:
            return self.output()

        domain = email_domain(record.email)
        if domain and any(blocked in domain for blocked in DISPOSABLE_EMAIL_DOMAINS):
            return self.output(
                points=SUSPICIOUS_DOMAIN_POINTS,
                factors=[self.factor('fraud', FactorSeverity.HIGH, 'Suspicious email domain detected')],
            )

        return self.output()
