from onboarding.risk_engine.rules.base import BaseRiskRule

MISSING_SCHEME_POINTS = 2


class WebsiteFormatRule(BaseRiskRule):
    name = 'Website Format Check'
    version = 1

    def run(self, record):
        if record.website and not record.website.startswith('http'):
            return self.output(points=MISSING_SCHEME_POINTS)
        return self.output()
