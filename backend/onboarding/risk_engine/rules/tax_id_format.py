import re

from onboarding.models import FactorSeverity
from onboarding.risk_engine.rules.base import BaseRiskRule

TAX_ID_PATTERN = re.compile(r'[0-9-]+')
WHITESPACE_PATTERN = re.compile(r'\s')
INVALID_FORMAT_POINTS = 5


def is_valid_tax_id_format(value: str) -> bool:
    return bool(TAX_ID_PATTERN.fullmatch(WHITESPACE_PATTERN.sub('', value or '')))


class TaxIdFormatRule(BaseRiskRule):
    name = 'Tax ID Format Check'
    version = 1

    def run(self, record):
        if not record.tax_id or is_valid_tax_id_format(record.tax_id):
            return self.output()

        return self.output(
            points=INVALID_FORMAT_POINTS,
            factors=[self.factor('validation', FactorSeverity.MEDIUM, 'Tax ID format appears invalid')],
        )
