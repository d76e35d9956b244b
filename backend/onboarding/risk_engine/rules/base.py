from __future__ import annotations

from onboarding.risk_engine.types import ApplicationRecord, RiskFactor, RuleOutput


class BaseRiskRule:
    name = ''
    version = 1

    def run(self, record: ApplicationRecord) -> RuleOutput:
        raise NotImplementedError

    def output(self, *, points: float = 0.0, factors: list[RiskFactor] | None = None) -> RuleOutput:
        return RuleOutput(
            rule_name=self.name,
            points=max(0.0, float(points)),
            factors=list(factors or []),
        )

    def factor(self, type_: str, severity: str, message: str, fields: list[str] | None = None) -> RiskFactor:
        return RiskFactor(type=type_, severity=severity, message=message, fields=list(fields or []))


def is_blank(value) -> bool:
    return not value or not str(value).strip()
