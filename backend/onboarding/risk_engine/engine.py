from __future__ import annotations

from dataclasses import dataclass, field
import math

from django.utils import timezone

from onboarding.models import RiskLevel, SubmissionStatus
from onboarding.risk_engine.errors import InvalidApplicationRecord
from onboarding.risk_engine.rules import DEFAULT_RULES
from onboarding.risk_engine.types import ApplicationRecord, RiskAssessment, RuleOutput, ScoringResult

MAX_SCORE = 100
HIGH_RISK_THRESHOLD = 70
MEDIUM_RISK_THRESHOLD = 40


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def level_from_score(score: int) -> str:
    if score >= HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if score >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def status_from_score(score: int) -> str:
    if score >= HIGH_RISK_THRESHOLD:
        return SubmissionStatus.FLAGGED
    if score >= MEDIUM_RISK_THRESHOLD:
        return SubmissionStatus.REVIEW
    return SubmissionStatus.APPROVED


@dataclass
class RiskScorer:
    rules: list = field(default_factory=lambda: list(DEFAULT_RULES))
    version: int = 1

    def run(self, record: ApplicationRecord) -> ScoringResult:
        if not isinstance(record, ApplicationRecord):
            raise InvalidApplicationRecord('assess', record)

        rule_outputs: list[RuleOutput] = []
        for rule_class in self.rules:
            rule = rule_class()
            rule_outputs.append(rule.run(record))

        raw_score = sum(output.points for output in rule_outputs)
        score = max(0, round_half_up(min(MAX_SCORE, raw_score)))

        assessment = RiskAssessment(
            score=score,
            level=level_from_score(score),
            status=status_from_score(score),
            factors=tuple(factor for output in rule_outputs for factor in output.factors),
            timestamp=timezone.now(),
        )
        return ScoringResult(assessment=assessment, raw_score=raw_score, rules=rule_outputs)

    def assess(self, record: ApplicationRecord) -> RiskAssessment:
        return self.run(record).assessment


def assess(record: ApplicationRecord) -> RiskAssessment:
    return RiskScorer().assess(record)
