from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
import re
from typing import Any, Mapping

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')

# Legacy export keys that do not convert mechanically.
_KEY_ALIASES = {
    'id': 'record_id',
    'recordId': 'record_id',
}


def _to_snake_case(key: str) -> str:
    if key in _KEY_ALIASES:
        return _KEY_ALIASES[key]
    return _CAMEL_BOUNDARY.sub('_', key).lower()


@dataclass(frozen=True)
class ApplicationRecord:
    entity_type: str = ''

    company_name: str = ''
    contact_name: str = ''
    email: str = ''
    phone: str = ''
    tax_id: str = ''
    address: str = ''
    city: str = ''
    state: str = ''
    zip_code: str = ''
    country: str = ''
    industry: str = ''
    website: str = ''

    annual_revenue: str = ''
    employee_count: str = ''
    business_type: str = ''

    service_type: str = ''
    contract_value: str = ''
    compliance_certifications: tuple[str, ...] = ()

    client_tier: str = ''
    expected_volume: str = ''
    payment_terms: str = ''

    has_encryption: str = ''
    has_access_control: str = ''
    has_logging: str = ''
    has_network_security: str = ''

    description: str = ''
    record_id: str = ''

    @classmethod
    def field_names(cls) -> list[str]:
        return [item.name for item in fields(cls)]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ApplicationRecord:
        """Build a record from snake_case or legacy camelCase keys.

        Unknown keys are ignored and ``None`` becomes an empty value, so a
        partially filled form maps onto a record without errors.
        """
        known = set(cls.field_names())
        values: dict[str, Any] = {}
        for raw_key, raw_value in (data or {}).items():
            key = _to_snake_case(str(raw_key))
            if key not in known:
                continue
            if key == 'compliance_certifications':
                values[key] = _as_certifications(raw_value)
            else:
                values[key] = '' if raw_value is None else str(raw_value)
        return cls(**values)


def _as_certifications(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value if item is not None)


@dataclass(frozen=True)
class RiskFactor:
    type: str
    severity: str
    message: str
    fields: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            'type': self.type,
            'severity': str(self.severity),
            'message': self.message,
        }
        if self.fields:
            payload['fields'] = list(self.fields)
        return payload


@dataclass(frozen=True)
class RuleOutput:
    rule_name: str
    points: float
    factors: list[RiskFactor] = field(default_factory=list)


@dataclass(frozen=True)
class RiskAssessment:
    score: int
    level: str
    status: str
    factors: tuple[RiskFactor, ...]
    timestamp: datetime


@dataclass(frozen=True)
class ScoringResult:
    assessment: RiskAssessment
    raw_score: float
    rules: list[RuleOutput]


@dataclass(frozen=True)
class DuplicateWarning:
    type: str
    existing_id: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {
            'type': str(self.type),
            'existing_id': self.existing_id,
            'message': self.message,
        }
