from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable

from onboarding.models import DuplicateType
from onboarding.risk_engine.errors import InvalidApplicationRecord
from onboarding.risk_engine.types import ApplicationRecord, DuplicateWarning

NON_DIGIT_PATTERN = re.compile(r'[^0-9]')

EMAIL_DUPLICATE_MESSAGE = 'Email already exists in system'
TAX_ID_DUPLICATE_MESSAGE = 'Tax ID already exists in system'


def normalize_tax_id(value: str) -> str:
    return NON_DIGIT_PATTERN.sub('', value or '')


def emails_match(left: str, right: str) -> bool:
    return bool(left and right) and left.lower() == right.lower()


def tax_ids_match(left: str, right: str) -> bool:
    left_digits = normalize_tax_id(left)
    # Two records without any tax ID digits are not duplicates of each other.
    return bool(left_digits) and left_digits == normalize_tax_id(right)


@dataclass
class DuplicateDetector:
    def find_duplicates(
        self,
        candidate: ApplicationRecord,
        existing: Iterable[ApplicationRecord],
    ) -> list[DuplicateWarning]:
        if not isinstance(candidate, ApplicationRecord):
            raise InvalidApplicationRecord('find_duplicates', candidate)
        if existing is None:
            raise InvalidApplicationRecord('find_duplicates', existing)

        warnings: list[DuplicateWarning] = []
        for other in existing:
            if not isinstance(other, ApplicationRecord):
                raise InvalidApplicationRecord('find_duplicates', other)
            if not other.record_id:
                continue

            if emails_match(candidate.email, other.email):
                warnings.append(
                    DuplicateWarning(
                        type=DuplicateType.EMAIL,
                        existing_id=other.record_id,
                        message=EMAIL_DUPLICATE_MESSAGE,
                    ),
                )

            if tax_ids_match(candidate.tax_id, other.tax_id):
                warnings.append(
                    DuplicateWarning(
                        type=DuplicateType.TAX_ID,
                        existing_id=other.record_id,
                        message=TAX_ID_DUPLICATE_MESSAGE,
                    ),
                )

        return warnings


def find_duplicates(candidate: ApplicationRecord, existing: Iterable[ApplicationRecord]) -> list[DuplicateWarning]:
    return DuplicateDetector().find_duplicates(candidate, existing)
