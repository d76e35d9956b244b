from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.db import transaction
from django.db.models import Avg, Count, Q

from onboarding.models import (
    APPLICATION_FIELDS,
    EntityType,
    RiskLevel,
    Submission,
    SubmissionStatus,
)
from onboarding.risk_engine.duplicates import DuplicateDetector
from onboarding.risk_engine.engine import RiskScorer, round_half_up
from onboarding.risk_engine.types import ApplicationRecord, DuplicateWarning, RiskAssessment, ScoringResult

logger = logging.getLogger(__name__)

DISCLAIMER_TEXT = 'Risk score is a rule-based indicator and does not replace manual review.'

SORT_ORDERINGS = {
    'newest': ['-created_at'],
    'oldest': ['created_at'],
    'risk-high': ['-risk_score', '-created_at'],
    'risk-low': ['risk_score', '-created_at'],
}


def _existing_records(exclude_id=None) -> list[ApplicationRecord]:
    limit = max(int(getattr(settings, 'ONBOARDING_DUPLICATE_SCAN_LIMIT', 5000)), 1)
    queryset = Submission.objects.only('id', 'email', 'tax_id', 'created_at')
    if exclude_id:
        queryset = queryset.exclude(pk=exclude_id)

    # Newest rows win the cap; warnings are still reported oldest first.
    rows = list(queryset.order_by('-created_at')[:limit])
    rows.reverse()
    return [
        ApplicationRecord(record_id=str(row.pk), email=row.email, tax_id=row.tax_id)
        for row in rows
    ]


def evaluate_application(
    record: ApplicationRecord,
    exclude_id=None,
) -> tuple[ScoringResult, list[DuplicateWarning]]:
    result = RiskScorer().run(record)
    warnings = DuplicateDetector().find_duplicates(record, _existing_records(exclude_id=exclude_id))
    return result, warnings


def _serialize_assessment(assessment: RiskAssessment) -> dict[str, Any]:
    return {
        'score': assessment.score,
        'level': str(assessment.level),
        'status': str(assessment.status),
        'factors': [factor.as_dict() for factor in assessment.factors],
        'timestamp': assessment.timestamp,
    }


def build_assessment_payload(
    result: ScoringResult,
    warnings: list[DuplicateWarning],
    include_breakdown: bool = False,
) -> dict[str, Any]:
    payload = {
        'assessment': _serialize_assessment(result.assessment),
        'duplicates': [warning.as_dict() for warning in warnings],
        'disclaimer': DISCLAIMER_TEXT,
    }
    if include_breakdown:
        payload['breakdown'] = [
            {'rule': output.rule_name, 'points': round(output.points, 2)}
            for output in result.rules
        ]
        payload['raw_score'] = round(result.raw_score, 2)
    return payload


def _apply_assessment(
    submission: Submission,
    assessment: RiskAssessment,
    warnings: list[DuplicateWarning],
) -> None:
    submission.risk_score = assessment.score
    submission.risk_level = assessment.level
    submission.status = assessment.status
    submission.status_overridden = False
    submission.risk_factors = [factor.as_dict() for factor in assessment.factors]
    submission.duplicate_warnings = [warning.as_dict() for warning in warnings]
    submission.assessed_at = assessment.timestamp


def reassess_submission(submission: Submission, save: bool = True) -> tuple[RiskAssessment, list[DuplicateWarning]]:
    result, warnings = evaluate_application(submission.to_application_record(), exclude_id=submission.pk)
    _apply_assessment(submission, result.assessment, warnings)
    if save:
        submission.save()
    return result.assessment, warnings


def create_submission(data: dict[str, Any]) -> Submission:
    values = {name: data[name] for name in APPLICATION_FIELDS if name in data}
    submission = Submission(**values)

    with transaction.atomic():
        reassess_submission(submission, save=False)
        submission.save()

    logger.info(
        'Created %s submission %s (score=%s, status=%s, duplicates=%s).',
        submission.entity_type,
        submission.pk,
        submission.risk_score,
        submission.status,
        len(submission.duplicate_warnings),
    )
    return submission


def get_submission(submission_id) -> Submission:
    return Submission.objects.get(pk=submission_id)


def list_submissions(
    status: str | None = None,
    entity_type: str | None = None,
    sort: str = 'newest',
    q: str = '',
    limit: int | None = None,
):
    queryset = Submission.objects.all()

    if status in SubmissionStatus.values:
        queryset = queryset.filter(status=status)
    if entity_type in EntityType.values:
        queryset = queryset.filter(entity_type=entity_type)

    query = (q or '').strip()
    if query:
        queryset = queryset.filter(
            Q(company_name__icontains=query)
            | Q(contact_name__icontains=query)
            | Q(email__icontains=query),
        )

    queryset = queryset.order_by(*SORT_ORDERINGS.get(sort, SORT_ORDERINGS['newest']))
    if limit:
        queryset = queryset[:limit]
    return queryset


def update_submission(submission_id, changes: dict[str, Any]) -> Submission:
    """Apply a partial update; any application field change triggers a fresh assessment.

    ``status`` in ``changes`` is treated as a reviewer override and is
    applied after re-assessment. Raises ``Submission.DoesNotExist``.
    """
    application_changes = {name: changes[name] for name in APPLICATION_FIELDS if name in changes}
    status_override = changes.get('status')

    with transaction.atomic():
        submission = Submission.objects.select_for_update().get(pk=submission_id)
        for name, value in application_changes.items():
            setattr(submission, name, value)

        if application_changes:
            reassess_submission(submission, save=False)

        if status_override:
            submission.status = status_override
            submission.status_overridden = True

        submission.save()

    logger.info(
        'Updated submission %s (fields=%s, status=%s, overridden=%s).',
        submission.pk,
        sorted(application_changes),
        submission.status,
        submission.status_overridden,
    )
    return submission


def override_status(submission_id, status: str) -> Submission:
    return update_submission(submission_id, {'status': status})


def attach_document(submission_id, document) -> Submission:
    with transaction.atomic():
        submission = Submission.objects.select_for_update().get(pk=submission_id)
        old_name = submission.document.name
        storage = submission.document.storage

        submission.document = document
        submission.save(update_fields=['document', 'updated_at'])

        # Storage deletes are not transactional; drop the old file after commit.
        if old_name and old_name != submission.document.name:
            transaction.on_commit(lambda: storage.delete(old_name))

    logger.info('Stored document %s for submission %s.', submission.document.name, submission.pk)
    return submission


def delete_submission(submission_id) -> bool:
    try:
        submission = Submission.objects.get(pk=submission_id)
    except Submission.DoesNotExist:
        return False

    document_name = submission.document.name
    storage = submission.document.storage
    with transaction.atomic():
        submission.delete()
        if document_name:
            transaction.on_commit(lambda: storage.delete(document_name))

    logger.info('Deleted submission %s.', submission_id)
    return True


def _count_by(field_name: str, keys) -> dict[str, int]:
    counts = {key: 0 for key in keys}
    rows = Submission.objects.order_by().values(field_name).annotate(count=Count('id'))
    for row in rows:
        counts[row[field_name]] = row['count']
    return counts


def get_statistics() -> dict[str, Any]:
    total = Submission.objects.count()
    average = Submission.objects.aggregate(average=Avg('risk_score'))['average']

    return {
        'total': total,
        'by_status': _count_by('status', SubmissionStatus.values),
        'by_entity_type': _count_by('entity_type', EntityType.values),
        'by_risk_level': _count_by('risk_level', RiskLevel.values),
        'average_risk_score': round_half_up(average) if total and average is not None else 0,
    }
