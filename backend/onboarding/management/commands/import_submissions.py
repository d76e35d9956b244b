from __future__ import annotations

import json
import logging

from django.core.management.base import BaseCommand, CommandError

from onboarding.models import APPLICATION_FIELDS, EntityType
from onboarding.risk_engine.types import ApplicationRecord
from onboarding.services import create_submission

logger = logging.getLogger(__name__)


def _row_to_fields(row: dict) -> dict:
    record = ApplicationRecord.from_mapping(row)
    values = {name: getattr(record, name) for name in APPLICATION_FIELDS}
    values['compliance_certifications'] = list(record.compliance_certifications)
    return values


class Command(BaseCommand):
    help = 'Import onboarding applications from a JSON array (snake_case or legacy camelCase keys).'

    def add_arguments(self, parser):
        parser.add_argument('path', type=str, help='Path to a JSON file holding a list of applications.')
        parser.add_argument('--dry-run', action='store_true', help='Validate the file without creating submissions.')

    def handle(self, *args, **options):
        path = options['path']
        dry_run = bool(options['dry_run'])

        try:
            with open(path, encoding='utf-8') as handle:
                rows = json.load(handle)
        except OSError as exc:
            raise CommandError(f'Could not read {path}: {exc}') from exc
        except json.JSONDecodeError as exc:
            raise CommandError(f'{path} is not valid JSON: {exc}') from exc

        if not isinstance(rows, list):
            raise CommandError(f'{path} must contain a JSON array of applications.')

        created = 0
        skipped = 0
        for index, row in enumerate(rows):
            if not isinstance(row, dict):
                skipped += 1
                self.stderr.write(f'Row {index}: skipped, expected an object.')
                continue

            values = _row_to_fields(row)
            if values['entity_type'] not in EntityType.values:
                skipped += 1
                self.stderr.write(f'Row {index}: skipped, entity type must be one of {", ".join(EntityType.values)}.')
                continue

            if dry_run:
                created += 1
                continue

            submission = create_submission(values)
            created += 1
            self.stdout.write(f'Row {index}: created {submission.pk} (score={submission.risk_score}, status={submission.status})')

        logger.info('Imported %s submission(s) from %s, skipped %s.', created, path, skipped)
        if dry_run:
            self.stdout.write(self.style.SUCCESS(f'Dry run complete. {created} valid, {skipped} skipped.'))
            return

        self.stdout.write(self.style.SUCCESS(f'Import complete. Created {created}, skipped {skipped}.'))
