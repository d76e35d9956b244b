from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from onboarding.models import Submission, SubmissionStatus
from onboarding.services import reassess_submission


class Command(BaseCommand):
    help = 'Re-run the risk assessment over stored submissions.'

    def add_arguments(self, parser):
        parser.add_argument('--status', type=str, default='', help='Only process submissions with this status.')
        parser.add_argument('--limit', type=int, default=500, help='Maximum number of submissions to process.')
        parser.add_argument(
            '--include-overridden',
            action='store_true',
            help='Also re-assess submissions whose status was set by a reviewer.',
        )
        parser.add_argument('--dry-run', action='store_true', help='Print score changes without saving.')

    def handle(self, *args, **options):
        status = (options['status'] or '').strip().lower()
        limit = max(options['limit'], 1)
        dry_run = bool(options['dry_run'])

        if status and status not in SubmissionStatus.values:
            raise CommandError(f'Unknown status "{status}". Choose from: {", ".join(SubmissionStatus.values)}.')

        queryset = Submission.objects.all()
        if status:
            queryset = queryset.filter(status=status)
        if not options['include_overridden']:
            queryset = queryset.filter(status_overridden=False)

        submissions = list(queryset.order_by('created_at')[:limit])
        if not submissions:
            self.stdout.write(self.style.SUCCESS('No submissions to re-assess.'))
            return

        changed = 0
        for submission in submissions:
            previous_score = submission.risk_score
            previous_status = submission.status
            assessment, _ = reassess_submission(submission, save=not dry_run)

            if assessment.score != previous_score or assessment.status != previous_status:
                changed += 1
                prefix = '[DRY RUN] ' if dry_run else ''
                self.stdout.write(
                    f'{prefix}{submission.pk}: {previous_score} ({previous_status}) '
                    f'-> {assessment.score} ({assessment.status})',
                )

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(f'Dry run complete. {changed} of {len(submissions)} submission(s) would change.'),
            )
            return

        self.stdout.write(
            self.style.SUCCESS(f'Re-assessment complete. {changed} of {len(submissions)} submission(s) changed.'),
        )
