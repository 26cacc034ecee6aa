from django.core.management.base import BaseCommand

from admissions.services import recalculate_candidates


class Command(BaseCommand):
    help = 'Recalculates O\'Level, exam and final scores and admission status for candidates'

    def add_arguments(self, parser):
        parser.add_argument(
            '--candidate', type=int, action='append', dest='candidate_ids',
            help='Candidate id to recalculate (repeatable). Defaults to every candidate.'
        )

    def handle(self, *args, **options):
        summary = recalculate_candidates(options['candidate_ids'])

        for failure in summary.failures:
            self.stdout.write(self.style.ERROR(
                f"Candidate {failure.candidate_id}: {failure.error}: {failure.message}"
            ))

        message = f"Recalculated {summary.succeeded} of {summary.processed} candidate(s)"
        if summary.failed:
            self.stdout.write(self.style.WARNING(f"{message}; {summary.failed} failed"))
        else:
            self.stdout.write(self.style.SUCCESS(message))
