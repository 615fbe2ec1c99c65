"""
Management command to load Ek-codes from a CSV file.

Each line holds a code and an optional pool (HSV, OSV or Common),
separated by comma, semicolon or tab. Codes that already exist are
left untouched.

Usage:
    python manage.py import_tickets codes.csv
    python manage.py import_tickets codes.csv --dry-run
"""

from collections import Counter

from django.core.management.base import BaseCommand, CommandError

from apps.tickets.services import import_tickets, parse_ticket_csv


class Command(BaseCommand):
    help = 'Import Ek-codes from a CSV file of code,pool rows'

    def add_arguments(self, parser):
        parser.add_argument('path', help='Path to the CSV file')
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be imported without making changes',
        )

    def handle(self, *args, **options):
        path = options['path']
        dry_run = options['dry_run']

        try:
            with open(path, encoding='utf-8-sig') as handle:
                rows = parse_ticket_csv(handle.read())
        except OSError as exc:
            raise CommandError(f'Cannot read {path}: {exc}')
        except UnicodeDecodeError:
            raise CommandError(f'{path} is not a UTF-8 text file')

        if not rows:
            self.stdout.write(
                self.style.WARNING('No valid codes found. Nothing to import.')
            )
            return

        per_pool = Counter(pool for _, pool in rows)
        self.stdout.write(f'\nParsed {len(rows)} code(s):\n')
        for pool, count in sorted(per_pool.items()):
            self.stdout.write(f'  - {pool}: {count}')

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        inserted = import_tickets(items=rows)

        self.stdout.write(
            self.style.SUCCESS(f'\nImported {inserted} new code(s).')
        )
        if inserted < len(rows):
            self.stdout.write(f'{len(rows) - inserted} code(s) already existed.')
