import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.system.services import migrate_data


class Command(BaseCommand):
    help = 'Imports a browser local-storage export into the database.'

    def add_arguments(self, parser):
        parser.add_argument(
            'file',
            nargs='?',
            default=None,
            help='Path to the export (defaults to DATA_FILE_PATH)',
        )

    def handle(self, *args, **options):
        path = options['file'] or settings.DATA_FILE_PATH
        self.stdout.write(f'Importing {path}...')

        try:
            with open(path, encoding='utf-8') as fh:
                data = json.load(fh)
        except OSError as e:
            raise CommandError(f'Cannot read {path}: {e}')
        except json.JSONDecodeError as e:
            raise CommandError(f'{path} is not valid JSON: {e}')

        try:
            result = migrate_data(data)
        except ValueError as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(result.message))
