"""Tests for CSV ingestion: parser, management command and upload endpoint."""

import pytest
from io import StringIO
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.core.management.base import CommandError
from django.urls import reverse
from rest_framework import status

from apps.tickets.models import Ticket, TicketPool
from apps.tickets.services import parse_ticket_csv


SAMPLE_CSV = (
    "code,pool\n"
    "aaaaaaaaa1,HSV\n"
    "AAAAAAAAA2;osv\n"
    "AAAAAAAAA3\tCommon\n"
    "\n"
    "too-short,HSV\n"
    "AAAAAAAAA4\n"
)


class TestParseTicketCsv:
    """Tests for parse_ticket_csv()."""

    def test_parses_mixed_separators(self):
        assert parse_ticket_csv(SAMPLE_CSV) == [
            ('AAAAAAAAA1', TicketPool.HSV),
            ('AAAAAAAAA2', TicketPool.OSV),
            ('AAAAAAAAA3', TicketPool.COMMON),
            ('AAAAAAAAA4', TicketPool.HSV),
        ]

    def test_empty_input(self):
        assert parse_ticket_csv('') == []
        assert parse_ticket_csv('code,pool\n') == []

    def test_windows_line_endings(self):
        assert parse_ticket_csv('AAAAAAAAA1,OSV\r\nAAAAAAAAA2,HSV\r\n') == [
            ('AAAAAAAAA1', TicketPool.OSV),
            ('AAAAAAAAA2', TicketPool.HSV),
        ]


@pytest.mark.django_db
class TestImportTicketsCommand:
    """Tests for the import_tickets management command."""

    def test_imports_file(self, tmp_path):
        path = tmp_path / 'codes.csv'
        path.write_text(SAMPLE_CSV, encoding='utf-8')
        out = StringIO()

        call_command('import_tickets', str(path), stdout=out)

        assert Ticket.objects.count() == 4
        assert 'Imported 4 new code(s)' in out.getvalue()

    def test_reimport_reports_existing(self, tmp_path):
        path = tmp_path / 'codes.csv'
        path.write_text(SAMPLE_CSV, encoding='utf-8')
        call_command('import_tickets', str(path), stdout=StringIO())
        out = StringIO()

        call_command('import_tickets', str(path), stdout=out)

        assert Ticket.objects.count() == 4
        assert '4 code(s) already existed' in out.getvalue()

    def test_dry_run_makes_no_changes(self, tmp_path):
        path = tmp_path / 'codes.csv'
        path.write_text(SAMPLE_CSV, encoding='utf-8')
        out = StringIO()

        call_command('import_tickets', str(path), '--dry-run', stdout=out)

        assert not Ticket.objects.exists()
        assert 'Parsed 4 code(s)' in out.getvalue()
        assert 'No changes made' in out.getvalue()

    def test_missing_file(self, tmp_path):
        with pytest.raises(CommandError):
            call_command('import_tickets', str(tmp_path / 'missing.csv'))


@pytest.mark.django_db
class TestImportCsvEndpoint:
    """Tests for POST /api/tickets/import-csv/"""

    def test_upload_csv(self, admin_client):
        upload = SimpleUploadedFile('codes.csv', SAMPLE_CSV.encode('utf-8'), content_type='text/csv')
        response = admin_client.post(reverse('tickets:import-csv'), {'file': upload}, format='multipart')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'parsed': 4, 'inserted': 4}

    def test_upload_without_valid_rows(self, admin_client):
        upload = SimpleUploadedFile('codes.csv', b'code,pool\nbad,HSV\n', content_type='text/csv')
        response = admin_client.post(reverse('tickets:import-csv'), {'file': upload}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'no_valid_items'}

    def test_upload_binary_file(self, admin_client):
        upload = SimpleUploadedFile('codes.csv', b'\xff\xfe\x00\x81', content_type='text/csv')
        response = admin_client.post(reverse('tickets:import-csv'), {'file': upload}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'invalid_file'}

    def test_upload_requires_admin(self, hsv_client):
        upload = SimpleUploadedFile('codes.csv', SAMPLE_CSV.encode('utf-8'), content_type='text/csv')
        response = hsv_client.post(reverse('tickets:import-csv'), {'file': upload}, format='multipart')

        assert response.status_code == status.HTTP_403_FORBIDDEN
