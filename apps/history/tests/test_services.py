import pytest
from datetime import timedelta
from django.utils import timezone

from apps.history.models import HistoryEntry, HistoryType
from apps.history.services import record_entry, list_entries, clamp_limit
from apps.history.services.exceptions import InvalidHistoryTypeError


@pytest.mark.django_db
class TestRecordEntry:
    """Tests for record_entry()."""

    def test_record_entry_upper_cases_code(self, user):
        entry = record_entry(entry_type=HistoryType.GENERATED, code=' abcdefghij ', user=user)

        assert entry.code == 'ABCDEFGHIJ'
        assert entry.user == user
        assert entry.date is not None

    def test_record_entry_explicit_date(self):
        when = timezone.now() - timedelta(days=3)
        entry = record_entry(entry_type=HistoryType.SUBMITTED, code='ABCDEFGHIJ', date=when)

        assert entry.date == when

    def test_record_entry_unknown_type(self):
        with pytest.raises(InvalidHistoryTypeError):
            record_entry(entry_type='exploded', code='ABCDEFGHIJ')

        assert not HistoryEntry.objects.exists()


@pytest.mark.django_db
class TestListEntries:
    """Tests for list_entries()."""

    def test_newest_first(self):
        now = timezone.now()
        record_entry(entry_type=HistoryType.GENERATED, code='AAAAAAAAA1', date=now - timedelta(hours=2))
        record_entry(entry_type=HistoryType.GENERATED, code='AAAAAAAAA2', date=now)
        record_entry(entry_type=HistoryType.GENERATED, code='AAAAAAAAA3', date=now - timedelta(hours=1))

        assert [e.code for e in list_entries()] == ['AAAAAAAAA2', 'AAAAAAAAA3', 'AAAAAAAAA1']

    def test_filter_by_type_and_user(self, user):
        record_entry(entry_type=HistoryType.GENERATED, code='AAAAAAAAA1', user=user)
        record_entry(entry_type=HistoryType.CLEARED, code='AAAAAAAAA1', user=user)
        record_entry(entry_type=HistoryType.CLEARED, code='AAAAAAAAA2')

        assert len(list_entries(entry_type=HistoryType.CLEARED)) == 2
        assert len(list_entries(entry_type=HistoryType.CLEARED, user_id=user.id)) == 1

    def test_unknown_type_filter_ignored(self):
        record_entry(entry_type=HistoryType.GENERATED, code='AAAAAAAAA1')

        assert len(list_entries(entry_type='bogus')) == 1

    def test_limit(self):
        for i in range(5):
            record_entry(entry_type=HistoryType.GENERATED, code=f'AAAAAAAAA{i}')

        assert len(list_entries(limit=2)) == 2


class TestClampLimit:
    """Tests for clamp_limit()."""

    def test_default(self, settings):
        settings.HISTORY_DEFAULT_LIMIT = 100
        assert clamp_limit(None) == 100

    def test_zero_or_garbage_means_default(self, settings):
        settings.HISTORY_DEFAULT_LIMIT = 100
        assert clamp_limit(0) == 100
        assert clamp_limit('0') == 100
        assert clamp_limit('') == 100
        assert clamp_limit('abc') == 100
        assert clamp_limit('25') == 25

    def test_bounds(self, settings):
        settings.HISTORY_MAX_LIMIT = 500
        assert clamp_limit(-7) == 1
        assert clamp_limit(10000) == 500
        assert clamp_limit(42) == 42
