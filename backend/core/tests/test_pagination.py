"""Unit tests for ``core.pagination.paginate_queryset``."""

from __future__ import annotations

import pytest

from cases.models import Case
from core.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, paginate_queryset


@pytest.fixture()
def ten_cases(db):
    for i in range(10):
        Case.objects.create(case_id=f"CASE-{i:02d}", location="Lab")
    return Case.objects.order_by("case_id")


class TestPaginateQueryset:

    def test_default_window(self, ten_cases):
        window = paginate_queryset(ten_cases)

        assert DEFAULT_PAGE_SIZE == 6
        assert [c.case_id for c in window.items] == [f"CASE-{i:02d}" for i in range(6)]
        assert window.current_page == 1
        assert window.total_pages == 2
        assert window.total_items == 10

    def test_last_partial_page(self, ten_cases):
        window = paginate_queryset(ten_cases, page=2)

        assert [c.case_id for c in window.items] == ["CASE-06", "CASE-07", "CASE-08", "CASE-09"]

    def test_page_past_the_end_is_not_clamped(self, ten_cases):
        window = paginate_queryset(ten_cases, page=9, limit=5)

        assert window.items == []
        assert window.current_page == 9
        assert window.total_pages == 2

    def test_pages_partition_the_result_set(self, ten_cases):
        seen = []
        for page in range(1, 5):
            seen.extend(c.pk for c in paginate_queryset(ten_cases, page=page, limit=3).items)

        assert len(seen) == 10
        assert len(set(seen)) == 10

    @pytest.mark.django_db
    def test_empty(self):
        window = paginate_queryset(Case.objects.all())

        assert window.items == []
        assert window.total_pages == 0
        assert window.total_items == 0

    @pytest.mark.django_db
    @pytest.mark.parametrize("page,limit", [(0, 6), (1, 0), (1, MAX_PAGE_SIZE + 1)])
    def test_out_of_range_arguments(self, page, limit):
        with pytest.raises(ValueError):
            paginate_queryset(Case.objects.all(), page=page, limit=limit)
