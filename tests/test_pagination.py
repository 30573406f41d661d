"""
Tests for Pagination arithmetic.
"""

from __future__ import annotations

from marketplace_admin.orchestration.pagination import Pagination


def test_empty_list_has_one_page() -> None:
    p = Pagination()
    assert p.total_pages == 1
    assert not p.can_go_next
    assert not p.can_go_prev
    assert p.page_numbers == [1]


def test_offset_and_navigation() -> None:
    p = Pagination(initial_page_size=10, total=57)
    assert p.total_pages == 6
    p.next_page()
    assert p.page == 2
    assert p.offset == 10
    p.last_page()
    assert p.page == 6
    p.next_page()
    assert p.page == 6
    p.first_page()
    p.prev_page()
    assert p.page == 1


def test_set_page_clamps() -> None:
    p = Pagination(total=30)
    p.set_page(99)
    assert p.page == 3
    p.set_page(-1)
    assert p.page == 1


def test_set_page_size_resets_to_first_page() -> None:
    p = Pagination(initial_page=3, total=100)
    p.set_page_size(25)
    assert p.page == 1
    assert p.total_pages == 4


def test_set_total_pulls_page_back() -> None:
    p = Pagination(initial_page=5, total=50)
    p.set_total(21)
    assert p.page == 3


def test_page_numbers_window() -> None:
    p = Pagination(initial_page=1, total=200)
    assert p.page_numbers == [1, 2, 3, 4, 5]
    p.set_page(10)
    assert p.page_numbers == [8, 9, 10, 11, 12]
    p.set_page(20)
    assert p.page_numbers == [16, 17, 18, 19, 20]
    p.set_page(19)
    assert p.page_numbers == [16, 17, 18, 19, 20]


def test_state_snapshot_and_reset() -> None:
    p = Pagination(initial_page=2, initial_page_size=25, total=60)
    p.set_page_size(50)
    state = p.state
    assert (state.page, state.page_size, state.total, state.total_pages) == (1, 50, 60, 2)
    p.reset()
    assert (p.page, p.page_size) == (2, 25)
