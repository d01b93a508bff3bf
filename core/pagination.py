"""
Core — Pagination

Standard page-number paginator with a hard max cap, and a cursor
paginator for the append-only stock ledger (stable under inserts).

@file core/pagination.py
"""

from rest_framework.pagination import CursorPagination, PageNumberPagination

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class StandardPagination(PageNumberPagination):
    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = MAX_PAGE_SIZE


class LedgerPagination(CursorPagination):
    page_size = DEFAULT_PAGE_SIZE * 2
    page_size_query_param = 'page_size'
    max_page_size = MAX_PAGE_SIZE
    ordering = '-id'
