"""Tests for BaseService and the failure translation it shares."""

from datetime import UTC, datetime

import pytest

from shelfctl.domain.errors import NotFoundError, RepositoryError
from shelfctl.infrastructure.library import Library
from shelfctl.services.base import BaseService, failed_result
from shelfctl.services.catalog import CatalogService
from shelfctl.services.lending import LendingService


class TestBaseService:
    def test_library_stored(self, library: Library) -> None:
        service = BaseService(library)
        assert service._library is library

    def test_injected_clock(self, library: Library) -> None:
        fixed = datetime(2024, 1, 1, tzinfo=UTC)
        service = BaseService(library, clock=lambda: fixed)
        assert service._now() == fixed

    def test_default_clock_is_utc(self, library: Library) -> None:
        assert BaseService(library)._now().tzinfo is not None

    @pytest.mark.parametrize("service_cls", [CatalogService, LendingService])
    def test_services_extend_base(self, service_cls: type[BaseService]) -> None:
        assert issubclass(service_cls, BaseService)


class TestFailedResult:
    def test_translates_domain_error(self) -> None:
        result = failed_result("get_book", NotFoundError("missing", isbn="9783161484100"))
        assert not result.ok
        assert result.op == "get_book"
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.message == "missing"
        assert result.error.detail == {"isbn": "9783161484100"}

    def test_repository_error_propagates(self) -> None:
        with pytest.raises(RepositoryError):
            failed_result("get_book", RepositoryError("disk on fire"))
