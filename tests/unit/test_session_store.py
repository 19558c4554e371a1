"""
Unit Tests for the in-memory analysis session store
"""

import pytest
from unittest.mock import MagicMock

from commentsense.domain.models import AnalysisReport
from commentsense.services import (
    AnalysisSessionStore,
    ResourceNotFoundError,
    ValidationError,
)


@pytest.fixture
def store():
    return AnalysisSessionStore(max_sessions=2)


class TestSessionStore:
    """Test save / get / delete and eviction"""

    def test_save_and_get(self, store):
        report = AnalysisReport()
        analysis_id = store.save(report)

        assert len(analysis_id) == 32
        assert store.get(analysis_id) is report
        assert analysis_id in store
        assert len(store) == 1

    def test_explicit_id(self, store):
        assert store.save(AnalysisReport(), analysis_id="fixed") == "fixed"
        assert store.ids() == ["fixed"]

    def test_oldest_evicted(self, store):
        first = store.save(AnalysisReport())
        second = store.save(AnalysisReport())
        third = store.save(AnalysisReport())

        assert store.ids() == [second, third]
        with pytest.raises(ResourceNotFoundError):
            store.get(first)

    def test_delete(self, store):
        analysis_id = store.save(AnalysisReport())
        store.delete(analysis_id)

        assert analysis_id not in store
        with pytest.raises(ResourceNotFoundError) as exc_info:
            store.delete(analysis_id)
        assert exc_info.value.resource_id == analysis_id

    def test_len_and_contains_take_lock(self, store):
        analysis_id = store.save(AnalysisReport())
        store._lock = MagicMock()

        assert len(store) == 1
        assert analysis_id in store
        assert store._lock.__enter__.call_count == 2

    def test_clear(self, store):
        store.save(AnalysisReport())
        store.clear()
        assert len(store) == 0

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_capacity(self, size):
        with pytest.raises(ValidationError):
            AnalysisSessionStore(max_sessions=size)
