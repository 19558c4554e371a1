# src/commentsense/services/session_store.py
"""
In-memory store of analysis reports keyed by analysis id.

Nothing is persisted: reports live for the lifetime of the process and
the oldest one is evicted once the configured capacity is exceeded.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from typing import List, Optional

from commentsense.domain.exceptions import ResourceNotFoundError, ValidationError
from commentsense.domain.models import AnalysisReport

logger = logging.getLogger(__name__)


class AnalysisSessionStore:
    """Insertion-ordered report cache with oldest-first eviction"""

    def __init__(self, max_sessions: int = 20):
        if max_sessions <= 0:
            raise ValidationError(
                "max_sessions must be positive", {"max_sessions": max_sessions}
            )
        self.max_sessions = max_sessions
        self._reports: "OrderedDict[str, AnalysisReport]" = OrderedDict()
        self._lock = threading.Lock()

    def save(self, report: AnalysisReport, analysis_id: Optional[str] = None) -> str:
        """Store a report and return its id"""
        analysis_id = analysis_id or uuid.uuid4().hex

        with self._lock:
            self._reports[analysis_id] = report
            self._reports.move_to_end(analysis_id)
            while len(self._reports) > self.max_sessions:
                evicted, _ = self._reports.popitem(last=False)
                logger.info(f"🗑️ Evicted analysis session: {evicted}")

        logger.info(f"💾 Stored analysis session: {analysis_id}")
        return analysis_id

    def get(self, analysis_id: str) -> AnalysisReport:
        """
        Fetch a stored report

        Raises:
            ResourceNotFoundError: Unknown or evicted id
        """
        with self._lock:
            report = self._reports.get(analysis_id)
        if report is None:
            raise ResourceNotFoundError("Analysis", analysis_id)
        return report

    def delete(self, analysis_id: str) -> None:
        """Drop a stored report; unknown ids raise ResourceNotFoundError"""
        with self._lock:
            if analysis_id not in self._reports:
                raise ResourceNotFoundError("Analysis", analysis_id)
            del self._reports[analysis_id]
        logger.info(f"🗑️ Deleted analysis session: {analysis_id}")

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._reports)

    def clear(self) -> None:
        with self._lock:
            self._reports.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._reports)

    def __contains__(self, analysis_id: str) -> bool:
        with self._lock:
            return analysis_id in self._reports
