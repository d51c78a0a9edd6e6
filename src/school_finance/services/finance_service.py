'''
Services that load finance data from the store and keep dashboards current.
'''
from typing import Annotated, Awaitable, Callable, Optional, Type

from fastapi import Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import engine as db_engine
from ..database import models as db_models
from ..models import finance as finance_models
from ..core.aggregates import FinanceAggregator
from ..core.filters import ALL, FinanceFilter
from ..common.exceptions import FinanceDataLoadError, DatabaseNotConfiguredError
from ..common.logger import log
from ..common.config import settings

# --- Service 1: Snapshot Loading ---

class FinanceSnapshotService:
    """
    Reads the five collections the finance dashboard needs from the store
    and validates them into a FinanceSnapshot.
    """
    def __init__(self, db: Annotated[AsyncSession, Depends(get_db_session)]):
        self.db = db

    async def _fetch(self, collection: str, stmt, model: Type[BaseModel]) -> list:
        try:
            result = await self.db.execute(stmt)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            log.error(f"Failed to load '{collection}': {e}", exc_info=True)
            raise FinanceDataLoadError(collection, str(e)) from e

        log.info(f"Loaded {len(rows)} rows from '{collection}'.")
        return [model.model_validate(row) for row in rows]

    async def load_snapshot(self) -> finance_models.FinanceSnapshot:
        """
        Fetches active teachers, students and classes, and every payment and
        payroll row, newest first.
        """
        teachers = await self._fetch(
            "teachers",
            select(db_models.Teachers)
            .filter(db_models.Teachers.is_active.is_(True))
            .order_by(db_models.Teachers.name),
            finance_models.Teacher,
        )
        students = await self._fetch(
            "dashboard_students",
            select(db_models.DashboardStudents)
            .filter(db_models.DashboardStudents.is_active.is_(True))
            .order_by(db_models.DashboardStudents.name),
            finance_models.Student,
        )
        classes = await self._fetch(
            "classes",
            select(db_models.Classes).filter(db_models.Classes.is_active.is_(True)),
            finance_models.SchoolClass,
        )
        payments = await self._fetch(
            "payments",
            select(db_models.Payments).order_by(db_models.Payments.payment_date.desc()),
            finance_models.Payment,
        )
        payrolls = await self._fetch(
            "payroll",
            select(db_models.Payroll).order_by(db_models.Payroll.period_start.desc()),
            finance_models.PayrollEntry,
        )
        return finance_models.FinanceSnapshot(
            teachers=teachers,
            students=students,
            classes=classes,
            payments=payments,
            payrolls=payrolls,
        )


async def load_snapshot_from_store() -> finance_models.FinanceSnapshot:
    """
    Loads a snapshot outside of a request, on a session of its own.
    Used by the live feed when the store signals a change.
    """
    if db_engine.AsyncSessionLocal is None:
        raise DatabaseNotConfiguredError("Database session factory is not available.")

    async with db_engine.AsyncSessionLocal() as session:
        return await FinanceSnapshotService(session).load_snapshot()


# --- Service 2: Dashboard Computation ---

class FinanceDashboardService:
    """Service for computing the finance dashboard."""

    def __init__(
        self,
        snapshot_service: Annotated[FinanceSnapshotService, Depends(FinanceSnapshotService)]
    ):
        self.snapshot_service = snapshot_service

    @staticmethod
    def compute_dashboard(
        snapshot: finance_models.FinanceSnapshot,
        teacher_id: str = ALL,
        student_id: str = ALL,
    ) -> finance_models.FinanceDashboard:
        """Runs the aggregation pipeline over an already loaded snapshot."""
        aggregator = FinanceAggregator(snapshot, FinanceFilter(teacher_id=teacher_id, student_id=student_id))
        log.info(f"Computing finance dashboard: {aggregator!r}")
        return aggregator.dashboard(top_students_limit=settings.TOP_STUDENTS_LIMIT)

    async def get_dashboard_for_api(
        self,
        teacher_id: str = ALL,
        student_id: str = ALL,
    ) -> finance_models.FinanceDashboard:
        """
        Public API-facing entry point: loads a fresh snapshot from the store
        and computes the dashboard for the given filters.
        """
        log.info(f"Generating finance dashboard for teacher={teacher_id}, student={student_id}")
        snapshot = await self.snapshot_service.load_snapshot()
        return self.compute_dashboard(snapshot, teacher_id, student_id)


# --- Service 3: Live Refresh ---

DashboardListener = Callable[[finance_models.FinanceDashboard], None]

class FinanceDashboardFeed:
    """
    Keeps one dashboard up to date while the store pushes change events.

    Every change event triggers a full reload and recomputation; nothing is
    updated incrementally. Filter changes recompute from the last snapshot
    without reloading. When reloads overlap, only the most recently started
    one may replace the snapshot; an older read that lands later is dropped.
    """
    def __init__(
        self,
        load_snapshot: Callable[[], Awaitable[finance_models.FinanceSnapshot]] = load_snapshot_from_store,
        teacher_id: str = ALL,
        student_id: str = ALL,
    ):
        self._load_snapshot = load_snapshot
        self.filters = FinanceFilter(teacher_id=teacher_id, student_id=student_id)
        self.snapshot: Optional[finance_models.FinanceSnapshot] = None
        self.latest: Optional[finance_models.FinanceDashboard] = None
        self._listeners: list[DashboardListener] = []
        self._generation = 0

    def subscribe(self, listener: DashboardListener) -> Callable[[], None]:
        """Registers a listener and returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> finance_models.FinanceDashboard:
        self.latest = FinanceDashboardService.compute_dashboard(
            self.snapshot, self.filters.teacher_id, self.filters.student_id
        )
        for listener in list(self._listeners):
            try:
                listener(self.latest)
            except Exception as e:
                log.error(f"Dashboard listener {listener!r} failed: {e}", exc_info=True)
        return self.latest

    async def refresh(self) -> Optional[finance_models.FinanceDashboard]:
        """
        Reloads the snapshot and publishes a new dashboard.
        Returns the current dashboard unchanged if a newer refresh started
        while this one was loading.
        """
        self._generation += 1
        generation = self._generation

        snapshot = await self._load_snapshot()

        if generation != self._generation:
            log.info(f"Discarding stale snapshot from refresh #{generation} (latest is #{self._generation}).")
            return self.latest

        self.snapshot = snapshot
        return self._publish()

    async def handle_change(self, event: Optional[dict] = None) -> Optional[finance_models.FinanceDashboard]:
        """Callback for the store's change notifications (payments or payroll rows)."""
        event = event or {}
        log.info(f"Store change on '{event.get('table', 'unknown')}' ({event.get('eventType', 'unknown')}), refreshing dashboard.")
        return await self.refresh()

    async def set_filters(self, teacher_id: str = ALL, student_id: str = ALL) -> Optional[finance_models.FinanceDashboard]:
        self.filters = FinanceFilter(teacher_id=teacher_id, student_id=student_id)
        if self.snapshot is None:
            return await self.refresh()
        return self._publish()
