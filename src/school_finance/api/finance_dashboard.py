'''
API endpoints for the finance dashboard.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Depends, Query

from ..models import finance as finance_models
from ..core.filters import ALL
from ..core.plans import SUBSCRIPTION_PLANS
from ..services.finance_service import FinanceDashboardService

class FinanceDashboardAPI:
    """
    A class to encapsulate the endpoints for the Finance Dashboard.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/finance-dashboard",
            tags=["Finance Dashboard"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/",
                self.get_finance_dashboard,
                methods=["GET"],
                response_model=finance_models.FinanceDashboard)
        self.router.add_api_route(
                "/compute",
                self.compute_finance_dashboard,
                methods=["POST"],
                response_model=finance_models.FinanceDashboard)
        self.router.add_api_route(
                "/plans",
                self.list_plans,
                methods=["GET"],
                response_model=list[finance_models.SubscriptionPlan])

    async def get_finance_dashboard(
        self,
        dashboard_service: Annotated[FinanceDashboardService, Depends(FinanceDashboardService)],
        teacher_id: Annotated[str, Query(description="Teacher ID or 'all'")] = ALL,
        student_id: Annotated[str, Query(description="Student ID or 'all'")] = ALL
    ) -> Any:
        """
        Loads fresh data from the store and returns the finance dashboard
        for the selected teacher and student.
        """
        return await dashboard_service.get_dashboard_for_api(teacher_id, student_id)

    async def compute_finance_dashboard(
        self,
        request: finance_models.FinanceDashboardRequest
    ) -> Any:
        """
        Computes the finance dashboard from a snapshot supplied in the body.
        Nothing is read from the store.
        """
        return FinanceDashboardService.compute_dashboard(
            request.snapshot,
            teacher_id=request.teacher_id,
            student_id=request.student_id
        )

    async def list_plans(self) -> Any:
        """Returns the subscription plan catalog."""
        return list(SUBSCRIPTION_PLANS)

# Instantiate the class and export its router
finance_dashboard_api = FinanceDashboardAPI()
router = finance_dashboard_api.router
