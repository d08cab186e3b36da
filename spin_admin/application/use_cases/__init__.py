"""Application use cases."""

from spin_admin.application.use_cases.dashboard_queries import DashboardQueries
from spin_admin.application.use_cases.delete_spins import BulkDeleteCoordinator

__all__ = ["BulkDeleteCoordinator", "DashboardQueries"]
