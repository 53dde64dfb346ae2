from .dashboard import DashboardRestClient

__all__ = ["DashboardRestClient"]
