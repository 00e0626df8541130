"""Terminal presentation of the dashboard state."""

from .dashboard import DashboardView

__all__ = ["DashboardView"]
