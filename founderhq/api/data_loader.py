"""
Builds DashboardData from the workspace backend, or from the bundled
sample workspace when no backend is configured.
"""

import logging

from founderhq.api.workspace_client import WorkspaceClient
from founderhq.config import BACKEND_ENABLED
from founderhq.models.records import DashboardData
from founderhq.sample_data import build_sample_workspace

logger = logging.getLogger(__name__)


def load_dashboard_data(client: WorkspaceClient = None, workspace_id: str = None) -> DashboardData:
    """Fetch and parse every table; sample data when nothing is configured."""
    if client is None and not BACKEND_ENABLED:
        logger.info("No workspace backend configured, using sample data")
        return build_sample_workspace()

    client = client or WorkspaceClient(workspace_id=workspace_id)
    data = DashboardData.from_dict(client.get_workspace_rows())
    logger.info(
        "Loaded workspace %s: %d transactions, %d expenses, %d deals",
        client.workspace_id,
        len(data.revenue_transactions),
        len(data.expenses),
        len(data.deals),
    )
    return data
