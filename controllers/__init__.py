"""Page controllers.

One controller per page. Each holds only ephemeral UI state (filters,
modal, selection, view mode) and routes user intents to the shared stores.
"""

from controllers.base import ModalState, PageController
from controllers.dashboard import DashboardController
from controllers.feeding import FeedingController
from controllers.finances import FinancesController
from controllers.health import HealthController
from controllers.livestock import LivestockController
from controllers.tasks import TasksController

__all__ = [
    "ModalState",
    "PageController",
    "DashboardController",
    "FeedingController",
    "FinancesController",
    "HealthController",
    "LivestockController",
    "TasksController",
]
