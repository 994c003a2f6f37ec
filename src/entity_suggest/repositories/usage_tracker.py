"""In-process usage counters for billable external APIs.

Counts calls per service by day, by month and in total. Daily counts are
kept for 30 days and monthly counts for 12 months. Nothing is persisted.
"""

import logging
from collections.abc import Callable
from datetime import date, timedelta

logger = logging.getLogger(__name__)

DAILY_RETENTION_DAYS = 30
MONTHLY_RETENTION = 12
WARNING_RATIO = 0.8

# Calls per month covered by the provider's free credit.
MONTHLY_BUDGETS: dict[str, int] = {"places": 6250}


class ApiUsageTracker:
    """Quota tracker for paid APIs.

    This class satisfies the UsageTracker protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        budgets: dict[str, int] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the tracker.

        Args:
            budgets: Monthly call budget per service id. Defaults to MONTHLY_BUDGETS.
            today: Source of the current date. Injectable for tests.
        """
        self._budgets = dict(MONTHLY_BUDGETS if budgets is None else budgets)
        self._today = today
        self._daily: dict[str, dict[str, int]] = {}
        self._monthly: dict[str, dict[str, int]] = {}
        self._total: dict[str, int] = {}

    async def record_external_call(self, service_id: str) -> None:
        day = self._today()
        day_key = day.isoformat()
        month_key = day_key[:7]

        daily = self._daily.setdefault(service_id, {})
        monthly = self._monthly.setdefault(service_id, {})
        daily[day_key] = daily.get(day_key, 0) + 1
        monthly[month_key] = monthly.get(month_key, 0) + 1
        self._total[service_id] = self._total.get(service_id, 0) + 1

        self._prune(daily, monthly, day)

        budget = self._budgets.get(service_id)
        if budget and monthly[month_key] >= budget * WARNING_RATIO:
            logger.warning(
                "%s usage at %d of %d monthly calls (%.0f%%)",
                service_id,
                monthly[month_key],
                budget,
                monthly[month_key] / budget * 100,
            )

    def _prune(self, daily: dict[str, int], monthly: dict[str, int], day: date) -> None:
        day_cutoff = (day - timedelta(days=DAILY_RETENTION_DAYS)).isoformat()
        for key in [key for key in daily if key < day_cutoff]:
            del daily[key]

        month_index = day.year * 12 + day.month - 1 - MONTHLY_RETENTION
        month_cutoff = f"{month_index // 12:04d}-{month_index % 12 + 1:02d}"
        for key in [key for key in monthly if key < month_cutoff]:
            del monthly[key]

    def month_analysis(self, service_id: str) -> dict:
        """Current month usage against the service's budget."""
        month_key = self._today().isoformat()[:7]
        usage = self._monthly.get(service_id, {}).get(month_key, 0)
        budget = self._budgets.get(service_id)
        if not budget:
            return {"usage": usage, "limit": None}
        return {
            "usage": usage,
            "limit": budget,
            "remaining_calls": max(0, budget - usage),
            "percentage_used": round(usage / budget * 100, 2),
            "within_limit": usage <= budget,
        }

    def get_stats(self) -> dict:
        services = set(self._total) | set(self._budgets)
        return {
            service: {
                "daily": dict(self._daily.get(service, {})),
                "monthly": dict(self._monthly.get(service, {})),
                "total": self._total.get(service, 0),
                "current_month": self.month_analysis(service),
            }
            for service in sorted(services)
        }
