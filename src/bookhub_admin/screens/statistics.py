"""Branch stock statistics: in/out/loss totals per branch for one month."""

from datetime import date

from bookhub_admin.controllers.remote import CredentialProvider, call_with_token
from bookhub_admin.lib import logs
from bookhub_admin.models.catalog import BranchStockBar
from bookhub_admin.models.common import Envelope
from bookhub_admin.services.bookhub_service import BookhubService

LOG = logs.logger(__file__)

INVALID_MONTH_MESSAGE = "Pick a month."
INVALID_CHART_MESSAGE = "The server returned unreadable statistics."


def parse_month(value: str) -> tuple[int, int] | None:
    """Parse an ``input type=month`` value (``YYYY-MM``)."""
    try:
        year, month = (int(part) for part in value.split("-", 1))
    except (AttributeError, ValueError):
        return None
    if year <= 0 or not 1 <= month <= 12:
        return None
    return year, month


class BranchStockStatisticsScreen:
    name = "statistics"

    def __init__(self, service: BookhubService, credentials: CredentialProvider) -> None:
        self._service = service
        self._credentials = credentials
        today = date.today()
        self.year = today.year
        self.month = today.month
        self.bars: tuple[BranchStockBar, ...] = ()
        self.message = ""

    @property
    def month_value(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def set_month(self, value: str) -> bool:
        parsed = parse_month(value)
        if parsed is None:
            self.message = INVALID_MONTH_MESSAGE
            return False
        self.year, self.month = parsed
        self.message = ""
        return True

    async def search(self) -> Envelope:
        year, month = self.year, self.month
        envelope = await call_with_token(
            self._credentials,
            "statistics.branch_stock",
            lambda token: self._service.branch_stock_chart(token, year, month),
        )
        if not envelope.ok:
            self.message = envelope.message
            return envelope
        try:
            self.bars = tuple(
                BranchStockBar.from_dict(raw) for raw in envelope.data or []
            )
        except (AttributeError, TypeError, ValueError, KeyError):
            LOG.error(
                "statistics.branch_stock - unreadable chart month:%s", self.month_value,
                exc_info=True,
            )
            self.message = INVALID_CHART_MESSAGE
            return Envelope.transport_failure(INVALID_CHART_MESSAGE)
        self.message = ""
        return envelope

    async def mount(self) -> Envelope:
        return await self.search()

    def release(self) -> None:
        pass
