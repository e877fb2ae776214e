"""
Stock screen.

Lists stock rows filtered by book title keyword, movement type and branch.
Editing a row records a stock movement (IN / OUT / LOSS) against it.
"""

from bookhub_admin import config
from bookhub_admin.controllers.crud import CrudCoordinator
from bookhub_admin.controllers.list_controller import PaginatedListController
from bookhub_admin.controllers.remote import CredentialProvider, call_remote
from bookhub_admin.lib import logs
from bookhub_admin.models.catalog import Branch, Stock, StockActionType, StockUpdateForm
from bookhub_admin.models.common import Envelope, StockQuery
from bookhub_admin.services.bookhub_service import BookhubService

LOG = logs.logger(__file__)

MISSING_STOCK_MESSAGE = "Select a stock row first."
AMOUNT_MESSAGE = "Enter an amount greater than zero."


def _check_movement(form: StockUpdateForm) -> str | None:
    if not form.branch_id or not form.book_isbn:
        return MISSING_STOCK_MESSAGE
    if form.amount <= 0:
        return AMOUNT_MESSAGE
    return None


class StockScreen:
    name = "stocks"

    def __init__(
        self,
        service: BookhubService,
        credentials: CredentialProvider,
        page_size: int = config.PAGE_SIZE,
    ) -> None:
        self._service = service
        self.listing: PaginatedListController[Stock, StockQuery] = (
            PaginatedListController(
                self.name,
                service.list_stocks,
                Stock.from_dict,
                credentials,
                StockQuery(page_size=page_size),
            )
        )
        self.crud: CrudCoordinator[Stock, StockUpdateForm, int] = CrudCoordinator(
            self.name,
            self.listing,
            credentials,
            update=service.update_stock,
            fetch_detail=service.get_stock,
            parse_detail=Stock.from_dict,
            check_form=_check_movement,
        )
        self.branches: tuple[Branch, ...] = ()

    async def mount(self) -> Envelope:
        envelope = await call_remote("stocks.branches", self._service.list_branches)
        if envelope.ok:
            try:
                self.branches = tuple(
                    Branch.from_dict(raw) for raw in envelope.data or []
                )
            except (AttributeError, TypeError, ValueError, KeyError):
                LOG.error("stocks.branches - unreadable branch list", exc_info=True)
                self.branches = ()
        else:
            LOG.warning("stocks.branches - branch filter unavailable: %s", envelope.message)
        return await self.listing.fetch_page(0)

    def movement_form(
        self,
        action: str = StockActionType.IN.value,
        amount: int = 0,
        description: str = "",
    ) -> StockUpdateForm:
        """Movement against the stock row opened for editing."""
        stock = self.crud.detail
        return StockUpdateForm(
            type=StockActionType(action).value,
            amount=amount,
            branch_id=stock.branch_id if stock else None,
            book_isbn=stock.book_isbn if stock else "",
            description=description,
        )

    async def record_movement(
        self, action: str, amount: int, description: str = ""
    ) -> Envelope:
        if self.crud.editing_key is None:
            return Envelope.local(MISSING_STOCK_MESSAGE)
        form = self.movement_form(action, amount, description)
        return await self.crud.submit_update(self.crud.editing_key, form)

    def release(self) -> None:
        pass
