"""Pricing policy screen: filtered list plus create/edit/delete."""

from bookhub_admin import config
from bookhub_admin.controllers.crud import CrudCoordinator
from bookhub_admin.controllers.list_controller import PaginatedListController
from bookhub_admin.controllers.remote import CredentialProvider
from bookhub_admin.models.catalog import Policy, PolicyDetail, PolicyForm
from bookhub_admin.models.common import Envelope, ListQuery
from bookhub_admin.services.bookhub_service import BookhubService


class PolicyScreen:
    """Policies filtered by title keyword, policy type and date range."""

    name = "policies"

    def __init__(
        self,
        service: BookhubService,
        credentials: CredentialProvider,
        page_size: int = config.PAGE_SIZE,
    ) -> None:
        self.listing: PaginatedListController[Policy, ListQuery] = (
            PaginatedListController(
                self.name,
                service.list_policies,
                Policy.from_dict,
                credentials,
                ListQuery(page_size=page_size),
            )
        )
        self.crud: CrudCoordinator[PolicyDetail, PolicyForm, int] = CrudCoordinator(
            self.name,
            self.listing,
            credentials,
            create=service.create_policy,
            update=service.update_policy,
            delete=service.delete_policy,
            fetch_detail=service.get_policy,
            parse_detail=PolicyDetail.from_dict,
        )

    async def mount(self) -> Envelope:
        return await self.listing.fetch_page(0)

    def edit_form(self) -> PolicyForm | None:
        """Form prefilled from the selected detail."""
        detail = self.crud.detail
        return PolicyForm.from_detail(detail) if detail is not None else None

    def release(self) -> None:
        """Nothing is scheduled on this screen."""
