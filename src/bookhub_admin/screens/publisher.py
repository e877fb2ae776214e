"""Publisher directory screen."""

from bookhub_admin import config
from bookhub_admin.controllers.crud import CrudCoordinator
from bookhub_admin.controllers.list_controller import PaginatedListController
from bookhub_admin.controllers.remote import CredentialProvider
from bookhub_admin.models.catalog import Publisher, PublisherForm
from bookhub_admin.models.common import Envelope, ListQuery
from bookhub_admin.services.bookhub_service import BookhubService

NAME_REQUIRED_MESSAGE = "Enter a publisher name."


def _check_publisher(form: PublisherForm) -> str | None:
    return None if form.publisher_name.strip() else NAME_REQUIRED_MESSAGE


class PublisherScreen:
    name = "publishers"

    def __init__(
        self,
        service: BookhubService,
        credentials: CredentialProvider,
        page_size: int = config.PAGE_SIZE,
    ) -> None:
        self.listing: PaginatedListController[Publisher, ListQuery] = (
            PaginatedListController(
                self.name,
                service.list_publishers,
                Publisher.from_dict,
                credentials,
                ListQuery(page_size=page_size),
            )
        )
        self.crud: CrudCoordinator[Publisher, PublisherForm, int] = CrudCoordinator(
            self.name,
            self.listing,
            credentials,
            create=service.create_publisher,
            update=service.update_publisher,
            delete=service.delete_publisher,
            fetch_detail=service.get_publisher,
            parse_detail=Publisher.from_dict,
            check_form=_check_publisher,
        )

    async def mount(self) -> Envelope:
        return await self.listing.fetch_page(0)

    def release(self) -> None:
        pass
