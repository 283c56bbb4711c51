"""Entity resolution for goods return notifications."""

from dataclasses import dataclass

from return_notifier.domain.models import (
    Contractor,
    Employee,
    Reseller,
    ReturnNotificationRequest,
)
from return_notifier.domain.ports import ReferenceDirectory

from .exceptions import ClientMismatch, EntityNotFound


@dataclass(frozen=True)
class ResolvedEntities:
    """Snapshots of every entity a notification refers to."""

    reseller: Reseller
    client: Contractor
    creator: Employee
    expert: Employee


class EntityResolver:
    """Looks up the request's reseller, client, creator and expert."""

    def __init__(self, directory: ReferenceDirectory):
        self.directory = directory

    def resolve(self, request: ReturnNotificationRequest) -> ResolvedEntities:
        """Resolve every entity, in order reseller, client, creator, expert.

        Raises:
            EntityNotFound: If the reseller, creator or expert does not exist
            ClientMismatch: If the client is missing, not a customer, or its id
                differs from the reseller id
        """
        reseller = self.directory.get_seller(request.reseller_id)
        if reseller is None:
            raise EntityNotFound("seller")

        client = self.directory.get_contractor(request.client_id)
        # The client id is compared with the reseller id on purpose
        if client is None or not client.is_customer or client.id != request.reseller_id:
            raise ClientMismatch()

        creator = self.directory.get_employee(request.creator_id)
        if creator is None:
            raise EntityNotFound("creator")

        expert = self.directory.get_employee(request.expert_id)
        if expert is None:
            raise EntityNotFound("expert")

        return ResolvedEntities(reseller=reseller, client=client, creator=creator, expert=expert)
