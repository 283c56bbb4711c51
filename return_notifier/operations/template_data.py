"""Template data assembly and validation."""

from return_notifier.domain.models import ReturnNotificationRequest, TemplateData

from .exceptions import EmptyTemplateField
from .resolver import ResolvedEntities


def build_template_data(
    request: ReturnNotificationRequest,
    entities: ResolvedEntities,
    differences: str,
) -> TemplateData:
    """Assemble the flat payload every message template renders from."""
    client = entities.client

    return {
        "COMPLAINT_ID": request.complaint_id,
        "COMPLAINT_NUMBER": request.complaint_number,
        "CREATOR_ID": request.creator_id,
        "CREATOR_NAME": entities.creator.full_name,
        "EXPERT_ID": request.expert_id,
        "EXPERT_NAME": entities.expert.full_name,
        "CLIENT_ID": request.client_id,
        "CLIENT_NAME": client.full_name or client.name,
        "CONSUMPTION_ID": request.consumption_id,
        "CONSUMPTION_NUMBER": request.consumption_number,
        "AGREEMENT_NUMBER": request.agreement_number,
        "DATE": request.date,
        "DIFFERENCES": differences,
    }


def validate_template_data(template_data: TemplateData) -> None:
    """Reject template data with any falsy value.

    Zero ids count as empty, so a legitimate id of 0 is rejected too.

    Raises:
        EmptyTemplateField: Naming the first empty key
    """
    for key, value in template_data.items():
        if not value:
            raise EmptyTemplateField(key)
