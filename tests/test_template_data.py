"""Unit tests for template data assembly and validation."""

import pytest

from return_notifier.domain.models import TEMPLATE_FIELDS
from return_notifier.operations.exceptions import EmptyTemplateField
from return_notifier.operations.resolver import EntityResolver, ResolvedEntities
from return_notifier.operations.template_data import build_template_data, validate_template_data
from return_notifier.operations.validation import parse_request


@pytest.fixture
def entities(directory, change_payload):
    return EntityResolver(directory).resolve(parse_request(change_payload))


def test_builds_every_field(change_payload, entities):
    data = build_template_data(parse_request(change_payload), entities, "changed")

    assert tuple(data) == TEMPLATE_FIELDS
    assert data == {
        "COMPLAINT_ID": 501,
        "COMPLAINT_NUMBER": "RT-501",
        "CREATOR_ID": 21,
        "CREATOR_NAME": "Ann Lee",
        "EXPERT_ID": 22,
        "EXPERT_NAME": "Bob Stone",
        "CLIENT_ID": 7,
        "CLIENT_NAME": "Jane Doe",
        "CONSUMPTION_ID": 900,
        "CONSUMPTION_NUMBER": "CN-900",
        "AGREEMENT_NUMBER": "AG-12",
        "DATE": "2024-05-01",
        "DIFFERENCES": "changed",
    }


def test_client_name_falls_back_to_registered_name(change_payload, entities):
    nameless = entities.client.model_copy(update={"first_name": None, "last_name": None})
    entities = ResolvedEntities(entities.reseller, nameless, entities.creator, entities.expert)

    data = build_template_data(parse_request(change_payload), entities, "changed")

    assert data["CLIENT_NAME"] == "Doe Trading"


def test_valid_data_passes(change_payload, entities):
    validate_template_data(build_template_data(parse_request(change_payload), entities, "changed"))


@pytest.mark.parametrize(
    "key, value",
    [("COMPLAINT_ID", 0), ("DATE", ""), ("DIFFERENCES", ""), ("AGREEMENT_NUMBER", "")],
)
def test_empty_value_rejected(change_payload, entities, key, value):
    data = build_template_data(parse_request(change_payload), entities, "changed")
    data[key] = value

    with pytest.raises(EmptyTemplateField) as exc_info:
        validate_template_data(data)

    assert exc_info.value.field == key
    assert exc_info.value.message == f"Template Data ({key}) is empty!"
    assert exc_info.value.status_code == 500


def test_first_empty_key_is_reported(change_payload, entities):
    data = build_template_data(parse_request(change_payload), entities, "")
    data["COMPLAINT_NUMBER"] = ""

    with pytest.raises(EmptyTemplateField, match="COMPLAINT_NUMBER"):
        validate_template_data(data)
