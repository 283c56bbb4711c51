"""Reference data seeding from YAML.

Expected layout::

    sellers:
      - id: 1
        name: Acme Returns
        email_from: returns@acme.com
        notification_emails:
          tsGoodsReturn: [desk@acme.com]
    contractors:
      - {id: 1, type: 0, name: Jane Doe, email: jane@example.com, mobile: "+15550100"}
    employees:
      - {id: 2, first_name: Ann, last_name: Lee}
    statuses:
      - {id: 1, name: Completed}
"""

from pathlib import Path
from typing import Dict

import yaml
from pydantic import ValidationError
from sqlalchemy.orm import Session

from return_notifier.domain.models import Contractor, Employee, Reseller, Status
from return_notifier.logging import get_logger

from .exceptions import ReferenceDataError
from .repositories import (
    ContractorRepository,
    EmployeeRepository,
    SellerRepository,
    StatusRepository,
)

logger = get_logger(__name__, component="database")

_SECTIONS = (
    ("sellers", Reseller, SellerRepository),
    ("contractors", Contractor, ContractorRepository),
    ("employees", Employee, EmployeeRepository),
    ("statuses", Status, StatusRepository),
)


def load_reference_data(path: Path, session: Session) -> Dict[str, int]:
    """Upsert every record of a seed file within the caller's session.

    Args:
        path: YAML seed file
        session: Session the caller commits

    Returns:
        Number of records upserted per section

    Raises:
        ReferenceDataError: If the file is unreadable or a record is invalid
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ReferenceDataError(f"Failed to read reference data {path}: {e}") from e

    if not isinstance(data, dict):
        raise ReferenceDataError(f"Reference data {path} must contain a mapping at the top level")

    counts: Dict[str, int] = {}
    for section, domain_model, repository_cls in _SECTIONS:
        records = data.get(section) or []
        if not isinstance(records, list):
            raise ReferenceDataError(f"Section '{section}' must be a list")

        repository = repository_cls(session)
        for index, record in enumerate(records):
            try:
                entity = domain_model.model_validate(record)
            except ValidationError as e:
                raise ReferenceDataError(
                    f"Invalid record {section}[{index}] in {path}: {e}"
                ) from e
            repository.upsert(entity)

        counts[section] = len(records)

    logger.info(
        "Reference data loaded",
        extra={"event": "database.seeded", "seed_file": str(path), **counts},
    )
    return counts
