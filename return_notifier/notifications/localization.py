"""Message localization backed by Jinja2 templates.

Each message key maps to a template file ``<key>.j2``. A reseller can override
any key with ``resellers/<reseller_id>/<key>.j2``; the override is looked up
first, then the bundled default. An extra override directory from the
configuration is searched before the bundled templates.
"""

import logging
from pathlib import Path
from typing import List, Mapping, Optional

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
)

from .models import NotificationTemplateError

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".j2"

# Message keys rendered by the goods return operation
NEW_POSITION_ADDED = "NewPositionAdded"
POSITION_STATUS_HAS_CHANGED = "PositionStatusHasChanged"
EMPLOYEE_EMAIL_SUBJECT = "complaintEmployeeEmailSubject"
EMPLOYEE_EMAIL_BODY = "complaintEmployeeEmailBody"
CLIENT_EMAIL_SUBJECT = "complaintClientEmailSubject"
CLIENT_EMAIL_BODY = "complaintClientEmailBody"

# Keys whose output must fit on one line
_SINGLE_LINE_KEYS = {EMPLOYEE_EMAIL_SUBJECT, CLIENT_EMAIL_SUBJECT}


class Localizer:
    """Renders localized messages for a reseller.

    Templates are compiled once and cached by the Jinja2 environment.
    Undefined variables raise instead of rendering as blanks.
    """

    def __init__(
        self,
        override_dir: Optional[Path] = None,
        template_dir: str = "message_templates",
    ):
        """Initialize the Jinja2 environment.

        Args:
            override_dir: Optional directory searched before the bundled templates
            template_dir: Directory name within the return_notifier.notifications package
        """
        loaders = []
        if override_dir is not None:
            loaders.append(FileSystemLoader(str(override_dir)))
        loaders.append(PackageLoader("return_notifier.notifications", template_dir))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

        logger.debug(
            f"Initialized Localizer with templates from {template_dir}"
            + (f" (overrides: {override_dir})" if override_dir else "")
        )

    def localize(
        self,
        key: str,
        params: Optional[Mapping[str, object]] = None,
        reseller_id: Optional[int] = None,
    ) -> str:
        """Render the message ``key`` for a reseller.

        Args:
            key: Message key (template name without suffix)
            params: Template variables; None renders with no variables
            reseller_id: Reseller whose overrides take precedence

        Returns:
            Rendered text, stripped; subjects are collapsed to one line

        Raises:
            NotificationTemplateError: If no template exists or rendering fails
        """
        candidates = self._candidate_names(key, reseller_id)

        try:
            template = self.env.select_template(candidates)
            text = template.render(dict(params or {})).strip()
        except TemplateNotFound as e:
            error_msg = f"No message template for '{key}' (tried: {', '.join(candidates)})"
            logger.error(error_msg)
            raise NotificationTemplateError(error_msg) from e
        except TemplateError as e:
            error_msg = f"Rendering message '{key}' failed: {e}"
            logger.error(error_msg, exc_info=True)
            raise NotificationTemplateError(error_msg) from e

        if key in _SINGLE_LINE_KEYS:
            text = " ".join(text.split())

        logger.debug(
            f"Localized message {key}",
            extra={"message_key": key, "template": template.name},
        )
        return text

    @staticmethod
    def _candidate_names(key: str, reseller_id: Optional[int]) -> List[str]:
        names = []
        if reseller_id:
            names.append(f"resellers/{reseller_id}/{key}{TEMPLATE_SUFFIX}")
        names.append(f"{key}{TEMPLATE_SUFFIX}")
        return names
