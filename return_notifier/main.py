"""Command-line entry point for the goods return notifier."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from return_notifier.config.environment import EnvironmentConfig
from return_notifier.config.exceptions import ConfigurationError
from return_notifier.config.loader import load_config
from return_notifier.config.models import AppConfig
from return_notifier.logging import get_logger
from return_notifier.logging.config import configure_logging
from return_notifier.notifications.localization import Localizer
from return_notifier.notifications.messages_client import MessagesClient
from return_notifier.notifications.sms_client import NotificationManager
from return_notifier.operations.dispatcher import NotificationDispatcher
from return_notifier.operations.exceptions import OperationError
from return_notifier.operations.return_operation import TsReturnOperation
from return_notifier.persistence.database import close_database, get_session, init_database
from return_notifier.persistence.directory import SqlReferenceDirectory
from return_notifier.persistence.seed import load_reference_data

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_OPERATION_ERROR = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > environment > config file > INFO.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        env_config.log_level = env_config.log_level.upper()
    elif app_config.logging and app_config.logging.level:
        env_config.log_level = app_config.logging.level
    else:
        env_config.log_level = "INFO"

    return app_config, env_config


def read_request(request_path: Path) -> Dict[str, Any]:
    """
    Read a request envelope from a JSON file.

    A bare payload (no top-level "data" key) is wrapped as {"data": payload}.

    Raises:
        ConfigurationError: If the file is missing or not a JSON object
    """
    if not request_path.exists():
        raise ConfigurationError(
            f"Request file not found: {request_path}",
            suggestions=["Pass the path of a JSON request with --request"],
        )

    try:
        with open(request_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in request file: {request_path}",
            errors=[str(e)],
        )

    if not isinstance(payload, dict):
        raise ConfigurationError(
            f"Request file must contain a JSON object, got {type(payload).__name__}"
        )

    if "data" not in payload:
        payload = {"data": payload}
    return payload


def build_operation(
    request: Dict[str, Any],
    session: Session,
    app_config: AppConfig,
    env_config: EnvironmentConfig,
) -> TsReturnOperation:
    """Wire the operation to the SQL directory and the real transports."""
    localizer = Localizer(override_dir=app_config.localization.override_dir)

    messages_client = MessagesClient(
        env_config, use_tls=app_config.notifications.email.use_tls
    )
    sms_manager = NotificationManager(
        env_config.sms_gateway_url,
        token=env_config.sms_gateway_token,
        timeout=app_config.sms.request_timeout,
        enabled=app_config.sms.enabled,
    )
    dispatcher = NotificationDispatcher(
        localizer,
        messages_client,
        sms_manager,
        permit_event=app_config.notifications.employee_permit_event,
        event_kind=app_config.notifications.event_kind,
    )

    return TsReturnOperation(
        request,
        directory=SqlReferenceDirectory(session),
        localizer=localizer,
        dispatcher=dispatcher,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="return-notifier",
        description="Goods return notifier - notify employees and clients about return status changes",
    )
    parser.add_argument(
        "--request",
        type=Path,
        required=True,
        help="Path to a JSON request ({\"data\": {...}} or the bare payload)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--seed",
        type=Path,
        default=None,
        help="YAML reference data to load into the database before running",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one goods return notification.

    Returns:
        0 on success, 1 on configuration or runtime failure, 2 when the
        operation rejects the request.
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        environment = os.environ.get("ENVIRONMENT", "local")
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=environment,
        )

        logger.info(
            "Goods return notifier starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "request_path": str(args.request),
                "log_level": env_config.log_level,
            },
        )

        request = read_request(args.request)
        init_database(env_config.database_url)

        try:
            if args.seed:
                with get_session() as session:
                    load_reference_data(args.seed, session)

            with get_session() as session:
                operation = build_operation(request, session, app_config, env_config)
                result = operation.do_operation()
        finally:
            close_database()

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return EXIT_FAILURE
    except OperationError as e:
        print(json.dumps(e.to_dict()))
        return EXIT_OPERATION_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error while running the notifier",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return EXIT_FAILURE

    print(json.dumps(result.to_dict()))
    logger.info(
        "Goods return notifier finished",
        extra={
            "event": "service.stopping",
            "uptime_seconds": round(time.time() - start_time, 2),
        },
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
