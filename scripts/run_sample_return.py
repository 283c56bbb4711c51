#!/usr/bin/env python3
"""Sample goods return harness for end-to-end validation.

Seeds a throwaway SQLite reference directory, runs one goods return
notification and prints what would have been sent. SMTP delivery and the SMS
gateway are patched out unless SAMPLE_RETURN_REAL_RUN=1 is set.

Usage:
    # Dry run with the bundled sample data (no email or SMS leaves the machine)
    python scripts/run_sample_return.py

    # Custom request, seed data and database
    python scripts/run_sample_return.py --request docs/sample_request.json \
        --seed docs/sample_reference_data.yaml --database /tmp/sample.db

    # Deliver for real through the configured SMTP server and SMS gateway
    SAMPLE_RETURN_REAL_RUN=1 python scripts/run_sample_return.py --config config.yaml
"""

import argparse
import json
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from return_notifier.config.loader import load_config
from return_notifier.logging.config import configure_logging
from return_notifier.main import build_operation, read_request
from return_notifier.operations.exceptions import OperationError
from return_notifier.persistence.database import close_database, get_session, init_database
from return_notifier.persistence.seed import load_reference_data


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_outgoing(smtp_mock: MagicMock, http_session: MagicMock):
    """Print the emails and SMS jobs captured by the dry-run patches."""
    print_header("Captured Emails")
    for call in smtp_mock.send_message.call_args_list:
        message = call.args[0]
        print(f"To: {message['To']}")
        print(f"Subject: {message['Subject']}")
        print(message.get_content())
        print("-" * 80)

    print_header("Captured SMS Jobs")
    for call in http_session.post.call_args_list:
        print(json.dumps(call.kwargs["json"], indent=2))


def print_result(result):
    print_header("Dispatch Result")
    print(json.dumps(result.to_dict(), indent=2))


def main():
    """Main entry point for the sample return harness."""
    parser = argparse.ArgumentParser(
        description="Run a sample goods return notification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: built-in defaults)",
    )
    parser.add_argument(
        "--request",
        type=Path,
        default=Path("docs/sample_request.json"),
        help="Path to request JSON (default: docs/sample_request.json)",
    )
    parser.add_argument(
        "--seed",
        type=Path,
        default=Path("docs/sample_reference_data.yaml"),
        help="Reference data YAML (default: docs/sample_reference_data.yaml)",
    )
    parser.add_argument(
        "--database",
        type=Path,
        default=Path("data/sample_return.db"),
        help="Path to SQLite database (default: data/sample_return.db)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    load_dotenv()
    # The dry run never connects anywhere, so placeholder SMTP settings are enough
    os.environ.setdefault("SMTP_HOST", "localhost")
    os.environ.setdefault("SMTP_PORT", "25")

    use_real_transports = os.environ.get("SAMPLE_RETURN_REAL_RUN", "0") == "1"

    print_header("Goods Return Notifier - Sample Harness")
    print(f"Request: {args.request}")
    print(f"Reference data: {args.seed}")
    print(f"Database: {args.database}")
    print("Mode: real delivery" if use_real_transports else "Mode: dry run (nothing is sent)")

    try:
        app_config, env_config = load_config(args.config)
        env_config.database_url = f"sqlite:///{args.database.absolute()}"

        configure_logging(
            level=args.log_level,
            format_type=app_config.logging.format,
            environment="validation",
        )

        request = read_request(args.request)
        init_database(env_config.database_url)

        with get_session() as session:
            counts = load_reference_data(args.seed, session)
        print(f"✓ Reference data loaded: {counts}")

        smtp_mock = MagicMock()
        http_session = MagicMock()
        http_session.headers = {}
        http_session.post.return_value = MagicMock(status_code=200, **{"json.return_value": {"sent": True}})

        try:
            with get_session() as session:
                operation = build_operation(request, session, app_config, env_config)

                if use_real_transports:
                    result = operation.do_operation()
                else:
                    sms_manager = operation.dispatcher.sms_manager
                    sms_manager.gateway_url = sms_manager.gateway_url or "https://sms.invalid/dry-run"
                    smtp_client = operation.dispatcher.messages_client.smtp_client
                    with patch.object(smtp_client, "smtp_factory", return_value=smtp_mock), patch.object(
                        smtp_client, "smtp_ssl_factory", return_value=smtp_mock
                    ), patch.object(sms_manager, "_session", http_session):
                        result = operation.do_operation()
        except OperationError as e:
            print_header("Operation Rejected")
            print(json.dumps(e.to_dict(), indent=2))
            return 2
        finally:
            close_database()

        if not use_real_transports:
            print_outgoing(smtp_mock, http_session)
        print_result(result)

        print("\n" + "-" * 80)
        print(f"To clean up: rm {args.database.absolute()}")
        print("-" * 80 + "\n")
        return 0

    except Exception as e:
        print(f"\n❌ Fatal error: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
