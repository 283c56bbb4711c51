"""Unit tests for the main entry point.

Tests the main() function including:
- CLI argument parsing
- Configuration loading with log level priority (CLI > env > config)
- Request file reading
- Exit code handling for success, operation errors and configuration errors
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from return_notifier.config.environment import EnvironmentConfig
from return_notifier.config.exceptions import ConfigurationError
from return_notifier.config.models import AppConfig, LoggingConfig
from return_notifier.main import (
    EXIT_FAILURE,
    EXIT_OK,
    EXIT_OPERATION_ERROR,
    build_operation,
    load_runtime_config,
    main,
    read_request,
)
from return_notifier.notifications.sms_client import NotificationManager
from return_notifier.operations.return_operation import TsReturnOperation

from tests.helpers import RecordingMessagesClient, StubSmsManager

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_env_config(log_level=None):
    return EnvironmentConfig(smtp_host="smtp.example.com", smtp_port=587, log_level=log_level)


class TestLoadRuntimeConfig:
    """Test suite for load_runtime_config helper."""

    @pytest.mark.parametrize(
        "cli_level, env_level, config_level, expected",
        [
            ("ERROR", "DEBUG", "WARNING", "ERROR"),
            (None, "debug", "WARNING", "DEBUG"),
            (None, None, "WARNING", "WARNING"),
        ],
    )
    def test_log_level_priority(self, cli_level, env_level, config_level, expected):
        app_config = AppConfig(logging=LoggingConfig(level=config_level))

        with patch("return_notifier.main.load_config") as mock_load:
            mock_load.return_value = (app_config, make_env_config(env_level))
            _, env_config = load_runtime_config(None, cli_level)

        assert env_config.log_level == expected

    def test_configuration_error_propagates(self):
        with patch("return_notifier.main.load_config", side_effect=ConfigurationError("bad")):
            with pytest.raises(ConfigurationError):
                load_runtime_config(None, None)


class TestReadRequest:
    def test_envelope_is_kept(self, tmp_path, change_payload):
        path = tmp_path / "request.json"
        path.write_text(json.dumps({"data": change_payload}))

        assert read_request(path) == {"data": change_payload}

    def test_bare_payload_is_wrapped(self, tmp_path, change_payload):
        path = tmp_path / "request.json"
        path.write_text(json.dumps(change_payload))

        assert read_request(path) == {"data": change_payload}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            read_request(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "request.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            read_request(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "request.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError, match="JSON object"):
            read_request(path)


def test_build_operation_wires_configuration(tmp_path):
    app_config = AppConfig.model_validate(
        {
            "notifications": {"employee_permit_event": "customEvent"},
            "sms": {"enabled": False, "request_timeout": 3},
        }
    )
    env_config = EnvironmentConfig(
        smtp_host="smtp.example.com",
        smtp_port=587,
        sms_gateway_url="https://sms.example.com/jobs",
    )

    operation = build_operation({"data": {}}, session=None, app_config=app_config, env_config=env_config)

    assert isinstance(operation, TsReturnOperation)
    assert operation.dispatcher.permit_event == "customEvent"
    sms_manager = operation.dispatcher.sms_manager
    assert isinstance(sms_manager, NotificationManager)
    assert sms_manager.enabled is False
    assert sms_manager.timeout == 3
    assert sms_manager.gateway_url == "https://sms.example.com/jobs"


class TestMain:
    """Test suite for the CLI entry point."""

    @pytest.fixture
    def cli_env(self, mock_env_vars, monkeypatch, tmp_path):
        """Point the CLI at a temporary database and keep the root logger untouched."""
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'reference.db'}")
        monkeypatch.chdir(tmp_path)
        with patch("return_notifier.main.configure_logging"):
            yield tmp_path

    @pytest.fixture
    def fake_transports(self):
        messages_client = RecordingMessagesClient()
        sms_manager = StubSmsManager(outcome=(False, "Invalid phone"))
        with patch("return_notifier.main.MessagesClient", return_value=messages_client), patch(
            "return_notifier.main.NotificationManager", return_value=sms_manager
        ):
            yield messages_client, sms_manager

    def write_request(self, directory, payload):
        path = directory / "request.json"
        path.write_text(json.dumps({"data": payload}))
        return path

    def test_successful_run_prints_result(self, cli_env, fake_transports, change_payload, capsys):
        request_path = self.write_request(cli_env, change_payload)

        exit_code = main(
            ["--request", str(request_path), "--seed", str(FIXTURES_DIR / "reference_data.yaml")]
        )

        assert exit_code == EXIT_OK
        assert json.loads(capsys.readouterr().out) == {
            "employeeEmailSent": True,
            "clientEmailSent": True,
            "clientSms": {"sent": False, "errorMessage": "Invalid phone"},
        }
        messages_client, sms_manager = fake_transports
        assert len(messages_client.calls) == 3
        assert len(sms_manager.calls) == 1

    def test_operation_error_exit_code(self, cli_env, fake_transports, change_payload, capsys):
        change_payload["expertId"] = 99
        request_path = self.write_request(cli_env, change_payload)

        exit_code = main(
            ["--request", str(request_path), "--seed", str(FIXTURES_DIR / "reference_data.yaml")]
        )

        assert exit_code == EXIT_OPERATION_ERROR
        assert json.loads(capsys.readouterr().out) == {
            "error": "EntityNotFound",
            "message": "Expert not found!",
            "statusCode": 400,
        }
        assert fake_transports[0].calls == []

    def test_missing_environment_exit_code(self, cli_env, monkeypatch, change_payload, capsys):
        monkeypatch.delenv("SMTP_HOST")
        request_path = self.write_request(cli_env, change_payload)

        exit_code = main(["--request", str(request_path)])

        assert exit_code == EXIT_FAILURE
        assert "SMTP_HOST" in capsys.readouterr().err

    def test_missing_request_file(self, cli_env, capsys):
        exit_code = main(["--request", str(cli_env / "missing.json")])

        assert exit_code == EXIT_FAILURE
        assert "Request file not found" in capsys.readouterr().err

    def test_invalid_seed_is_runtime_failure(self, cli_env, fake_transports, change_payload, capsys):
        request_path = self.write_request(cli_env, change_payload)

        exit_code = main(
            [
                "--request",
                str(request_path),
                "--seed",
                str(FIXTURES_DIR / "invalid_reference_data.yaml"),
            ]
        )

        assert exit_code == EXIT_FAILURE
        assert "Fatal error" in capsys.readouterr().err

    def test_request_is_required(self):
        with pytest.raises(SystemExit):
            main([])
