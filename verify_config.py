#!/usr/bin/env python3
"""Verify that config.example.yaml (or a given file) passes configuration validation."""

import sys
from pathlib import Path

from return_notifier.config import validate_config_file


def verify_config(config_file: Path) -> bool:
    """Validate a configuration file without requiring SMTP environment variables."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    return validate_config_file(config_file)


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.example.yaml")
    sys.exit(0 if verify_config(path) else 1)
