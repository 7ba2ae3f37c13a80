"""Unit tests for structured logging configuration."""

import os
import re
import subprocess
import sys
from decimal import Decimal
from pathlib import Path

import pytest
import structlog

from src.funkybit_sdk.utils.logger import add_short_timestamp, configure_logging, get_logger

REPO_ROOT = Path(__file__).resolve().parents[3]


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


class TestAddShortTimestamp:
    """Test the timestamp processor."""

    def test_adds_short_timestamp(self):
        """Should add an HH:MM:SS.ss timestamp."""
        event_dict = add_short_timestamp(None, "info", {"event": "Quote computed"})

        assert re.fullmatch(r"\d{2}:\d{2}:\d{2}\.\d{2}", event_dict["timestamp"])
        assert event_dict["event"] == "Quote computed"


class TestConfigureLogging:
    """Test structlog configuration."""

    def test_json_logs_render_decimals(self):
        """Should render JSON logs with non-JSON values as strings."""
        configure_logging(log_level="INFO", json_logs=True)
        processors = structlog.get_config()["processors"]

        event_dict = {"event": "Quote computed", "price": Decimal("1.5")}
        rendered = processors[-1](None, "info", event_dict)

        assert '"price": "1.5"' in rendered

    def test_console_logs(self):
        """Should use the console renderer by default."""
        configure_logging()

        assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)

    def test_get_logger(self):
        """Should return a logger exposing the standard level methods."""
        logger = get_logger("funkybit_sdk.tests")

        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")


class TestImportSideEffects:
    """Importing the pricing engine must not touch ambient configuration."""

    @pytest.mark.parametrize(
        "module",
        [
            "src.funkybit_sdk.utils.logger",
            "src.funkybit_sdk.pricing.clob",
            "src.funkybit_sdk.pricing.amm",
            "src.funkybit_sdk.pricing.quotes",
        ],
    )
    def test_import_leaves_environment_untouched(self, tmp_path, module):
        """Should neither load a .env file nor import settings."""
        (tmp_path / ".env").write_text("FUNKYBIT_IMPORT_MARKER=1\n", encoding="utf-8")
        script = (
            "import importlib, os, sys\n"
            f"importlib.import_module({module!r})\n"
            "print(os.environ.get('FUNKYBIT_IMPORT_MARKER'))\n"
            "print('src.funkybit_sdk.config.settings' in sys.modules)\n"
        )
        env = {k: v for k, v in os.environ.items() if k != "FUNKYBIT_IMPORT_MARKER"}
        env["PYTHONPATH"] = str(REPO_ROOT)

        result = subprocess.run(
            [sys.executable, "-c", script],
            cwd=tmp_path,
            env=env,
            capture_output=True,
            text=True,
            check=True,
        )

        assert result.stdout.split() == ["None", "False"]
