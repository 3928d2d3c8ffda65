"""Tests for config and logging."""

import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Iterator

import pytest

from amort_gen.config import AmortGenConfig, EngineConfig, OutputConfig
from amort_gen.exceptions import ConfigurationError
from amort_gen.logging import JsonFormatter, LoanContextFormatter, loan_context, setup_logging

ENV_VARS = [
    "AMORT_INSURANCE_RATE",
    "AMORT_VAT_RATE",
    "AMORT_ROUNDING_UNIT",
    "AMORT_VALIDATION_TOLERANCE",
    "OUTPUT_DIR",
    "PRETTY_JSON",
    "SEED",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable read by AmortGenConfig.from_env."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_default_values(self) -> None:
        config = EngineConfig()

        assert config.default_insurance_rate == Decimal("0.10")
        assert config.default_vat_rate == Decimal("0.19")
        assert config.rounding_unit == 100
        assert config.validation_tolerance == 100
        assert config.weeks_per_month == Decimal("4.33")
        assert config.negative_balance_tolerance == 1

    def test_custom_values(self) -> None:
        config = EngineConfig(default_insurance_rate=Decimal("0.05"), rounding_unit=1000)

        assert config.default_insurance_rate == Decimal("0.05")
        assert config.rounding_unit == 1000


class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_default_values(self) -> None:
        config = OutputConfig()

        assert config.output_dir == Path("output")
        assert config.pretty_json is False


class TestAmortGenConfig:
    """Tests for AmortGenConfig."""

    def test_default_values(self) -> None:
        config = AmortGenConfig()

        assert isinstance(config.engine, EngineConfig)
        assert isinstance(config.output, OutputConfig)
        assert config.seed is None
        assert config.log_level == "INFO"
        assert config.log_format == "standard"

    def test_from_env_default(self, clean_env: pytest.MonkeyPatch) -> None:
        config = AmortGenConfig.from_env()

        assert config.engine == EngineConfig()
        assert config.output.output_dir == Path("output")
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_custom(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("AMORT_INSURANCE_RATE", "0.08")
        clean_env.setenv("AMORT_VAT_RATE", "0.16")
        clean_env.setenv("AMORT_ROUNDING_UNIT", "50")
        clean_env.setenv("AMORT_VALIDATION_TOLERANCE", "10")
        clean_env.setenv("OUTPUT_DIR", "/data/schedules")
        clean_env.setenv("PRETTY_JSON", "true")
        clean_env.setenv("SEED", "12345")
        clean_env.setenv("LOG_LEVEL", "DEBUG")
        clean_env.setenv("LOG_FORMAT", "json")

        config = AmortGenConfig.from_env()

        assert config.engine.default_insurance_rate == Decimal("0.08")
        assert config.engine.default_vat_rate == Decimal("0.16")
        assert config.engine.rounding_unit == 50
        assert config.engine.validation_tolerance == 10
        assert config.output.output_dir == Path("/data/schedules")
        assert config.output.pretty_json is True
        assert config.seed == 12345
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_from_env_bad_decimal(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("AMORT_INSURANCE_RATE", "ten percent")

        with pytest.raises(ConfigurationError, match="AMORT_INSURANCE_RATE"):
            AmortGenConfig.from_env()

    def test_from_env_bad_integer(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("SEED", "abc")

        with pytest.raises(ConfigurationError, match="SEED"):
            AmortGenConfig.from_env()

    @pytest.mark.parametrize("unit", ["0", "-100"])
    def test_from_env_non_positive_rounding_unit(
        self, clean_env: pytest.MonkeyPatch, unit: str
    ) -> None:
        clean_env.setenv("AMORT_ROUNDING_UNIT", unit)

        with pytest.raises(ConfigurationError, match="AMORT_ROUNDING_UNIT"):
            AmortGenConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        setup_logging()

        assert logging.getLogger("amort_gen").level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        setup_logging(format_type="json")

        root = logging.getLogger()
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(root.handlers) == 1

    def test_faker_logger_quieted(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        defaults = dict(
            name="amort_gen.engine.schedule",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Loan %s capital mismatch",
            args=("loan-001",),
            exc_info=None,
        )
        defaults.update(kwargs)
        return logging.LogRecord(**defaults)

    def test_format_basic(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "WARNING"
        assert data["logger"] == "amort_gen.engine.schedule"
        assert data["message"] == "Loan loan-001 capital mismatch"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(self._record(exc_info=exc_info)))

        assert "ValueError" in data["exception"]

    def test_format_with_loan_context(self) -> None:
        record = self._record()
        record.__dict__.update(loan_context("loan-001", 7))

        data = json.loads(JsonFormatter().format(record))

        assert data["loan_id"] == "loan-001"
        assert data["installment_number"] == 7

    def test_format_without_loan_context(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert "loan_id" not in data
        assert "installment_number" not in data

    def test_non_json_values_stringified(self) -> None:
        record = self._record()
        record.__dict__.update(loan_context(Decimal("42")))

        data = json.loads(JsonFormatter().format(record))

        assert data["loan_id"] == "42"


class TestLoanContextFormatter:
    """Tests for the standard formatter."""

    def _record(self) -> logging.LogRecord:
        return logging.LogRecord(
            name="amort_gen.engine.schedule",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="Schedule generation aborted",
            args=(),
            exc_info=None,
        )

    def test_appends_loan_and_installment(self) -> None:
        record = self._record()
        record.__dict__.update(loan_context("loan-001", 3))

        line = LoanContextFormatter("%(message)s").format(record)

        assert line == "Schedule generation aborted [loan=loan-001 installment=3]"

    def test_plain_line_without_context(self) -> None:
        line = LoanContextFormatter("%(message)s").format(self._record())

        assert line == "Schedule generation aborted"


class TestLoanContext:
    """Tests for loan_context."""

    def test_loan_only(self) -> None:
        assert loan_context("loan-001") == {"loan_id": "loan-001"}

    def test_with_installment(self) -> None:
        assert loan_context(5, 2) == {"loan_id": 5, "installment_number": 2}

    def test_accepted_as_logging_extra(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="amort_gen"):
            logging.getLogger("amort_gen.test").info("hello", extra=loan_context("x", 1))

        assert caplog.records[0].loan_id == "x"
        assert caplog.records[0].installment_number == 1


class TestPackageInit:
    """Tests for amort_gen __init__.py."""

    def test_version_exported(self) -> None:
        from amort_gen import __version__

        assert isinstance(__version__, str)

    def test_engine_exported(self) -> None:
        import amort_gen

        assert callable(amort_gen.generate_schedule)
        assert callable(amort_gen.validate_schedule)
        assert callable(amort_gen.summarize_schedule)
