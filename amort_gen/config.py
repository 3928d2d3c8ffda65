"""Configuration management for amort-gen."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path

from amort_gen.exceptions import ConfigurationError


@dataclass
class EngineConfig:
    """Constants that govern schedule generation.

    The defaults are the production values; changing them alters every
    generated schedule, so they are normally left alone.
    """

    default_insurance_rate: Decimal = Decimal("0.10")
    default_vat_rate: Decimal = Decimal("0.19")
    rounding_unit: int = 100
    validation_tolerance: int = 100
    weeks_per_month: Decimal = Decimal("4.33")
    negative_balance_tolerance: int = 1


@dataclass
class OutputConfig:
    """Output configuration."""

    output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class AmortGenConfig:
    """Main configuration for amort-gen."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "AmortGenConfig":
        """Create config from environment variables."""
        import os

        rounding_unit = _int_env("AMORT_ROUNDING_UNIT", "100")
        if rounding_unit <= 0:
            raise ConfigurationError(
                f"AMORT_ROUNDING_UNIT must be a positive integer, got {rounding_unit}"
            )

        engine = EngineConfig(
            default_insurance_rate=_decimal_env("AMORT_INSURANCE_RATE", "0.10"),
            default_vat_rate=_decimal_env("AMORT_VAT_RATE", "0.19"),
            rounding_unit=rounding_unit,
            validation_tolerance=_int_env("AMORT_VALIDATION_TOLERANCE", "100"),
        )

        output = OutputConfig(
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            engine=engine,
            output=output,
            seed=_int_env("SEED", None),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _decimal_env(name: str, default: str) -> Decimal:
    import os

    raw = os.getenv(name, default)
    try:
        return Decimal(raw)
    except InvalidOperation as exc:
        raise ConfigurationError(f"{name} must be a decimal number, got {raw!r}") from exc


def _int_env(name: str, default: str | None) -> int | None:
    import os

    raw = os.getenv(name) or default
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
