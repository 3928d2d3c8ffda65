"""Enumeration types for loan schedule entities."""

from enum import Enum


class Periodicity(str, Enum):
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: "Periodicity | str | None") -> "Periodicity":
        """Map a periodicity label onto a member.

        Accepts members, English names and the legacy Spanish labels
        (SEMANAL, QUINCENAL, DECADAL, MENSUAL) in any case. Unknown labels
        map to ``UNKNOWN`` instead of raising.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNKNOWN
        return _PERIODICITY_ALIASES.get(str(value).strip().upper(), cls.UNKNOWN)


_PERIODICITY_ALIASES = {
    "WEEKLY": Periodicity.WEEKLY,
    "SEMANAL": Periodicity.WEEKLY,
    "BIWEEKLY": Periodicity.BIWEEKLY,
    "QUINCENAL": Periodicity.BIWEEKLY,
    "DECADAL": Periodicity.BIWEEKLY,
    "MONTHLY": Periodicity.MONTHLY,
    "MENSUAL": Periodicity.MONTHLY,
}


class InstallmentStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"
