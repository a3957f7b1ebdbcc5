"""Severity and health status enums."""

from enum import Enum


class Severity(Enum):
    """Issue severity. Lower value = more urgent."""

    CRITICAL = 1
    WARNING = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class Status(Enum):
    """Overall vehicle health categories. Lower value = more urgent."""

    CRITICAL = 1
    WARNING = 2
    OK = 3
    NO_DATA = 4  # Neither inspections nor maintenance on record

    @property
    def label(self) -> str:
        return self.name.lower()
