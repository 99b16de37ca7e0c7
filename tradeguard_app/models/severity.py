"""Ordered severity levels for validation outcomes."""

from enum import Enum


class Severity(str, Enum):
    """Validation severity, ordered OK < WARNING < ERROR < BLOCKED."""
    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"
    BLOCKED = "BLOCKED"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def blocks_execution(self) -> bool:
        return self is Severity.BLOCKED

    @classmethod
    def max(cls, a: "Severity", b: "Severity") -> "Severity":
        """Return the more severe of two levels."""
        return a if a.rank >= b.rank else b

    def escalate(self, other: "Severity") -> "Severity":
        """Combine with another level without ever lowering severity."""
        return Severity.max(self, other)

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {
    Severity.OK: 0,
    Severity.WARNING: 1,
    Severity.ERROR: 2,
    Severity.BLOCKED: 3,
}
