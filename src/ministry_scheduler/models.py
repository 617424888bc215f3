import datetime
from dataclasses import dataclass, field
from types import MappingProxyType
from ministry_scheduler.constants import DATE_KEY_FORMAT


@dataclass(frozen=True)
class RosterRow:
    """One member's current profile in the roster."""

    name: str
    roles: tuple[str, ...] = ()
    times_willing_to_serve: str = ""
    unavailable_dates: tuple[str, ...] = ()
    comments: str = ""

    @property
    def unavailable_all_month(self) -> bool:
        # a blank "times willing" cell means no availability this month
        return self.times_willing_to_serve == ""

    def to_csv(self, columns: dict[str, str]) -> dict[str, str]:
        """Render the row as a dict keyed by roster column header."""
        return {
            columns["name"]: self.name,
            columns["roles"]: ", ".join(self.roles),
            columns["times_willing_to_serve"]: self.times_willing_to_serve,
            columns["unavailable_dates"]: ", ".join(self.unavailable_dates),
            columns["comments"]: self.comments,
        }


@dataclass(frozen=True)
class ServiceDate:
    """A date a role must be staffed, with an optional display label."""

    date: datetime.date
    label: str | None = None

    @property
    def key(self) -> str:
        return self.date.strftime(DATE_KEY_FORMAT)

    @property
    def header(self) -> str:
        if self.label:
            return f"{self.key} - {self.label}"
        return self.key


@dataclass(frozen=True)
class FormResponse:
    """A single availability form submission."""

    name: str
    times_willing_to_serve: str = ""
    unavailable_dates: tuple[str, ...] = ()
    comments: str = ""
    timestamp: datetime.datetime | None = None


@dataclass(frozen=True)
class AvailabilityMatrix:
    """Read-only role -> date key -> names mapping."""

    cells: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, data: dict[str, dict[str, list[str]]]) -> "AvailabilityMatrix":
        frozen = {
            role: MappingProxyType({date: tuple(names) for date, names in dates.items()})
            for role, dates in data.items()
        }
        return cls(cells=MappingProxyType(frozen))

    def roles(self) -> list[str]:
        return list(self.cells.keys())

    def names(self, role: str, date_key: str) -> tuple[str, ...]:
        return self.cells.get(role.upper(), {}).get(date_key, ())

    def __contains__(self, role: str) -> bool:
        return role.upper() in self.cells
