import pytest
from ministry_scheduler.config import SchedulerConfig
from ministry_scheduler.layout import build_matrix_grid
from ministry_scheduler.models import RosterRow
from ministry_scheduler.service_dates import service_dates
from ministry_scheduler.store import CsvStore

ROSTER_HEADER = "Name,Roles,Times Willing to Serve,Unavailable Dates,Comments"


@pytest.fixture
def config():
    return SchedulerConfig()


@pytest.fixture
def roster_row_factory():
    """Factory for roster rows that are available all month by default."""

    def _create(name="Test Member", roles=("WL",), **kwargs):
        defaults = {
            "times_willing_to_serve": "2",
            "unavailable_dates": (),
            "comments": "",
        }
        defaults.update(kwargs)
        return RosterRow(name=name, roles=tuple(roles), **defaults)

    return _create


@pytest.fixture
def june_dates():
    return service_dates(2025, 6)


@pytest.fixture
def data_folder(tmp_path, config):
    """Data folder with a small roster and an empty June 2025 availability sheet."""
    roster = "\n".join(
        [
            ROSTER_HEADER,
            'Anna Bell,"WL, Singer",2,06/08,',
            "Ben Carter,bass,3,,Can play keys too",
            "Cara Diaz,Drums,,,",
            "Dan Evans,,4,,No roles yet",
        ]
    )
    (tmp_path / f"{config.roster_sheet_name}.csv").write_text(roster + "\n")

    grid = build_matrix_grid(service_dates(2025, 6), config)
    CsvStore(tmp_path, config).create_matrix(config.matrix_name(2025, 6), grid)
    return tmp_path


@pytest.fixture
def csv_store(data_folder, config):
    return CsvStore(data_folder, config, config.matrix_name(2025, 6))
