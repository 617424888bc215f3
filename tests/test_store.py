import pytest
from ministry_scheduler import file_io
from ministry_scheduler.errors import MissingResourceError, StoreError
from ministry_scheduler.file_io import load_csv, load_grid
from ministry_scheduler.models import RosterRow
from ministry_scheduler.store import CsvStore, iter_form_responses

RESPONSES_CSV = """Timestamp,Select your name,How many times are you willing to serve this month?,"Which days are you NOT available? If re-submitting, please re-submit this section also",Comments(optional)
5/20/2025 09:15:00,Anna Bell,1,"06/06 - Corporate Prayer, 06/15",
5/21/2025 18:40:00,,2,,forgot my name
5/22/2025 07:05:00,Ben Carter,3,,Out of town late June
"""


class TestCsvStoreRoster:
    def test_read_roster_parses_cells(self, csv_store):
        roster = csv_store.read_roster()

        assert [row.name for row in roster] == ["Anna Bell", "Ben Carter", "Cara Diaz", "Dan Evans"]
        anna = roster[0]
        assert anna.roles == ("WL", "SINGER")
        assert anna.times_willing_to_serve == "2"
        assert anna.unavailable_dates == ("06/08",)
        assert roster[1].roles == ("BASS",)
        assert roster[1].comments == "Can play keys too"
        assert roster[2].unavailable_all_month
        assert roster[3].roles == ()

    def test_upsert_updates_matching_row_in_place(self, csv_store):
        row = RosterRow(
            name="Ben Carter",
            roles=("BASS", "ACOUSTIC"),
            times_willing_to_serve="1",
            unavailable_dates=("06/01", "06/08"),
            comments="",
        )
        csv_store.upsert_roster_row(row)

        roster = csv_store.read_roster()
        assert len(roster) == 4
        assert roster[1] == row

        records = load_csv(csv_store.roster_path)
        assert records[1]["Unavailable Dates"] == "06/01, 06/08"

    def test_upsert_appends_unknown_name(self, csv_store):
        csv_store.upsert_roster_row(RosterRow(name="New Person", times_willing_to_serve="2"))

        roster = csv_store.read_roster()
        assert roster[-1].name == "New Person"
        assert roster[-1].roles == ()

    def test_repeated_upsert_is_idempotent(self, csv_store):
        row = RosterRow(name="Anna Bell", roles=("WL",), times_willing_to_serve="3")
        csv_store.upsert_roster_row(row)
        first = csv_store.roster_path.read_text()
        csv_store.upsert_roster_row(row)

        assert csv_store.roster_path.read_text() == first

    def test_upsert_keeps_extra_columns(self, tmp_path, config):
        (tmp_path / "Ministry Members.csv").write_text(
            "Name,Roles,Times Willing to Serve,Unavailable Dates,Comments,Phone\n"
            "Anna Bell,WL,2,,,555-0100\n"
        )
        store = CsvStore(tmp_path, config)
        store.upsert_roster_row(RosterRow(name="Anna Bell", roles=("WL",), times_willing_to_serve="4"))

        assert load_csv(store.roster_path)[0]["Phone"] == "555-0100"

    def test_roster_names(self, csv_store):
        assert csv_store.roster_names() == ["Anna Bell", "Ben Carter", "Cara Diaz", "Dan Evans"]

    def test_clear_roster_fields(self, csv_store):
        csv_store.clear_roster_fields(["times_willing_to_serve", "comments"])

        roster = csv_store.read_roster()
        assert all(row.times_willing_to_serve == "" for row in roster)
        assert all(row.comments == "" for row in roster)
        assert roster[0].unavailable_dates == ("06/08",)
        assert roster[0].roles == ("WL", "SINGER")

    def test_missing_roster_raises(self, tmp_path, config):
        with pytest.raises(MissingResourceError):
            CsvStore(tmp_path, config).read_roster()

    def test_unreadable_roster_raises_store_error(self, tmp_path, config):
        (tmp_path / "Ministry Members.csv").mkdir()
        with pytest.raises(StoreError):
            CsvStore(tmp_path, config).read_roster()


class TestCsvStoreMatrix:
    def test_write_matrix_cell_uses_layout(self, csv_store, config):
        csv_store.write_matrix_cell("singer", "06/15", "Anna B.\nBen C.")

        grid = load_grid(csv_store.sheet_path(csv_store.matrix_name))
        assert grid[config.availability_start_row][4] == "Anna B.\nBen C."

    def test_prayer_column_found_by_date_key(self, csv_store, config):
        csv_store.write_matrix_cell("WL", "06/06", "Anna B.")

        grid = load_grid(csv_store.sheet_path(csv_store.matrix_name))
        assert grid[0][1] == "06/06 - Corporate Prayer"
        assert grid[config.availability_start_row - 1][1] == "Anna B."

    def test_unknown_date_column_is_skipped(self, csv_store, config):
        before = csv_store.sheet_path(csv_store.matrix_name).read_text()
        csv_store.write_matrix_cell("WL", "07/04", "Anna B.")

        assert csv_store.sheet_path(csv_store.matrix_name).read_text() == before

    def test_clear_region(self, csv_store, config):
        csv_store.write_matrix_cell("WL", "06/01", "Anna B.")
        csv_store.write_matrix_cell("BASS", "06/08", "Ben C.")
        csv_store.clear_matrix_region(["WL"], ["06/01", "06/08"])

        grid = load_grid(csv_store.sheet_path(csv_store.matrix_name))
        start = config.availability_start_row - 1
        assert grid[start][2] == ""
        assert grid[start + 5][3] == "Ben C."

    def test_write_matrix_cells_saves_once(self, csv_store, config, monkeypatch):
        saved = []
        save_grid = file_io.save_grid

        def _save(grid, path):
            saved.append(path)
            save_grid(grid, path)

        monkeypatch.setattr(file_io, "save_grid", _save)
        csv_store.write_matrix_cells([("WL", "06/01", "Anna B."), ("BASS", "06/08", "Ben C.")])

        assert len(saved) == 1
        grid = load_grid(csv_store.sheet_path(csv_store.matrix_name))
        start = config.availability_start_row - 1
        assert grid[start][2] == "Anna B."
        assert grid[start + 5][3] == "Ben C."

    def test_write_without_matrix_raises(self, data_folder, config):
        store = CsvStore(data_folder, config)
        with pytest.raises(MissingResourceError):
            store.write_matrix_cell("WL", "06/01", "Anna B.")

    def test_delete_matrix(self, csv_store):
        assert csv_store.delete_matrix("June Availability") is True
        assert csv_store.delete_matrix("June Availability") is False

    def test_with_matrix_rebinds_a_copy(self, csv_store):
        july = csv_store.with_matrix("July Availability")

        assert july.matrix_name == "July Availability"
        assert csv_store.matrix_name == "June Availability"
        assert july.data_folder == csv_store.data_folder
        with pytest.raises(MissingResourceError):
            july.write_matrix_cell("WL", "07/06", "Anna B.")


class TestFormResponses:
    def test_reads_first_response_file(self, csv_store):
        (csv_store.data_folder / "Form Responses 1.csv").write_text(RESPONSES_CSV)

        responses = list(csv_store.form_responses())

        assert [r.name for r in responses] == ["Anna Bell", "Ben Carter"]
        anna = responses[0]
        assert anna.times_willing_to_serve == "1"
        assert anna.unavailable_dates == ("06/06 - Corporate Prayer", "06/15")
        assert anna.timestamp.day == 20
        assert responses[1].comments == "Out of town late June"

    def test_responses_are_lazy(self, csv_store):
        (csv_store.data_folder / "Form Responses 1.csv").write_text(RESPONSES_CSV)

        responses = csv_store.form_responses()
        assert next(responses).name == "Anna Bell"
        assert next(responses).name == "Ben Carter"
        with pytest.raises(StopIteration):
            next(responses)

    def test_missing_response_file_raises_on_iteration(self, csv_store):
        with pytest.raises(MissingResourceError):
            list(csv_store.form_responses())

    def test_delete_response_tabs(self, csv_store):
        (csv_store.data_folder / "Form Responses 1.csv").write_text(RESPONSES_CSV)
        (csv_store.data_folder / "Form Responses 2.csv").write_text(RESPONSES_CSV)

        assert csv_store.delete_response_tabs() == ["Form Responses 1", "Form Responses 2"]
        assert csv_store.response_paths() == []

    def test_iter_form_responses_skips_invalid_records(self, config, caplog):
        records = [
            {"Select your name": "", "Timestamp": ""},
            {"Select your name": "Ok Person", "Timestamp": "not a time"},
            {"Select your name": "Cara Diaz"},
        ]
        responses = list(iter_form_responses(records, config))

        assert [r.name for r in responses] == ["Cara Diaz"]
        assert "Skipping form response 1" in caplog.text
        assert "Skipping form response 2" in caplog.text
