import threading

from climate_outlook.data.loader import LoadCancelled
from climate_outlook.data.schemas import Coordinates, SubsetQuery, Timeframe, describe_variable
from climate_outlook.data.store import DataStore

from conftest import STATION_A


class FlakyStream:
    """Serves the header and a few rows, then fails like a dropped connection."""

    def __init__(self, text: str, rows_before_failure: int = 2) -> None:
        lines = text.splitlines(keepends=True)
        self._header = lines[0]
        self._partial = "".join(lines[1:1 + rows_before_failure])
        self._served = False

    def readline(self) -> str:
        header, self._header = self._header, ""
        return header

    def read(self, size: int = -1) -> str:
        if self._served:
            raise OSError("connection reset by peer")
        self._served = True
        return self._partial


JULY_QUERY = SubsetQuery(timeframe=Timeframe.MONTH, month=7)


def test_new_store_is_empty_and_not_loaded():
    store = DataStore()
    assert not store.is_loaded
    assert store.row_count() == 0
    assert store.list_variables() == []
    assert store.query(JULY_QUERY, ["temperature"])["temperature"].samples == 0


def test_load_replaces_dataset(loaded_store):
    assert loaded_store.is_loaded
    assert loaded_store.row_count() == 120
    assert loaded_store.year_range() == (2005, 2019)
    assert loaded_store.last_error is None


def test_list_variables_uses_display_tables(loaded_store):
    assert loaded_store.list_variables() == [
        {"key": "humidity", "name": "Humidity", "unit": "%"},
        {"key": "precipitation", "name": "Precipitation", "unit": "mm"},
        {"key": "temperature", "name": "Temperature", "unit": "°C"},
    ]


def test_describe_variable_fallback():
    assert describe_variable("ozone") == {"key": "ozone", "name": "Ozone", "unit": "units"}
    assert describe_variable("wind") == {"key": "wind", "name": "Wind Speed", "unit": "km/h"}


def test_failed_load_keeps_previous_dataset(loaded_store, tmp_path):
    before = loaded_store.snapshot()
    assert loaded_store.load(tmp_path / "missing.csv") is False
    assert isinstance(loaded_store.last_error, FileNotFoundError)
    assert loaded_store.snapshot() is before
    assert loaded_store.row_count() == 120


def test_mid_stream_failure_leaves_query_results_unchanged(loaded_store, climate_csv):
    query = SubsetQuery(timeframe=Timeframe.MONTH, month=7, coordinates=Coordinates(*STATION_A))
    thresholds = {"temperature": {"high": 30.5}}
    before = {k: v.to_dict() for k, v in loaded_store.query(query, ["temperature"], thresholds).items()}

    stream = FlakyStream(climate_csv.read_text(encoding="utf-8"))
    assert loaded_store.load(stream) is False
    assert loaded_store.last_error is not None

    after = {k: v.to_dict() for k, v in loaded_store.query(query, ["temperature"], thresholds).items()}
    assert after == before
    assert loaded_store.row_count() == 120


def test_cancelled_load_keeps_previous_dataset(loaded_store, write_csv):
    cancel = threading.Event()
    cancel.set()
    other = write_csv("date,snow\n2024-01-01,5\n", name="other.csv")

    assert loaded_store.load(other, cancel=cancel) is False
    assert isinstance(loaded_store.last_error, LoadCancelled)
    assert {v["key"] for v in loaded_store.list_variables()} == {"humidity", "precipitation", "temperature"}


def test_held_snapshot_survives_reload(loaded_store, write_csv):
    snapshot = loaded_store.snapshot()
    assert loaded_store.load(write_csv("date,snow\n2024-01-01,5\n", name="other.csv"))

    assert loaded_store.row_count() == 1
    assert [v["key"] for v in loaded_store.list_variables()] == ["snow"]
    # the old snapshot is still complete
    assert len(snapshot) == 120
    assert "temperature" in snapshot.variables


def test_store_query_and_timeline(loaded_store):
    import datetime as dt

    results = loaded_store.query(JULY_QUERY, ["temperature", "ozone"])
    assert results["temperature"].samples == 60
    assert results["ozone"].samples == 0

    points = loaded_store.timeline_query(
        SubsetQuery(coordinates=Coordinates(*STATION_A)),
        ["temperature"],
        start_date=dt.date(2026, 6, 28),
        months=1,
        step_days=7,
    )
    assert [p.date for p in points] == [dt.date(2026, 6, 28) + dt.timedelta(days=d) for d in (0, 7, 14, 21, 28)]
    # only the Jul 1 observations fall within a week of Jul 5
    assert points[1].data["temperature"].samples == 15
