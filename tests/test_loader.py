import io
import threading

import pandas as pd
import pytest

from climate_outlook.data.loader import LoadCancelled, detect_delimiter, load_dataset


SEMICOLON_CSV = (
    "Date;Latitude;Longitude;Temperature(°C);Humidity(%);Snow\n"
    "2020-01-01;10,5;20,25;25,5;60;\n"
    "2020-01-02;10,5;20,25;;61;\n"
    "not-a-date;10,5;20,25;30;62;\n"
    "2020-01-03;10,5;20,25;27;;\n"
)


def test_detect_delimiter():
    assert detect_delimiter("date;temp") == ";"
    assert detect_delimiter("date,temp") == ","
    assert detect_delimiter("date") == ","


def test_load_semicolon_file_with_decimal_commas(write_csv):
    dataset = load_dataset(write_csv(SEMICOLON_CSV))

    assert len(dataset) == 3
    assert dataset.variables == frozenset({"temperature", "humidity"})
    records = dataset.records
    assert records["lat"].tolist() == [10.5, 10.5, 10.5]
    assert records["lon"].tolist() == [20.25, 20.25, 20.25]
    assert records["temperature"].iloc[0] == 25.5
    assert pd.isna(records["temperature"].iloc[1])
    assert records["temperature"].iloc[2] == 27.0
    assert records["date"].notna().all()


def test_load_preserves_ingestion_order(write_csv):
    text = "date,temp\n2021-05-01,3\n2019-01-01,1\n2020-03-01,2\n"
    dataset = load_dataset(write_csv(text))
    assert dataset.records["temperature"].tolist() == [3.0, 1.0, 2.0]


def test_load_text_stream():
    stream = io.StringIO("validdate,lat,lng,rain\n2020-06-01T00:00:00Z,1,2,0.4\n")
    dataset = load_dataset(stream)
    assert len(dataset) == 1
    assert dataset.records["precipitation"].tolist() == [0.4]
    assert dataset.records["date"].iloc[0] == pd.Timestamp("2020-06-01")
    assert dataset.source == "<stream>"


def test_load_binary_stream_with_bom():
    payload = "\ufeffdate;wind_speed\n2020-06-01;12,5\n".encode("utf-8")
    dataset = load_dataset(io.BytesIO(payload))
    assert dataset.variables == frozenset({"wind"})
    assert dataset.records["wind"].tolist() == [12.5]


def test_chunked_load_matches_single_pass(write_csv):
    lines = ["date,temp"] + [f"2020-01-{d:02d},{d}" for d in range(1, 29)]
    path = write_csv("\n".join(lines) + "\n")

    whole = load_dataset(path)
    chunked = load_dataset(path, chunk_rows=5)
    pd.testing.assert_frame_equal(whole.records, chunked.records)
    assert whole.variables == chunked.variables


def test_header_only_source_is_empty_dataset(write_csv):
    dataset = load_dataset(write_csv("date,temp\n"))
    assert len(dataset) == 0
    assert dataset.variables == frozenset()


def test_empty_source_raises(write_csv):
    with pytest.raises(pd.errors.EmptyDataError):
        load_dataset(write_csv(""))


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dataset(tmp_path / "missing.csv")


def test_cancelled_load_raises(write_csv):
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(LoadCancelled):
        load_dataset(write_csv(SEMICOLON_CSV), cancel=cancel)


class TrickleStream:
    """Hands out one row per read, like a slow network source."""

    def __init__(self, rows: int, cancel: threading.Event, cancel_after: int) -> None:
        self._lines = ["date,temp\n"] + [f"2020-01-01,{i}\n" for i in range(rows)]
        self._cancel = cancel
        self._cancel_after = cancel_after
        self.reads = 0

    def readline(self) -> str:
        return self._lines.pop(0) if self._lines else ""

    def read(self, size: int = -1) -> str:
        self.reads += 1
        if self.reads == self._cancel_after:
            self._cancel.set()
        return self._lines.pop(0) if self._lines else ""


def test_cancel_stops_a_slow_source_mid_chunk():
    cancel = threading.Event()
    stream = TrickleStream(rows=1000, cancel=cancel, cancel_after=3)

    with pytest.raises(LoadCancelled):
        load_dataset(stream, cancel=cancel)
    # stopped right after the flag was set, well before the chunk filled
    assert stream.reads == 3
