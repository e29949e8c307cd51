from pathlib import Path

import pandas as pd
import pytest

from climate_outlook.data.store import DataStore


STATION_A = (10.0, 20.0)
STATION_B = (45.0, -70.0)
SAMPLE_DAYS = [(1, 2), (7, 1), (7, 15), (12, 30)]
SAMPLE_YEARS = range(2005, 2020)


def make_records(rows: list[dict]) -> pd.DataFrame:
    """Canonical records (as the loader produces them) from plain dicts."""
    df = pd.DataFrame(rows)
    df["date"] = pd.to_datetime(df["date"])
    for col in ("lat", "lon"):
        if col not in df.columns:
            df[col] = float("nan")
    return df


def station_temperature(year: int, month: int) -> float:
    return round(20 + (year - 2005) * 0.1 + (10 if month == 7 else 0), 2)


@pytest.fixture
def write_csv(tmp_path):
    def _write(text: str, name: str = "observations.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def climate_csv(write_csv) -> Path:
    """15 years x 4 days at two stations; station B reports no precipitation."""
    lines = ["date,lat,lon,temp,rh,prcp"]
    for year in SAMPLE_YEARS:
        for month, day in SAMPLE_DAYS:
            temp = station_temperature(year, month)
            stamp = f"{year}-{month:02d}-{day:02d}"
            lines.append(f"{stamp},{STATION_A[0]},{STATION_A[1]},{temp:.2f},{60 + month},{month * 1.5:.1f}")
            lines.append(f"{stamp},{STATION_B[0]},{STATION_B[1]},{temp - 15:.2f},{50 + month},")
    return write_csv("\n".join(lines) + "\n", name="climate.csv")


@pytest.fixture
def loaded_store(climate_csv) -> DataStore:
    store = DataStore()
    assert store.load(climate_csv)
    return store
