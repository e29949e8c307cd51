"""Data loading, normalization, and the in-memory dataset store."""
from .loader import load_dataset, detect_delimiter, LoadCancelled
from .schemas import Coordinates, Dataset, StatResult, SubsetQuery, Timeframe, TimelinePoint, TrendAdjustment
from .normalize import build_header_map, parse_number, parse_number_series, normalize_frame
