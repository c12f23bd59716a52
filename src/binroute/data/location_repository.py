"""Location coordinate and distance tables loaded from CSV or Excel files."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Iterator, Sequence

from openpyxl import load_workbook

from ..config import settings
from ..models.domain import Coordinates
from ..services.distance import TableDistanceProvider

logger = logging.getLogger(__name__)

COORDINATE_COLUMNS = ("Location", "Latitude", "Longitude")
DISTANCE_COLUMNS = ("From", "To", "DistanceKm")


def _normalize_location_name(name: Any) -> str:
    return str(name).strip()


def _iter_rows(path: Path) -> Iterator[Sequence[Any]]:
    """Yield raw rows, header first, from a .csv or .xlsx file."""
    if not path.exists():
        raise FileNotFoundError(f"Location file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            yield from csv.reader(handle)
    elif suffix in {".xlsx", ".xlsm"}:
        wb = load_workbook(path, data_only=True, read_only=True)
        try:
            yield from wb.active.iter_rows(min_row=1, values_only=True)
        finally:
            wb.close()
    else:
        raise ValueError(f"Unsupported location file type '{path.suffix}' for {path}")


def _read_table(path: Path, columns: Sequence[str]) -> Iterator[tuple[int, tuple[Any, ...]]]:
    rows = _iter_rows(path)
    header = next(rows, None)
    if header is None:
        raise ValueError(f"Location file '{path}' is empty.")

    header_map = {str(name).strip(): idx for idx, name in enumerate(header) if name is not None}
    missing_columns = set(columns) - set(header_map)
    if missing_columns:
        raise ValueError(f"Location file '{path}' missing columns: {', '.join(sorted(missing_columns))}")

    for line_number, row in enumerate(rows, start=2):
        if not row or all(value in (None, "") for value in row):
            continue
        try:
            yield line_number, tuple(row[header_map[column]] for column in columns)
        except IndexError:
            logger.warning(f"Skipping short row {line_number} in {path}")


def load_coordinates(path: Path) -> dict[str, Coordinates]:
    coordinates: dict[str, Coordinates] = {}
    for line_number, (name, lat, lng) in _read_table(path, COORDINATE_COLUMNS):
        if not name:
            continue
        try:
            coordinates[_normalize_location_name(name)] = Coordinates(lat=float(lat), lng=float(lng))
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping invalid coordinate row {line_number} in {path}: {e}")
    return coordinates


def load_distances(path: Path) -> dict[str, dict[str, float]]:
    table: dict[str, dict[str, float]] = {}
    for line_number, (origin, destination, distance_km) in _read_table(path, DISTANCE_COLUMNS):
        if not origin or not destination:
            continue
        try:
            value = float(distance_km)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping invalid distance row {line_number} in {path}: {e}")
            continue
        table.setdefault(_normalize_location_name(origin), {})[_normalize_location_name(destination)] = value
    return table


def build_distance_provider(
    coordinates_file: Path | None = None,
    distances_file: Path | None = None,
) -> TableDistanceProvider:
    """Provider from configured files, built-in Kilinochchi tables for anything not configured."""

    coordinates_file = coordinates_file or settings.coordinates_file
    distances_file = distances_file or settings.distances_file

    coordinates = load_coordinates(coordinates_file) if coordinates_file else None
    distances = load_distances(distances_file) if distances_file else None
    if coordinates is not None:
        logger.info(f"Loaded {len(coordinates)} location coordinates from {coordinates_file}")
    if distances is not None:
        logger.info(f"Loaded distances for {len(distances)} origins from {distances_file}")
    return TableDistanceProvider(distance_table=distances, coordinates=coordinates)
