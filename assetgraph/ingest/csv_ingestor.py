import csv
import io
import re
from pathlib import Path
from typing import List, Dict, Any, Optional, Iterable, Mapping, Sequence, Union

from ..config import settings
from ..types import RelationshipRecord, ParseResult
from ..utils.logger import app_logger


class IngestionError(Exception):
    """Raised when a relationship source cannot be read or has the wrong shape."""


_SEED_SEPARATOR = re.compile(r"[\n,]")


def parse_seed_list(text: Optional[str]) -> List[str]:
    """Split a comma/newline separated blob into trimmed, non-empty seed ids."""
    if not text:
        return []
    return [token.strip() for token in _SEED_SEPARATOR.split(text) if token.strip()]


class CsvRecordIngestor:
    """Reads parent/child relationship rows from CSV sources."""

    def __init__(self, columns: Optional[Sequence[str]] = None):
        self.logger = app_logger.bind(component="csv_ingestor")
        if columns is None:
            columns = settings.required_columns
        if len(columns) != 4:
            raise ValueError(f"Expected 4 column names, got {len(columns)}")
        self.child_column, self.parent_column, self.child_type_column, self.parent_type_column = columns

    @property
    def columns(self) -> List[str]:
        return [self.child_column, self.parent_column, self.child_type_column, self.parent_type_column]

    def parse_file(self, path: Union[str, Path]) -> ParseResult:
        """Parse a CSV file from disk."""
        file_path = Path(path)
        self.logger.info(f"Reading relationship records from {file_path}")
        try:
            text = file_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise IngestionError(f"Cannot read {file_path}: {e}") from e
        return self.parse_text(text)

    def parse_text(self, text: str) -> ParseResult:
        """Parse CSV content with a header row."""
        if text.startswith("\ufeff"):
            text = text[1:]
        try:
            reader = csv.DictReader(io.StringIO(text, newline=""))
            header = reader.fieldnames
            if not header:
                raise IngestionError("CSV source is empty or has no header row")
            missing = [column for column in self.columns if column not in header]
            if missing:
                raise IngestionError(f"CSV header is missing required columns: {missing}")
            rows = list(reader)
        except csv.Error as e:
            raise IngestionError(f"Malformed CSV: {e}") from e
        return self.parse_rows(rows)

    def parse_rows(self, rows: Iterable[Mapping[str, Any]]) -> ParseResult:
        """Validate rows and collect reporting statistics over the valid ones."""
        records = []
        node_ids = set()
        edge_keys = set()
        types = set()
        total_rows = 0
        invalid_rows = 0

        for row in rows:
            total_rows += 1
            record = self._row_to_record(row)
            if record is None:
                invalid_rows += 1
                self.logger.debug(f"Skipping invalid row {total_rows}: {dict(row)}")
                continue

            records.append(record)
            node_ids.add(record.child_id)
            node_ids.add(record.parent_id)
            edge_keys.add((record.child_id, record.parent_id))
            types.add(record.child_type)
            types.add(record.parent_type)

        result = ParseResult(
            records=tuple(records),
            total_rows=total_rows,
            unique_nodes=len(node_ids),
            unique_edges=len(edge_keys),
            invalid_rows=invalid_rows,
            types=frozenset(types),
        )
        self.logger.info(
            f"Parsed {total_rows} rows: {len(records)} valid, {invalid_rows} invalid, "
            f"{result.unique_nodes} nodes, {result.unique_edges} edges, {len(types)} types"
        )
        return result

    def _row_to_record(self, row: Mapping[str, Any]) -> Optional[RelationshipRecord]:
        """Convert a row to a record, or None when any required field is missing or empty."""
        values: Dict[str, str] = {}
        for column in self.columns:
            value = row.get(column)
            if not isinstance(value, str) or not value:
                return None
            values[column] = value

        return RelationshipRecord(
            child_id=values[self.child_column],
            parent_id=values[self.parent_column],
            child_type=values[self.child_type_column],
            parent_type=values[self.parent_type_column],
        )
