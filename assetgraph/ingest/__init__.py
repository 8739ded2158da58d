"""
Ingestion of relationship records and seed lists.
"""

from .csv_ingestor import CsvRecordIngestor, IngestionError, parse_seed_list

__all__ = [
    'CsvRecordIngestor',
    'IngestionError',
    'parse_seed_list'
]
