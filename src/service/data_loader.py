"""
Data Loader Service

Validates raw records into pydantic models and reads record files.
Malformed records are skipped with a warning rather than failing the batch.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, Iterable, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ParsedRecords(Generic[ModelT]):
    """Validated records and the number of raw records rejected."""

    records: list[ModelT] = field(default_factory=list)
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.records)


def parse_records(raw_records: Iterable[Any], model: type[ModelT]) -> ParsedRecords[ModelT]:
    """
    Validate raw dictionaries into model instances.

    Args:
        raw_records: Raw records, typically upstream JSON objects
        model: Pydantic model to validate against

    Returns:
        ParsedRecords with the valid records in input order
    """
    parsed: ParsedRecords[ModelT] = ParsedRecords()

    for index, raw in enumerate(raw_records):
        try:
            parsed.records.append(model.model_validate(raw))
        except ValidationError as e:
            parsed.skipped += 1
            logger.warning(f"Skipping invalid {model.__name__} record at index {index}: {e.error_count()} errors")
            logger.debug(f"Validation details: {e}")

    if parsed.skipped:
        logger.warning(f"Skipped {parsed.skipped} of {parsed.skipped + len(parsed)} {model.__name__} records")

    return parsed


def unwrap_records(payload: Any) -> list[Any]:
    """
    Extract the record list from a JSON payload.

    Accepts a bare list or an API envelope with a "data" list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    raise ValueError("Expected a JSON list of records or an object with a 'data' list")


def load_records_file(path: str | Path, model: type[ModelT]) -> ParsedRecords[ModelT]:
    """
    Read and validate a JSON file of records.

    Args:
        path: JSON file path
        model: Pydantic model for each record

    Returns:
        ParsedRecords

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid JSON or has no record list
    """
    path = Path(path)
    with open(path) as f:
        payload = json.load(f)

    parsed = parse_records(unwrap_records(payload), model)
    logger.info(f"Loaded {len(parsed)} {model.__name__} records from {path}")
    return parsed


def sort_by_kickoff(matches: Iterable[Any]) -> list[Any]:
    """Matches in ascending kickoff order (stable for equal timestamps)."""
    return sorted(matches, key=lambda match: match.date_unix)
