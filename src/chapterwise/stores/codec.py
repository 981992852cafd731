# src/chapterwise/stores/codec.py
"""Canonical text encoding for chapter embeddings.

Embeddings are persisted as a JSON array of numbers in a TEXT column, e.g.
"[0.0132, -0.221, ...]". This is also the textual form pgvector emits, so rows
exported from a Postgres vector column decode unchanged. Decoding accepts only
that form: anything else is a data-integrity failure, never a silent skip.
"""

import json
import math
from collections.abc import Sequence

from chapterwise.exceptions import DataIntegrityError


def encode_embedding(embedding: Sequence[float]) -> str:
    """Serialize an embedding to its canonical JSON text form."""
    if not embedding:
        raise DataIntegrityError("Cannot encode an empty embedding")
    try:
        return json.dumps([float(v) for v in embedding], allow_nan=False)
    except (TypeError, ValueError) as e:
        raise DataIntegrityError(f"Cannot encode embedding: {e}") from e


def decode_embedding(raw: object, dimension: int | None = None) -> list[float]:
    """Parse canonical JSON text into a vector of finite floats.

    Args:
        raw: The stored value. Must be a str.
        dimension: Expected vector length, or None to accept any non-zero length.

    Raises:
        DataIntegrityError: If the value is not valid canonical text, holds
            non-numeric or non-finite entries, or has the wrong length.
    """
    if not isinstance(raw, str):
        raise DataIntegrityError(
            f"Embedding must be stored as JSON text, got {type(raw).__name__}"
        )
    try:
        values = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DataIntegrityError(f"Embedding is not valid JSON: {e.msg}") from e

    if not isinstance(values, list) or not values:
        raise DataIntegrityError("Embedding must be a non-empty JSON array")
    if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in values):
        raise DataIntegrityError("Embedding contains non-numeric entries")

    vector = [float(v) for v in values]
    if not all(math.isfinite(v) for v in vector):
        raise DataIntegrityError("Embedding contains NaN or infinite entries")
    if dimension is not None and len(vector) != dimension:
        raise DataIntegrityError(
            f"Embedding has dimension {len(vector)}, expected {dimension}"
        )
    return vector
