"""
Tabular export of enriched players.

The CSV text is produced by :func:`format_export` so that its layout is
exactly the one the roster spreadsheet expects (the name column is always
quoted). Other formats go through a polars DataFrame with the same columns.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import polars as pl

from uscf_roster.core.constants import EXPORT_FORMATS, EXPORT_HEADER, RATING_CATEGORIES
from uscf_roster.core.models import EnrichedPlayer

logger = logging.getLogger(__name__)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def format_row(player: EnrichedPlayer) -> str:
    fields = [player.identifier, _quote(player.name)]
    fields.extend(player.ratings[code] for code in RATING_CATEGORIES)
    return ",".join(fields)


def format_export(players: Iterable[EnrichedPlayer]) -> str:
    """Render players as CSV text: fixed header, then one row per player."""
    lines = [",".join(EXPORT_HEADER)]
    lines.extend(format_row(player) for player in players)
    return "\n".join(lines) + "\n"


def build_export_frame(players: Iterable[EnrichedPlayer]) -> pl.DataFrame:
    """Players as a DataFrame with the export header as column names."""
    rows = [
        [player.identifier, player.name]
        + [player.ratings[code] for code in RATING_CATEGORIES]
        for player in players
    ]
    return pl.DataFrame(
        rows,
        schema={column: pl.Utf8 for column in EXPORT_HEADER},
        orient="row",
    )


def infer_format(path: str | Path) -> str:
    suffix = Path(path).suffix.lower().lstrip(".")
    return suffix if suffix in EXPORT_FORMATS else "csv"


def write_export(
    players: Iterable[EnrichedPlayer],
    path: str | Path,
    fmt: Optional[str] = None,
) -> int:
    """Write players to ``path`` and return the number of rows written.

    The format is inferred from the extension unless ``fmt`` is given.
    """
    players = list(players)
    path = Path(path)
    fmt = fmt or infer_format(path)
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")

    if fmt == "csv":
        path.write_text(format_export(players), encoding="utf-8")
    else:
        frame = build_export_frame(players)
        if fmt == "json":
            frame.write_json(path)
        elif fmt == "ndjson":
            frame.write_ndjson(path)
        elif fmt == "parquet":
            frame.write_parquet(path)

    logger.info("Wrote %d rows to %s (%s)", len(players), path, fmt)
    return len(players)
