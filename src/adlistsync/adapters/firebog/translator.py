"""Translate the firebog CSV body into candidate entries."""

from __future__ import annotations

import csv
import io

from pydantic import ValidationError

from adlistsync.domain.errors import ParseError
from adlistsync.domain.model import CandidateEntry

from .schema import FEED_COLUMNS, FeedRow


def parse_candidate(row: FeedRow) -> CandidateEntry:
    return CandidateEntry(
        category=row.category,
        tick_type=row.tick_type,
        source_repo=row.source_repo,
        description=row.description,
        source_url=row.source_url,
    )


def decode_feed(body: bytes) -> str:
    try:
        return body.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Feed is not valid UTF-8: {exc}") from exc


def parse_feed(body: bytes | str) -> list[CandidateEntry]:
    """Parse the whole feed or raise ``ParseError``; blank lines are skipped."""

    text = decode_feed(body) if isinstance(body, bytes) else body
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=",", quotechar='"', strict=True)
    entries: list[CandidateEntry] = []
    try:
        for columns in reader:
            if not columns:
                continue
            line = reader.line_num
            if len(columns) != len(FEED_COLUMNS):
                raise ParseError(
                    f"Line {line}: expected {len(FEED_COLUMNS)} columns, got {len(columns)}",
                    line=line,
                )
            try:
                row = FeedRow.from_columns(columns)
            except ValidationError as exc:
                raise ParseError(f"Line {line}: invalid row: {exc}", line=line) from exc
            entries.append(parse_candidate(row))
    except csv.Error as exc:
        raise ParseError(
            f"Line {reader.line_num}: malformed CSV: {exc}", line=reader.line_num
        ) from exc
    return entries
