"""
Row-to-result mapping and highlight extraction.

The constants here are relied on by existing consumers and must not be
tuned.
"""

import re
from typing import Any

from .models import SearchResult

LAW_SIMILARITY = 0.9
CHUNK_SIMILARITY = 0.8
CONTENT_PREVIEW_CHARS = 300
HIGHLIGHT_CONTEXT_CHARS = 50
MIN_HIGHLIGHT_WORD_LENGTH = 3
MAX_HIGHLIGHTS = 3
MATCHES_PER_WORD = 2
CHUNK_TITLE_CHARS = 50

DEFAULT_LAW_SOURCE = "Constituição Federal"
DEFAULT_LAW_TITLE = "Artigo"
CHUNK_SOURCE = "Jurisprudência"


def truncate(content: str, limit: int = CONTENT_PREVIEW_CHARS) -> str:
    if len(content) > limit:
        return f"{content[:limit]}..."
    return content


def extract_highlights(content: str, query: str) -> list[str]:
    """
    Snippets of ``content`` around each query word.

    Words shorter than three characters are ignored. Each word contributes at
    most two snippets and at most three are returned in total.
    """
    if not content or not query:
        return []

    words = [w for w in query.lower().split(" ") if len(w) >= MIN_HIGHLIGHT_WORD_LENGTH]
    highlights: list[str] = []
    ctx = HIGHLIGHT_CONTEXT_CHARS
    for word in words:
        pattern = re.compile(f".{{0,{ctx}}}{re.escape(word)}.{{0,{ctx}}}", re.IGNORECASE)
        highlights.extend(pattern.findall(content)[:MATCHES_PER_WORD])
    return highlights[:MAX_HIGHLIGHTS]


def law_to_result(row: dict[str, Any], query: str) -> SearchResult:
    content = row.get("content") or ""
    article = row.get("article") or ""
    title = row.get("title") or ""
    return SearchResult(
        id=row["id"],
        title=article or title or DEFAULT_LAW_TITLE,
        content=truncate(content),
        type="article",
        source=title or DEFAULT_LAW_SOURCE,
        similarity=LAW_SIMILARITY,
        highlights=extract_highlights(content, query),
        metadata={
            "document_id": f"law_{row['id']}",
            "article_number": re.sub(r"\D", "", article),
            "full_content": row.get("content"),
        },
    )


def chunk_to_result(row: dict[str, Any], query: str) -> SearchResult:
    content = row.get("content") or ""
    extra = row.get("metadata") if isinstance(row.get("metadata"), dict) else {}
    return SearchResult(
        id=row["id"],
        title=f"{content[:CHUNK_TITLE_CHARS]}..." if content else CHUNK_SOURCE,
        content=truncate(content),
        type="jurisprudence",
        source=CHUNK_SOURCE,
        similarity=CHUNK_SIMILARITY,
        highlights=extract_highlights(content, query),
        metadata={
            "document_id": f"chunk_{row['id']}",
            "law_id": row.get("law_id"),
            "full_content": row.get("content"),
            **extra,
        },
    )
