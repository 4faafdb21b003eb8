"""Tests for modules/search/service.py."""

from unittest.mock import MagicMock

import pytest

from modules.search.service import SearchService


def _repo(laws=None, fulltext=None, substring=None):
    repo = MagicMock()
    repo.search_laws.return_value = laws or []
    if isinstance(fulltext, Exception):
        repo.search_chunks_fulltext.side_effect = fulltext
    else:
        repo.search_chunks_fulltext.return_value = fulltext or []
    repo.search_chunks_substring.return_value = substring or []
    return repo


LAW = {"id": 1, "title": "Constituição", "article": "Art. 5", "content": "Todos são iguais"}
CHUNK = {"id": "c1", "content": "Todos são iguais perante a lei", "law_id": 1}


class TestSearchService:
    @pytest.mark.asyncio
    async def test_laws_first_then_chunks(self):
        service = SearchService(_repo(laws=[LAW], fulltext=[CHUNK]))

        response = await service.search("iguais", limit=10)

        assert [r.type for r in response.results] == ["article", "jurisprudence"]
        assert response.total == 2
        assert response.debug.laws_found == 1
        assert response.debug.chunks_found == 1
        assert response.debug.used_fallback is False

    @pytest.mark.asyncio
    async def test_splits_limit_between_tables(self):
        repo = _repo()
        await SearchService(repo).search("lei", limit=15)

        repo.search_laws.assert_called_once_with("lei", 7)
        repo.search_chunks_fulltext.assert_called_once_with("lei", 7)

    @pytest.mark.asyncio
    async def test_limit_one_still_queries(self):
        repo = _repo()
        await SearchService(repo).search("lei", limit=1)
        repo.search_laws.assert_called_once_with("lei", 1)

    @pytest.mark.asyncio
    async def test_fallback_on_empty_fulltext(self):
        repo = _repo(fulltext=[], substring=[CHUNK])

        response = await SearchService(repo).search("art. 5")

        repo.search_chunks_substring.assert_called_once()
        assert response.debug.used_fallback is True
        assert response.debug.chunks_found == 1
        assert response.debug.chunks_error is None

    @pytest.mark.asyncio
    async def test_fallback_on_fulltext_error(self):
        repo = _repo(fulltext=RuntimeError("syntax error in tsquery"), substring=[CHUNK])

        response = await SearchService(repo).search("a & b")

        assert response.total == 1
        assert response.debug.used_fallback is True
        assert "tsquery" in response.debug.chunks_error

    @pytest.mark.asyncio
    async def test_no_fallback_when_fulltext_finds_rows(self):
        repo = _repo(fulltext=[CHUNK])
        await SearchService(repo).search("iguais")
        repo.search_chunks_substring.assert_not_called()

    @pytest.mark.asyncio
    async def test_query_error_returns_empty_with_message(self):
        repo = _repo()
        repo.search_laws.side_effect = RuntimeError("connection refused")

        response = await SearchService(repo).search("lei")

        assert response.results == []
        assert response.total == 0
        assert response.message == "Não foi possível realizar a busca no momento"

    @pytest.mark.asyncio
    async def test_no_database(self):
        response = await SearchService(None).search("lei", "smart", 15)

        assert response.results == []
        assert response.message == "Database not configured"
        assert response.query == "lei"
