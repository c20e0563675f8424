"""
Tests de récupération : fail-soft, normalisation, mode mixed, transports.
"""
import asyncio
from unittest.mock import MagicMock

import pytest
import requests
from pydantic import ValidationError

from page_composer.core.schemas import DataSource, FetchResult, MixedSource
from page_composer.data_source import (
    MockTransport, RequestsTransport, blend, draw_counts, fetch_block_data,
    fetch_mixed_data, fetch_related, fetch_source, mock_items, normalize_response, resolve_query,
)


async def _boom(query):
    raise ConnectionError("backend down")


# ── Fail-soft ─────────────────────────────────────────────────────────────

class TestFailSoft:
    def test_transport_qui_leve(self):
        result = asyncio.run(fetch_block_data(DataSource(mode="latest"), _boom))
        assert result == FetchResult.empty()
        assert result.to_json() == {"items": [], "total": 0, "hasMore": False}

    def test_reponse_invalide(self):
        async def garbage(query):
            return None
        result = asyncio.run(fetch_block_data(DataSource(mode="latest"), garbage))
        assert result.items == []


# ── Normalisation ─────────────────────────────────────────────────────────

class TestNormalize:
    def test_items(self):
        result = normalize_response({"items": [{"id": "a"}], "total": 10, "hasMore": True})
        assert result.item_ids() == ["a"]
        assert result.total == 10
        assert result.has_more is True

    def test_alias_data_et_meta(self):
        result = normalize_response({"data": [{"id": "a"}, {"id": "b"}], "meta": {"total": 2, "hasMore": False}})
        assert result.item_ids() == ["a", "b"]
        assert result.total == 2

    def test_premiere_liste_non_vide(self):
        result = normalize_response({"items": [], "articles": [{"id": "x"}]})
        assert result.item_ids() == ["x"]

    def test_reponse_vide(self):
        assert normalize_response({}) == FetchResult.empty()


# ── Mode mixed ────────────────────────────────────────────────────────────

class TestMixed:
    def test_poids(self):
        assert draw_counts(8, [1, 1, 2]) == [2, 2, 4]
        assert draw_counts(5, [None, None]) == [3, 3]

    def test_sous_source_mixed_refusee(self):
        with pytest.raises(ValidationError):
            DataSource.model_validate({"mode": "mixed", "mixedSources": [{"mode": "mixed", "weight": 1}]})
        with pytest.raises(ValidationError):
            MixedSource(mode="mixed")

    def test_sous_sources_heritent_du_parent(self):
        transport = MockTransport()
        source = DataSource.model_validate({
            "mode": "mixed",
            "limit": 8,
            "sortBy": "views",
            "excludeIds": ["article-99"],
            "filters": {"hasImage": True},
            "mixedSources": [
                {"mode": "category", "categoryIds": ["c1"], "weight": 1},
                {"mode": "tag", "tagIds": ["t1"], "weight": 1},
                {"mode": "author", "authorIds": ["u1"], "weight": 2},
            ],
        })
        asyncio.run(fetch_mixed_data(source, transport))
        params = [q.params for q in transport.calls]
        assert [p.limit for p in params] == [2, 2, 4]
        assert [p.mode for p in params] == ["category", "tag", "author"]
        assert params[2].author_ids == ["u1"]
        assert all(p.sort_by == "views" for p in params)
        assert all(p.exclude_ids == ["article-99"] for p in params)
        assert all(p.has_image is True for p in params)

    def test_dedoublonnage_et_tri(self):
        # MockTransport ignore le mode : les sous-sources renvoient les mêmes articles
        source = DataSource.model_validate({
            "mode": "mixed",
            "limit": 8,
            "mixedSources": [{"mode": "latest", "weight": 1}, {"mode": "latest", "weight": 1}, {"mode": "latest", "weight": 2}],
        })
        result = asyncio.run(fetch_source(source, MockTransport()))
        assert result.item_ids() == ["article-1", "article-2", "article-3", "article-4"]
        assert result.total == 4
        assert result.has_more is False

    def test_une_sous_source_en_echec(self):
        mock = MockTransport()

        async def flaky(query):
            if query.params.mode == "tag":
                raise requests.ConnectionError("tag backend down")
            return await mock(query)

        source = DataSource.model_validate({
            "mode": "mixed", "limit": 4,
            "mixedSources": [{"mode": "tag", "weight": 1}, {"mode": "latest", "weight": 1}],
        })
        result = asyncio.run(fetch_mixed_data(source, flaky))
        assert result.item_ids() == ["article-1", "article-2"]

    def test_blend_tri_stable(self):
        items = [{"id": "a", "views": 5}, {"id": "b", "views": 9}, {"id": "c", "views": 5}, {"id": "a", "views": 1}]
        result = blend(items, 10, "views", "desc")
        assert result.item_ids() == ["b", "a", "c"]
        assert blend(items, 2, "views", "asc").item_ids() == ["a", "c"]

    def test_blend_date_illisible(self):
        items = [{"id": "old", "publishedAt": "pas une date"}, {"id": "new", "publishedAt": "2024-03-15T10:00:00Z"}]
        assert blend(items, 5, "publishedAt", "desc").item_ids() == ["new", "old"]

    def test_source_simple_non_mixed(self):
        transport = MockTransport()
        result = asyncio.run(fetch_mixed_data(DataSource(mode="latest", limit=3), transport))
        assert len(result.items) == 3
        assert len(transport.calls) == 1


# ── Articles liés ─────────────────────────────────────────────────────────

def test_fetch_related_exclut_l_article():
    transport = MockTransport()
    items = asyncio.run(fetch_related("article-1", ["category-1"], ["t"], transport))
    assert len(items) == 4
    assert "article-1" not in [i["id"] for i in items]
    params = transport.calls[0].params
    assert params.mode == "related"
    assert params.exclude_ids == ["article-1"]


# ── Transports ────────────────────────────────────────────────────────────

class TestMockTransport:
    def test_articles_deterministes(self):
        items = mock_items(3)
        assert [i["id"] for i in items] == ["article-1", "article-2", "article-3"]
        assert items[0]["publishedAt"] == "2024-01-01T12:00:00Z"
        assert items[1]["publishedAt"] == "2024-01-01T11:00:00Z"

    def test_offset_exclusions_manual(self):
        transport = MockTransport(pool_size=10)
        result = asyncio.run(fetch_block_data(
            DataSource(mode="latest", limit=3, offset=2, exclude_ids=["article-1"]), transport))
        assert result.item_ids() == ["article-4", "article-5", "article-6"]
        assert result.total == 9
        assert result.has_more is True

        manual = asyncio.run(fetch_block_data(
            DataSource(mode="manual", article_ids=["article-7", "article-2"], limit=5), transport))
        assert manual.item_ids() == ["article-2", "article-7"]


class TestRequestsTransport:
    def _session(self, payload=None, error=None):
        resp = MagicMock()
        resp.json.return_value = payload or {}
        if error:
            resp.raise_for_status.side_effect = error
        session = MagicMock()
        session.get.return_value = resp
        return session

    def test_get(self):
        session = self._session({"articles": [{"id": "a"}], "total": 1})
        transport = RequestsTransport(base_url="http://api.test/v1/", timeout=5, session=session)
        result = asyncio.run(fetch_block_data(DataSource(mode="breaking", limit=2), transport))
        assert result.item_ids() == ["a"]
        args, kwargs = session.get.call_args
        assert args[0] == "http://api.test/v1/articles/query"
        assert kwargs["timeout"] == 5
        assert ("mode", "breaking") in kwargs["params"]
        assert ("limit", "2") in kwargs["params"]

    def test_erreur_http_fail_soft(self):
        session = self._session(error=requests.HTTPError("500"))
        transport = RequestsTransport(base_url="http://api.test", session=session)
        result = asyncio.run(fetch_block_data(DataSource(mode="latest"), transport))
        assert result == FetchResult.empty()

    def test_get_direct(self):
        session = self._session({"items": []})
        transport = RequestsTransport(base_url="http://api.test", session=session)
        assert transport.get(resolve_query(DataSource())) == {"items": []}
