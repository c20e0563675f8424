"""
Tests du moteur de requêtes : presets de dates, paramètres, query string, cache tags.
"""
from datetime import datetime, timezone

import pytest

from page_composer.core.schemas import DataSource, DateRange
from page_composer.data_source import (
    build_cache_tags, build_query_params, describe_query, resolve_date_range,
    resolve_query, revalidate_for, to_iso, to_query_string,
)


def _preset(preset, now):
    return resolve_date_range(DateRange(preset=preset), now)


# ── Dates ─────────────────────────────────────────────────────────────────

class TestDatePresets:
    def test_yesterday(self, now):
        assert _preset("yesterday", now) == ("2024-03-14T00:00:00Z", "2024-03-15T00:00:00Z")

    def test_today(self, now):
        assert _preset("today", now) == ("2024-03-15T00:00:00Z", "2024-03-15T10:00:00Z")

    def test_this_week_commence_dimanche(self, now):
        assert _preset("this_week", now) == ("2024-03-10T00:00:00Z", "2024-03-15T10:00:00Z")

    def test_this_week_un_dimanche(self):
        sunday = datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc)
        assert _preset("this_week", sunday)[0] == "2024-03-10T00:00:00Z"

    def test_this_month(self, now):
        assert _preset("this_month", now)[0] == "2024-03-01T00:00:00Z"

    def test_this_year(self, now):
        assert _preset("this_year", now)[0] == "2024-01-01T00:00:00Z"

    def test_bornes_explicites_verbatim(self, now):
        dr = DateRange.model_validate({"from": "2024-01-01", "to": "2024-02-01", "preset": "today"})
        assert resolve_date_range(dr, now) == ("2024-01-01", "2024-02-01")

    def test_sans_borne(self, now):
        assert resolve_date_range(None, now) == (None, None)
        assert resolve_date_range(DateRange(), now) == (None, None)

    def test_to_iso_naive_est_utc(self):
        assert to_iso(datetime(2024, 3, 15, 10, 0, 0, 123456)) == "2024-03-15T10:00:00Z"


# ── Paramètres ────────────────────────────────────────────────────────────

class TestQueryParams:
    def test_offset_par_defaut(self):
        params = build_query_params(DataSource(mode="latest", limit=6))
        assert params.offset == 0
        assert params.sort_by == "publishedAt"
        assert params.sort_order == "desc"
        assert params.date_from is None

    def test_filtres_copies(self):
        source = DataSource.model_validate({
            "mode": "latest",
            "filters": {"hasImage": True, "minReadingTime": 3, "status": "featured"},
        })
        params = build_query_params(source)
        assert params.has_image is True
        assert params.min_reading_time == 3
        assert params.status == "featured"

    def test_query_string(self, now):
        source = DataSource.model_validate({
            "mode": "category",
            "categoryIds": ["c1", "c2"],
            "limit": 5,
            "dateRange": {"preset": "yesterday"},
        })
        assert to_query_string(build_query_params(source, now)) == (
            "mode=category&limit=5&offset=0&sortBy=publishedAt&sortOrder=desc"
            "&categoryIds=c1,c2&dateFrom=2024-03-14T00:00:00Z&dateTo=2024-03-15T00:00:00Z"
        )

    def test_booleens_minuscules_vides_omis(self):
        source = DataSource.model_validate({
            "mode": "latest", "limit": 3, "excludeIds": [], "filters": {"hasVideo": False},
        })
        qs = to_query_string(build_query_params(source))
        assert "hasVideo=false" in qs
        assert "excludeIds" not in qs

    def test_limit_negatif_refuse(self):
        with pytest.raises(ValueError):
            DataSource(limit=-1)


class TestCacheTags:
    @pytest.mark.parametrize("source, expected", [
        ({"mode": "latest"}, ["articles"]),
        ({"mode": "category", "categoryIds": ["a", "b"]}, ["articles", "category:a", "category:b"]),
        ({"mode": "tags", "tagIds": ["t"]}, ["articles", "tag:t"]),
        ({"mode": "author", "authorIds": ["u"]}, ["articles", "author:u"]),
        ({"mode": "manual", "articleIds": ["x", "y"]}, ["articles", "article:x", "article:y"]),
        ({"mode": "breaking"}, ["articles", "breaking"]),
        ({"mode": "trending"}, ["articles", "trending"]),
        ({"mode": "featured"}, ["articles", "featured"]),
    ])
    def test_tags_par_mode(self, source, expected):
        assert build_cache_tags(DataSource.model_validate(source)) == expected

    def test_revalidate(self):
        assert revalidate_for("breaking") == 30
        assert revalidate_for("category") == 180
        assert revalidate_for("manual") == 300


class TestResolveQuery:
    def test_requete_resolue(self, now):
        resolved = resolve_query(DataSource(mode="trending", limit=8, sort_by="views"), now)
        assert resolved.cache_tags == ["articles", "trending"]
        assert resolved.revalidate == 60
        assert resolved.query_string.startswith("mode=trending&limit=8&offset=0&sortBy=views")

    def test_describe_query(self, now):
        data = describe_query(DataSource(mode="latest"), now)
        assert set(data) == {"params", "queryString", "cacheTags", "revalidate"}
        assert data["params"]["sortBy"] == "publishedAt"
        assert "dateFrom" not in data["params"]
