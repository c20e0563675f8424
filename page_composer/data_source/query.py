"""
Data source → paramètres de requête, query string, cache tags, revalidation.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

from ..core.schemas import ComposerModel, DataSource, DataSourceMode, SortBy, SortOrder
from .dates import resolve_date_range

# Durée de fraîcheur (secondes) par mode ; métadonnée consultative
REVALIDATE_TIMES: Dict[str, int] = {
    "breaking":   30,
    "trending":   60,
    "latest":     60,
    "featured":   120,
    "mixed":      120,
    "category":   180,
    "categories": 180,
    "tag":        180,
    "tags":       180,
    "author":     300,
    "authors":    300,
    "manual":     300,
    "related":    300,
}

# mode → (champ d'ids, préfixe de tag)
_TAGGED_SELECTORS = {
    "category":   ("category_ids", "category"),
    "categories": ("category_ids", "category"),
    "tag":        ("tag_ids", "tag"),
    "tags":       ("tag_ids", "tag"),
    "author":     ("author_ids", "author"),
    "authors":    ("author_ids", "author"),
    "manual":     ("article_ids", "article"),
}
_FIXED_TAGS = {"breaking", "trending", "featured"}

_LIST_KEYS = ("categoryIds", "tagIds", "authorIds", "articleIds", "excludeIds")
_SCALAR_KEYS = (
    "dateFrom", "dateTo", "hasImage", "hasVideo", "hasGallery",
    "minReadingTime", "maxReadingTime", "status", "language",
)


class QueryParams(ComposerModel):
    """Paramètres à plat envoyés au backend de contenus."""
    mode: DataSourceMode
    category_ids: Optional[List[str]] = None
    tag_ids: Optional[List[str]] = None
    author_ids: Optional[List[str]] = None
    article_ids: Optional[List[str]] = None
    limit: int
    offset: int = 0
    sort_by: SortBy
    sort_order: SortOrder
    exclude_ids: Optional[List[str]] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    has_image: Optional[bool] = None
    has_video: Optional[bool] = None
    has_gallery: Optional[bool] = None
    min_reading_time: Optional[int] = None
    max_reading_time: Optional[int] = None
    status: Optional[str] = None
    language: Optional[str] = None


class ResolvedQuery(ComposerModel):
    """Requête prête à émettre + métadonnées de cache."""
    params: QueryParams
    query_string: str
    cache_tags: List[str]
    revalidate: int


def build_query_params(source: DataSource, now: Optional[datetime] = None) -> QueryParams:
    date_from, date_to = resolve_date_range(source.date_range, now)
    filters = source.filters
    return QueryParams(
        mode=source.mode,
        category_ids=source.category_ids,
        tag_ids=source.tag_ids,
        author_ids=source.author_ids,
        article_ids=source.article_ids,
        limit=source.limit,
        offset=source.offset or 0,
        sort_by=source.sort_by,
        sort_order=source.sort_order,
        exclude_ids=source.exclude_ids,
        date_from=date_from,
        date_to=date_to,
        has_image=filters.has_image if filters else None,
        has_video=filters.has_video if filters else None,
        has_gallery=filters.has_gallery if filters else None,
        min_reading_time=filters.min_reading_time if filters else None,
        max_reading_time=filters.max_reading_time if filters else None,
        status=filters.status if filters else None,
        language=filters.language if filters else None,
    )


def query_pairs(params: QueryParams) -> List[Tuple[str, str]]:
    """Paires clé/valeur ordonnées : tableaux joints par virgules, vides omis."""
    data = params.model_dump(by_alias=True)
    pairs: List[Tuple[str, str]] = [
        ("mode", data["mode"]),
        ("limit", str(data["limit"])),
        ("offset", str(data["offset"])),
        ("sortBy", data["sortBy"]),
        ("sortOrder", data["sortOrder"]),
    ]
    for key in _LIST_KEYS:
        values = data.get(key)
        if values:
            pairs.append((key, ",".join(values)))
    for key in _SCALAR_KEYS:
        value = data.get(key)
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        pairs.append((key, str(value)))
    return pairs


def to_query_string(params: QueryParams) -> str:
    return urlencode(query_pairs(params), safe=",:")


def build_cache_tags(source: DataSource) -> List[str]:
    """Clés d'invalidation : "articles" + un tag par id sélectionné ou un tag fixe."""
    tags = ["articles"]
    selector = _TAGGED_SELECTORS.get(source.mode)
    if selector:
        field, prefix = selector
        tags.extend(f"{prefix}:{i}" for i in (getattr(source, field) or []))
    elif source.mode in _FIXED_TAGS:
        tags.append(source.mode)
    return tags


def revalidate_for(mode: str) -> int:
    return REVALIDATE_TIMES[mode]


def resolve_query(source: DataSource, now: Optional[datetime] = None) -> ResolvedQuery:
    params = build_query_params(source, now)
    return ResolvedQuery(
        params=params,
        query_string=to_query_string(params),
        cache_tags=build_cache_tags(source),
        revalidate=revalidate_for(source.mode),
    )


def describe_query(source: DataSource, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Forme JSON exposée par l'API (/query)."""
    resolved = resolve_query(source, now)
    return {
        "params": resolved.params.to_json(),
        "queryString": resolved.query_string,
        "cacheTags": resolved.cache_tags,
        "revalidate": resolved.revalidate,
    }
