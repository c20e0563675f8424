"""
Récupération des contenus d'un data source.

Politique fail-soft : une erreur de transport n'est jamais propagée, le bloc
reçoit un résultat vide et la composition de la page continue.
"""
import asyncio
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

import requests

from .. import config
from ..core.schemas import DataSource, FetchResult
from .dates import to_iso
from .query import ResolvedQuery, query_pairs, resolve_query

log = logging.getLogger(__name__)

# Transport : requête résolue → payload JSON brut du backend
Transport = Callable[[ResolvedQuery], Awaitable[Mapping[str, Any]]]


# ── Transport HTTP ──────────────────────────────────────────────────────────

class RequestsTransport:
    """GET {base_url}/articles/query via requests, exécuté hors de la boucle asyncio."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT
        self.session = session or requests.Session()

    def get(self, query: ResolvedQuery) -> Dict[str, Any]:
        resp = self.session.get(
            f"{self.base_url}/articles/query",
            params=query_pairs(query.params),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    async def __call__(self, query: ResolvedQuery) -> Dict[str, Any]:
        return await asyncio.to_thread(self.get, query)


# ── Normalisation ───────────────────────────────────────────────────────────

def normalize_response(payload: Mapping[str, Any]) -> FetchResult:
    """
    Ramène la réponse backend à {items, total, hasMore}.
    La liste peut s'appeler items, articles ou data ; total/hasMore peuvent
    être à la racine ou sous `meta`.
    """
    items: List[Dict[str, Any]] = []
    for key in ("items", "articles", "data"):
        value = payload.get(key)
        if isinstance(value, list) and value:
            items = value
            break
    meta = payload.get("meta") or {}
    return FetchResult(
        items=items,
        total=payload.get("total") or meta.get("total") or 0,
        has_more=bool(payload.get("hasMore") or meta.get("hasMore") or False),
    )


# ── Source simple ───────────────────────────────────────────────────────────

async def fetch_block_data(
    source: DataSource,
    transport: Transport,
    now: Optional[datetime] = None,
) -> FetchResult:
    """Une requête ; toute erreur → FetchResult vide (loggée en WARNING)."""
    try:
        query = resolve_query(source, now)
        payload = await transport(query)
        return normalize_response(payload)
    except Exception as exc:
        log.warning("Data source %s (limit=%s) : échec de récupération : %s", source.mode, source.limit, exc)
        return FetchResult.empty()


# ── Mode mixed ──────────────────────────────────────────────────────────────

def draw_counts(limit: int, weights: Sequence[Optional[float]]) -> List[int]:
    """Part de chaque sous-source : ceil(limit * w / Σw), poids par défaut 1."""
    resolved = [w or 1 for w in weights]
    total = sum(resolved)
    return [math.ceil(limit * w / total) for w in resolved]


def _published_ts(item: Mapping[str, Any]) -> float:
    raw = item.get("publishedAt")
    if not raw:
        return 0.0
    try:
        parsed = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def _views(item: Mapping[str, Any]) -> float:
    return item.get("views") or 0


def _dedup(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    seen = set()
    unique = []
    for item in items:
        item_id = item.get("id")
        if item_id is not None:
            if item_id in seen:
                continue
            seen.add(item_id)
        unique.append(item)
    return unique


def blend(items: List[Dict[str, Any]], limit: int, sort_by: str, sort_order: str) -> FetchResult:
    """Dédoublonne (première occurrence), trie (stable), tronque à `limit`."""
    unique = _dedup(items)
    key = _views if sort_by == "views" else _published_ts
    # sorted() reste stable avec reverse=True
    ordered = sorted(unique, key=key, reverse=(sort_order == "desc"))
    return FetchResult(
        items=ordered[:limit],
        total=len(ordered),
        has_more=len(ordered) > limit,
    )


async def fetch_mixed_data(
    source: DataSource,
    transport: Transport,
    now: Optional[datetime] = None,
) -> FetchResult:
    """
    Mélange pondéré de plusieurs sous-sources.
    Chaque sous-source hérite du tri, des exclusions et des filtres du parent.
    """
    if source.mode != "mixed" or not source.mixed_sources:
        return await fetch_block_data(source, transport, now)

    counts = draw_counts(source.limit, [s.weight for s in source.mixed_sources])
    subs = [
        DataSource(
            mode=sub.mode,
            category_ids=sub.category_ids,
            tag_ids=sub.tag_ids,
            author_ids=sub.author_ids,
            limit=count,
            sort_by=source.sort_by,
            sort_order=source.sort_order,
            exclude_ids=list(source.exclude_ids) if source.exclude_ids else None,
            filters=source.filters.model_copy(deep=True) if source.filters else None,
        )
        for sub, count in zip(source.mixed_sources, counts)
    ]
    results = await asyncio.gather(*(fetch_block_data(s, transport, now) for s in subs))

    combined = [item for r in results for item in r.items]
    return blend(combined, source.limit, source.sort_by, source.sort_order)


async def fetch_source(
    source: DataSource,
    transport: Transport,
    now: Optional[datetime] = None,
) -> FetchResult:
    """Route vers le mode mixed ou la source simple."""
    if source.mode == "mixed":
        return await fetch_mixed_data(source, transport, now)
    return await fetch_block_data(source, transport, now)


async def fetch_related(
    article_id: str,
    category_ids: Sequence[str],
    tag_ids: Sequence[str],
    transport: Transport,
    limit: int = 4,
) -> List[Dict[str, Any]]:
    """Articles liés à `article_id` (même catégories/tags), l'article lui-même exclu."""
    source = DataSource(
        mode="related",
        category_ids=list(category_ids),
        tag_ids=list(tag_ids),
        limit=limit,
        sort_by="publishedAt",
        sort_order="desc",
        exclude_ids=[article_id],
    )
    result = await fetch_block_data(source, transport)
    return result.items


# ── Données fictives (développement sans backend) ──────────────────────────

_AUTHORS    = ["أحمد محمد", "سارة علي", "محمد خالد", "فاطمة حسن", "عمر يوسف"]
_CATEGORIES = [
    ("Politics", "سياسة", "politics"),
    ("Sports", "رياضة", "sports"),
    ("Technology", "تكنولوجيا", "technology"),
    ("Entertainment", "ترفيه", "entertainment"),
]
_EPOCH = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def mock_items(count: int, start: int = 0, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Articles fictifs déterministes : article-{n}, un par heure en remontant depuis `now`."""
    now = now or _EPOCH
    items = []
    for i in range(start, start + count):
        name, name_ar, slug = _CATEGORIES[i % 4]
        items.append({
            "id": f"article-{i + 1}",
            "slug": f"article-{i + 1}",
            "title": f"عنوان المقال رقم {i + 1}",
            "excerpt": "مقتطف تجريبي للمقال.",
            "coverImageUrl": f"https://picsum.photos/seed/{i + 1}/800/450",
            "publishedAt": to_iso(now - timedelta(hours=i)),
            "readingTime": 2 + (i * 3) % 10,
            "views": (i * 7919) % 10000,
            "commentsCount": (i * 31) % 100,
            "author": {"id": f"author-{(i % 5) + 1}", "name": _AUTHORS[i % 5]},
            "categories": [{"id": f"category-{(i % 4) + 1}", "name": name, "nameAr": name_ar, "slug": slug}],
        })
    return items


class MockTransport:
    """
    Transport hors-ligne : sert un pool fixe d'articles en respectant
    excludeIds/offset/limit. Garde la trace des requêtes reçues.
    """

    def __init__(self, pool_size: int = 100, now: Optional[datetime] = None):
        self.pool = mock_items(pool_size, now=now)
        self.calls: List[ResolvedQuery] = []

    async def __call__(self, query: ResolvedQuery) -> Dict[str, Any]:
        self.calls.append(query)
        params = query.params
        excluded = set(params.exclude_ids or ())
        available = [i for i in self.pool if i["id"] not in excluded]
        if params.article_ids:
            wanted = set(params.article_ids)
            available = [i for i in available if i["id"] in wanted]
        page = available[params.offset:params.offset + params.limit]
        return {
            "items": page,
            "total": len(available),
            "hasMore": params.offset + params.limit < len(available),
        }
