"""Moteur de requêtes data source : presets de dates, query, fetch, prefetch."""
from .dates import resolve_date_range, preset_bounds, to_iso
from .query import (
    QueryParams, ResolvedQuery, REVALIDATE_TIMES,
    build_query_params, build_cache_tags, query_pairs, to_query_string,
    revalidate_for, resolve_query, describe_query,
)
from .fetch import (
    Transport, RequestsTransport, MockTransport,
    normalize_response, fetch_block_data, fetch_mixed_data, fetch_source,
    fetch_related, draw_counts, blend, mock_items,
)
from .prefetch import Binding, collect_bindings, prefetch_all, prefetch_template

__all__ = [
    "resolve_date_range", "preset_bounds", "to_iso",
    "QueryParams", "ResolvedQuery", "REVALIDATE_TIMES",
    "build_query_params", "build_cache_tags", "query_pairs", "to_query_string",
    "revalidate_for", "resolve_query", "describe_query",
    "Transport", "RequestsTransport", "MockTransport",
    "normalize_response", "fetch_block_data", "fetch_mixed_data", "fetch_source",
    "fetch_related", "draw_counts", "blend", "mock_items",
    "Binding", "collect_bindings", "prefetch_all", "prefetch_template",
]
