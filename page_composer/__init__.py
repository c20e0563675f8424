"""
Page Composer v1.0 — Moteur de composition visuelle de pages (Template → Section → Block).

Usage (rendu):
    >>> from page_composer import PageComposer, MockTransport, default_template_for
    >>> import asyncio
    >>> page = asyncio.run(PageComposer(transport=MockTransport()).compose(default_template_for("home"), "mobile"))

Usage (édition):
    >>> from page_composer import EditSession, default_template_for
    >>> session = EditSession()
    >>> session.set_template(default_template_for("home"))
    >>> session.add_block_from_type("hero-section", "article-list")
    >>> session.undo()
"""
__version__ = "1.0.0"

# ── Core ────────────────────────────────────────────────────────────────────
from .core import (
    VIEWPORTS, Viewport, is_responsive, resolve, resolve_tree, responsive,
    deep_merge, merge_all,
    DataSource, DateRange, MixedSource, Block, Section, SectionHeader, Template, FetchResult,
    generate_id, BlockConfig, DEFAULT_BLOCK_CONFIG, parse_custom,
)
from .errors import PageComposerError, CatalogError, ResponsiveValueError, TemplateNotFound

# ── Catalogue / résolution ──────────────────────────────────────────────────
from .registry import BlockCatalog, BlockMeta, BlockVariant, default_catalog
from .resolver import resolve_block_config, resolve_section_layout, is_visible

# ── Données ─────────────────────────────────────────────────────────────────
from .data_source import (
    build_query_params, to_query_string, resolve_query,
    fetch_block_data, fetch_mixed_data, prefetch_all, prefetch_template,
    RequestsTransport, MockTransport,
)

# ── Édition / templates ─────────────────────────────────────────────────────
from .session import EditSession, History
from .templates import default_template_for, new_template, duplicate_template
from .composer import PageComposer

__all__ = [
    "__version__",
    # core
    "VIEWPORTS", "Viewport", "is_responsive", "resolve", "resolve_tree", "responsive",
    "deep_merge", "merge_all",
    "DataSource", "DateRange", "MixedSource", "Block", "Section", "SectionHeader", "Template",
    "FetchResult", "generate_id", "BlockConfig", "DEFAULT_BLOCK_CONFIG", "parse_custom",
    "PageComposerError", "CatalogError", "ResponsiveValueError", "TemplateNotFound",
    # catalogue
    "BlockCatalog", "BlockMeta", "BlockVariant", "default_catalog",
    "resolve_block_config", "resolve_section_layout", "is_visible",
    # données
    "build_query_params", "to_query_string", "resolve_query",
    "fetch_block_data", "fetch_mixed_data", "prefetch_all", "prefetch_template",
    "RequestsTransport", "MockTransport",
    # édition
    "EditSession", "History",
    "default_template_for", "new_template", "duplicate_template",
    "PageComposer",
]
