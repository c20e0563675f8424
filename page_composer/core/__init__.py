"""Core module pour page_composer : schémas, valeurs responsive, fusion de configs."""
from .responsive import VIEWPORTS, Viewport, is_responsive, resolve, resolve_tree, responsive
from .merge import deep_merge, merge_all
from .schemas import (
    DataSource,
    DateRange,
    MixedSource,
    Block,
    Section,
    SectionHeader,
    Template,
    FetchResult,
    generate_id,
)
from .block_config import BlockConfig, DEFAULT_BLOCK_CONFIG, parse_custom

__all__ = [
    "VIEWPORTS",
    "Viewport",
    "is_responsive",
    "resolve",
    "resolve_tree",
    "responsive",
    "deep_merge",
    "merge_all",
    "DataSource",
    "DateRange",
    "MixedSource",
    "Block",
    "Section",
    "SectionHeader",
    "Template",
    "FetchResult",
    "generate_id",
    "BlockConfig",
    "DEFAULT_BLOCK_CONFIG",
    "parse_custom",
]
