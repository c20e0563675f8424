from .catalog import BlockCatalog, BlockMeta, BlockVariant, CATEGORIES
from .blocks import BLOCK_METAS, default_catalog
from .variants import VARIANT_PRESETS

__all__ = [
    "BlockCatalog", "BlockMeta", "BlockVariant", "CATEGORIES",
    "BLOCK_METAS", "default_catalog", "VARIANT_PRESETS",
]
