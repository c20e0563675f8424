"""
Catalogue des blocs — métadonnées par type + variants (presets de config).

Le catalogue est construit explicitement et passé au moteur ; il est en
lecture seule (aucune mutation après construction).
"""
import copy
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.block_config import DEFAULT_BLOCK_CONFIG
from ..core.schemas import Block
from ..errors import CatalogError

log = logging.getLogger(__name__)

BlockCategory = Literal[
    "articles", "hero", "breaking", "navigation", "ads",
    "media", "authors", "engagement", "widgets", "layout",
]

CATEGORIES: List[Dict[str, str]] = [
    {"id": "articles",   "name": "Articles",      "nameAr": "المقالات"},
    {"id": "hero",       "name": "Hero Sections", "nameAr": "الأقسام الرئيسية"},
    {"id": "breaking",   "name": "Breaking News", "nameAr": "الأخبار العاجلة"},
    {"id": "navigation", "name": "Navigation",    "nameAr": "التنقل"},
    {"id": "ads",        "name": "Advertising",   "nameAr": "الإعلانات"},
    {"id": "media",      "name": "Media",         "nameAr": "الوسائط"},
    {"id": "authors",    "name": "Authors",       "nameAr": "الكتّاب"},
    {"id": "engagement", "name": "Engagement",    "nameAr": "التفاعل"},
    {"id": "widgets",    "name": "Widgets",       "nameAr": "الودجات"},
    {"id": "layout",     "name": "Layout",        "nameAr": "التخطيط"},
]


class BlockVariant(BaseModel):
    """Preset nommé de config par défaut pour un type de bloc."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_ar: str = ""
    description: str = ""
    preview: str = ""
    default_config: Dict[str, Any] = Field(default_factory=dict)


class BlockMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    name_ar: str = ""
    description: str = ""
    category: BlockCategory
    icon: str = ""
    has_data_source: bool = False
    default_variant: str
    variants: tuple = ()


class BlockCatalog:
    """
    Registre immuable type → BlockMeta + variants.

    Usage:
        >>> catalog = BlockCatalog(metas, variants)
        >>> catalog.get_default_variant("article-grid").id
        'grid-1'
    """

    def __init__(self, metas: Iterable[BlockMeta], variants: Optional[Mapping[str, Iterable[BlockVariant]]] = None):
        metas_by_type: Dict[str, BlockMeta] = {}
        for meta in metas:
            if meta.default_variant not in meta.variants:
                raise CatalogError(
                    f"Variant par défaut {meta.default_variant!r} absent des variants de {meta.type!r}"
                )
            metas_by_type[meta.type] = meta
        self._metas = MappingProxyType(metas_by_type)

        variants = variants or {}
        by_type: Dict[str, Mapping[str, BlockVariant]] = {}
        for block_type, meta in metas_by_type.items():
            presets = {v.id: v for v in variants.get(block_type, ())}
            # Les variants sans preset reprennent la config par défaut
            resolved = {
                vid: presets.get(vid) or BlockVariant(id=vid, name=vid, default_config=copy.deepcopy(DEFAULT_BLOCK_CONFIG))
                for vid in meta.variants
            }
            by_type[block_type] = MappingProxyType(resolved)
        self._variants = MappingProxyType(by_type)

    # ── Lecture ────────────────────────────────────────────────────────────

    def __contains__(self, block_type: str) -> bool:
        return block_type in self._metas

    def __len__(self) -> int:
        return len(self._metas)

    def types(self) -> List[str]:
        return list(self._metas)

    def get_meta(self, block_type: str) -> Optional[BlockMeta]:
        return self._metas.get(block_type)

    def get_variants(self, block_type: str) -> List[BlockVariant]:
        return list(self._variants.get(block_type, {}).values())

    def get_variant(self, block_type: str, variant_id: str) -> Optional[BlockVariant]:
        return self._variants.get(block_type, {}).get(variant_id)

    def get_default_variant(self, block_type: str) -> Optional[BlockVariant]:
        meta = self.get_meta(block_type)
        if meta is None:
            return None
        return self.get_variant(block_type, meta.default_variant)

    def has_data_source(self, block_type: str) -> bool:
        meta = self.get_meta(block_type)
        return meta.has_data_source if meta else False

    def by_category(self, category: str) -> List[BlockMeta]:
        return [m for m in self._metas.values() if m.category == category]

    @staticmethod
    def categories() -> List[Dict[str, str]]:
        return [dict(c) for c in CATEGORIES]

    def default_config(self, block_type: str, variant_id: str) -> Dict[str, Any]:
        """Copie de la config du variant (DEFAULT_BLOCK_CONFIG si type/variant inconnus)."""
        variant = self.get_variant(block_type, variant_id)
        if variant is None:
            return copy.deepcopy(DEFAULT_BLOCK_CONFIG)
        return copy.deepcopy(variant.default_config)

    # ── Validation (à la construction, pas à chaque fusion) ─────────────────

    def validate_block(self, block: Block) -> Block:
        meta = self.get_meta(block.type)
        if meta is None:
            log.warning("Bloc %s : type inconnu %r", block.id, block.type)
            raise CatalogError(f"Bloc inconnu : {block.type!r}. Registry : {self.types()}")
        if block.variant not in meta.variants:
            log.warning("Bloc %s : variant %r non enregistré pour %r", block.id, block.variant, block.type)
            raise CatalogError(
                f"Variant {block.variant!r} non enregistré pour {block.type!r} (variants : {list(meta.variants)})"
            )
        return block

    def to_json(self) -> Dict[str, Any]:
        """Catalogue sérialisable (endpoint /catalog)."""
        return {
            "categories": self.categories(),
            "blocks": [
                {
                    "type": m.type,
                    "name": m.name,
                    "nameAr": m.name_ar,
                    "description": m.description,
                    "category": m.category,
                    "icon": m.icon,
                    "hasDataSource": m.has_data_source,
                    "defaultVariant": m.default_variant,
                    "variants": [
                        {"id": v.id, "name": v.name, "nameAr": v.name_ar, "defaultConfig": v.default_config}
                        for v in self.get_variants(m.type)
                    ],
                }
                for m in self._metas.values()
            ],
        }
