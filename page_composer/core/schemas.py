"""
Schémas Pydantic du moteur de composition.
Structure : Template → Section[] → Block[] (+ régions, chacune avec ses propres blocs)

Le JSON échangé (chargement/sauvegarde, backend) est en camelCase ; les champs
Python sont en snake_case. Les champs inconnus sont conservés (extra="allow")
pour rester compatible avec des documents plus récents.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union, Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def generate_id(prefix: str = "") -> str:
    """Identifiant stable unique : "{prefix}_{hex}"."""
    token = uuid.uuid4().hex[:16]
    return f"{prefix}_{token}" if prefix else token


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ComposerModel(BaseModel):
    """Base commune : alias camelCase, champs inconnus conservés."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_json(self) -> Dict[str, Any]:
        """Dict JSON-compatible (camelCase, sans les None)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ── Data source ─────────────────────────────────────────────────────────────

DataSourceMode = Literal[
    "latest", "category", "categories", "tag", "tags", "author", "authors",
    "manual", "trending", "featured", "breaking", "related", "mixed",
]
# Modes admis pour une sous-source de "mixed" (pas de récursion)
MixedSourceMode = Literal[
    "latest", "category", "categories", "tag", "tags", "author", "authors",
    "manual", "trending", "featured", "breaking", "related",
]
SortBy    = Literal["publishedAt", "updatedAt", "views", "comments", "shares", "manual", "random"]
SortOrder = Literal["asc", "desc"]
DatePreset = Literal["today", "yesterday", "this_week", "this_month", "this_year"]


class DateRange(ComposerModel):
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    preset: Optional[DatePreset] = None


class DataSourceFilters(ComposerModel):
    has_image: Optional[bool] = None
    has_video: Optional[bool] = None
    has_gallery: Optional[bool] = None
    min_reading_time: Optional[int] = None
    max_reading_time: Optional[int] = None
    language: Optional[str] = None
    status: Optional[Literal["published", "featured", "pinned"]] = None


class MixedSource(ComposerModel):
    """Sous-source d'un data source "mixed" (pondérée)."""
    mode: MixedSourceMode
    category_ids: Optional[List[str]] = None
    tag_ids: Optional[List[str]] = None
    author_ids: Optional[List[str]] = None
    weight: Optional[float] = None


class DataSource(ComposerModel):
    """Description déclarative du contenu affiché par un bloc."""
    mode: DataSourceMode = "latest"
    category_ids: Optional[List[str]] = None
    tag_ids: Optional[List[str]] = None
    author_ids: Optional[List[str]] = None
    article_ids: Optional[List[str]] = None
    limit: int = Field(default=6, ge=0)
    offset: Optional[int] = None
    sort_by: SortBy = "publishedAt"
    sort_order: SortOrder = "desc"
    exclude_ids: Optional[List[str]] = None
    exclude_from_other: bool = False
    date_range: Optional[DateRange] = None
    filters: Optional[DataSourceFilters] = None
    mixed_sources: Optional[List[MixedSource]] = None


def default_data_source() -> DataSource:
    return DataSource(mode="latest", limit=6, sort_by="publishedAt", sort_order="desc")


# ── Blocs ───────────────────────────────────────────────────────────────────

class GridSpan(ComposerModel):
    start: int = 1
    span: int = 12


class GridArea(ComposerModel):
    column: Optional[GridSpan] = None
    row: Optional[GridSpan] = None


class Block(ComposerModel):
    """
    Bloc : type + variant + overrides de config (partiels).
    `config` reste un dict JSON brut : il est fusionné sur la config du variant
    au moment du rendu (voir resolver.resolve_block_config).
    """
    id: str = Field(default_factory=lambda: generate_id("block"))
    type: str = "article-grid"
    variant: str = "grid-1"
    name: Optional[str] = None
    name_ar: Optional[str] = None
    data_source: Optional[DataSource] = None
    config: Dict[str, Any] = Field(default_factory=dict)
    responsive: Optional[Dict[str, Dict[str, Any]]] = None
    grid_area: Optional[GridArea] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    is_locked: Optional[bool] = None


# ── Sections ────────────────────────────────────────────────────────────────

SectionHeaderStyle = Literal["simple", "bordered", "decorated", "gradient", "badge", "underlined", "boxed"]
ContainerType      = Literal["full", "wide", "normal", "narrow", "custom"]

CONTAINER_WIDTHS: Dict[str, str] = {
    "full":   "100%",
    "wide":   "1536px",
    "normal": "1280px",
    "narrow": "1024px",
    "custom": "var(--container-width)",
}


class SectionHeader(ComposerModel):
    enabled: bool = True
    title: str = ""
    title_ar: str = ""
    subtitle: Optional[str] = None
    subtitle_ar: Optional[str] = None
    style: SectionHeaderStyle = "simple"
    icon: Optional[str] = None
    show_more: bool = False
    more_text: Optional[str] = None
    more_text_ar: Optional[str] = None
    more_link: Optional[str] = None
    alignment: Literal["start", "center", "end"] = "start"
    accent_color: Optional[str] = None


class BackgroundConfig(ComposerModel):
    type: Literal["none", "color", "gradient", "image", "pattern", "video"] = "none"
    color: Optional[str] = None
    gradient: Optional[Dict[str, Any]] = None
    image: Optional[Dict[str, Any]] = None
    pattern: Optional[str] = None
    overlay: Optional[Dict[str, Any]] = None


class Section(ComposerModel):
    """Section : conteneur ordonné de blocs. `order` == index dans le template."""
    id: str = Field(default_factory=lambda: generate_id("section"))
    name: str = "New Section"
    name_ar: str = "قسم جديد"
    header: Optional[SectionHeader] = None
    layout: Optional[Dict[str, Any]] = None
    container: ContainerType = "normal"
    custom_width: Optional[str] = None
    grid: Optional[Dict[str, Any]] = None
    background: Optional[BackgroundConfig] = None
    padding: Optional[Dict[str, Any]] = None
    margin: Optional[Dict[str, Any]] = None
    border: Optional[Dict[str, Any]] = None
    blocks: List[Block] = Field(default_factory=list)
    visibility: Optional[Dict[str, Any]] = None
    order: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    is_collapsible: Optional[bool] = None
    is_collapsed: Optional[bool] = None


# Valeurs structurelles héritées par toute nouvelle section
DEFAULT_SECTION: Dict[str, Any] = {
    "container": "normal",
    "grid": {
        "columns": {"desktop": 12, "tablet": 12, "mobile": 12},
        "gap":     {"desktop": "lg", "tablet": "md", "mobile": "md"},
    },
    "padding": {
        "desktop": {"top": "xl", "bottom": "xl", "left": "md", "right": "md"},
        "tablet":  {"top": "lg", "bottom": "lg", "left": "md", "right": "md"},
        "mobile":  {"top": "md", "bottom": "md", "left": "sm", "right": "sm"},
    },
    "margin": {
        "desktop": {"top": "none", "bottom": "none"},
    },
}


# ── Template ────────────────────────────────────────────────────────────────

TemplateType = Literal["home", "category", "tag", "author", "search", "article", "page", "error", "archive", "custom"]
LayoutType   = Literal["full-width", "sidebar-right", "sidebar-left", "sidebar-both", "centered"]


class RegionConfig(ComposerModel):
    enabled: bool = False
    sticky: Optional[bool] = None
    sticky_offset: Optional[int] = None
    blocks: Optional[List[Block]] = None
    class_name: Optional[str] = None


class TemplateRegions(ComposerModel):
    header: RegionConfig = Field(default_factory=lambda: RegionConfig(enabled=True))
    top_bar: Optional[RegionConfig] = None
    breaking_news: Optional[RegionConfig] = None
    before_content: Optional[RegionConfig] = None
    sidebar: Optional[RegionConfig] = None
    sidebar_secondary: Optional[RegionConfig] = None
    after_content: Optional[RegionConfig] = None
    footer: RegionConfig = Field(default_factory=lambda: RegionConfig(enabled=True))
    floating: Optional[RegionConfig] = None


class LayoutConfig(ComposerModel):
    type: LayoutType = "full-width"
    sidebar_width: Optional[str] = None
    sidebar_secondary_width: Optional[str] = None
    max_width: Optional[str] = None
    min_height: Optional[str] = None


class TemplateSettings(ComposerModel):
    show_breaking_news: bool = True
    show_breadcrumb: bool = True
    show_last_updated: bool = False
    infinite_scroll: bool = False
    load_more_button: bool = True
    sticky_header: bool = True
    sticky_sidebar: bool = True
    back_to_top: bool = True
    reading_progress: bool = False


class TemplateSEO(ComposerModel):
    title_template: str = "{title}"
    title_template_ar: Optional[str] = None
    description_template: Optional[str] = None
    description_template_ar: Optional[str] = None
    og_image: Optional[str] = None
    no_index: Optional[bool] = None
    canonical: Optional[str] = None


class Template(ComposerModel):
    """Document racine d'une page composée."""
    id: str = Field(default_factory=lambda: generate_id("template"))
    name: str = ""
    name_ar: str = ""
    description: str = ""
    description_ar: str = ""
    type: TemplateType = "page"
    extends: Optional[str] = None
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    regions: TemplateRegions = Field(default_factory=TemplateRegions)
    sections: List[Section] = Field(default_factory=list)
    settings: TemplateSettings = Field(default_factory=TemplateSettings)
    seo: Optional[TemplateSEO] = None
    styles: Optional[Dict[str, Any]] = None
    preview: str = ""
    version: str = "1.0.0"
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
    created_by: Optional[str] = None
    is_default: bool = False
    is_active: bool = True
    is_locked: Optional[bool] = None
    tenant_id: Optional[str] = None

    def find_section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)

    def section_index(self, section_id: str) -> int:
        return next((i for i, s in enumerate(self.sections) if s.id == section_id), -1)

    def renumber_sections(self) -> None:
        """Réaligne `order` sur l'index de chaque section."""
        for i, section in enumerate(self.sections):
            section.order = i

    def all_ids(self) -> List[str]:
        """Tous les ids de sections et blocs (sections + régions), dans l'ordre du document."""
        ids: List[str] = []
        for section in self.sections:
            ids.append(section.id)
            ids.extend(b.id for b in section.blocks)
        for name in TemplateRegions.model_fields:
            region = getattr(self.regions, name)
            if region is not None and region.blocks:
                ids.extend(b.id for b in region.blocks)
        return ids


# ── Résultats de requête ────────────────────────────────────────────────────

class FetchResult(ComposerModel):
    """Résultat canonique d'une requête : {items, total, hasMore}."""
    items: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False

    @classmethod
    def empty(cls) -> "FetchResult":
        return cls(items=[], total=0, has_more=False)

    def item_ids(self) -> List[str]:
        return [str(i["id"]) for i in self.items if i.get("id") is not None]


# ── Sélection / drag & drop (état de session) ───────────────────────────────

class TemplateRef(ComposerModel):
    kind: Literal["template"] = "template"
    id: str


class SectionRef(ComposerModel):
    kind: Literal["section"] = "section"
    id: str


class BlockRef(ComposerModel):
    kind: Literal["block"] = "block"
    id: str
    section_id: str


SelectedElement = Annotated[
    Union[TemplateRef, SectionRef, BlockRef],
    Field(discriminator="kind"),
]


class DraggedItem(ComposerModel):
    kind: Literal["block", "section"]
    id: Optional[str] = None
    section_id: Optional[str] = None
    index: Optional[int] = None
    data: Optional[Dict[str, Any]] = None


class DropTarget(ComposerModel):
    section_id: Optional[str] = None
    index: int = 0


class HistoryEntry(ComposerModel):
    id: str = Field(default_factory=lambda: generate_id("history"))
    timestamp: float
    action: str
    action_ar: str = ""
    state: Template


class SessionError(ComposerModel):
    id: str = Field(default_factory=lambda: generate_id("error"))
    message: str
    message_ar: str = ""
