"""
BlockConfig — préoccupations indépendantes d'un bloc (display, image, text,
grid, card, + background/spacing/border/animation/visibility/custom).

Les configs circulent en dict JSON (camelCase) pour la fusion ; ces modèles
servent à typer une config résolue et le payload `custom` par type de bloc.
"""
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import Field

from .schemas import ComposerModel, BackgroundConfig

TextSize    = Literal["xs", "sm", "md", "lg", "xl", "2xl", "3xl", "4xl"]
SpacingSize = Literal["none", "xs", "sm", "md", "lg", "xl", "2xl"]
ShadowSize  = Literal["none", "sm", "md", "lg", "xl", "2xl"]
Radius      = Literal["none", "sm", "md", "lg", "xl", "2xl", "full"]

# Une valeur responsive non résolue est un dict ; résolue, c'est la valeur concrète
Responsive = Any


class DisplayConfig(ComposerModel):
    show_image: Optional[bool] = None
    show_title: Optional[bool] = None
    show_excerpt: Optional[bool] = None
    show_category: Optional[bool] = None
    show_author: Optional[bool] = None
    show_author_image: Optional[bool] = None
    show_date: Optional[bool] = None
    show_reading_time: Optional[bool] = None
    show_views: Optional[bool] = None
    show_comments: Optional[bool] = None
    show_share_buttons: Optional[bool] = None
    show_tags: Optional[bool] = None


class ImageConfig(ComposerModel):
    aspect_ratio: Optional[str] = None
    position: Optional[Literal["top", "bottom", "left", "right", "background", "overlay", "none"]] = None
    fit: Optional[Literal["cover", "contain", "fill", "none"]] = None
    lazy: Optional[bool] = None
    placeholder: Optional[Literal["blur", "empty", "shimmer"]] = None
    overlay: Optional[Dict[str, Any]] = None
    hover: Optional[Dict[str, Any]] = None


class TextConfig(ComposerModel):
    title_size: Optional[Responsive] = None
    title_lines: Optional[int] = None
    title_weight: Optional[Literal["normal", "medium", "semibold", "bold", "extrabold"]] = None
    excerpt_size: Optional[Responsive] = None
    excerpt_lines: Optional[int] = None
    meta_size: Optional[TextSize] = None
    alignment: Optional[Literal["start", "center", "end"]] = None


class GridConfig(ComposerModel):
    columns: Optional[Responsive] = None
    rows: Optional[int] = None
    gap: Optional[Responsive] = None
    column_gap: Optional[Responsive] = None
    row_gap: Optional[Responsive] = None


class CardConfig(ComposerModel):
    style: Optional[Literal["flat", "elevated", "outlined", "glass"]] = None
    shadow: Optional[ShadowSize] = None
    radius: Optional[Radius] = None
    padding: Optional[Responsive] = None
    hover_effect: Optional[Literal["none", "lift", "glow", "border"]] = None


class SpacingConfig(ComposerModel):
    margin: Optional[Responsive] = None
    padding: Optional[Responsive] = None


class BorderConfig(ComposerModel):
    width: Optional[float] = None
    style: Optional[Literal["solid", "dashed", "dotted"]] = None
    color: Optional[str] = None
    radius: Optional[Radius] = None
    sides: Optional[Dict[str, bool]] = None


class AnimationConfig(ComposerModel):
    enabled: bool = False
    type: Literal["fade", "slide-up", "slide-down", "slide-left", "slide-right", "zoom", "flip"] = "fade"
    duration: int = 300
    delay: Optional[int] = None
    stagger: Optional[int] = None
    trigger: Literal["load", "scroll", "hover"] = "scroll"
    once: Optional[bool] = None


class TimeWindow(ComposerModel):
    start: str  # HH:MM
    end: str    # HH:MM


class VisibilitySchedule(ComposerModel):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    days_of_week: Optional[List[int]] = None  # 0 = dimanche
    time_range: Optional[TimeWindow] = None


class VisibilityConfig(ComposerModel):
    desktop: bool = True
    tablet: bool = True
    mobile: bool = True
    logged_in_only: Optional[bool] = None
    guest_only: Optional[bool] = None
    schedule: Optional[VisibilitySchedule] = None


class BlockConfig(ComposerModel):
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    image: ImageConfig = Field(default_factory=ImageConfig)
    text: TextConfig = Field(default_factory=TextConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    card: CardConfig = Field(default_factory=CardConfig)
    background: Optional[BackgroundConfig] = None
    spacing: Optional[SpacingConfig] = None
    border: Optional[BorderConfig] = None
    animation: Optional[AnimationConfig] = None
    visibility: Optional[VisibilityConfig] = None
    custom: Optional[Dict[str, Any]] = None


# Config de base quand un type n'a pas de preset de variant
DEFAULT_BLOCK_CONFIG: Dict[str, Any] = {
    "display": {
        "showImage": True,
        "showTitle": True,
        "showExcerpt": True,
        "showCategory": True,
        "showAuthor": False,
        "showAuthorImage": False,
        "showDate": True,
        "showReadingTime": False,
        "showViews": False,
        "showComments": False,
        "showShareButtons": False,
        "showTags": False,
    },
    "image": {
        "aspectRatio": "16:9",
        "position": "top",
        "fit": "cover",
        "lazy": True,
        "placeholder": "shimmer",
        "hover": {"scale": 1.05},
    },
    "text": {
        "titleSize":   {"desktop": "lg", "tablet": "md", "mobile": "md"},
        "titleLines": 2,
        "titleWeight": "bold",
        "excerptSize": {"desktop": "sm", "tablet": "sm", "mobile": "xs"},
        "excerptLines": 2,
        "metaSize": "xs",
        "alignment": "start",
    },
    "grid": {
        "columns": {"desktop": 3, "tablet": 2, "mobile": 1},
        "gap":     {"desktop": "lg", "tablet": "md", "mobile": "md"},
    },
    "card": {
        "style": "elevated",
        "shadow": "md",
        "radius": "lg",
        "padding": {"desktop": "md", "tablet": "sm", "mobile": "sm"},
        "hoverEffect": "lift",
    },
}


# ── Payload `custom` typé par type de bloc ──────────────────────────────────

class GenericCustom(ComposerModel):
    """Fallback : clés arbitraires conservées (types inconnus ou futurs)."""
    block_type: Optional[str] = None


class SliderCustom(ComposerModel):
    block_type: Literal["article-slider", "article-carousel"] = "article-slider"
    slides_per_view: Optional[Responsive] = None
    height: Optional[Responsive] = None
    autoplay: bool = False
    autoplay_delay: int = 5000
    loop: bool = True
    show_arrows: bool = True
    show_dots: bool = True
    transition: Literal["slide", "fade"] = "slide"


class HeroCustom(ComposerModel):
    block_type: Literal["big-hero"] = "big-hero"
    layout: Optional[str] = None
    main_width: Optional[str] = None
    sidebar_width: Optional[str] = None
    sidebar_articles: Optional[int] = None
    autoplay_interval: Optional[int] = None
    overlay_opacity: Optional[float] = None
    featured_count: Optional[int] = None


class TickerCustom(ComposerModel):
    block_type: Literal["breaking-ticker", "currency-ticker", "stocks-ticker"] = "breaking-ticker"
    speed: int = 50
    direction: Literal["ltr", "rtl"] = "rtl"
    label: Optional[str] = None
    pause_on_hover: bool = True


class AdUnitCustom(ComposerModel):
    block_type: Literal["ad-unit", "ad-banner", "ad-native"] = "ad-unit"
    slot_id: Optional[str] = None
    size: Optional[str] = None
    provider: Optional[str] = None


_CUSTOM_MODELS: Dict[str, Type[ComposerModel]] = {
    "article-slider":   SliderCustom,
    "article-carousel": SliderCustom,
    "big-hero":         HeroCustom,
    "breaking-ticker":  TickerCustom,
    "currency-ticker":  TickerCustom,
    "stocks-ticker":    TickerCustom,
    "ad-unit":          AdUnitCustom,
    "ad-banner":        AdUnitCustom,
    "ad-native":        AdUnitCustom,
}

CustomPayload = Union[SliderCustom, HeroCustom, TickerCustom, AdUnitCustom, GenericCustom]


def parse_custom(block_type: str, data: Optional[Dict[str, Any]]) -> CustomPayload:
    """Retourne le payload `custom` typé pour `block_type` (GenericCustom sinon)."""
    model = _CUSTOM_MODELS.get(block_type, GenericCustom)
    return model.model_validate({**(data or {}), "blockType": block_type})
