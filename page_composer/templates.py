"""
Templates intégrés (home, category, article) et fabriques de templates.

Chaque appel reconstruit un template neuf : les appelants peuvent le muter
sans affecter les autres.
"""
from typing import Any, Callable, Dict, List, Optional

from .core.merge import deep_merge
from .core.schemas import (
    DEFAULT_SECTION, Template, TemplateSettings, generate_id, utc_now_iso,
)

_FULL_ROW = {"column": {"start": 1, "span": 12}}


def _section(section_id: str, name: str, name_ar: str, order: int, blocks: List[Dict[str, Any]],
             **extra: Any) -> Dict[str, Any]:
    section = deep_merge(DEFAULT_SECTION, {
        "id": section_id,
        "name": name,
        "nameAr": name_ar,
        "order": order,
        "blocks": blocks,
    })
    return deep_merge(section, extra)


def _source(mode: str, limit: int, sort_by: str = "publishedAt", **extra: Any) -> Dict[str, Any]:
    return {"mode": mode, "limit": limit, "sortBy": sort_by, "sortOrder": "desc", **extra}


def home_template() -> Template:
    return Template.model_validate({
        "id": "home-default",
        "name": "Default Home",
        "nameAr": "الرئيسية الافتراضية",
        "description": "Default homepage template",
        "descriptionAr": "قالب الصفحة الرئيسية الافتراضي",
        "type": "home",
        "isDefault": True,
        "preview": "/templates/home-default.png",
        "layout": {"type": "sidebar-right", "sidebarWidth": "320px"},
        "regions": {
            "header": {"enabled": True},
            "breakingNews": {"enabled": True},
            "sidebar": {"enabled": True, "sticky": True},
            "footer": {"enabled": True},
        },
        "sections": [
            _section("hero-section", "Hero Section", "القسم الرئيسي", 0, [{
                "id": "hero-block",
                "type": "big-hero",
                "variant": "hero-classic",
                "config": {"display": {"showAuthor": True}},
                "dataSource": _source("featured", 5, excludeFromOther=True),
                "gridArea": _FULL_ROW,
            }], padding={"desktop": {"top": "lg", "bottom": "lg", "left": "md", "right": "md"}}),
            _section("latest-section", "Latest News", "آخر الأخبار", 1, [{
                "id": "latest-grid",
                "type": "article-grid",
                "variant": "grid-1",
                "config": {},
                "dataSource": _source("latest", 6, excludeFromOther=True),
                "gridArea": _FULL_ROW,
            }], header={
                "enabled": True, "title": "Latest News", "titleAr": "آخر الأخبار",
                "style": "bordered", "showMore": True, "moreLink": "/latest",
            }),
            _section("trending-section", "Trending", "الأكثر قراءة", 2, [{
                "id": "trending-slider",
                "type": "article-slider",
                "variant": "slider-3",
                "config": {"custom": {"autoplay": True}},
                "dataSource": _source("trending", 8, sort_by="views"),
                "gridArea": _FULL_ROW,
            }], header={
                "enabled": True, "title": "Most Read", "titleAr": "الأكثر قراءة", "style": "decorated",
            }, background={"type": "color", "color": "#f8fafc"}),
        ],
    })


def category_template() -> Template:
    return Template.model_validate({
        "id": "category-default",
        "name": "Default Category",
        "nameAr": "القسم الافتراضي",
        "description": "Default category page template",
        "descriptionAr": "قالب صفحة القسم الافتراضي",
        "type": "category",
        "isDefault": True,
        "preview": "/templates/category-default.png",
        "layout": {"type": "sidebar-right", "sidebarWidth": "320px"},
        "regions": {
            "header": {"enabled": True},
            "sidebar": {"enabled": True, "sticky": True},
            "footer": {"enabled": True},
        },
        "settings": {"showBreadcrumb": True, "loadMoreButton": True},
        "sections": [
            _section("category-hero", "Category Hero", "بطل القسم", 0, [{
                "id": "category-featured",
                "type": "article-grid",
                "variant": "grid-6",
                "config": {"display": {"showCategory": False, "showAuthor": True}},
                # categoryIds fournis par la page au rendu
                "dataSource": _source("category", 5),
                "gridArea": _FULL_ROW,
            }], padding={"desktop": {"top": "lg", "bottom": "lg", "left": "md", "right": "md"}}),
            _section("category-articles", "Category Articles", "مقالات القسم", 1, [{
                "id": "category-grid",
                "type": "article-grid",
                "variant": "grid-1",
                "config": {"display": {"showCategory": False}},
                # Les 5 premiers sont déjà dans le hero
                "dataSource": _source("category", 12, offset=5),
                "gridArea": _FULL_ROW,
            }]),
        ],
    })


def article_template() -> Template:
    return Template.model_validate({
        "id": "article-default",
        "name": "Default Article",
        "nameAr": "المقال الافتراضي",
        "description": "Default article page template",
        "descriptionAr": "قالب صفحة المقال الافتراضي",
        "type": "article",
        "isDefault": True,
        "preview": "/templates/article-default.png",
        "layout": {"type": "sidebar-right", "sidebarWidth": "320px"},
        "regions": {
            "header": {"enabled": True},
            "sidebar": {"enabled": True, "sticky": True},
            "footer": {"enabled": True},
        },
        "settings": {"showBreadcrumb": True, "readingProgress": True},
        "sections": [
            _section("related-articles", "Related Articles", "مقالات ذات صلة", 0, [{
                "id": "related-grid",
                "type": "article-grid",
                "variant": "grid-2",
                "config": {"grid": {"gap": {"desktop": "md", "tablet": "md", "mobile": "sm"}}},
                "dataSource": _source("related", 4),
                "gridArea": _FULL_ROW,
            }], header={
                "enabled": True, "title": "Related Articles", "titleAr": "مقالات ذات صلة", "style": "bordered",
            }),
        ],
    })


# Type de page → template par défaut
DEFAULT_TEMPLATES: Dict[str, Callable[[], Template]] = {
    "home":     home_template,
    "category": category_template,
    "article":  article_template,
    "tag":      category_template,
    "author":   category_template,
    "search":   category_template,
    "archive":  category_template,
    "page":     article_template,
    "error":    article_template,
    "custom":   home_template,
}

_BUILTINS = (home_template, category_template, article_template)


def default_template_for(page_type: str) -> Optional[Template]:
    factory = DEFAULT_TEMPLATES.get(page_type)
    return factory() if factory else None


def builtin_templates() -> List[Template]:
    return [factory() for factory in _BUILTINS]


def find_builtin(template_id: str) -> Optional[Template]:
    return next((t for t in builtin_templates() if t.id == template_id), None)


def new_template(page_type: str = "page", name: str = "New Template", name_ar: str = "قالب جديد") -> Template:
    """Template vide avec réglages par défaut et layout pleine largeur."""
    return Template(
        name=name,
        name_ar=name_ar,
        type=page_type,
        settings=TemplateSettings(),
        sections=[],
    )


def duplicate_template(template: Template, name: Optional[str] = None) -> Template:
    """Copie avec nouveaux ids (template, sections, blocs) ; jamais marquée par défaut."""
    copy = template.model_copy(deep=True)
    copy.id = generate_id("template")
    copy.name = name or f"{template.name} (Copy)"
    copy.name_ar = f"{template.name_ar} (نسخة)" if template.name_ar else ""
    copy.is_default = False
    copy.created_at = copy.updated_at = utc_now_iso()
    for section in copy.sections:
        section.id = generate_id("section")
        for block in section.blocks:
            block.id = generate_id("block")
    for region_name in type(copy.regions).model_fields:
        region = getattr(copy.regions, region_name)
        if region is not None and region.blocks:
            for block in region.blocks:
                block.id = generate_id("block")
    copy.renumber_sections()
    return copy


def prepare_for_page(template: Template, category_ids: Optional[List[str]] = None,
                     article_id: Optional[str] = None) -> Template:
    """
    Copie du template liée au contexte de la page : les blocs category sans
    ids reçoivent ceux de la page, les blocs related excluent l'article courant.
    """
    copy = template.model_copy(deep=True)
    for section in copy.sections:
        for block in section.blocks:
            source = block.data_source
            if source is None:
                continue
            if source.mode in ("category", "categories") and not source.category_ids and category_ids:
                source.category_ids = list(category_ids)
            if source.mode == "related" and article_id:
                source.exclude_ids = list(dict.fromkeys([*(source.exclude_ids or []), article_id]))
                if category_ids and not source.category_ids:
                    source.category_ids = list(category_ids)
    return copy
