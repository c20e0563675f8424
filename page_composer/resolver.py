"""
Résolution de config côté rendu.

Bloc : config du variant → overrides d'instance → overrides `responsive`
du viewport → valeurs responsive résolues.
Section : valeurs structurelles par défaut → grid/padding/margin locaux.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from .core.block_config import BlockConfig, VisibilityConfig
from .core.merge import deep_merge, merge_all
from .core.responsive import Viewport, resolve_tree
from .core.schemas import Block, CONTAINER_WIDTHS, DEFAULT_SECTION, Section
from .registry import BlockCatalog, default_catalog

# Overrides `Block.responsive` appliqués par viewport, dans l'ordre
_RESPONSIVE_OVERRIDES = {
    "desktop": (),
    "tablet":  ("tablet",),
    "mobile":  ("tablet", "mobile"),
}


def merged_block_config(
    block: Block,
    catalog: Optional[BlockCatalog] = None,
    viewport: Viewport = "desktop",
) -> Dict[str, Any]:
    """Config fusionnée, valeurs responsive encore non résolues."""
    catalog = catalog or default_catalog()
    if viewport not in _RESPONSIVE_OVERRIDES:
        raise ValueError(f"Viewport inconnu : {viewport!r}")

    config = deep_merge(catalog.default_config(block.type, block.variant), block.config)
    for key in _RESPONSIVE_OVERRIDES[viewport]:
        override = (block.responsive or {}).get(key)
        if override:
            config = deep_merge(config, override)
    return config


def resolve_block_config(
    block: Block,
    catalog: Optional[BlockCatalog] = None,
    viewport: Viewport = "desktop",
) -> Dict[str, Any]:
    """Config concrète d'un bloc pour un viewport (dict camelCase)."""
    return resolve_tree(merged_block_config(block, catalog, viewport), viewport)


def typed_block_config(
    block: Block,
    catalog: Optional[BlockCatalog] = None,
    viewport: Viewport = "desktop",
) -> BlockConfig:
    return BlockConfig.model_validate(resolve_block_config(block, catalog, viewport))


def resolve_section_layout(section: Section, viewport: Viewport = "desktop") -> Dict[str, Any]:
    """
    Layout concret d'une section : container, largeur max, grid, padding, margin.

    Les valeurs locales de la section sont fusionnées sur DEFAULT_SECTION.
    """
    local = {
        "container": section.container,
        "grid": section.grid,
        "padding": section.padding,
        "margin": section.margin,
    }
    merged = merge_all(DEFAULT_SECTION, {k: v for k, v in local.items() if v is not None})
    layout = resolve_tree(merged, viewport)

    container = layout.get("container", "normal")
    if container == "custom" and section.custom_width:
        layout["maxWidth"] = section.custom_width
    else:
        layout["maxWidth"] = CONTAINER_WIDTHS.get(container, CONTAINER_WIDTHS["normal"])
    return layout


# ── Visibilité ──────────────────────────────────────────────────────────────

def _parse_dt(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _in_time_window(hhmm: str, start: str, end: str) -> bool:
    if start <= end:
        return start <= hhmm <= end
    # Fenêtre qui passe minuit (ex. 22:00 → 06:00)
    return hhmm >= start or hhmm <= end


def is_visible(
    visibility: Optional[Mapping[str, Any]],
    viewport: Viewport = "desktop",
    logged_in: bool = False,
    now: Optional[datetime] = None,
) -> bool:
    """
    Évalue la préoccupation `visibility` d'un bloc ou d'une section.

    Args:
        visibility: dict camelCase (desktop/tablet/mobile, loggedInOnly, guestOnly, schedule)
        viewport: viewport courant
        logged_in: visiteur connecté ou non
        now: horloge UTC, injectable pour les tests

    Returns:
        True si l'élément doit être affiché
    """
    if not visibility:
        return True
    if viewport not in _RESPONSIVE_OVERRIDES:
        raise ValueError(f"Viewport inconnu : {viewport!r}")
    vis = VisibilityConfig.model_validate(visibility)

    if not getattr(vis, viewport):
        return False
    if vis.logged_in_only and not logged_in:
        return False
    if vis.guest_only and logged_in:
        return False

    schedule = vis.schedule
    if schedule is None:
        return True

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if schedule.start_date and now < _parse_dt(schedule.start_date):
        return False
    if schedule.end_date and now > _parse_dt(schedule.end_date):
        return False
    if schedule.days_of_week is not None:
        # weekday() : lundi=0 ; ici dimanche=0
        if (now.weekday() + 1) % 7 not in schedule.days_of_week:
            return False
    if schedule.time_range is not None:
        hhmm = now.strftime("%H:%M")
        if not _in_time_window(hhmm, schedule.time_range.start, schedule.time_range.end):
            return False
    return True


def block_is_visible(
    block: Block,
    catalog: Optional[BlockCatalog] = None,
    viewport: Viewport = "desktop",
    logged_in: bool = False,
    now: Optional[datetime] = None,
) -> bool:
    config = merged_block_config(block, catalog, viewport)
    return is_visible(config.get("visibility"), viewport, logged_in, now)
