"""
Résolution des valeurs responsive.

Une valeur responsive est un dict {"desktop": T, "tablet"?: T, "mobile"?: T}.
Fallback : mobile → tablet → desktop ; tablet → desktop ; desktop → desktop.
"""
from typing import Any, Dict, Iterable, Literal, Mapping, Optional

from ..errors import ResponsiveValueError

Viewport = Literal["desktop", "tablet", "mobile"]

VIEWPORTS = ("desktop", "tablet", "mobile")

_FALLBACK: Dict[str, tuple] = {
    "desktop": ("desktop",),
    "tablet":  ("tablet", "desktop"),
    "mobile":  ("mobile", "tablet", "desktop"),
}

# Clés dont le contenu a la forme desktop/tablet/mobile sans être responsive
NON_RESPONSIVE_KEYS = frozenset({"visibility"})


def is_responsive(value: Any) -> bool:
    """Vrai si `value` est un record responsive (clés viewport uniquement, desktop présent)."""
    return (
        isinstance(value, Mapping)
        and "desktop" in value
        and all(k in VIEWPORTS for k in value)
    )


def _looks_responsive(value: Any) -> bool:
    return isinstance(value, Mapping) and bool(value) and all(k in VIEWPORTS for k in value)


def responsive(desktop: Any, tablet: Any = None, mobile: Any = None) -> Dict[str, Any]:
    """Construit une valeur responsive ; `desktop` est obligatoire."""
    if desktop is None:
        raise ResponsiveValueError("Une valeur responsive exige une valeur desktop")
    value = {"desktop": desktop}
    if tablet is not None:
        value["tablet"] = tablet
    if mobile is not None:
        value["mobile"] = mobile
    return value


def resolve(value: Any, viewport: Viewport = "desktop") -> Any:
    """
    Retourne la valeur concrète pour le viewport.
    Une valeur non responsive est retournée telle quelle (idempotent).
    """
    if viewport not in _FALLBACK:
        raise ValueError(f"Viewport inconnu : {viewport!r}")
    if not _looks_responsive(value):
        return value
    if value.get("desktop") is None:
        raise ResponsiveValueError(f"Valeur responsive sans desktop : {dict(value)!r}")
    for key in _FALLBACK[viewport]:
        candidate = value.get(key)
        if candidate is not None:
            return candidate
    return value["desktop"]


def resolve_tree(
    config: Any,
    viewport: Viewport = "desktop",
    skip: Iterable[str] = NON_RESPONSIVE_KEYS,
) -> Any:
    """Résout récursivement toutes les valeurs responsive d'une config (dict/list)."""
    skip = frozenset(skip)
    return _resolve_tree(config, viewport, skip)


def _resolve_tree(node: Any, viewport: Viewport, skip: frozenset) -> Any:
    if _looks_responsive(node):
        return _resolve_tree(resolve(node, viewport), viewport, skip)
    if isinstance(node, Mapping):
        return {
            k: (dict(v) if k in skip and isinstance(v, Mapping) else _resolve_tree(v, viewport, skip))
            for k, v in node.items()
        }
    if isinstance(node, list):
        return [_resolve_tree(v, viewport, skip) for v in node]
    return node


def resolve_or(value: Any, viewport: Viewport, default: Optional[Any] = None) -> Any:
    """Comme resolve(), mais retourne `default` si la valeur est absente."""
    if value is None:
        return default
    resolved = resolve(value, viewport)
    return default if resolved is None else resolved
