"""
Fusion profonde des configurations.

base (variant) + override (instance) → nouvelle config.
  - dict + dict            → fusion récursive
  - listes, scalaires      → l'override remplace
  - valeurs responsive     → remplacées d'un bloc, jamais fusionnées
  - clés NON_RESPONSIVE_KEYS (visibility) → toujours fusionnées champ par champ,
    même si leur forme {desktop, tablet, mobile} ressemble à une valeur responsive
Aucune des deux entrées n'est modifiée.
"""
import copy
from typing import Any, Dict, Mapping, Optional

from .responsive import NON_RESPONSIVE_KEYS, is_responsive


def _mergeable(key: str, value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    return key in NON_RESPONSIVE_KEYS or not is_responsive(value)


def deep_merge(base: Optional[Mapping[str, Any]], override: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Fusionne `override` dans une copie de `base`."""
    result: Dict[str, Any] = copy.deepcopy(dict(base or {}))
    for key, value in (override or {}).items():
        current = result.get(key)
        if _mergeable(key, value) and _mergeable(key, current):
            result[key] = deep_merge(current, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def merge_all(*configs: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Fusionne une cascade de configs de gauche à droite (la dernière gagne)."""
    result: Dict[str, Any] = {}
    for cfg in configs:
        result = deep_merge(result, cfg)
    return result
