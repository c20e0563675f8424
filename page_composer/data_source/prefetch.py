"""
Préchargement de tous les data sources d'un template, avec dédoublonnage
inter-blocs (excludeFromOther).

Les bindings sont traités strictement dans l'ordre reçu : l'ordre des blocs
sur la page décide quel bloc obtient un article en premier.
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..core.schemas import ComposerModel, DataSource, FetchResult, Template
from .fetch import Transport, fetch_source

log = logging.getLogger(__name__)


class Binding(ComposerModel):
    block_id: str
    data_source: DataSource


def collect_bindings(template: Template) -> List[Binding]:
    """
    Couples (bloc, data source) dans l'ordre de la page : sections par `order`,
    blocs par index. Copies profondes : le prefetch travaille sur un instantané.
    """
    bindings: List[Binding] = []
    for section in sorted(template.sections, key=lambda s: s.order):
        for block in section.blocks:
            if block.data_source is not None:
                bindings.append(Binding(block_id=block.id, data_source=block.data_source.model_copy(deep=True)))
    return bindings


def _with_exclusions(source: DataSource, displayed: Dict[str, None]) -> DataSource:
    if not source.exclude_from_other:
        return source
    exclude = list(source.exclude_ids or [])
    exclude.extend(i for i in displayed if i not in exclude)
    return source.model_copy(update={"exclude_ids": exclude})


async def prefetch_all(
    bindings: Iterable[Binding],
    transport: Transport,
    now: Optional[datetime] = None,
) -> Dict[str, FetchResult]:
    """
    Résout chaque binding l'un après l'autre.

    Un binding excludeFromOther exclut tout ce qui a déjà été affiché par les
    bindings précédents ; ses propres résultats rejoignent ensuite l'ensemble
    affiché. Un échec de récupération donne un résultat vide pour ce bloc seulement.
    """
    results: Dict[str, FetchResult] = {}
    # Ids déjà affichés, dans l'ordre d'apparition
    displayed: Dict[str, None] = {}

    for binding in bindings:
        source = _with_exclusions(binding.data_source, displayed)
        result = await fetch_source(source, transport, now)
        results[binding.block_id] = result
        displayed.update(dict.fromkeys(result.item_ids()))

    log.info("Prefetch : %d blocs, %d articles distincts", len(results), len(displayed))
    return results


async def prefetch_template(
    template: Template,
    transport: Transport,
    now: Optional[datetime] = None,
) -> Dict[str, FetchResult]:
    return await prefetch_all(collect_bindings(template), transport, now)
