"""
API publique du moteur de composition.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from .core.block_config import BlockConfig
from .core.responsive import Viewport, resolve_tree
from .core.schemas import Block, FetchResult, Section, Template
from .data_source import RequestsTransport, Transport, prefetch_template
from .registry import BlockCatalog, default_catalog
from .resolver import (
    block_is_visible, is_visible, merged_block_config, resolve_block_config, resolve_section_layout,
    typed_block_config,
)


class PageComposer:
    """
    Compose une page prête à rendre : configs résolues par viewport +
    contenus préchargés et dédoublonnés.

    Usage:
        >>> composer = PageComposer(transport=MockTransport())
        >>> page = asyncio.run(composer.compose(template, viewport="mobile"))
        >>> page["sections"][0]["blocks"][0]["items"]
    """

    def __init__(self, catalog: Optional[BlockCatalog] = None, transport: Optional[Transport] = None):
        """
        Args:
            catalog: Catalogue des blocs (catalogue par défaut sinon)
            transport: Transport async vers le backend de contenus (requests sinon)
        """
        self.catalog = catalog or default_catalog()
        self.transport = transport or RequestsTransport()

    def resolve_block(self, block: Block, viewport: Viewport = "desktop") -> Dict[str, Any]:
        return resolve_block_config(block, self.catalog, viewport)

    def typed_block(self, block: Block, viewport: Viewport = "desktop") -> BlockConfig:
        return typed_block_config(block, self.catalog, viewport)

    def block_visible(
        self,
        block: Block,
        viewport: Viewport = "desktop",
        logged_in: bool = False,
        now: Optional[datetime] = None,
    ) -> bool:
        return block_is_visible(block, self.catalog, viewport, logged_in, now)

    def resolve_section(self, section: Section, viewport: Viewport = "desktop") -> Dict[str, Any]:
        return resolve_section_layout(section, viewport)

    async def prefetch(self, template: Template, now: Optional[datetime] = None) -> Dict[str, FetchResult]:
        return await prefetch_template(template, self.transport, now)

    async def compose(
        self,
        template: Template,
        viewport: Viewport = "desktop",
        logged_in: bool = False,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Compose le template pour un viewport.

        Les données sont préchargées pour tous les blocs (l'ordre de la page
        fixe la priorité de dédoublonnage), puis chaque section et bloc reçoit
        sa config concrète et son drapeau de visibilité.

        Returns:
            dict JSON-compatible {id, type, layout, settings, sections: [...]}
        """
        data = await self.prefetch(template, now)
        sections = []
        for section in sorted(template.sections, key=lambda s: s.order):
            blocks = []
            for block in section.blocks:
                config = merged_block_config(block, self.catalog, viewport)
                result = data.get(block.id)
                blocks.append({
                    "id": block.id,
                    "type": block.type,
                    "variant": block.variant,
                    "config": resolve_tree(config, viewport),
                    "visible": self.block_visible(block, viewport, logged_in, now),
                    "items": result.items if result else [],
                    "total": result.total if result else 0,
                    "hasMore": result.has_more if result else False,
                })
            sections.append({
                "id": section.id,
                "name": section.name,
                "nameAr": section.name_ar,
                "header": section.header.to_json() if section.header else None,
                "layout": self.resolve_section(section, viewport),
                "visible": is_visible(section.visibility, viewport, logged_in, now),
                "blocks": blocks,
            })
        return {
            "id": template.id,
            "type": template.type,
            "viewport": viewport,
            "layout": template.layout.to_json(),
            "settings": template.settings.to_json(),
            "sections": sections,
        }
