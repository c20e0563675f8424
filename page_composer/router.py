"""
Router FastAPI — endpoints page_composer.

GET    /page-composer/catalog                    → catalogue des blocs + variants
GET    /page-composer/templates?type=            → templates enregistrés (+ intégrés)
GET    /page-composer/templates/for/{page_type}  → template par défaut d'un type de page
GET    /page-composer/templates/{id}             → un template
PUT    /page-composer/templates/{id}             → enregistre (upsert) un template
DELETE /page-composer/templates/{id}             → supprime un template
POST   /page-composer/templates/{id}/duplicate   → copie avec nouveaux ids
POST   /page-composer/resolve-config             → config concrète d'un bloc pour un viewport
POST   /page-composer/query                      → paramètres, query string, cache tags, revalidate
"""
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .core.responsive import Viewport
from .core.schemas import Block, ComposerModel, DataSource, Template
from .data_source import describe_query
from .errors import CatalogError, TemplateNotFound
from .registry import BlockCatalog, default_catalog
from .resolver import resolve_block_config
from .storage import TemplateStore, db_list_templates, get_db
from .templates import builtin_templates, duplicate_template

log = logging.getLogger(__name__)

router = APIRouter(prefix="/page-composer", tags=["page_composer"])


class ResolveConfigRequest(ComposerModel):
    block: Block
    viewport: Viewport = "desktop"


class QueryRequest(ComposerModel):
    data_source: DataSource
    now: Optional[datetime] = None


def get_catalog() -> BlockCatalog:
    return default_catalog()


def get_store(db: Session = Depends(get_db)) -> TemplateStore:
    return TemplateStore(db)


def _validate_blocks(template: Template, catalog: BlockCatalog) -> None:
    for section in template.sections:
        for block in section.blocks:
            catalog.validate_block(block)


# ── Catalogue ─────────────────────────────────────────────────────────────

@router.get("/catalog", summary="Catalogue des blocs et de leurs variants")
def block_catalog(catalog: BlockCatalog = Depends(get_catalog)) -> dict:
    return catalog.to_json()


# ── Templates ─────────────────────────────────────────────────────────────

@router.get("/templates", summary="Liste les templates")
def list_templates(type: Optional[str] = None, store: TemplateStore = Depends(get_store)) -> dict:
    templates = db_list_templates(store.db, type)
    if store.local_templates:
        stored = {t.id for t in templates}
        templates += [t for t in builtin_templates() if t.id not in stored and (not type or t.type == type)]
    return {"templates": [t.to_json() for t in templates]}


@router.get("/templates/for/{page_type}", summary="Template par défaut d'un type de page")
def template_for_page(page_type: str, store: TemplateStore = Depends(get_store)) -> dict:
    template = store.for_page(page_type)
    if template is None:
        raise HTTPException(404, f"Aucun template pour le type '{page_type}'")
    return template.to_json()


@router.get("/templates/{template_id}", summary="Récupère un template")
def get_template(template_id: str, store: TemplateStore = Depends(get_store)) -> dict:
    try:
        return store.get(template_id).to_json()
    except TemplateNotFound as e:
        raise HTTPException(404, str(e))


@router.put("/templates/{template_id}", summary="Enregistre un template")
def save_template(
    template_id: str,
    template: Template,
    store: TemplateStore = Depends(get_store),
    catalog: BlockCatalog = Depends(get_catalog),
) -> dict:
    if template.id != template_id:
        raise HTTPException(400, f"Id du corps ({template.id}) ≠ id de l'URL ({template_id})")
    try:
        _validate_blocks(template, catalog)
    except CatalogError as e:
        raise HTTPException(422, str(e))
    saved = store.save(template)
    log.info("Template enregistré : %s (%d sections)", saved.id, len(saved.sections))
    return saved.to_json()


@router.delete("/templates/{template_id}", summary="Supprime un template")
def delete_template(template_id: str, store: TemplateStore = Depends(get_store)) -> dict:
    if not store.delete(template_id):
        raise HTTPException(404, f"Template introuvable : {template_id!r}")
    return {"deleted": True, "id": template_id}


@router.post("/templates/{template_id}/duplicate", summary="Duplique un template")
def duplicate(template_id: str, store: TemplateStore = Depends(get_store)) -> dict:
    try:
        source = store.get(template_id)
    except TemplateNotFound as e:
        raise HTTPException(404, str(e))
    return store.save(duplicate_template(source)).to_json()


# ── Résolution ────────────────────────────────────────────────────────────

@router.post("/resolve-config", summary="Config concrète d'un bloc pour un viewport")
def resolve_config(req: ResolveConfigRequest, catalog: BlockCatalog = Depends(get_catalog)) -> dict:
    try:
        catalog.validate_block(req.block)
    except CatalogError as e:
        raise HTTPException(422, str(e))
    return {
        "blockId": req.block.id,
        "viewport": req.viewport,
        "config": resolve_block_config(req.block, catalog, req.viewport),
    }


@router.post("/query", summary="Résout un data source en requête backend")
def resolve_data_source(req: QueryRequest) -> dict:
    return describe_query(req.data_source, req.now)
