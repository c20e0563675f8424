"""SQLite — modèle ORM des templates + init + session + CRUD helpers"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from . import config
from .core.schemas import Template, utc_now_iso
from .errors import TemplateNotFound
from .templates import default_template_for, find_builtin

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class TemplateDB(Base):
    __tablename__ = "templates"
    id:         Mapped[str]      = mapped_column(sa.String, primary_key=True)
    type:       Mapped[str]      = mapped_column(sa.String, nullable=False, index=True)
    name:       Mapped[str]      = mapped_column(sa.String, default="")
    document:   Mapped[str]      = mapped_column(sa.Text, nullable=False)
    is_default: Mapped[bool]     = mapped_column(sa.Boolean, default=False)
    updated_at: Mapped[datetime] = mapped_column(sa.DateTime, default=_utcnow, onupdate=_utcnow)


# ── Engine / session ──

def make_engine(path: Optional[str] = None) -> Engine:
    path = path or config.db_path()
    if path == ":memory:":
        # Une seule connexion partagée, sinon chaque session voit une base vide
        return create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})


ENGINE       = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def init_db(path: Optional[str] = None) -> Engine:
    """Crée (ou recrée pour un autre chemin) l'engine et les tables."""
    global ENGINE
    ENGINE = make_engine(path)
    SessionLocal.configure(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    log.info("Base templates prête : %s", ENGINE.url)
    return ENGINE


def get_db():
    if ENGINE is None:
        init_db()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── Conversion ──

def _to_template(row: TemplateDB) -> Template:
    return Template.model_validate(json.loads(row.document))


def _dump(template: Template) -> str:
    return json.dumps(template.to_json(), ensure_ascii=False)


# ── CRUD ──

def db_get_template(db: Session, template_id: str) -> Optional[Template]:
    row = db.get(TemplateDB, template_id)
    return _to_template(row) if row else None


def db_list_templates(db: Session, type: Optional[str] = None) -> List[Template]:
    q = db.query(TemplateDB)
    if type:
        q = q.filter(TemplateDB.type == type)
    return [_to_template(r) for r in q.order_by(TemplateDB.updated_at.desc()).all()]


def db_get_default_template(db: Session, type: str) -> Optional[Template]:
    row = (
        db.query(TemplateDB)
        .filter(TemplateDB.type == type, TemplateDB.is_default.is_(True))
        .order_by(TemplateDB.updated_at.desc())
        .first()
    )
    return _to_template(row) if row else None


def db_save_template(db: Session, template: Template) -> Template:
    """Upsert : met à jour `updatedAt` du document et la ligne."""
    template = template.model_copy(update={"updated_at": utc_now_iso()})
    row = db.get(TemplateDB, template.id)
    if row is None:
        row = TemplateDB(id=template.id)
        db.add(row)
    row.type       = template.type
    row.name       = template.name
    row.document   = _dump(template)
    row.is_default = template.is_default
    db.commit()
    db.refresh(row)
    return template


def db_delete_template(db: Session, template_id: str) -> bool:
    row = db.get(TemplateDB, template_id)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    return True


# ── Adaptateur session d'édition ──

class TemplateStore:
    """
    Saver/loader pour EditSession : DB d'abord, puis templates intégrés
    si `local_templates` est actif.

    Usage:
        >>> store = TemplateStore(db)
        >>> session.load(store.load, "home-default")
        >>> session.save(store.save)
    """

    def __init__(self, db: Session, local_templates: Optional[bool] = None):
        self.db = db
        self.local_templates = config.LOCAL_TEMPLATES if local_templates is None else local_templates

    def save(self, template: Template) -> Template:
        return db_save_template(self.db, template)

    def load(self, template_id: str) -> Optional[Template]:
        template = db_get_template(self.db, template_id)
        if template is None and self.local_templates:
            template = find_builtin(template_id)
        return template

    def get(self, template_id: str) -> Template:
        template = self.load(template_id)
        if template is None:
            raise TemplateNotFound(template_id)
        return template

    def for_page(self, page_type: str) -> Optional[Template]:
        """Template par défaut d'un type de page : DB, sinon intégré."""
        template = db_get_default_template(self.db, page_type)
        if template is None and self.local_templates:
            template = default_template_for(page_type)
        return template

    def delete(self, template_id: str) -> bool:
        return db_delete_template(self.db, template_id)
