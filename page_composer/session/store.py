"""
Session d'édition — état mutable d'un template en cours de construction.

Règles communes à toutes les mutations :
  - id inconnu (section/bloc) → no-op silencieux, pas d'historique
  - `order` des sections == index, après chaque mutation
  - supprimer l'élément sélectionné vide la sélection
  - toute mutation structurelle réussie pousse un instantané dans l'historique

Sélection, survol et réglages de vue ne touchent pas l'historique.
"""
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter

from ..core.merge import deep_merge
from ..core.responsive import VIEWPORTS, Viewport
from ..core.schemas import (
    Block, BlockRef, DraggedItem, DropTarget, DEFAULT_SECTION,
    Section, SectionRef, SelectedElement, SessionError, Template,
    default_data_source, generate_id, utc_now_iso,
)
from ..registry import BlockCatalog, default_catalog
from .history import History

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ZOOM_MIN, ZOOM_MAX = 25, 200

_selection_adapter = TypeAdapter(SelectedElement)

Saver  = Callable[[Template], Any]
Loader = Callable[[str], Optional[Template]]


def _field_name(model_cls: Type[BaseModel], key: str) -> str:
    """Nom de champ Python pour une clé snake_case ou camelCase."""
    if key in model_cls.model_fields:
        return key
    for name, field in model_cls.model_fields.items():
        if field.alias == key:
            return name
    return key


def _patched(model: M, updates: Mapping[str, Any]) -> M:
    """Nouvelle instance validée de `model` avec `updates` appliqués (remplacement par champ)."""
    data = model.model_dump()
    for key, value in updates.items():
        if isinstance(value, BaseModel):
            value = value.model_dump()
        data[_field_name(type(model), key)] = value
    return type(model).model_validate(data)


def _as_dict(data: Union[BaseModel, Mapping[str, Any], None]) -> Dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True)
    return dict(data)


def _fresh_block(block: Block, suffix: bool = False) -> Block:
    copy = block.model_copy(deep=True)
    copy.id = generate_id("block")
    if suffix:
        copy.name = f"{block.name} (Copy)" if block.name else None
        copy.name_ar = f"{block.name_ar} (نسخة)" if block.name_ar else None
    return copy


class EditSession:
    """
    Session d'édition mono-thread : chaque mutation est synchrone et complète
    (historique compris) avant la suivante.

    Usage:
        >>> session = EditSession()
        >>> session.set_template(template)
        >>> section = session.add_section({"name": "Hero"})
        >>> session.add_block_from_type(section.id, "big-hero")
        >>> session.undo()
    """

    def __init__(self, catalog: Optional[BlockCatalog] = None, history_limit: Optional[int] = None):
        self.catalog = catalog or default_catalog()
        self.template: Optional[Template] = None
        self.original_template: Optional[Template] = None
        self.history = History(history_limit)

        self.selected: Optional[SelectedElement] = None
        self.hovered: Optional[SelectedElement] = None

        self.is_dragging = False
        self.dragged_item: Optional[DraggedItem] = None
        self.drop_target: Optional[DropTarget] = None

        self.viewport: Viewport = "desktop"
        self.zoom = 100
        self.show_grid = True
        self.show_outlines = False
        self.preview_mode = False

        self.is_dirty = False
        self.is_saving = False
        self.is_loading = False
        self.last_saved: Optional[str] = None
        self.errors: List[SessionError] = []

    # ── Interne ─────────────────────────────────────────────────────────────

    def _commit(self, action: str, action_ar: str) -> None:
        self.template.renumber_sections()
        self.is_dirty = True
        self.history.push(self.template, action, action_ar)

    def _section(self, section_id: str) -> Optional[Section]:
        if self.template is None:
            return None
        return self.template.find_section(section_id)

    def _block_index(self, section: Section, block_id: str) -> int:
        return next((i for i, b in enumerate(section.blocks) if b.id == block_id), -1)

    def _unique_id(self, candidate: Optional[str], prefix: str) -> str:
        """Garde l'id fourni s'il est libre dans le template, sinon en génère un neuf."""
        if candidate and candidate not in self.template.all_ids():
            return candidate
        return generate_id(prefix)

    # ── Template ────────────────────────────────────────────────────────────

    def set_template(self, template: Optional[Template]) -> None:
        """Remplace le document : sélection vidée, historique réinitialisé, état propre."""
        self.template = template.model_copy(deep=True) if template is not None else None
        self.original_template = template.model_copy(deep=True) if template is not None else None
        self.selected = None
        self.hovered = None
        self.is_dirty = False
        self.history.clear()
        if self.template is not None:
            self.template.renumber_sections()
            self.history.push(self.template, "Load Template", "تحميل القالب")

    def update_template(self, updates: Mapping[str, Any]) -> None:
        if self.template is None:
            return
        self.template = _patched(self.template, updates)
        self._commit("Update Template", "تحديث القالب")

    def reset_template(self) -> None:
        """Revient à la dernière version propre (chargée ou sauvegardée)."""
        if self.original_template is None:
            return
        self.template = self.original_template.model_copy(deep=True)
        self.is_dirty = False

    # ── Sections ────────────────────────────────────────────────────────────

    def add_section(self, data: Union[Section, Mapping[str, Any], None] = None) -> Optional[Section]:
        if self.template is None:
            return None
        values = deep_merge(DEFAULT_SECTION, {})
        values.update({"blocks": []})
        values.update(_as_dict(data))
        values["id"] = self._unique_id(values.get("id"), "section")
        section = Section.model_validate(values)
        self.template.sections.append(section)
        self._commit("Add Section", "إضافة قسم")
        return section

    def update_section(self, section_id: str, updates: Mapping[str, Any]) -> None:
        if self.template is None:
            return
        index = self.template.section_index(section_id)
        if index == -1:
            return
        self.template.sections[index] = _patched(self.template.sections[index], updates)
        self._commit("Update Section", "تحديث قسم")

    def delete_section(self, section_id: str) -> None:
        if self.template is None:
            return
        index = self.template.section_index(section_id)
        if index == -1:
            return
        removed = self.template.sections.pop(index)
        if self.selected is not None and (
            (self.selected.kind == "section" and self.selected.id == section_id)
            or (self.selected.kind == "block" and self.selected.section_id == section_id)
        ):
            self.selected = None
        log.debug("Section supprimée : %s (%d blocs)", removed.id, len(removed.blocks))
        self._commit("Delete Section", "حذف قسم")

    def move_section(self, from_index: int, to_index: int) -> None:
        if self.template is None:
            return
        sections = self.template.sections
        if not (0 <= from_index < len(sections) and 0 <= to_index < len(sections)):
            return
        if from_index == to_index:
            return
        sections.insert(to_index, sections.pop(from_index))
        self._commit("Move Section", "نقل قسم")

    def duplicate_section(self, section_id: str) -> Optional[Section]:
        if self.template is None:
            return None
        index = self.template.section_index(section_id)
        if index == -1:
            return None
        source = self.template.sections[index]
        copy = source.model_copy(deep=True)
        copy.id = generate_id("section")
        copy.name = f"{source.name} (Copy)"
        copy.name_ar = f"{source.name_ar} (نسخة)"
        copy.blocks = [_fresh_block(b) for b in source.blocks]
        self.template.sections.insert(index + 1, copy)
        self._commit("Duplicate Section", "تكرار قسم")
        return copy

    # ── Blocs ───────────────────────────────────────────────────────────────

    def add_block(
        self,
        section_id: str,
        data: Union[Block, Mapping[str, Any], None] = None,
        index: Optional[int] = None,
    ) -> Optional[Block]:
        section = self._section(section_id)
        if section is None:
            return None
        values = _as_dict(data)
        block_type = values.get("type") or "article-grid"
        meta = self.catalog.get_meta(block_type)
        variant = values.get("variant") or (meta.default_variant if meta else "grid-1")
        values.update({
            "id": self._unique_id(values.get("id"), "block"),
            "type": block_type,
            "variant": variant,
            "config": deep_merge(self.catalog.default_config(block_type, variant), values.get("config")),
        })
        block = Block.model_validate(values)
        self._insert_block(section, block, index)
        self._commit("Add Block", "إضافة بلوك")
        return block

    def add_block_from_type(self, section_id: str, block_type: str, index: Optional[int] = None) -> Optional[Block]:
        """Bloc neuf depuis le catalogue : variant par défaut, data source par défaut, sélectionné."""
        section = self._section(section_id)
        meta = self.catalog.get_meta(block_type)
        if section is None or meta is None:
            return None
        block = Block(
            type=block_type,
            variant=meta.default_variant,
            config=self.catalog.default_config(block_type, meta.default_variant),
            data_source=default_data_source() if meta.has_data_source else None,
        )
        self._insert_block(section, block, index)
        self.selected = BlockRef(id=block.id, section_id=section_id)
        self._commit(f"Add {meta.name}", f"إضافة {meta.name_ar}")
        return block

    def _insert_block(self, section: Section, block: Block, index: Optional[int]) -> None:
        if index is None or not (0 <= index <= len(section.blocks)):
            section.blocks.append(block)
        else:
            section.blocks.insert(index, block)

    def update_block(self, section_id: str, block_id: str, updates: Mapping[str, Any]) -> None:
        """Met à jour un bloc ; `config` est fusionné en profondeur, le reste remplacé."""
        section = self._section(section_id)
        if section is None:
            return
        index = self._block_index(section, block_id)
        if index == -1:
            return
        block = section.blocks[index]
        updates = dict(updates)
        if "config" in updates:
            updates["config"] = deep_merge(block.config, updates["config"])
        section.blocks[index] = _patched(block, updates)
        self._commit("Update Block", "تحديث بلوك")

    def delete_block(self, section_id: str, block_id: str) -> None:
        section = self._section(section_id)
        if section is None:
            return
        index = self._block_index(section, block_id)
        if index == -1:
            return
        section.blocks.pop(index)
        if self.selected is not None and self.selected.kind == "block" and self.selected.id == block_id:
            self.selected = None
        self._commit("Delete Block", "حذف بلوك")

    def move_block(self, from_section_id: str, to_section_id: str, from_index: int, to_index: int) -> None:
        source = self._section(from_section_id)
        target = self._section(to_section_id)
        if source is None or target is None:
            return
        if not 0 <= from_index < len(source.blocks):
            return
        limit = len(target.blocks) - 1 if source is target else len(target.blocks)
        if not 0 <= to_index <= limit:
            return
        if source is target and from_index == to_index:
            return
        block = source.blocks.pop(from_index)
        target.blocks.insert(to_index, block)
        if self.selected is not None and self.selected.kind == "block" and self.selected.id == block.id:
            self.selected = BlockRef(id=block.id, section_id=to_section_id)
        self._commit("Move Block", "نقل بلوك")

    def duplicate_block(self, section_id: str, block_id: str) -> Optional[Block]:
        section = self._section(section_id)
        if section is None:
            return None
        index = self._block_index(section, block_id)
        if index == -1:
            return None
        copy = _fresh_block(section.blocks[index], suffix=True)
        section.blocks.insert(index + 1, copy)
        self._commit("Duplicate Block", "تكرار بلوك")
        return copy

    # ── Sélection / survol ──────────────────────────────────────────────────

    def select(self, element: Union[SelectedElement, Mapping[str, Any], None]) -> None:
        self.selected = _selection_adapter.validate_python(element) if isinstance(element, Mapping) else element

    def hover(self, element: Union[SelectedElement, Mapping[str, Any], None]) -> None:
        self.hovered = _selection_adapter.validate_python(element) if isinstance(element, Mapping) else element

    def clear_selection(self) -> None:
        self.selected = None

    def clear_hover(self) -> None:
        self.hovered = None

    def selected_section(self) -> Optional[Section]:
        if self.template is None or self.selected is None:
            return None
        if isinstance(self.selected, SectionRef):
            return self.template.find_section(self.selected.id)
        if isinstance(self.selected, BlockRef):
            return self.template.find_section(self.selected.section_id)
        return None

    def selected_block(self) -> Optional[Block]:
        if self.template is None or not isinstance(self.selected, BlockRef):
            return None
        section = self.template.find_section(self.selected.section_id)
        if section is None:
            return None
        return next((b for b in section.blocks if b.id == self.selected.id), None)

    # ── Drag & drop ─────────────────────────────────────────────────────────

    def start_drag(self, item: Union[DraggedItem, Mapping[str, Any]]) -> None:
        self.is_dragging = True
        self.dragged_item = item if isinstance(item, DraggedItem) else DraggedItem.model_validate(item)
        self.drop_target = None

    def update_drop_target(self, target: Union[DropTarget, Mapping[str, Any], None]) -> None:
        if target is not None and not isinstance(target, DropTarget):
            target = DropTarget.model_validate(target)
        self.drop_target = target

    def end_drag(self, apply: bool = False) -> None:
        """
        Termine le drag. Avec `apply=True`, la cible courante est appliquée :
          - section existante → move_section
          - bloc existant     → move_block
          - bloc du catalogue (data.type, sans id) → add_block_from_type à l'index visé
        """
        item, target = self.dragged_item, self.drop_target
        self.is_dragging = False
        self.dragged_item = None
        self.drop_target = None
        if not apply or item is None or target is None:
            return

        if item.kind == "section" and item.index is not None:
            self.move_section(item.index, target.index)
        elif item.kind == "block" and item.id and item.section_id and item.index is not None and target.section_id:
            self.move_block(item.section_id, target.section_id, item.index, target.index)
        elif item.kind == "block" and not item.id and target.section_id and (item.data or {}).get("type"):
            self.add_block_from_type(target.section_id, item.data["type"], index=target.index)

    # ── Vue ─────────────────────────────────────────────────────────────────

    def set_viewport(self, viewport: Viewport) -> None:
        if viewport not in VIEWPORTS:
            raise ValueError(f"Viewport inconnu : {viewport!r}")
        self.viewport = viewport

    def set_zoom(self, zoom: int) -> None:
        self.zoom = max(ZOOM_MIN, min(ZOOM_MAX, zoom))

    def toggle_grid(self) -> None:
        self.show_grid = not self.show_grid

    def toggle_outlines(self) -> None:
        self.show_outlines = not self.show_outlines

    def toggle_preview(self) -> None:
        self.preview_mode = not self.preview_mode
        if self.preview_mode:
            self.selected = None

    # ── Historique ──────────────────────────────────────────────────────────

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self) -> None:
        state = self.history.undo()
        if state is not None:
            self.template = state
            self.is_dirty = True

    def redo(self) -> None:
        state = self.history.redo()
        if state is not None:
            self.template = state
            self.is_dirty = True

    def clear_history(self) -> None:
        self.history.clear()

    # ── Sauvegarde / chargement ─────────────────────────────────────────────

    def save(self, saver: Saver) -> bool:
        """Passe une copie du document à `saver` ; en cas d'échec, erreur de session."""
        if self.template is None:
            return False
        self.is_saving = True
        try:
            saver(self.template.model_copy(deep=True))
        except Exception as exc:
            log.error("Sauvegarde du template %s échouée : %s", self.template.id, exc)
            self.add_error("Failed to save template", "فشل في حفظ القالب")
            return False
        finally:
            self.is_saving = False

        self.is_dirty = False
        self.last_saved = utc_now_iso()
        self.original_template = self.template.model_copy(deep=True)
        log.info("Template sauvegardé : %s", self.template.id)
        return True

    def load(self, loader: Loader, template_id: str) -> bool:
        """Charge via `loader` ; un template absent vide la session sans erreur."""
        self.is_loading = True
        try:
            template = loader(template_id)
        except Exception as exc:
            log.error("Chargement du template %s échoué : %s", template_id, exc)
            self.add_error("Failed to load template", "فشل في تحميل القالب")
            return False
        finally:
            self.is_loading = False

        self.set_template(template)
        if template is None:
            log.info("Template absent : %s", template_id)
            return False
        log.info("Template chargé : %s", template_id)
        return True

    # ── Erreurs ─────────────────────────────────────────────────────────────

    def add_error(self, message: str, message_ar: str = "") -> SessionError:
        error = SessionError(message=message, message_ar=message_ar)
        self.errors.append(error)
        return error

    def clear_errors(self) -> None:
        self.errors = []
