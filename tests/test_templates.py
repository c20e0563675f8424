"""
Tests des templates intégrés et du stockage SQLite.
"""
import pytest

from page_composer.core.schemas import Template
from page_composer.errors import TemplateNotFound
from page_composer.registry import default_catalog
from page_composer.session import EditSession
from page_composer.storage import (
    TemplateStore, db_delete_template, db_get_default_template, db_get_template,
    db_list_templates, db_save_template,
)
from page_composer.templates import (
    builtin_templates, default_template_for, duplicate_template, find_builtin,
    home_template, new_template, prepare_for_page,
)


# ── Templates intégrés ────────────────────────────────────────────────────

class TestBuiltins:
    def test_par_type_de_page(self):
        assert default_template_for("home").id == "home-default"
        assert default_template_for("tag").id == "category-default"
        assert default_template_for("article").id == "article-default"
        assert default_template_for("inconnu") is None

    def test_instances_independantes(self):
        a, b = home_template(), home_template()
        a.sections[0].name = "modifié"
        assert b.sections[0].name == "Hero Section"

    def test_blocs_valides(self):
        catalog = default_catalog()
        for template in builtin_templates():
            for section in template.sections:
                for block in section.blocks:
                    catalog.validate_block(block)

    def test_exclude_from_other_home(self):
        blocks = {b.id: b for s in home_template().sections for b in s.blocks}
        assert blocks["hero-block"].data_source.exclude_from_other is True
        assert blocks["latest-grid"].data_source.exclude_from_other is True
        assert blocks["trending-slider"].data_source.exclude_from_other is False

    def test_ordre_sections(self):
        for template in builtin_templates():
            assert [s.order for s in template.sections] == list(range(len(template.sections)))

    def test_json_camel_case(self):
        data = home_template().to_json()
        assert data["nameAr"] == "الرئيسية الافتراضية"
        assert data["sections"][0]["blocks"][0]["dataSource"]["excludeFromOther"] is True
        restored = Template.model_validate(data)
        assert [s.model_dump() for s in restored.sections] == [s.model_dump() for s in home_template().sections]

    def test_champs_inconnus_conserves(self):
        data = home_template().to_json()
        data["futureField"] = {"x": 1}
        assert Template.model_validate(data).to_json()["futureField"] == {"x": 1}


class TestFactories:
    def test_new_template(self):
        template = new_template("category")
        assert template.type == "category"
        assert template.sections == []
        assert template.name == "New Template"
        assert template.id.startswith("template_")

    def test_duplicate_template(self):
        source = home_template()
        copy = duplicate_template(source)
        assert copy.name == "Default Home (Copy)"
        assert copy.is_default is False
        assert not set(copy.all_ids()) & set(source.all_ids())
        assert [b.type for s in copy.sections for b in s.blocks] == ["big-hero", "article-grid", "article-slider"]

    def test_prepare_for_page(self):
        template = default_template_for("category")
        page = prepare_for_page(template, category_ids=["sports"])
        assert page.sections[0].blocks[0].data_source.category_ids == ["sports"]
        assert template.sections[0].blocks[0].data_source.category_ids is None

        article = prepare_for_page(default_template_for("article"), category_ids=["c"], article_id="a-1")
        related = article.sections[0].blocks[0].data_source
        assert related.exclude_ids == ["a-1"]
        assert related.category_ids == ["c"]


# ── Stockage ──────────────────────────────────────────────────────────────

class TestStorage:
    def test_aller_retour(self, db):
        template = duplicate_template(home_template(), name="Accueil")
        saved = db_save_template(db, template)
        loaded = db_get_template(db, template.id)
        assert loaded.name == "Accueil"
        assert loaded.model_dump() == saved.model_dump()

    def test_upsert(self, db):
        template = new_template("page", name="v1")
        db_save_template(db, template)
        db_save_template(db, template.model_copy(update={"name": "v2"}))
        assert [t.name for t in db_list_templates(db)] == ["v2"]

    def test_liste_par_type(self, db):
        db_save_template(db, new_template("home"))
        db_save_template(db, new_template("article"))
        assert len(db_list_templates(db)) == 2
        assert [t.type for t in db_list_templates(db, "article")] == ["article"]

    def test_defaut_par_type(self, db):
        assert db_get_default_template(db, "home") is None
        db_save_template(db, home_template().model_copy(update={"id": "my-home"}))
        assert db_get_default_template(db, "home").id == "my-home"

    def test_delete(self, db):
        template = new_template()
        db_save_template(db, template)
        assert db_delete_template(db, template.id) is True
        assert db_delete_template(db, template.id) is False
        assert db_get_template(db, template.id) is None


class TestTemplateStore:
    def test_repli_sur_les_integres(self, db):
        assert TemplateStore(db).load("home-default").id == "home-default"
        assert TemplateStore(db, local_templates=False).load("home-default") is None

    def test_get_absent(self, db):
        with pytest.raises(TemplateNotFound) as exc:
            TemplateStore(db).get("nope")
        assert exc.value.template_id == "nope"

    def test_for_page_db_prioritaire(self, db):
        store = TemplateStore(db)
        assert store.for_page("home").id == "home-default"
        store.save(home_template().model_copy(update={"id": "my-home"}))
        assert store.for_page("home").id == "my-home"

    def test_session_save_load(self, db):
        store = TemplateStore(db)
        session = EditSession()
        assert session.load(store.load, "home-default") is True
        session.update_template({"name": "Accueil modifié"})
        assert session.save(store.save) is True
        assert find_builtin("home-default").name == "Default Home"
        assert store.get("home-default").name == "Accueil modifié"

    def test_fichier_sqlite(self, tmp_path):
        from page_composer.storage import SessionLocal, init_db

        path = tmp_path / "data" / "templates.db"
        init_db(str(path))
        db = SessionLocal()
        try:
            db_save_template(db, home_template())
            assert db_get_template(db, "home-default").name == "Default Home"
        finally:
            db.close()
        assert path.exists()
