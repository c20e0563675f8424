"""
Tests du catalogue de blocs et de la résolution de config côté rendu.
"""
from datetime import datetime, timezone

import pytest

from page_composer.core.block_config import DEFAULT_BLOCK_CONFIG, HeroCustom, GenericCustom, SliderCustom, parse_custom
from page_composer.core.schemas import Block, Section
from page_composer.errors import CatalogError
from page_composer.registry import BlockCatalog, BlockMeta, BlockVariant, default_catalog
from page_composer.resolver import (
    block_is_visible, is_visible, resolve_block_config, resolve_section_layout, typed_block_config,
)


# ── Catalogue ─────────────────────────────────────────────────────────────

class TestCatalog:
    def test_catalogue_par_defaut(self):
        catalog = default_catalog()
        assert len(catalog) == 38
        assert "article-grid" in catalog
        assert catalog.get_default_variant("article-grid").id == "grid-1"
        assert [v.id for v in catalog.get_variants("big-hero")][0] == "hero-classic"

    def test_data_source_requis(self):
        catalog = default_catalog()
        assert catalog.has_data_source("article-grid") is True
        assert catalog.has_data_source("spacer") is False
        assert catalog.has_data_source("inconnu") is False

    def test_variant_sans_preset(self):
        variant = default_catalog().get_variant("article-tabs", "tabs-2")
        assert variant is not None
        assert variant.default_config == DEFAULT_BLOCK_CONFIG

    def test_default_config_est_une_copie(self):
        catalog = default_catalog()
        config = catalog.default_config("article-grid", "grid-1")
        config["grid"]["columns"] = 99
        assert catalog.default_config("article-grid", "grid-1")["grid"]["columns"] != 99

    def test_default_config_type_inconnu(self):
        assert default_catalog().default_config("inconnu", "x") == DEFAULT_BLOCK_CONFIG

    def test_validate_block(self):
        catalog = default_catalog()
        block = Block(type="article-grid", variant="grid-3")
        assert catalog.validate_block(block) is block
        with pytest.raises(CatalogError):
            catalog.validate_block(Block(type="article-grid", variant="hero-classic"))
        with pytest.raises(CatalogError):
            catalog.validate_block(Block(type="carrousel-3d", variant="grid-1"))

    def test_variant_par_defaut_non_enregistre(self):
        meta = BlockMeta(type="x", name="X", category="layout", default_variant="b", variants=("a",))
        with pytest.raises(CatalogError):
            BlockCatalog([meta])

    def test_catalogue_explicite(self):
        meta = BlockMeta(type="x", name="X", category="layout", default_variant="a", variants=("a",))
        catalog = BlockCatalog([meta], {"x": [BlockVariant(id="a", name="A", default_config={"custom": {"k": 1}})]})
        assert catalog.default_config("x", "a") == {"custom": {"k": 1}}
        assert catalog.types() == ["x"]

    def test_by_category(self):
        types = {m.type for m in default_catalog().by_category("hero")}
        assert types == {"big-hero", "featured-story", "spotlight"}

    def test_to_json(self):
        data = default_catalog().to_json()
        assert len(data["categories"]) == 10
        grid = next(b for b in data["blocks"] if b["type"] == "article-grid")
        assert grid["hasDataSource"] is True
        assert grid["defaultVariant"] == "grid-1"
        assert [v["id"] for v in grid["variants"]] == ["grid-1", "grid-2", "grid-3", "grid-4", "grid-5", "grid-6"]


class TestCustomPayload:
    def test_slider(self):
        custom = parse_custom("article-slider", {"autoplay": True, "slidesPerView": {"desktop": 3}})
        assert isinstance(custom, SliderCustom)
        assert custom.autoplay is True
        assert custom.autoplay_delay == 5000

    def test_hero(self):
        custom = parse_custom("big-hero", {"layout": "classic", "sidebarArticles": 4})
        assert isinstance(custom, HeroCustom)
        assert custom.sidebar_articles == 4

    def test_type_inconnu_conserve_les_cles(self):
        custom = parse_custom("spacer", {"height": "40px"})
        assert isinstance(custom, GenericCustom)
        assert custom.to_json() == {"blockType": "spacer", "height": "40px"}


# ── Résolution de config ──────────────────────────────────────────────────

class TestResolveBlockConfig:
    def test_variant_puis_overrides(self):
        block = Block(type="article-grid", variant="grid-1",
                      config={"grid": {"columns": {"desktop": 4, "tablet": 3, "mobile": 2}}})
        config = resolve_block_config(block, viewport="tablet")
        assert config["grid"]["columns"] == 3
        assert config["grid"]["gap"] == "md"
        assert config["card"]["style"] == "elevated"

    def test_overrides_responsive_du_bloc(self):
        block = Block(type="article-grid", variant="grid-1",
                      responsive={"mobile": {"display": {"showExcerpt": False}}})
        assert resolve_block_config(block, viewport="mobile")["display"]["showExcerpt"] is False
        assert resolve_block_config(block, viewport="desktop")["display"]["showExcerpt"] is True

    def test_override_tablet_herite_sur_mobile(self):
        block = Block(type="article-grid", variant="grid-1",
                      responsive={"tablet": {"display": {"showDate": False}}})
        assert resolve_block_config(block, viewport="mobile")["display"]["showDate"] is False

    def test_block_non_modifie(self):
        block = Block(type="article-grid", variant="grid-1", config={"display": {"showImage": False}})
        resolve_block_config(block, viewport="mobile")
        assert block.config == {"display": {"showImage": False}}

    def test_viewport_inconnu(self):
        with pytest.raises(ValueError):
            resolve_block_config(Block(), viewport="watch")

    def test_config_typee(self):
        config = typed_block_config(Block(type="article-grid", variant="grid-1"), viewport="mobile")
        assert config.grid.columns == 1
        assert config.display.show_image is True
        assert config.card.hover_effect == "lift"


class TestResolveSectionLayout:
    def test_valeurs_par_defaut(self):
        layout = resolve_section_layout(Section(), "mobile")
        assert layout["maxWidth"] == "1280px"
        assert layout["grid"] == {"columns": 12, "gap": "md"}
        assert layout["padding"]["top"] == "md"
        assert layout["margin"] == {"top": "none", "bottom": "none"}

    def test_container_wide(self):
        assert resolve_section_layout(Section(container="wide"))["maxWidth"] == "1536px"

    def test_container_custom(self):
        layout = resolve_section_layout(Section(container="custom", custom_width="900px"))
        assert layout["maxWidth"] == "900px"

    def test_padding_local(self):
        section = Section(padding={"desktop": {"top": "lg"}})
        assert resolve_section_layout(section, "tablet")["padding"] == {"top": "lg"}


# ── Visibilité ────────────────────────────────────────────────────────────

FRIDAY = datetime(2024, 3, 15, 23, 30, tzinfo=timezone.utc)


class TestVisibility:
    def test_sans_regle(self):
        assert is_visible(None, "mobile") is True
        assert is_visible({}, "mobile") is True

    def test_par_viewport(self):
        assert is_visible({"mobile": False}, "mobile") is False
        assert is_visible({"mobile": False}, "desktop") is True

    def test_connexion(self):
        assert is_visible({"loggedInOnly": True}, logged_in=False) is False
        assert is_visible({"loggedInOnly": True}, logged_in=True) is True
        assert is_visible({"guestOnly": True}, logged_in=True) is False

    def test_dates(self):
        assert is_visible({"schedule": {"startDate": "2024-04-01T00:00:00Z"}}, now=FRIDAY) is False
        assert is_visible({"schedule": {"endDate": "2024-03-01T00:00:00Z"}}, now=FRIDAY) is False
        assert is_visible({"schedule": {"startDate": "2024-03-01T00:00:00Z"}}, now=FRIDAY) is True

    def test_jours_dimanche_zero(self):
        assert is_visible({"schedule": {"daysOfWeek": [5]}}, now=FRIDAY) is True
        assert is_visible({"schedule": {"daysOfWeek": [0, 6]}}, now=FRIDAY) is False

    def test_fenetre_qui_passe_minuit(self):
        night = {"schedule": {"timeRange": {"start": "22:00", "end": "06:00"}}}
        assert is_visible(night, now=FRIDAY) is True
        assert is_visible(night, now=FRIDAY.replace(hour=12)) is False

    def test_viewport_inconnu(self):
        with pytest.raises(ValueError):
            is_visible({"mobile": False}, "watch")

    def test_bloc_masque_sur_mobile(self):
        block = Block(type="article-grid", variant="grid-1", config={"visibility": {"mobile": False}})
        assert block_is_visible(block, viewport="mobile") is False
        assert block_is_visible(block, viewport="tablet") is True
