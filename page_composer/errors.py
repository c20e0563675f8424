"""Exceptions page_composer."""


class PageComposerError(Exception):
    """Erreur de base du moteur de composition."""


class CatalogError(PageComposerError):
    """Type de bloc inconnu ou variant non enregistré pour ce type."""


class ResponsiveValueError(PageComposerError, ValueError):
    """Valeur responsive construite sans clé `desktop`."""


class TemplateNotFound(PageComposerError, LookupError):
    """Chargement d'un template absent du stockage."""

    def __init__(self, template_id: str):
        super().__init__(f"Template introuvable : {template_id!r}")
        self.template_id = template_id
