"""
Configuration page_composer — variables d'environnement lues une seule fois.

PAGE_COMPOSER_API_URL          → base URL du backend de contenus (défaut /api/v1)
PAGE_COMPOSER_HTTP_TIMEOUT     → timeout HTTP en secondes (défaut 10)
PAGE_COMPOSER_HISTORY_LIMIT    → taille max de l'historique undo/redo (défaut 50)
PAGE_COMPOSER_LOCAL_TEMPLATES  → sert les templates intégrés si rien en DB (défaut true)
DB_PATH                        → fichier SQLite des templates
"""
import os
from pathlib import Path

DATA_DIR = Path(__file__).parent.parent / "data"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


API_BASE_URL   = os.getenv("PAGE_COMPOSER_API_URL", "/api/v1").rstrip("/")
HTTP_TIMEOUT   = float(os.getenv("PAGE_COMPOSER_HTTP_TIMEOUT", "10"))
HISTORY_LIMIT  = int(os.getenv("PAGE_COMPOSER_HISTORY_LIMIT", "50"))
LOCAL_TEMPLATES = _env_bool("PAGE_COMPOSER_LOCAL_TEMPLATES", True)


def db_path() -> str:
    """Chemin SQLite — relu à chaque appel pour que les tests puissent le surcharger."""
    return os.getenv("DB_PATH", str(DATA_DIR / "page_composer.db"))
