"""Types de blocs connus et catalogue par défaut."""
from functools import lru_cache
from typing import Sequence

from .catalog import BlockCatalog, BlockMeta
from .variants import VARIANT_PRESETS


def _ids(block_type: str) -> tuple:
    return tuple(v.id for v in VARIANT_PRESETS[block_type])


def _meta(block_type: str, name: str, name_ar: str, category: str, icon: str,
          has_data_source: bool, variants: Sequence[str]) -> BlockMeta:
    return BlockMeta(
        type=block_type,
        name=name,
        name_ar=name_ar,
        category=category,
        icon=icon,
        has_data_source=has_data_source,
        default_variant=variants[0],
        variants=tuple(variants),
    )


BLOCK_METAS = [
    # ── Articles ──
    _meta("article-grid",     "Article Grid",     "شبكة المقالات",      "articles", "LayoutGrid",        True,  _ids("article-grid")),
    _meta("article-list",     "Article List",     "قائمة المقالات",     "articles", "List",              True,  _ids("article-list")),
    _meta("article-slider",   "Article Slider",   "سلايدر المقالات",    "articles", "GalleryHorizontal", True,  _ids("article-slider")),
    _meta("article-tabs",     "Article Tabs",     "تبويبات المقالات",   "articles", "PanelTop",          True,  ("tabs-1", "tabs-2", "tabs-3")),
    _meta("article-carousel", "Article Carousel", "دوّار المقالات",     "articles", "CircleDot",         True,  ("carousel-1", "carousel-2", "carousel-3")),
    _meta("article-masonry",  "Article Masonry",  "فسيفساء المقالات",   "articles", "LayoutDashboard",   True,  ("masonry-1", "masonry-2")),
    # ── Hero ──
    _meta("big-hero",         "Big Hero",         "البطل الكبير",       "hero",     "Maximize",          True,  _ids("big-hero")),
    _meta("featured-story",   "Featured Story",   "القصة المميزة",      "hero",     "Star",              True,  ("story-1", "story-2", "story-3")),
    _meta("spotlight",        "Spotlight",        "تحت الضوء",          "hero",     "Lightbulb",         True,  ("spotlight-1", "spotlight-2")),
    # ── Breaking ──
    _meta("breaking-ticker",  "Breaking News Ticker", "شريط الأخبار العاجلة", "breaking", "Zap",          True,  ("ticker-1", "ticker-2", "ticker-3")),
    _meta("breaking-banner",  "Breaking News Banner", "بانر الأخبار العاجلة", "breaking", "AlertTriangle", True, ("banner-1", "banner-2")),
    # ── Navigation ──
    _meta("category-nav",     "Category Navigation", "تصفح الأقسام",    "navigation", "FolderTree",      False, ("nav-1", "nav-2", "nav-3")),
    _meta("tag-cloud",        "Tag Cloud",        "سحابة الوسوم",       "navigation", "Tags",            False, ("cloud-1", "cloud-2")),
    _meta("breadcrumb",       "Breadcrumb",       "مسار التنقل",        "navigation", "ChevronRight",    False, ("breadcrumb-1", "breadcrumb-2")),
    # ── Publicité ──
    _meta("ad-unit",          "Ad Unit",          "وحدة إعلانية",       "ads",      "Megaphone",         False, ("ad-1", "ad-2", "ad-3")),
    _meta("ad-banner",        "Ad Banner",        "بانر إعلاني",        "ads",      "Image",             False, ("banner-1", "banner-2")),
    _meta("ad-native",        "Native Ad",        "إعلان أصلي",         "ads",      "Newspaper",         False, ("native-1", "native-2")),
    # ── Médias ──
    _meta("html-embed",       "HTML Embed",       "كود HTML",           "media",    "Code",              False, ("embed-1",)),
    _meta("video-player",     "Video Player",     "مشغل الفيديو",       "media",    "Play",              False, ("player-1", "player-2")),
    _meta("video-playlist",   "Video Playlist",   "قائمة الفيديوهات",   "media",    "PlaySquare",        True,  ("playlist-1", "playlist-2")),
    _meta("photo-gallery",    "Photo Gallery",    "معرض الصور",         "media",    "Images",            False, ("gallery-1", "gallery-2", "gallery-3")),
    _meta("podcast-player",   "Podcast Player",   "مشغل البودكاست",     "media",    "Headphones",        False, ("podcast-1", "podcast-2")),
    _meta("live-stream",      "Live Stream",      "البث المباشر",       "media",    "Radio",             False, ("live-1", "live-2")),
    # ── Auteurs ──
    _meta("opinion-cards",    "Opinion Cards",    "بطاقات الرأي",       "authors",  "MessageSquare",     True,  ("opinion-1", "opinion-2", "opinion-3")),
    _meta("author-spotlight", "Author Spotlight", "كاتب مميز",          "authors",  "UserCircle",        True,  ("spotlight-1", "spotlight-2")),
    _meta("author-list",      "Author List",      "قائمة الكتّاب",      "authors",  "Users",             False, ("authors-1", "authors-2")),
    # ── Engagement ──
    _meta("newsletter-form",  "Newsletter Form",  "نموذج النشرة البريدية", "engagement", "Mail",         False, ("newsletter-1", "newsletter-2", "newsletter-3")),
    _meta("social-feed",      "Social Feed",      "خلاصة التواصل",      "engagement", "Share2",          False, ("social-1", "social-2")),
    _meta("comments-section", "Comments Section", "قسم التعليقات",      "engagement", "MessageCircle",   False, ("comments-1", "comments-2")),
    _meta("poll-widget",      "Poll Widget",      "استطلاع رأي",        "engagement", "BarChart2",       False, ("poll-1", "poll-2")),
    # ── Widgets ──
    _meta("weather-widget",   "Weather Widget",   "ودجة الطقس",         "widgets",  "Cloud",             False, ("weather-1", "weather-2")),
    _meta("currency-ticker",  "Currency Ticker",  "شريط العملات",       "widgets",  "DollarSign",        False, ("currency-1", "currency-2")),
    _meta("stocks-ticker",    "Stocks Ticker",    "شريط الأسهم",        "widgets",  "TrendingUp",        False, ("stocks-1", "stocks-2")),
    _meta("sports-scores",    "Sports Scores",    "نتائج المباريات",    "widgets",  "Trophy",            False, ("sports-1", "sports-2")),
    # ── Mise en page ──
    _meta("spacer",           "Spacer",           "مسافة فارغة",        "layout",   "MoveVertical",      False, ("spacer-1",)),
    _meta("divider",          "Divider",          "فاصل",               "layout",   "Minus",             False, ("divider-1", "divider-2", "divider-3")),
    _meta("heading",          "Heading",          "عنوان",              "layout",   "Type",              False, ("heading-1", "heading-2", "heading-3")),
    _meta("text-block",       "Text Block",       "كتلة نصية",          "layout",   "AlignLeft",         False, ("text-1",)),
]


@lru_cache(maxsize=1)
def default_catalog() -> BlockCatalog:
    """Catalogue complet (types connus + presets de variants), construit une fois."""
    return BlockCatalog(BLOCK_METAS, VARIANT_PRESETS)
