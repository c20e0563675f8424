"""Presets de variants — article-grid, article-list, article-slider, big-hero."""
from .catalog import BlockVariant


def _card(style, shadow, radius, hover, padding=None):
    card = {"style": style, "shadow": shadow, "radius": radius, "hoverEffect": hover}
    if padding:
        card["padding"] = padding
    return card


ARTICLE_GRID_VARIANTS = [
    BlockVariant(
        id="grid-1", name="Standard Grid", name_ar="الشبكة القياسية",
        description="Classic 3-column grid with image on top",
        default_config={
            "grid":    {"columns": {"desktop": 3, "tablet": 2, "mobile": 1}, "gap": {"desktop": "lg", "tablet": "md", "mobile": "md"}},
            "image":   {"aspectRatio": "16:9", "position": "top"},
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showDate": True},
            "text":    {"titleSize": {"desktop": "lg", "tablet": "md", "mobile": "md"}, "titleLines": 2, "excerptLines": 2},
            "card":    _card("elevated", "md", "lg", "lift"),
        },
    ),
    BlockVariant(
        id="grid-2", name="Compact Grid", name_ar="الشبكة المدمجة",
        description="4-column compact grid without excerpt",
        default_config={
            "grid":    {"columns": {"desktop": 4, "tablet": 2, "mobile": 1}, "gap": {"desktop": "md", "tablet": "sm", "mobile": "sm"}},
            "image":   {"aspectRatio": "4:3", "position": "top"},
            "display": {"showImage": True, "showTitle": True, "showExcerpt": False, "showCategory": True, "showDate": True},
            "text":    {"titleSize": {"desktop": "md", "tablet": "sm", "mobile": "sm"}, "titleLines": 2},
            "card":    _card("flat", "none", "md", "none"),
        },
    ),
    BlockVariant(
        id="grid-3", name="Large Cards Grid", name_ar="شبكة البطاقات الكبيرة",
        description="2-column grid with large cards and full details",
        default_config={
            "grid":    {"columns": {"desktop": 2, "tablet": 2, "mobile": 1}, "gap": {"desktop": "xl", "tablet": "lg", "mobile": "md"}},
            "image":   {"aspectRatio": "16:9", "position": "top"},
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True,
                        "showAuthor": True, "showAuthorImage": True, "showDate": True, "showReadingTime": True},
            "text":    {"titleSize": {"desktop": "xl", "tablet": "lg", "mobile": "lg"}, "titleLines": 2, "excerptLines": 3},
            "card":    _card("elevated", "lg", "xl", "lift"),
        },
    ),
    BlockVariant(
        id="grid-4", name="Minimal Grid", name_ar="الشبكة البسيطة",
        description="Clean minimal grid with subtle styling",
        default_config={
            "grid":    {"columns": {"desktop": 3, "tablet": 2, "mobile": 1}, "gap": {"desktop": "xl", "tablet": "lg", "mobile": "md"}},
            "image":   {"aspectRatio": "3:2", "position": "top"},
            "display": {"showImage": True, "showTitle": True, "showExcerpt": False, "showCategory": False, "showDate": True},
            "text":    {"titleSize": {"desktop": "lg", "tablet": "md", "mobile": "md"}, "titleLines": 2, "titleWeight": "medium"},
            "card":    _card("flat", "none", "none", "none"),
        },
    ),
    BlockVariant(
        id="grid-5", name="Dense Grid", name_ar="الشبكة الكثيفة",
        description="5-column dense grid for maximum content",
        default_config={
            "grid":    {"columns": {"desktop": 5, "tablet": 3, "mobile": 2}, "gap": {"desktop": "sm", "tablet": "sm", "mobile": "xs"}},
            "image":   {"aspectRatio": "1:1", "position": "top"},
            "display": {"showImage": True, "showTitle": True, "showExcerpt": False, "showCategory": False, "showDate": False},
            "text":    {"titleSize": {"desktop": "sm", "tablet": "sm", "mobile": "xs"}, "titleLines": 2},
            "card":    _card("flat", "sm", "md", "glow"),
        },
    ),
    BlockVariant(
        id="grid-6", name="Featured First", name_ar="المميز أولاً",
        description="First article large, rest in grid",
        default_config={
            "grid":    {"columns": {"desktop": 3, "tablet": 2, "mobile": 1}, "gap": {"desktop": "lg", "tablet": "md", "mobile": "md"}},
            "image":   {"aspectRatio": "16:9", "position": "top"},
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showDate": True},
            "text":    {"titleSize": {"desktop": "lg", "tablet": "md", "mobile": "md"}, "titleLines": 2, "excerptLines": 2},
            "card":    _card("elevated", "md", "lg", "lift"),
            "custom":  {
                "layout": "featured-first",
                "featuredSpan": {"desktop": 2, "tablet": 2, "mobile": 1},
                "featuredConfig": {
                    "image":   {"aspectRatio": "16:9"},
                    "text":    {"titleSize": {"desktop": "2xl", "tablet": "xl", "mobile": "lg"}, "excerptLines": 3},
                    "display": {"showAuthor": True, "showReadingTime": True},
                },
            },
        },
    ),
]

ARTICLE_LIST_VARIANTS = [
    BlockVariant(
        id="list-1", name="Standard List", name_ar="القائمة القياسية",
        description="Classic vertical list with thumbnails",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showDate": True},
            "image":   {"aspectRatio": "16:9", "position": "left"},
            "text":    {"titleSize": {"desktop": "lg", "tablet": "md", "mobile": "md"}, "titleLines": 2, "excerptLines": 2},
            "card":    _card("flat", "none", "lg", "none", {"desktop": "md", "tablet": "sm", "mobile": "sm"}),
            "custom":  {"imageWidth": {"desktop": "200px", "tablet": "150px", "mobile": "100px"}, "showDivider": True, "dividerStyle": "dashed"},
        },
    ),
    BlockVariant(
        id="list-2", name="Compact List", name_ar="القائمة المدمجة",
        description="Compact list with small thumbnails",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": False, "showCategory": False, "showDate": True},
            "image":   {"aspectRatio": "1:1", "position": "left"},
            "text":    {"titleSize": {"desktop": "md", "tablet": "sm", "mobile": "sm"}, "titleLines": 2},
            "card":    _card("flat", "none", "md", "none", {"desktop": "sm", "tablet": "sm", "mobile": "xs"}),
            "custom":  {"imageWidth": {"desktop": "80px", "tablet": "70px", "mobile": "60px"}, "showDivider": True, "dividerStyle": "solid"},
        },
    ),
    BlockVariant(
        id="list-3", name="Numbered List", name_ar="القائمة المرقمة",
        description="List with large numbers",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": False, "showCategory": True, "showDate": True},
            "image":   {"aspectRatio": "16:9", "position": "left"},
            "text":    {"titleSize": {"desktop": "md", "tablet": "sm", "mobile": "sm"}, "titleLines": 2},
            "card":    _card("flat", "none", "md", "none", {"desktop": "md", "tablet": "sm", "mobile": "sm"}),
            "custom":  {
                "showNumber": True, "numberStyle": "large",
                "numberSize": {"desktop": "3xl", "tablet": "2xl", "mobile": "xl"},
                "imageWidth": {"desktop": "150px", "tablet": "120px", "mobile": "100px"},
                "showDivider": True,
            },
        },
    ),
]

ARTICLE_SLIDER_VARIANTS = [
    BlockVariant(
        id="slider-1", name="Full Width Slider", name_ar="سلايدر بعرض كامل",
        description="Full-width image slider with overlay text",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showDate": True},
            "image":   {"aspectRatio": "21:9", "position": "background", "overlay": {"type": "gradient", "direction": "to-top", "opacity": 0.7}},
            "text":    {"titleSize": {"desktop": "3xl", "tablet": "2xl", "mobile": "xl"}, "titleLines": 2, "excerptLines": 2, "alignment": "start"},
            "card":    _card("flat", "none", "none", "none"),
            "custom":  {
                "height": {"desktop": "500px", "tablet": "400px", "mobile": "300px"},
                "autoplay": True, "autoplayDelay": 5000, "loop": True,
                "showArrows": True, "showDots": True, "transition": "slide",
            },
        },
    ),
    BlockVariant(
        id="slider-2", name="Fade Slider", name_ar="سلايدر التلاشي",
        description="Smooth fade transition slider",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showAuthor": True, "showDate": True},
            "image":   {"aspectRatio": "16:9", "position": "background", "overlay": {"type": "gradient", "direction": "to-top", "opacity": 0.8}},
            "text":    {"titleSize": {"desktop": "2xl", "tablet": "xl", "mobile": "lg"}, "titleLines": 2, "excerptLines": 2, "alignment": "center"},
            "card":    _card("flat", "none", "xl", "none"),
            "custom":  {
                "height": {"desktop": "450px", "tablet": "350px", "mobile": "280px"},
                "autoplay": True, "autoplayDelay": 4000, "loop": True,
                "showArrows": True, "showDots": True, "transition": "fade",
            },
        },
    ),
    BlockVariant(
        id="slider-3", name="Card Slider", name_ar="سلايدر البطاقات",
        description="Multiple cards per view",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showDate": True},
            "image":   {"aspectRatio": "16:9", "position": "top"},
            "text":    {"titleSize": {"desktop": "lg", "tablet": "md", "mobile": "md"}, "titleLines": 2, "excerptLines": 2},
            "card":    _card("elevated", "md", "lg", "lift"),
            "custom":  {
                "slidesPerView": {"desktop": 3, "tablet": 2, "mobile": 1},
                "autoplay": False, "loop": True, "showArrows": True, "showDots": False,
            },
        },
    ),
]

BIG_HERO_VARIANTS = [
    BlockVariant(
        id="hero-classic", name="Classic Hero", name_ar="البطل الكلاسيكي",
        description="Classic 60/40 split with main article and sidebar",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showAuthor": True, "showDate": True},
            "image":   {"aspectRatio": "16:9", "position": "top", "overlay": {"type": "gradient", "direction": "to-top", "opacity": 0.5}},
            "text":    {"titleSize": {"desktop": "2xl", "tablet": "xl", "mobile": "lg"}, "titleLines": 3, "excerptLines": 2},
            "card":    _card("elevated", "lg", "xl", "lift"),
            "custom":  {"layout": "classic", "mainWidth": "60%", "sidebarWidth": "40%", "sidebarArticles": 4},
        },
    ),
    BlockVariant(
        id="hero-newspaper", name="Newspaper Hero", name_ar="بطل الجريدة",
        description="Traditional newspaper style with 3 columns",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showDate": True},
            "image":   {"aspectRatio": "4:3", "position": "top"},
            "text":    {"titleSize": {"desktop": "xl", "tablet": "lg", "mobile": "md"}, "titleLines": 3, "excerptLines": 2},
            "card":    _card("flat", "none", "none", "none"),
            "custom":  {"layout": "newspaper", "columns": 3, "columnRatio": "3-6-3", "mainColumn": "center"},
        },
    ),
    BlockVariant(
        id="hero-magazine", name="Magazine Hero", name_ar="بطل المجلة",
        description="Full-width main with bottom grid",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showAuthor": True, "showDate": True},
            "image":   {"aspectRatio": "21:9", "position": "background",
                        "overlay": {"type": "gradient", "direction": "to-top", "opacity": 0.7}, "hover": {"scale": 1.02}},
            "text":    {"titleSize": {"desktop": "3xl", "tablet": "2xl", "mobile": "xl"}, "titleLines": 2, "excerptLines": 2, "alignment": "start"},
            "card":    _card("flat", "none", "none", "none"),
            "custom":  {
                "layout": "magazine",
                "mainHeight": {"desktop": "70vh", "tablet": "50vh", "mobile": "40vh"},
                "bottomGrid": {"enabled": True, "columns": {"desktop": 4, "tablet": 2, "mobile": 1}, "articles": 4},
            },
        },
    ),
    BlockVariant(
        id="hero-immersive", name="Immersive Hero", name_ar="البطل الغامر",
        description="Full-screen immersive hero",
        default_config={
            "display": {"showImage": True, "showTitle": True, "showExcerpt": True, "showCategory": True, "showDate": True},
            "image":   {"aspectRatio": "auto", "position": "background", "overlay": {"type": "gradient", "direction": "to-top", "opacity": 0.6}},
            "text":    {"titleSize": {"desktop": "4xl", "tablet": "3xl", "mobile": "2xl"}, "titleLines": 3, "alignment": "center"},
            "card":    _card("flat", "none", "none", "none"),
            "custom":  {"layout": "immersive", "mainHeight": {"desktop": "100vh", "tablet": "80vh", "mobile": "70vh"}},
        },
    ),
]

VARIANT_PRESETS = {
    "article-grid":   ARTICLE_GRID_VARIANTS,
    "article-list":   ARTICLE_LIST_VARIANTS,
    "article-slider": ARTICLE_SLIDER_VARIANTS,
    "big-hero":       BIG_HERO_VARIANTS,
}
