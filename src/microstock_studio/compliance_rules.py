"""Microstock compliance constants.

Thresholds and the brand/trademark denylist used by the validators. These are
fixed at build time; pass a different list to ``MetadataValidator`` to score
against another policy.
"""

# ===== Title / Description =====

TITLE_MAX_CHARS = 70  # Adobe Stock truncates longer titles
TITLE_MIN_CHARS = 20
TITLE_MIN_WORDS = 5
DESCRIPTION_MIN_WORDS = 10

TITLE_TOO_LONG_PENALTY = 15
TITLE_TOO_SHORT_PENALTY = 5
TITLE_FEW_WORDS_PENALTY = 5
DESCRIPTION_SPARSE_PENALTY = 10


# ===== Keywords =====

KEYWORDS_MIN = 30
KEYWORDS_MAX = 50
KEYWORD_SHORTFALL_PENALTY = 1.5  # per missing keyword
KEYWORD_EXCESS_PENALTY = 2  # per extra keyword
DUPLICATE_KEYWORD_PENALTY = 3  # per duplicate

SHORT_KEYWORD_CHARS = 3  # keywords shorter than this are generic
SHORT_KEYWORD_TOLERANCE = 3  # more short keywords than this raise an info


# ===== Compliance / Technical =====

BANNED_TERM_PENALTY = 25  # per distinct banned term
AI_DISCLOSURE_PENALTY = 10
AUTHOR_PLACEHOLDER = "{{author}}"


# ===== Brand / Trademark Denylist =====
# Matched case-insensitively as substrings of title, description and keywords.

BANNED_KEYWORDS_BY_CATEGORY: dict[str, tuple[str, ...]] = {
    "tech": (
        "iphone", "ipad", "apple", "macbook", "ios", "airpods",
        "android", "google", "pixel", "samsung", "galaxy", "windows", "microsoft",
        "facebook", "instagram", "twitter", "tiktok", "whatsapp", "youtube", "linkedin",
        "adobe", "photoshop", "illustrator", "zoom", "skype",
    ),
    "auto": (
        "bmw", "mercedes", "audi", "tesla", "ferrari", "porsche", "lamborghini",
        "toyota", "honda", "ford", "jeep",
    ),
    "fashion_retail": (
        "nike", "adidas", "puma", "reebok", "gucci", "prada", "louis vuitton",
        "chanel", "zara", "h&m",
    ),
    "entertainment_toys": (
        "disney", "marvel", "dc comics", "star wars", "lego", "barbie",
        "hot wheels", "nerf", "mickey mouse",
    ),
    "food_drink": (
        "coca-cola", "pepsi", "coke", "mcdonalds", "starbucks", "kfc", "burger king",
    ),
    "camera_gear": (
        "canon", "nikon", "sony", "fujifilm", "leica", "gopro",
    ),
}

BANNED_KEYWORDS: tuple[str, ...] = tuple(
    term for terms in BANNED_KEYWORDS_BY_CATEGORY.values() for term in terms
)
