"""
Keyword lexicon and feature encoding for ingredient text.

Slot order of every vector follows the order of the (label, keywords) pairs
below, which is also the order the classifiers are trained in.
"""
import re
from typing import List

# ============================================================
# KEYWORD LEXICON
# ============================================================

CUISINE_KEYWORDS = [
    ("Indian", ["turmeric", "curry", "masala", "ginger", "garam", "dal", "spices"]),
    ("Italian", ["basil", "olive oil", "tomato", "mozzarella", "pasta", "parmesan"]),
    ("Chinese", ["soy", "garlic", "noodles", "sesame", "chili sauce"]),
    ("Mexican", ["beans", "chili", "tortilla", "avocado", "salsa", "corn"]),
    ("French", ["butter", "cream", "wine", "cheese", "herbs", "onion"]),
]

HEALTH_KEYWORDS = [
    ("protein", ["chicken", "egg", "paneer", "tofu", "beans", "lentil"]),
    ("fat", ["olive oil", "butter", "ghee", "avocado", "nuts", "salmon"]),
    ("fiber", ["leafy", "broccoli", "spinach", "oats", "brown rice", "fiber"]),
]

CUISINES = [label for label, _ in CUISINE_KEYWORDS]
HEALTH_AXES = [axis for axis, _ in HEALTH_KEYWORDS]

# Health axes match whole words only
_HEALTH_PATTERNS = [
    re.compile(r"\b(" + "|".join(re.escape(k) for k in keywords) + r")\b")
    for _, keywords in HEALTH_KEYWORDS
]

PROTEIN_SLOT = HEALTH_AXES.index("protein")
FIBER_SLOT = HEALTH_AXES.index("fiber")


# ============================================================
# ENCODERS
# ============================================================

def encode_cuisine_features(text: str) -> List[int]:
    """One slot per cuisine, lit when any of its keywords occurs in the text.

    Plain substring containment: "soy" also fires inside longer words.
    """
    lowered = (text or "").lower()
    return [
        1 if any(keyword in lowered for keyword in keywords) else 0
        for _, keywords in CUISINE_KEYWORDS
    ]


def encode_health_features(text: str) -> List[int]:
    """[protein, fat, fiber] presence flags."""
    lowered = (text or "").lower()
    return [1 if pattern.search(lowered) else 0 for pattern in _HEALTH_PATTERNS]


def has_evidence(features: List[int]) -> bool:
    return any(v == 1 for v in features)
