"""Vacation / out-of-office detection from custom status fields.

The vocabulary is a product choice rather than a correctness contract; it may
miss statuses worded differently. Extend the lists below to localize it.
"""

import re

# Substrings of the emoji alt-text or shortcode, e.g. "palm tree" / ":palm_tree:".
VACATION_EMOJI_WORDS = ("palm",)

# Substrings of the emoji image reference; 1f334 is the palm tree code point.
VACATION_IMAGE_CODES = ("1f334",)

# Whole words or phrases in the free-text status (English and German).
VACATION_PHRASES = ("vacation", "ooo", "out of office", "urlaub")

_PHRASE_PATTERN = re.compile(
    "|".join(rf"\b{re.escape(phrase)}\b" for phrase in VACATION_PHRASES),
    re.IGNORECASE,
)


def _text(entity: object, field: str) -> str:
    value = getattr(entity, field, None)
    return value.lower() if isinstance(value, str) else ""


def is_vacation(entity: object | None) -> bool:
    """Whether an entity's custom status says the user is away on vacation.

    Works with observed entities, stored records or any object exposing the
    custom status attributes; missing attributes simply do not match.
    """
    if entity is None:
        return False

    emoji_alt = _text(entity, "custom_status_emoji_alt")
    shortcode = _text(entity, "custom_status_emoji_shortcode")
    image_ref = _text(entity, "custom_status_image_ref")
    text = _text(entity, "custom_status_text")

    if any(word in emoji_alt or word in shortcode for word in VACATION_EMOJI_WORDS):
        return True
    if any(code in image_ref for code in VACATION_IMAGE_CODES):
        return True
    return _PHRASE_PATTERN.search(text) is not None
