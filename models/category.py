"""Transaction categories and provider category mapping."""

from typing import Optional

# Closed set; every transaction carries exactly one of these.
CATEGORIES = [
    "groceries",
    "food",
    "shopping",
    "transport",
    "utilities",
    "entertainment",
    "health",
    "housing",
    "travel",
    "income",
    "transfer",
    "other",
]

# Categories that never count as spending, whatever the amount sign.
NON_SPENDING_CATEGORIES = frozenset({"income", "transfer"})

_PROVIDER_CATEGORY_MAP = {
    "FOOD_AND_DRINK": "food",
    "GROCERIES": "groceries",
    "TRANSPORTATION": "transport",
    "TRAVEL": "travel",
    "ENTERTAINMENT": "entertainment",
    "SHOPPING": "shopping",
    "HEALTH": "health",
    "UTILITIES": "utilities",
    "HOUSING": "housing",
    "INCOME": "income",
    "TRANSFER": "transfer",
}


def map_provider_category(provider_category: Optional[str]) -> str:
    """Map a bank-provider category onto the internal category set.

    Accepts both the newer upper-snake form ("FOOD_AND_DRINK") and the legacy
    title-case form ("Food and Drink").

    Args:
        provider_category: Category string from the provider, or None.

    Returns:
        One of CATEGORIES. Unknown or missing categories map to "other".
    """
    if not provider_category:
        return "other"

    key = provider_category.strip().upper().replace(" ", "_")
    return _PROVIDER_CATEGORY_MAP.get(key, "other")
