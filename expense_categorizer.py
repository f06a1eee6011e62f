import logging
import re
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class ExpenseCategorizer:
    CATEGORIES = [
        "Accommodation",
        "Food & Drinks",
        "Transport",
        "Activities & Sightseeing",
        "Shopping",
        "Miscellaneous"
    ]

    DEFAULT_CATEGORY = "Miscellaneous"

    KEYWORDS: Dict[str, List[str]] = {
        "Accommodation": ["hotel", "hostel", "airbnb", "resort", "lodge", "room", "stay", "booking"],
        "Food & Drinks": ["restaurant", "cafe", "coffee", "dinner", "lunch", "breakfast", "food", "meal", "snack", "bar", "drinks"],
        "Transport": ["cab", "taxi", "uber", "ola", "flight", "train", "bus", "fuel", "petrol", "toll", "parking", "fare"],
        "Activities & Sightseeing": ["ticket", "museum", "tour", "trek", "entry", "park", "show", "guide"],
        "Shopping": ["souvenir", "shopping", "market", "gift", "clothes"]
    }

    def __init__(self, keywords: Optional[Dict[str, List[str]]] = None):
        self.keywords = keywords or self.KEYWORDS
        self._patterns = {
            category: re.compile(r"\b(" + "|".join(map(re.escape, words)) + r")\b")
            for category, words in self.keywords.items()
        }

    def categorize(self, description: Optional[str], category: Optional[str] = None) -> str:
        """Category given by the caller, else the first keyword match in the description"""
        if category:
            return category

        if not description:
            return self.DEFAULT_CATEGORY

        description_lower = description.lower()
        for name, pattern in self._patterns.items():
            if pattern.search(description_lower):
                return name

        logger.debug(f"No category keyword in {description!r}")
        return self.DEFAULT_CATEGORY

    def batch_categorize(self, descriptions: List[Optional[str]]) -> List[str]:
        return [self.categorize(description) for description in descriptions]


categorizer = ExpenseCategorizer()
