import logging
import random
from typing import Optional

from services.response_table import Category, ResponseTable

logger = logging.getLogger(__name__)


class ResponseSelector:
    """Picks a reply by scanning categories, then patterns, in declaration order.

    The first pattern found anywhere in the lowercased input wins, and a reply is
    drawn uniformly from that category. Pass a seeded ``random.Random`` as ``rng``
    for repeatable picks.
    """

    def __init__(self, table: ResponseTable, rng: Optional[random.Random] = None):
        self.table = table
        self.rng = rng or random.Random()

    def match_category(self, processed_text: str) -> Optional[Category]:
        """First matching category, or None when the default replies apply."""
        text = processed_text.lower()
        for category in self.table.categories:
            # A category with nothing to say falls through like a miss
            if not category.responses:
                continue
            for pattern in category.patterns:
                if pattern in text:
                    return category
        return None

    def select_response(self, processed_text: str) -> str:
        category = self.match_category(processed_text)
        if category is None:
            logger.debug("No category matched, using default replies")
            return self.rng.choice(self.table.default)
        logger.debug("Matched category %s", category.name)
        return self.rng.choice(category.responses)
