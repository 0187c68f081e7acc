"""Ingredient extraction from Cooklang recipe text.

Only the ingredient marker is recognized:

    @name            -> "name"
    @name{1 kg}      -> "name" (the {annotation} is consumed and dropped)

A name runs up to the next "@", "{" or newline, so trailing prose on the
same line is kept: "@onion, diced." yields "onion, diced.".
"""

import re
from typing import Iterator

# Captured group is the raw ingredient name; the optional brace block is
# matched so it is skipped, but never captured.
INGREDIENT_PATTERN = r'@([^{@\n]+)(?:\{[^}]*\})?'


def normalize_ingredient_name(name: str) -> str:
    """Trim surrounding whitespace and lower-case an ingredient name.

    Queries against an index must go through the same normalization,
    e.g. normalize_ingredient_name("  Chicken ") -> "chicken".
    """
    return name.strip().lower()


class IngredientExtractor:
    """Finds ingredient markers in recipe text.

    The pattern is compiled once per extractor and reused for every file.
    """

    def __init__(self, pattern: str = INGREDIENT_PATTERN):
        self._pattern = re.compile(pattern)

    def extract(self, content: str) -> Iterator[str]:
        """Yield normalized ingredient names in order of appearance.

        Args:
            content: Full text of one recipe file

        Yields:
            Ingredient names, trimmed and lower-cased. Duplicates are kept.
        """
        for match in self._pattern.finditer(content):
            name = normalize_ingredient_name(match.group(1))
            # "@ {x}" captures only whitespace
            if name:
                yield name


_default_extractor = IngredientExtractor()


def extract_ingredients(content: str) -> list[str]:
    """Return all ingredient names in content using the shared extractor."""
    return list(_default_extractor.extract(content))
