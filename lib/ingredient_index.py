"""Ingredient index - map each ingredient to the recipes that use it.

Usage:
    index = build_index(Path("recipes"))
    for ingredient in index.ingredients():
        print(ingredient, index.recipes_for(ingredient))
    html = index.render_html("http://localhost:8080/r")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from lib.ingredient_extractor import IngredientExtractor
from lib.recipe_discovery import SkippedEntry, SkipPolicy, iter_recipe_files
from templates.ingredient_index_template import format_ingredient_index_html


class RecipeDirectoryError(OSError):
    """The scan root is missing, not a directory, or cannot be read."""


@dataclass(frozen=True)
class Recipe:
    """One recipe file and the ingredients found in it, in file order."""
    path: Path
    ingredients: tuple[str, ...]


def index_recipes(
    root: Path,
    extractor: Optional[IngredientExtractor] = None,
    skip_policy: Optional[SkipPolicy] = None,
) -> list[Recipe]:
    """Scan root for .cook files and extract their ingredients.

    Files that cannot be read or decoded as UTF-8 are recorded on
    skip_policy and left out. Files without any ingredient are left out
    silently.

    Args:
        root: Recipe directory to scan
        extractor: Extractor to reuse; a new one is built when omitted
        skip_policy: Collects skipped entries

    Returns:
        List of Recipe records, one per file with at least one ingredient
    """
    if extractor is None:
        extractor = IngredientExtractor()
    if skip_policy is None:
        skip_policy = SkipPolicy()

    recipes = []
    for path in iter_recipe_files(root, skip_policy):
        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            skip_policy.record(path, e)
            continue

        ingredients = tuple(extractor.extract(content))
        if ingredients:
            recipes.append(Recipe(path=path, ingredients=ingredients))

    return recipes


def create_ingredient_index(recipes: list[Recipe]) -> dict[str, tuple[Path, ...]]:
    """Fold recipes into a reverse index of ingredient -> recipe paths.

    Each path list is de-duplicated and sorted by path string, so the
    result does not depend on the order recipes were discovered in.
    """
    collected: dict[str, set[Path]] = {}
    for recipe in recipes:
        for ingredient in recipe.ingredients:
            collected.setdefault(ingredient, set()).add(recipe.path)

    return {
        ingredient: tuple(sorted(paths, key=str))
        for ingredient, paths in collected.items()
    }


def check_recipe_directory(root: Path) -> None:
    """Raise RecipeDirectoryError unless root is a readable directory."""
    try:
        exists = root.exists()
        is_dir = exists and root.is_dir()
    except OSError as e:
        raise RecipeDirectoryError(f"Cannot access recipe directory {root}: {e}") from e

    if not exists:
        raise RecipeDirectoryError(f"Recipe directory not found: {root}")
    if not is_dir:
        raise RecipeDirectoryError(f"Not a directory: {root}")
    try:
        with os.scandir(root):
            pass
    except OSError as e:
        raise RecipeDirectoryError(f"Cannot read recipe directory {root}: {e}") from e


class IngredientIndex:
    """Read-only ingredient index over one recipe directory.

    Building the index scans the whole tree up front; there is no
    incremental update. Scan a directory again to pick up changes.
    """

    def __init__(
        self,
        index: dict[str, tuple[Path, ...]],
        base_dir: Path,
        skipped: tuple[SkippedEntry, ...] = (),
        recipe_count: int = 0,
    ):
        self._index = dict(index)
        self.base_dir = Path(base_dir)
        self.skipped = tuple(skipped)
        self.recipe_count = recipe_count

    @classmethod
    def from_directory(cls, recipes_dir) -> "IngredientIndex":
        root = Path(recipes_dir)
        check_recipe_directory(root)

        skip_policy = SkipPolicy()
        recipes = index_recipes(root, skip_policy=skip_policy)
        return cls(
            index=create_ingredient_index(recipes),
            base_dir=root,
            skipped=tuple(skip_policy.skipped),
            recipe_count=len(recipes),
        )

    def ingredients(self) -> list[str]:
        """All ingredient names, sorted ascending."""
        return sorted(self._index)

    def recipes_for(self, ingredient: str) -> Optional[tuple[Path, ...]]:
        """Sorted recipe paths for an exact ingredient name, or None.

        The name is not normalized here; pass it through
        normalize_ingredient_name() first, e.g. "Chicken" finds nothing.
        """
        return self._index.get(ingredient)

    get_recipes_for_ingredient = recipes_for

    def render_html(self, base_url: str) -> str:
        """Render the index as a standalone HTML page linking to base_url."""
        return format_ingredient_index_html(self._index, base_url, self.base_dir)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, ingredient) -> bool:
        return ingredient in self._index


def build_index(recipes_dir) -> IngredientIndex:
    """Scan recipes_dir and return its ingredient index.

    Raises:
        RecipeDirectoryError: If recipes_dir is missing, not a directory,
            or unreadable. No partial index is returned.
    """
    return IngredientIndex.from_directory(recipes_dir)
