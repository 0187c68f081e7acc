#!/usr/bin/env python3
"""Generate a browsable ingredient index from a folder of Cooklang recipes.

Usage:
    # Index ./recipes, link to the default base URL
    .venv/bin/python generate_ingredient_index.py recipes

    # Custom base URL and output file
    .venv/bin/python generate_ingredient_index.py recipes https://cook.example.com/r --output site/index.html

    # Show every ingredient with its recipes
    .venv/bin/python generate_ingredient_index.py recipes --list

    # Dry run (print HTML instead of saving)
    .venv/bin/python generate_ingredient_index.py recipes --dry-run

RECIPES_DIR, RECIPE_INDEX_BASE_URL and RECIPE_INDEX_OUTPUT may be set in
the environment or a .env file; command-line arguments take precedence.
"""

import argparse
import os
from pathlib import Path

from dotenv import load_dotenv

from lib.ingredient_index import RecipeDirectoryError, build_index

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "http://localhost:8080/r"
DEFAULT_OUTPUT = "ingredient-index.html"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an HTML index of recipes by ingredient"
    )
    parser.add_argument(
        "recipes_dir",
        nargs="?",
        default=os.getenv("RECIPES_DIR"),
        help="Directory containing .cook recipe files (or set RECIPES_DIR)",
    )
    parser.add_argument(
        "base_url",
        nargs="?",
        default=os.getenv("RECIPE_INDEX_BASE_URL", DEFAULT_BASE_URL),
        help=f"Base URL where recipes are served (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(os.getenv("RECIPE_INDEX_OUTPUT", DEFAULT_OUTPUT)),
        help=f"Where to write the HTML index (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print each ingredient with the recipes that use it",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the HTML instead of writing it",
    )
    return parser


def print_ingredients(index, with_recipes: bool = False) -> None:
    """Print ingredient names, optionally followed by their recipe paths."""
    for ingredient in index.ingredients():
        if not with_recipes:
            print(f"Found ingredient: {ingredient}")
            continue
        print(f"Ingredient: {ingredient}")
        for recipe in index.recipes_for(ingredient) or ():
            print(f"  Recipe: {recipe}")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.recipes_dir:
        print("Error: Please provide the recipe directory path (or set RECIPES_DIR)")
        return 1

    try:
        index = build_index(Path(args.recipes_dir))
    except RecipeDirectoryError as e:
        print(f"Error: {e}")
        return 1

    html = index.render_html(args.base_url)

    if args.dry_run:
        print(html)
    else:
        print_ingredients(index, with_recipes=args.list)
        try:
            args.output.write_text(html, encoding="utf-8")
        except OSError as e:
            print(f"Error: Could not write {args.output}: {e}")
            return 1
        print(f"Indexed {len(index)} ingredients from {index.recipe_count} recipes")
        print(f"Index generated at: {args.output}")

    if index.skipped:
        print("\nWarnings:")
        for entry in index.skipped:
            print(f"  - Skipped {entry.path}: {entry.reason}")

    return 0


if __name__ == "__main__":
    exit(main())
