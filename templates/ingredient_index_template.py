"""HTML template for the ingredient index page"""

import html
from pathlib import Path

from lib.recipe_urls import path_to_url

PAGE_TITLE = "Recipe Ingredient Index"

# Inline styling only; the page must work when opened straight from disk
INDEX_HEADER = '''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            line-height: 1.6;
        }}
        h1 {{
            color: #2c3e50;
            border-bottom: 2px solid #eee;
            padding-bottom: 10px;
        }}
        .ingredient {{
            margin: 20px 0;
        }}
        .ingredient-name {{
            font-weight: bold;
            color: #34495e;
            margin-bottom: 5px;
        }}
        .recipe-list {{
            margin-left: 20px;
            list-style-type: none;
        }}
        .recipe-list li {{
            margin: 5px 0;
        }}
        a {{
            color: #3498db;
            text-decoration: none;
        }}
        a:hover {{
            text-decoration: underline;
        }}
    </style>
</head>
<body>
    <h1>{title}</h1>
'''

INDEX_FOOTER = '''</body>
</html>
'''


def recipe_display_name(path: Path) -> str:
    """Link text for a recipe: the file stem with - and _ turned into spaces.

    No title-casing: "chicken_pasta-bake.cook" -> "chicken pasta bake".
    """
    stem = Path(path).stem or "Unknown Recipe"
    return stem.replace('-', ' ').replace('_', ' ')


def format_ingredient_section(
    ingredient: str,
    recipe_paths,
    base_url: str,
    base_dir: Path,
) -> str:
    """Render one ingredient block with its list of recipe links."""
    lines = [
        '<div class="ingredient">',
        f'    <div class="ingredient-name">{html.escape(ingredient)}</div>',
        '    <ul class="recipe-list">',
    ]
    for recipe_path in recipe_paths:
        url = path_to_url(recipe_path, base_url, base_dir)
        name = recipe_display_name(recipe_path)
        lines.append(
            f'        <li><a href="{html.escape(url, quote=True)}">{html.escape(name)}</a></li>'
        )
    lines.append('    </ul>')
    lines.append('</div>')
    return '\n'.join(lines) + '\n'


def format_ingredient_index_html(
    index: dict,
    base_url: str,
    base_dir: Path,
) -> str:
    """Render the full ingredient index as a standalone HTML document.

    Args:
        index: Mapping of ingredient name to sorted recipe paths
        base_url: Public URL prefix for recipe links
        base_dir: Scan root the recipe paths are relative to

    Returns:
        HTML text. Identical input always produces identical output.
    """
    parts = [INDEX_HEADER.format(title=PAGE_TITLE)]
    for ingredient in sorted(index):
        parts.append(format_ingredient_section(ingredient, index[ingredient], base_url, base_dir))
    parts.append(INDEX_FOOTER)
    return ''.join(parts)
