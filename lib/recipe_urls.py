"""Build public URLs for recipe files."""

from pathlib import Path, PurePath
from urllib.parse import quote


def relative_recipe_path(path: Path, base_dir: Path) -> PurePath:
    """Return path relative to base_dir, or path unchanged if it is outside."""
    try:
        return PurePath(path).relative_to(base_dir)
    except ValueError:
        return PurePath(path)


def path_to_url(path: Path, base_url: str, base_dir: Path) -> str:
    """Convert a recipe file path to its URL under base_url.

    The extension is dropped and the relative path is percent-encoded as a
    single component, so the "/" between folder and stem becomes %2F.

    Examples:
        ("recipes/chicken_pasta.cook", "http://example.com/recipes", "recipes")
            -> "http://example.com/recipes/chicken_pasta"
        ("recipes/soup/leek soup.cook", "http://example.com/r/", "recipes")
            -> "http://example.com/r/soup%2Fleek%20soup"

    Args:
        path: Recipe file path
        base_url: Public URL prefix; a trailing slash is ignored
        base_dir: Scan root the recipe path is made relative to

    Returns:
        The full URL string. No filesystem access is performed.
    """
    relative = relative_recipe_path(path, base_dir)
    stem = relative.stem or "unknown"
    parent = relative.parent.as_posix()

    if parent in ("", "."):
        final_path = stem
    else:
        final_path = f"{parent}/{stem}"

    base = base_url.rstrip('/')
    return f"{base}/{quote(final_path, safe='')}"
