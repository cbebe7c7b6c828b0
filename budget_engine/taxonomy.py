"""Spending category taxonomy.

The taxonomy is a fixed, ordered table of sixteen categories. Each entry
carries a keyword list used by the classifier plus an icon and color that
the presentation layer may use. The table is read once at import and
exposed through read-only mappings, so it can be shared freely.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from . import config
from .exceptions import TaxonomyError

OTHER_CATEGORY = 'Other'
SUBSCRIPTION_CATEGORY = 'Subscription'
DEFAULT_ICON = '📦'

EXPECTED_CATEGORIES = (
    'Food & Dining',
    'Groceries',
    'Transportation',
    'Shopping',
    'Entertainment',
    'Bills & Utilities',
    'Subscription',
    'Health',
    'Education',
    'Travel',
    'Rent & Housing',
    'Personal Care',
    'Gifts & Donations',
    'Insurance',
    'Investments',
    'Other',
)


def validate_taxonomy(data: Any) -> List[str]:
    """Return a list of problems found in a raw taxonomy document."""
    if not isinstance(data, dict) or not isinstance(data.get('categories'), list):
        return ["missing 'categories' list"]

    errors = []
    seen = []
    for position, entry in enumerate(data['categories']):
        if not isinstance(entry, dict):
            errors.append(f"entry {position} is not an object")
            continue
        name = entry.get('name')
        if not isinstance(name, str) or not name:
            errors.append(f"entry {position} has no name")
            continue
        if name in seen:
            errors.append(f"duplicate category '{name}'")
        seen.append(name)

        keywords = entry.get('keywords', [])
        if not isinstance(keywords, list):
            errors.append(f"'{name}' keywords must be a list")
            continue
        for keyword in keywords:
            if not isinstance(keyword, str) or not keyword.strip():
                errors.append(f"'{name}' has an empty keyword")
            elif keyword != keyword.lower():
                errors.append(f"'{name}' keyword '{keyword}' must be lower-case")

    missing = [name for name in EXPECTED_CATEGORIES if name not in seen]
    unknown = [name for name in seen if name not in EXPECTED_CATEGORIES]
    if missing:
        errors.append(f"missing categories: {', '.join(missing)}")
    if unknown:
        errors.append(f"unknown categories: {', '.join(unknown)}")
    return errors


def load_taxonomy(path: Optional[Union[str, Path]] = None) -> Tuple[Dict[str, Any], ...]:
    """Load and validate the taxonomy file.

    Returns:
        Tuple of category entries in file order, each a dict with
        ``name``, ``icon``, ``color`` and a tuple of ``keywords``.

    Raises:
        TaxonomyError: If the file is missing or malformed
    """
    target = Path(path) if path is not None else config.TAXONOMY_PATH
    try:
        data = config.load_config(target)
    except (OSError, ValueError) as exc:
        raise TaxonomyError(f"Could not read taxonomy {target}: {exc}") from exc

    errors = validate_taxonomy(data)
    if errors:
        raise TaxonomyError(f"Invalid taxonomy {target}: {'; '.join(errors)}")

    return tuple(
        {
            'name': entry['name'],
            'icon': entry.get('icon') or DEFAULT_ICON,
            'color': entry.get('color', ''),
            'keywords': tuple(entry.get('keywords', [])),
        }
        for entry in data['categories']
    )


_ENTRIES = load_taxonomy()

# Evaluation order for the classifier is the file order.
CATEGORY_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    entry['name']: entry['keywords']
    for entry in _ENTRIES
    if entry['name'] != OTHER_CATEGORY
})
CATEGORY_NAMES: Tuple[str, ...] = tuple(entry['name'] for entry in _ENTRIES)
CATEGORY_ICONS: Mapping[str, str] = MappingProxyType({entry['name']: entry['icon'] for entry in _ENTRIES})
CATEGORY_COLORS: Mapping[str, str] = MappingProxyType({entry['name']: entry['color'] for entry in _ENTRIES})


def is_known_category(name: Any) -> bool:
    return isinstance(name, str) and name in CATEGORY_ICONS


def category_icon(name: str) -> str:
    return CATEGORY_ICONS.get(name, DEFAULT_ICON)
