"""
Deterministic placeholder catalog data.
Used when no live endpoint answered, so the calculator still has products to show.
"""
import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

FIXTURES_PATH = Path(__file__).resolve().parent.parent / "fixtures" / "synthetic_catalog.json"


def load_fixtures(path: Path = FIXTURES_PATH) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


# Loaded once at import
FIXTURES = load_fixtures()


def _render(value: Any, replacements: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        for placeholder, replacement in replacements.items():
            value = value.replace(placeholder, replacement)
        return value
    if isinstance(value, list):
        return [_render(item, replacements) for item in value]
    if isinstance(value, dict):
        return {key: _render(item, replacements) for key, item in value.items()}
    return value


class SyntheticCatalog:
    """
    Pure lookup/filter functions over the fixture data set.
    Output mirrors the WooCommerce response shape for each resource kind.
    """

    def __init__(self, fixtures: Optional[Dict[str, Any]] = None):
        self.fixtures = fixtures if fixtures is not None else FIXTURES

    def synthesize(self, resource_path: str, query_params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Build a placeholder response for a catalog resource.

        Args:
            resource_path: Path as passed to the client (e.g. "products/101")
            query_params: Query parameters; only category and search are honored

        Returns:
            Category list, single product, product list, or an empty list
        """
        path = resource_path.strip("/")
        params = query_params or {}

        if "products" not in path:
            return []

        if "categories" in path:
            return self.categories()

        # A numeric last segment names one record, as in products/<id>/variations/<id>
        last_segment = path.rsplit("/", 1)[-1]
        if last_segment.isdigit():
            return self.product(int(last_segment))
        if last_segment == "variations":
            return []

        return self.products(category=params.get("category"), search=params.get("search"))

    def categories(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.fixtures["categories"])

    def product(self, product_id: int) -> Dict[str, Any]:
        """Template product, overlaid with the curated record for known ids."""
        product = _render(self.fixtures["product_template"], {
            "{id}": str(product_id),
            "{timestamp}": self.fixtures["timestamp"],
        })
        product["id"] = product_id
        for image in product["images"]:
            image["id"] = 1000 + product_id

        override = self.fixtures["product_overrides"].get(str(product_id))
        if override is None:
            override = self.fixtures["unknown_product"]
        product.update(copy.deepcopy(override))
        return product

    def products(self, category: Optional[Any] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
        """Curated collection filtered the way the live API filters it."""
        products = [self.product(product_id) for product_id in self.fixtures["collection"]]

        if category not in (None, ""):
            wanted = str(category).strip()
            products = [
                product for product in products
                if any(
                    str(cat.get("id")) == wanted or cat.get("slug") == wanted
                    for cat in product.get("categories", [])
                )
            ]

        if search:
            needle = str(search).lower()
            products = [
                product for product in products
                if needle in product.get("name", "").lower()
            ]

        return products


synthetic_catalog = SyntheticCatalog()
