"""Mapper from `CatalogItem` domain models to `ItemView` display models."""

from __future__ import annotations

from typing import Sequence

from OshiViewer.core.models import CatalogItem
from OshiViewer.renderers.view_models import ItemView


def format_ref(item: CatalogItem) -> str:
    """Format an item reference as "<collection> <volume>/<item>"."""
    return f"{item.collection} {item.volume}/{item.item}"


def map_item_to_view(item: CatalogItem) -> ItemView:
    """Map a catalog item to its display model.

    Fittings show their fitting type where blades show a blade type.
    """
    return ItemView(
        ref=format_ref(item),
        collection=item.collection,
        volume=item.volume,
        item=item.item,
        item_type=item.item_type or (item.metadata.item_type if item.metadata else None),
        name=item.smith_name_romaji,
        name_kanji=item.smith_name_kanji,
        form=item.blade_type or item.fitting_type,
        school=item.school,
        tradition=item.tradition,
        era=item.era,
        nagasa=item.nagasa,
        mei_status=item.mei_status,
        nakago_condition=item.nakago_condition,
        has_translation=item.has_translation,
    )


def map_items_to_views(items: Sequence[CatalogItem]) -> list[ItemView]:
    """Map catalog items to display models, keeping order."""
    return [map_item_to_view(item) for item in items]
