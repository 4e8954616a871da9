"""View models for output rendering.

Display-oriented data structures that keep presentation concerns out of the
domain models. Used by OutputWriter implementations.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ItemView:
    """Catalog item view model for output rendering.

    Attributes:
        ref: Display reference, e.g. "Juyo 12/34".
        collection: Collection name.
        volume: Volume (session) number.
        item: Item number within the volume.
        item_type: Item kind (token, tosogu, koshirae) if known.
        name: Romanized smith or maker name.
        name_kanji: Smith or maker name in kanji.
        form: Blade type, or fitting type for fittings.
        school: School name.
        tradition: Tradition (gokaden) name.
        era: Era label.
        nagasa: Blade length in cm.
        mei_status: Signature status.
        nakago_condition: Tang condition.
        has_translation: Whether an English translation exists.
    """

    ref: str
    collection: str
    volume: int
    item: int
    item_type: str | None
    name: str | None
    name_kanji: str | None
    form: str | None
    school: str | None
    tradition: str | None
    era: str | None
    nagasa: float | None
    mei_status: str | None
    nakago_condition: str | None
    has_translation: bool
