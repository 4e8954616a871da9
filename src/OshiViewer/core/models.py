from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Sequence, Union

ItemKind = Literal["token", "tosogu", "koshirae"]


@dataclass(frozen=True, slots=True, order=True)
class ItemRef:
    """Identity triple of a catalog item.

    Attributes:
        collection: Collection name (e.g. "Juyo", "Tokuju").
        volume: Volume (session) number.
        item: Item number inside the volume.
    """

    collection: str
    volume: int
    item: int


@dataclass(frozen=True, slots=True)
class Era:
    period: Optional[str] = None
    sub_period: Optional[str] = None
    nengo: Optional[str] = None
    western_year: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Appraiser:
    name: str
    kanji: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Mei:
    """Signature (mei) information.

    Observed status values: signed, mumei, kinzogan-mei, orikaeshi-mei, gaku-mei.
    """

    status: Optional[str] = None
    inscription_omote: Optional[str] = None
    inscription_ura: Optional[str] = None
    smith_name_romaji: Optional[str] = None
    smith_name_kanji: Optional[str] = None
    attribution_type: Optional[str] = None
    appraiser: Optional[Appraiser] = None


@dataclass(frozen=True, slots=True)
class Smith:
    name_romaji: Optional[str] = None
    name_kanji: Optional[str] = None
    school: Optional[str] = None
    tradition: Optional[str] = None
    lineage: Optional[str] = None
    generation: Optional[str] = None
    active_period: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Maker:
    name_romaji: Optional[str] = None
    name_kanji: Optional[str] = None
    school: Optional[str] = None
    lineage: Optional[str] = None
    generation: Optional[str] = None
    branch: Optional[str] = None
    active_period: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FittingsMaker:
    primary_artisan: Optional[str] = None
    primary_artisan_kanji: Optional[str] = None
    school: Optional[str] = None
    unified_set: bool = False


@dataclass(frozen=True, slots=True)
class Measurements:
    """Blade measurements in cm."""

    nagasa: Optional[float] = None
    sori: Optional[float] = None
    motohaba: Optional[float] = None
    sakihaba: Optional[float] = None
    kissaki_nagasa: Optional[float] = None
    nakago_nagasa: Optional[float] = None
    nakago_sori: Optional[float] = None
    kasane: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Sugata:
    form: Optional[str] = None
    mune: Optional[str] = None
    kissaki: Optional[str] = None
    mihaba: Optional[str] = None
    features: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class Kitae:
    primary_hada: Sequence[str] = ()
    characteristics: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class Hamon:
    primary_pattern: Sequence[str] = ()
    activities: Sequence[str] = ()
    style: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Boshi:
    pattern: Sequence[str] = ()
    features: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class Horimono:
    present: bool = False
    omote: Sequence[str] = ()
    ura: Sequence[str] = ()
    types: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class Nakago:
    condition: Optional[str] = None
    shape: Optional[str] = None
    yasurime: Sequence[str] = ()
    mekugi_ana: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Origami:
    present: bool = False
    appraiser: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Sayagaki:
    present: bool = False
    author: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Provenance:
    denrai: Sequence[str] = ()
    origami: Origami = Origami()
    sayagaki: Sayagaki = Sayagaki()
    publications: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class Assessment:
    significance: Optional[str] = None
    praise_tags: Sequence[str] = ()
    documentary_value: Optional[str] = None
    overall_summary: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ArticleAuthor:
    name_romaji: Optional[str] = None
    name_kanji: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SetType:
    type: str
    components: Sequence[str] = ()
    unified_theme: bool = False


@dataclass(frozen=True, slots=True)
class MountingStyle:
    overall: Optional[str] = None
    style_tags: Sequence[str] = ()
    aesthetic_notes: Optional[str] = None


@dataclass(frozen=True, slots=True)
class BladeDetails:
    """Blade (token) specific record groups."""

    blade_type: Optional[str] = None
    smith: Optional[Smith] = None
    measurements: Measurements = Measurements()
    sugata: Sugata = Sugata()
    kitae: Kitae = Kitae()
    hamon: Hamon = Hamon()
    boshi: Boshi = Boshi()
    horimono: Horimono = Horimono()
    nakago: Nakago = Nakago()
    kind: ItemKind = "token"


@dataclass(frozen=True, slots=True)
class FittingDetails:
    """Sword fitting (tosogu) specific record groups."""

    fitting_type: Optional[str] = None
    maker: Optional[Maker] = None
    piece_count: Optional[int] = None
    set_type: Optional[SetType] = None
    kind: ItemKind = "tosogu"


@dataclass(frozen=True, slots=True)
class MountingDetails:
    """Mounting (koshirae) specific record groups."""

    mounting_type: Optional[str] = None
    blade_type_intended: Optional[str] = None
    fittings_maker: Optional[FittingsMaker] = None
    style: Optional[MountingStyle] = None
    kind: ItemKind = "koshirae"


ItemDetails = Union[BladeDetails, FittingDetails, MountingDetails]


@dataclass(frozen=True, slots=True)
class ItemMetadata:
    """Full nested metadata record of one catalog item.

    Kind-specific groups live in `details`, a tagged union keyed by
    `details.kind`. Groups shared by every kind stay on this record.

    Attributes:
        details: Blade, fitting or mounting specific groups.
        classification: "tokubetsu-juyo" or "juyo".
        session_number: Designation session number.
        designation_date: Designation date string if known.
        era: Dating information.
        mei: Signature information.
        provenance: Ownership chain and certificates.
        assessment: Curatorial assessment.
        article_author: Author of the source article.
    """

    details: ItemDetails
    classification: Optional[str] = None
    session_number: Optional[int] = None
    designation_date: Optional[str] = None
    era: Optional[Era] = None
    mei: Optional[Mei] = None
    provenance: Provenance = Provenance()
    assessment: Assessment = Assessment()
    article_author: Optional[ArticleAuthor] = None

    @property
    def item_type(self) -> str:
        return self.details.kind


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """Catalog item as supplied to the query engine.

    Summary attributes are a denormalized cache of the metadata record. Either
    side may be missing, so value extraction consults both.

    Attributes:
        collection: Collection name.
        volume: Volume (session) number.
        item: Item number inside the volume.
        smith_name_romaji: Maker name in romaji.
        smith_name_kanji: Maker name in kanji.
        school: School of the maker.
        blade_type: Display type (blade, fitting or mounting type).
        item_type: "token", "tosogu" or "koshirae".
        fitting_type: Fitting type for tosogu.
        nagasa: Blade length in cm.
        nakago_condition: Tang condition.
        era: Period name.
        tradition: Gokaden tradition.
        mei_status: Signature status.
        has_translation: Whether an English translation exists.
        metadata: Full nested record if loaded.
    """

    collection: str
    volume: int
    item: int
    smith_name_romaji: Optional[str] = None
    smith_name_kanji: Optional[str] = None
    school: Optional[str] = None
    blade_type: Optional[str] = None
    item_type: Optional[str] = None
    fitting_type: Optional[str] = None
    nagasa: Optional[float] = None
    nakago_condition: Optional[str] = None
    era: Optional[str] = None
    tradition: Optional[str] = None
    mei_status: Optional[str] = None
    has_translation: bool = False
    metadata: Optional[ItemMetadata] = None

    @property
    def ref(self) -> ItemRef:
        return ItemRef(collection=self.collection, volume=self.volume, item=self.item)
