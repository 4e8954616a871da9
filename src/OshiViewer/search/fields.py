"""Field registry for catalog search.

Maps user-facing field names and aliases to canonical fields, and extracts
field values and free-text content from catalog items.

Every canonical field has exactly one extraction rule. Rules prefer the
item's denormalized summary attribute and fall back to the nested metadata
record, switching explicitly on the record kind (token/tosogu/koshirae).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Final, Literal, Mapping, Optional, Sequence, Union

from OshiViewer.core.models import (
    BladeDetails,
    CatalogItem,
    FittingDetails,
    ItemMetadata,
    MountingDetails,
)

FieldType = Literal["numeric", "text", "boolean", "array"]
FieldValue = Union[int, float, str, bool, list[str]]
Extractor = Callable[[CatalogItem], Optional[FieldValue]]


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    """Searchable field description.

    Attributes:
        name: Canonical field name.
        aliases: Alternative names users may type.
        type: Determines how matching is done.
        description: Human readable help text.
        examples: Example query fragments.
    """

    name: str
    aliases: tuple[str, ...]
    type: FieldType
    description: str
    examples: tuple[str, ...] = ()


FIELD_DEFINITIONS: Final[tuple[FieldDefinition, ...]] = (
    # Measurements
    FieldDefinition("nagasa", ("cm", "length", "blade_length"), "numeric", "Blade length in cm", ("nagasa>70", "cm<60")),
    FieldDefinition("sori", ("curve", "curvature"), "numeric", "Blade curvature in cm", ("sori>1.5",)),
    FieldDefinition("motohaba", ("width", "base_width"), "numeric", "Width at base in cm", ("motohaba>3.0",)),
    FieldDefinition("sakihaba", ("tip_width",), "numeric", "Width at tip in cm", ("sakihaba<2.5",)),
    FieldDefinition("kasane", ("thickness",), "numeric", "Blade thickness in cm", ("kasane>0.7",)),
    FieldDefinition("kissaki", ("kissaki_nagasa", "point_length"), "numeric", "Kissaki (point) length in cm"),
    FieldDefinition("nakago_length", ("nakago_nagasa", "tang_length"), "numeric", "Tang length in cm"),
    FieldDefinition("mekugi", ("mekugi_ana", "holes", "peg_holes"), "numeric", "Number of mekugi-ana", ("mekugi=2",)),
    FieldDefinition("volume", ("session", "vol", "book"), "numeric", "Volume/session number", ("volume=6", "session=1")),
    FieldDefinition("western_year", ("year",), "numeric", "Western calendar year of the dating", ("year<1300",)),
    # Text
    FieldDefinition("school", ("ha", "smithing_school"), "text", "School of the maker", ("school:Rai",)),
    FieldDefinition("tradition", ("den", "gokaden"), "text", "Sword-making tradition (Gokaden)", ("den:Yamashiro",)),
    FieldDefinition("era", ("period", "jidai"), "text", "Historical period", ("era:Kamakura",)),
    FieldDefinition("mei", ("signature", "mei_status"), "text", "Signature status", ("mei:signed", "mei:mumei")),
    FieldDefinition("nakago", ("tang", "nakago_condition"), "text", "Tang condition", ("nakago:ubu", "nakago:suriage")),
    FieldDefinition("type", ("blade", "blade_type", "form"), "text", "Blade, fitting or mounting type", ("type:tachi",)),
    FieldDefinition("smith", ("maker", "tosho", "craftsman"), "text", "Smith or maker name", ("smith:Masamune",)),
    FieldDefinition("hamon", ("hamon_pattern", "temper"), "text", "Hamon pattern", ("hamon:choji",)),
    FieldDefinition("hada", ("kitae", "jihada", "grain"), "text", "Hada (grain pattern)", ("hada:itame",)),
    FieldDefinition("boshi", ("boshi_pattern", "tip_temper"), "text", "Boshi pattern", ("boshi:komaru",)),
    FieldDefinition("sugata", ("shape", "form_type"), "text", "Overall shape"),
    FieldDefinition("mune", ("back", "spine"), "text", "Mune (back) type", ("mune:iori",)),
    FieldDefinition("collection", ("designation", "class"), "text", "Collection (Tokuju or Juyo)", ("collection:Tokuju",)),
    FieldDefinition("item_type", ("category",), "text", "Item type (token, tosogu, koshirae)", ("item_type:tosogu",)),
    FieldDefinition("kiwame", ("appraiser", "attribution"), "text", "Appraiser of the attribution", ("kiwame:honami",)),
    # Boolean
    FieldDefinition("translated", ("has_translation", "english"), "boolean", "Has English translation", ("translated:true",)),
    FieldDefinition("horimono", ("carving", "engraving"), "boolean", "Has horimono (carvings)", ("horimono:true",)),
    FieldDefinition("origami", ("papers", "certification"), "boolean", "Has origami (papers)"),
    FieldDefinition("ensemble", ("set", "is_ensemble"), "boolean", "Fitting set or unified mounting", ("ensemble:yes",)),
    # Array
    FieldDefinition("yasurime", ("file_marks",), "array", "Yasurime (file marks) pattern"),
    FieldDefinition("denrai", ("provenance", "owner"), "array", "Ownership history", ("denrai:tokugawa",)),
)


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _joined(values: Sequence[str], sep: str = ", ") -> Optional[str]:
    return sep.join(values) if values else None


def _blade(item: CatalogItem) -> Optional[BladeDetails]:
    meta = item.metadata
    if meta is not None and meta.details.kind == "token":
        return meta.details
    return None


def _fitting(item: CatalogItem) -> Optional[FittingDetails]:
    meta = item.metadata
    if meta is not None and meta.details.kind == "tosogu":
        return meta.details
    return None


def _mounting(item: CatalogItem) -> Optional[MountingDetails]:
    meta = item.metadata
    if meta is not None and meta.details.kind == "koshirae":
        return meta.details
    return None


def _measurement(attr: str) -> Extractor:
    def extract(item: CatalogItem) -> Optional[float]:
        blade = _blade(item)
        return getattr(blade.measurements, attr) if blade else None

    return extract


def _nagasa(item: CatalogItem) -> Optional[float]:
    blade = _blade(item)
    return _first(item.nagasa, blade.measurements.nagasa if blade else None)


def _mekugi(item: CatalogItem) -> Optional[int]:
    blade = _blade(item)
    return blade.nakago.mekugi_ana if blade else None


def _western_year(item: CatalogItem) -> Optional[int]:
    meta = item.metadata
    return meta.era.western_year if meta and meta.era else None


def _school(item: CatalogItem) -> Optional[str]:
    if item.school is not None:
        return item.school
    meta = item.metadata
    if meta is None:
        return None
    details = meta.details
    if details.kind == "token":
        return details.smith.school if details.smith else None
    if details.kind == "tosogu":
        return details.maker.school if details.maker else None
    return details.fittings_maker.school if details.fittings_maker else None


def _tradition(item: CatalogItem) -> Optional[str]:
    blade = _blade(item)
    return _first(item.tradition, blade.smith.tradition if blade and blade.smith else None)


def _era(item: CatalogItem) -> Optional[str]:
    meta = item.metadata
    return _first(item.era, meta.era.period if meta and meta.era else None)


def _mei(item: CatalogItem) -> Optional[str]:
    meta = item.metadata
    return _first(item.mei_status, meta.mei.status if meta and meta.mei else None)


def _nakago(item: CatalogItem) -> Optional[str]:
    blade = _blade(item)
    return _first(item.nakago_condition, blade.nakago.condition if blade else None)


def _type(item: CatalogItem) -> Optional[str]:
    if item.blade_type is not None:
        return item.blade_type
    meta = item.metadata
    if meta is None:
        return None
    details = meta.details
    if details.kind == "token":
        return details.blade_type
    if details.kind == "tosogu":
        return details.fitting_type
    return details.mounting_type


def _smith(item: CatalogItem) -> Optional[str]:
    if item.smith_name_romaji is not None:
        return item.smith_name_romaji
    meta = item.metadata
    if meta is None:
        return None
    details = meta.details
    if details.kind == "token":
        return _first(
            details.smith.name_romaji if details.smith else None,
            meta.mei.smith_name_romaji if meta.mei else None,
        )
    if details.kind == "tosogu":
        return details.maker.name_romaji if details.maker else None
    return details.fittings_maker.primary_artisan if details.fittings_maker else None


def _hamon(item: CatalogItem) -> Optional[str]:
    blade = _blade(item)
    return _joined(blade.hamon.primary_pattern) if blade else None


def _hada(item: CatalogItem) -> Optional[str]:
    blade = _blade(item)
    return _joined(blade.kitae.primary_hada) if blade else None


def _boshi(item: CatalogItem) -> Optional[str]:
    blade = _blade(item)
    return _joined(blade.boshi.pattern) if blade else None


def _sugata(item: CatalogItem) -> Optional[str]:
    blade = _blade(item)
    return blade.sugata.form if blade else None


def _mune(item: CatalogItem) -> Optional[str]:
    blade = _blade(item)
    return blade.sugata.mune if blade else None


def _item_type(item: CatalogItem) -> Optional[str]:
    return _first(item.item_type, item.metadata.item_type if item.metadata else None)


def _kiwame(item: CatalogItem) -> Optional[str]:
    meta = item.metadata
    if meta is None:
        return None
    return _first(
        meta.mei.appraiser.name if meta.mei and meta.mei.appraiser else None,
        meta.provenance.origami.appraiser,
    )


def _horimono(item: CatalogItem) -> Optional[bool]:
    blade = _blade(item)
    return blade.horimono.present if blade else None


def _origami(item: CatalogItem) -> Optional[bool]:
    meta = item.metadata
    return meta.provenance.origami.present if meta else None


def _ensemble(item: CatalogItem) -> Optional[bool]:
    meta = item.metadata
    if meta is None:
        return None
    details = meta.details
    if details.kind == "tosogu":
        return details.set_type is not None or (details.piece_count or 0) > 1
    if details.kind == "koshirae":
        return bool(details.fittings_maker and details.fittings_maker.unified_set)
    return False


def _yasurime(item: CatalogItem) -> Optional[list[str]]:
    blade = _blade(item)
    return list(blade.nakago.yasurime) or None if blade else None


def _denrai(item: CatalogItem) -> Optional[list[str]]:
    meta = item.metadata
    return list(meta.provenance.denrai) or None if meta else None


_EXTRACTORS: Final[Mapping[str, Extractor]] = MappingProxyType(
    {
        "nagasa": _nagasa,
        "sori": _measurement("sori"),
        "motohaba": _measurement("motohaba"),
        "sakihaba": _measurement("sakihaba"),
        "kasane": _measurement("kasane"),
        "kissaki": _measurement("kissaki_nagasa"),
        "nakago_length": _measurement("nakago_nagasa"),
        "mekugi": _mekugi,
        "volume": lambda item: item.volume,
        "western_year": _western_year,
        "school": _school,
        "tradition": _tradition,
        "era": _era,
        "mei": _mei,
        "nakago": _nakago,
        "type": _type,
        "smith": _smith,
        "hamon": _hamon,
        "hada": _hada,
        "boshi": _boshi,
        "sugata": _sugata,
        "mune": _mune,
        "collection": lambda item: item.collection,
        "item_type": _item_type,
        "kiwame": _kiwame,
        "translated": lambda item: item.has_translation,
        "horimono": _horimono,
        "origami": _origami,
        "ensemble": _ensemble,
        "yasurime": _yasurime,
        "denrai": _denrai,
    }
)


def _metadata_text_parts(meta: ItemMetadata) -> list[Optional[str]]:
    """Collect the curated metadata attributes of an item.

    Only the item's own identity and technical descriptors are included.
    Lineage, provenance, praise tags and article authors routinely name other
    makers and are left out.
    """
    parts: list[Optional[str]] = []
    if meta.era:
        parts.extend((meta.era.period, meta.era.sub_period, meta.era.nengo))
    if meta.mei:
        parts.extend(
            (
                meta.mei.status,
                meta.mei.inscription_omote,
                meta.mei.inscription_ura,
                meta.mei.smith_name_romaji,
                meta.mei.smith_name_kanji,
            )
        )

    details = meta.details
    if details.kind == "token":
        if details.smith:
            parts.extend(
                (details.smith.name_romaji, details.smith.name_kanji, details.smith.school, details.smith.tradition)
            )
        parts.extend(
            (
                details.blade_type,
                details.nakago.condition,
                details.nakago.shape,
                details.sugata.form,
                details.sugata.mune,
                details.sugata.kissaki,
                " ".join(details.hamon.primary_pattern),
                " ".join(details.hamon.activities),
                " ".join(details.kitae.primary_hada),
                " ".join(details.kitae.characteristics),
                " ".join(details.boshi.pattern),
                " ".join(details.boshi.features),
                " ".join(details.horimono.types),
                " ".join(details.nakago.yasurime),
            )
        )
    elif details.kind == "tosogu":
        if details.maker:
            parts.extend((details.maker.name_romaji, details.maker.name_kanji, details.maker.school))
        parts.append(details.fitting_type)
        if details.set_type:
            parts.append(details.set_type.type)
    else:
        if details.fittings_maker:
            parts.extend(
                (
                    details.fittings_maker.primary_artisan,
                    details.fittings_maker.primary_artisan_kanji,
                    details.fittings_maker.school,
                )
            )
        parts.extend((details.mounting_type, details.blade_type_intended))
    return parts


class FieldRegistry:
    """Read-only lookup of field definitions, aliases and extractors.

    Build once and share; instances are never mutated after construction.
    """

    def __init__(self, definitions: Sequence[FieldDefinition], extractors: Mapping[str, Extractor]) -> None:
        """Build the alias map and validate the tables.

        Args:
            definitions: Field definitions.
            extractors: Mapping of canonical field name to extraction rule.

        Raises:
            ValueError: If names repeat, an alias maps to two canonical fields,
                or the extractor table does not match the definitions 1:1.
        """
        by_name: dict[str, FieldDefinition] = {}
        aliases: dict[str, str] = {}
        for definition in definitions:
            if definition.name in by_name:
                raise ValueError(f"Duplicate field definition: {definition.name}")
            by_name[definition.name] = definition
            for key in (definition.name, *definition.aliases):
                lowered = key.lower()
                owner = aliases.get(lowered)
                if owner is not None and owner != definition.name:
                    raise ValueError(f"Field alias collision: {key} maps to both {owner} and {definition.name}")
                aliases[lowered] = definition.name

        missing = sorted(set(by_name) - set(extractors))
        if missing:
            raise ValueError(f"Fields without extraction rule: {missing}")
        orphaned = sorted(set(extractors) - set(by_name))
        if orphaned:
            raise ValueError(f"Extraction rules without field definition: {orphaned}")

        self._definitions: Mapping[str, FieldDefinition] = MappingProxyType(by_name)
        self._aliases: Mapping[str, str] = MappingProxyType(aliases)
        self._extractors: Mapping[str, Extractor] = MappingProxyType(dict(extractors))

    @property
    def definitions(self) -> tuple[FieldDefinition, ...]:
        return tuple(self._definitions.values())

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def resolve(self, name: str) -> Optional[str]:
        """Resolve a field name or alias (case-insensitive) to its canonical name."""
        return self._aliases.get(name.lower())

    def definition(self, name: str) -> Optional[FieldDefinition]:
        """Return the definition for a field name or alias."""
        canonical = self.resolve(name)
        return self._definitions[canonical] if canonical else None

    def value_of(self, item: CatalogItem, name: str) -> Optional[FieldValue]:
        """Extract a field value from an item.

        Args:
            item: Catalog item.
            name: Field name or alias.

        Returns:
            The value, or None when the field is unknown or the item carries
            no value for it.
        """
        canonical = self.resolve(name)
        if canonical is None:
            return None
        return self._extractors[canonical](item)

    def searchable_text(self, item: CatalogItem) -> str:
        """Return the curated free-text content of an item, lower-cased."""
        parts: list[Optional[str]] = [
            item.smith_name_romaji,
            item.smith_name_kanji,
            item.school,
            item.blade_type,
            item.fitting_type,
            item.era,
            item.tradition,
            item.mei_status,
            item.nakago_condition,
            item.collection,
        ]
        if item.metadata is not None:
            parts.extend(_metadata_text_parts(item.metadata))
        return " ".join(part for part in parts if part).lower()

    def all_field_names(self) -> list[str]:
        """Return every canonical name and alias, sorted."""
        names: set[str] = set()
        for definition in self._definitions.values():
            names.add(definition.name)
            names.update(definition.aliases)
        return sorted(names)


REGISTRY: Final[FieldRegistry] = FieldRegistry(FIELD_DEFINITIONS, _EXTRACTORS)


def resolve_field_name(name: str) -> Optional[str]:
    return REGISTRY.resolve(name)


def get_field_definition(name: str) -> Optional[FieldDefinition]:
    return REGISTRY.definition(name)


def get_field_value(item: CatalogItem, name: str) -> Optional[FieldValue]:
    return REGISTRY.value_of(item, name)


def get_searchable_text(item: CatalogItem) -> str:
    return REGISTRY.searchable_text(item)


def get_all_field_names() -> list[str]:
    return REGISTRY.all_field_names()
