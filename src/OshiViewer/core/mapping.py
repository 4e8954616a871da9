"""Archive record mapping.

Converts raw JSON-like records (summary attributes plus the nested metadata
schema of the archive) into `CatalogItem` objects.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from OshiViewer.core.models import (
    Appraiser,
    ArticleAuthor,
    Assessment,
    BladeDetails,
    Boshi,
    CatalogItem,
    Era,
    FittingDetails,
    FittingsMaker,
    Hamon,
    Horimono,
    ItemDetails,
    ItemMetadata,
    Kitae,
    Maker,
    Measurements,
    Mei,
    MountingDetails,
    MountingStyle,
    Nakago,
    Origami,
    Provenance,
    Sayagaki,
    SetType,
    Smith,
    Sugata,
)

# Summary keys as written by the archive index (camelCase); snake_case is
# accepted as well.
_SUMMARY_KEYS: dict[str, str] = {
    "smith_name_romaji": "smithNameRomaji",
    "smith_name_kanji": "smithNameKanji",
    "school": "school",
    "blade_type": "bladeType",
    "item_type": "itemType",
    "fitting_type": "fittingType",
    "nakago_condition": "nakagoCondition",
    "era": "era",
    "tradition": "tradition",
    "mei_status": "meiStatus",
}


def item_from_dict(record: Mapping[str, Any], *, with_metadata: bool = True) -> CatalogItem:
    """Build a catalog item from a raw record.

    Args:
        record: Mapping with identity keys, optional summary keys and an
            optional `metadata` object.
        with_metadata: Whether to map the nested metadata record.

    Returns:
        Catalog item.

    Raises:
        ValueError: If the identity triple is missing or malformed, or the
            metadata names an unknown item type.
    """
    collection = _safe_str(record.get("collection"))
    volume = _opt_int(record.get("volume"))
    item_no = _opt_int(record.get("item"))
    if not collection or volume is None or item_no is None:
        raise ValueError(f"Record is missing collection/volume/item: {dict(record)!r:.120}")

    summary = {attr: _summary_value(record, attr, camel) for attr, camel in _SUMMARY_KEYS.items()}
    raw_meta = record.get("metadata")
    metadata = metadata_from_dict(raw_meta) if with_metadata and isinstance(raw_meta, Mapping) else None

    return CatalogItem(
        collection=collection,
        volume=volume,
        item=item_no,
        nagasa=_opt_float(record.get("nagasa")),
        has_translation=bool(_first_present(record, "hasTranslation", "has_translation")),
        metadata=metadata,
        **summary,
    )


def metadata_from_dict(raw: Mapping[str, Any]) -> ItemMetadata:
    """Map the archive metadata schema into `ItemMetadata`.

    Raises:
        ValueError: If `item_type` is present but not token/tosogu/koshirae.
    """
    kind = _safe_str(raw.get("item_type")) or "token"
    if kind == "token":
        details: ItemDetails = _blade_details(raw)
    elif kind == "tosogu":
        details = _fitting_details(raw)
    elif kind == "koshirae":
        details = _mounting_details(raw)
    else:
        raise ValueError(f"Unsupported item_type: {kind}")

    provenance = _section(raw, "provenance")
    assessment = _section(raw, "assessment")
    origami = _section(provenance, "origami")
    sayagaki = _section(provenance, "sayagaki")

    return ItemMetadata(
        details=details,
        classification=_opt_str(raw.get("classification")),
        session_number=_opt_int(raw.get("session_number")),
        designation_date=_opt_str(raw.get("designation_date")),
        era=_era(raw.get("era")),
        mei=_mei(raw.get("mei")),
        provenance=Provenance(
            denrai=_str_tuple(provenance.get("denrai")),
            origami=Origami(present=bool(origami.get("present")), appraiser=_opt_str(origami.get("appraiser"))),
            sayagaki=Sayagaki(present=bool(sayagaki.get("present")), author=_opt_str(sayagaki.get("author"))),
            publications=_str_tuple(provenance.get("publications")),
        ),
        assessment=Assessment(
            significance=_opt_str(assessment.get("significance")),
            praise_tags=_str_tuple(assessment.get("praise_tags")),
            documentary_value=_opt_str(assessment.get("documentary_value")),
            overall_summary=_opt_str(assessment.get("overall_summary")),
        ),
        article_author=_article_author(raw.get("article_author")),
    )


def _blade_details(raw: Mapping[str, Any]) -> BladeDetails:
    measurements = _section(raw, "measurements")
    sugata = _section(raw, "sugata")
    kitae = _section(raw, "kitae")
    hamon = _section(raw, "hamon")
    boshi = _section(raw, "boshi")
    horimono = _section(raw, "horimono")
    nakago = _section(raw, "nakago")
    smith = raw.get("smith")

    return BladeDetails(
        blade_type=_opt_str(raw.get("blade_type")),
        smith=Smith(
            name_romaji=_opt_str(smith.get("name_romaji")),
            name_kanji=_opt_str(smith.get("name_kanji")),
            school=_opt_str(smith.get("school")),
            tradition=_opt_str(smith.get("tradition")),
            lineage=_opt_str(smith.get("lineage")),
            generation=_opt_str(smith.get("generation")),
            active_period=_opt_str(smith.get("active_period")),
        )
        if isinstance(smith, Mapping)
        else None,
        measurements=Measurements(
            **{
                key: _opt_float(measurements.get(key))
                for key in (
                    "nagasa",
                    "sori",
                    "motohaba",
                    "sakihaba",
                    "kissaki_nagasa",
                    "nakago_nagasa",
                    "nakago_sori",
                    "kasane",
                )
            }
        ),
        sugata=Sugata(
            form=_opt_str(sugata.get("form")),
            mune=_opt_str(sugata.get("mune")),
            kissaki=_opt_str(sugata.get("kissaki")),
            mihaba=_opt_str(sugata.get("mihaba")),
            features=_str_tuple(sugata.get("features")),
        ),
        kitae=Kitae(
            primary_hada=_str_tuple(kitae.get("primary_hada")),
            characteristics=_str_tuple(kitae.get("characteristics")),
        ),
        hamon=Hamon(
            primary_pattern=_str_tuple(hamon.get("primary_pattern")),
            activities=_str_tuple(hamon.get("activities")),
            style=_opt_str(hamon.get("style")),
        ),
        boshi=Boshi(pattern=_str_tuple(boshi.get("pattern")), features=_str_tuple(boshi.get("features"))),
        horimono=Horimono(
            present=bool(horimono.get("present")),
            omote=_str_tuple(horimono.get("omote")),
            ura=_str_tuple(horimono.get("ura")),
            types=_str_tuple(horimono.get("types")),
        ),
        nakago=Nakago(
            condition=_opt_str(nakago.get("condition")),
            shape=_opt_str(nakago.get("shape")),
            yasurime=_str_tuple(nakago.get("yasurime")),
            mekugi_ana=_opt_int(nakago.get("mekugi_ana")),
        ),
    )


def _fitting_details(raw: Mapping[str, Any]) -> FittingDetails:
    maker = raw.get("maker")
    set_type = raw.get("set_type")
    return FittingDetails(
        fitting_type=_opt_str(raw.get("fitting_type")),
        maker=Maker(
            name_romaji=_opt_str(maker.get("name_romaji")),
            name_kanji=_opt_str(maker.get("name_kanji")),
            school=_opt_str(maker.get("school")),
            lineage=_opt_str(maker.get("lineage")),
            generation=_opt_str(maker.get("generation")),
            branch=_opt_str(maker.get("branch")),
            active_period=_opt_str(maker.get("active_period")),
        )
        if isinstance(maker, Mapping)
        else None,
        piece_count=_opt_int(raw.get("piece_count")),
        set_type=SetType(
            type=_safe_str(set_type.get("type")),
            components=_str_tuple(set_type.get("components")),
            unified_theme=bool(set_type.get("unified_theme")),
        )
        if isinstance(set_type, Mapping)
        else None,
    )


def _mounting_details(raw: Mapping[str, Any]) -> MountingDetails:
    fittings_maker = raw.get("fittings_maker")
    style = raw.get("style")
    return MountingDetails(
        mounting_type=_opt_str(raw.get("mounting_type")),
        blade_type_intended=_opt_str(raw.get("blade_type_intended")),
        fittings_maker=FittingsMaker(
            primary_artisan=_opt_str(fittings_maker.get("primary_artisan")),
            primary_artisan_kanji=_opt_str(fittings_maker.get("primary_artisan_kanji")),
            school=_opt_str(fittings_maker.get("school")),
            unified_set=bool(fittings_maker.get("unified_set")),
        )
        if isinstance(fittings_maker, Mapping)
        else None,
        style=MountingStyle(
            overall=_opt_str(style.get("overall")),
            style_tags=_str_tuple(style.get("style_tags")),
            aesthetic_notes=_opt_str(style.get("aesthetic_notes")),
        )
        if isinstance(style, Mapping)
        else None,
    )


def _era(value: Any) -> Optional[Era]:
    if not isinstance(value, Mapping):
        return None
    return Era(
        period=_opt_str(value.get("period")),
        sub_period=_opt_str(value.get("sub_period")),
        nengo=_opt_str(value.get("nengo")),
        western_year=_opt_int(value.get("western_year")),
    )


def _mei(value: Any) -> Optional[Mei]:
    if not isinstance(value, Mapping):
        return None
    appraiser = value.get("appraiser")
    return Mei(
        status=_opt_str(value.get("status")),
        inscription_omote=_opt_str(value.get("inscription_omote")),
        inscription_ura=_opt_str(value.get("inscription_ura")),
        smith_name_romaji=_opt_str(value.get("smith_name_romaji")),
        smith_name_kanji=_opt_str(value.get("smith_name_kanji")),
        attribution_type=_opt_str(value.get("attribution_type")),
        appraiser=Appraiser(name=_safe_str(appraiser.get("name")), kanji=_opt_str(appraiser.get("kanji")))
        if isinstance(appraiser, Mapping) and _safe_str(appraiser.get("name"))
        else None,
    )


def _article_author(value: Any) -> Optional[ArticleAuthor]:
    if not isinstance(value, Mapping):
        return None
    return ArticleAuthor(name_romaji=_opt_str(value.get("name_romaji")), name_kanji=_opt_str(value.get("name_kanji")))


def _summary_value(record: Mapping[str, Any], attr: str, camel: str) -> Optional[str]:
    return _opt_str(_first_present(record, camel, attr))


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, Mapping) else {}


def _safe_str(value: Any) -> str:
    """Return stripped text for string-like values, else empty string."""
    if isinstance(value, str):
        return value.strip()
    return ""


def _opt_str(value: Any) -> Optional[str]:
    return _safe_str(value) or None


def _opt_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _opt_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(text for text in (_safe_str(v) for v in value) if text)
