"""
Grouping keys: "the same priced item at the same venue".

A key is the venue's place ID plus the product's category, brand, name
and mixer, plus the size label and volume. Text is compared verbatim,
so "Schooner" and "schooner" are different keys. Missing text is the
empty string and a missing volume is None, whichever way it arrived.
"""

import json
from typing import Any, Dict, NamedTuple, Optional

from .exceptions import InvalidGroupingKeyError


def _text(value: Optional[str]) -> str:
    if value is None:
        return ''
    return str(value)


def _ml(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise InvalidGroupingKeyError("ml must be a number")
    try:
        ml = int(value)
    except (TypeError, ValueError):
        raise InvalidGroupingKeyError(f"ml must be a number, got {value!r}")
    if ml != value and str(ml) != str(value):
        raise InvalidGroupingKeyError(f"ml must be a whole number, got {value!r}")
    return ml


class GroupingKey(NamedTuple):
    """
    Value type for a report group.

    Two keys are equal when every field is equal. ``serialize()`` gives
    a JSON array that survives any characters in venue or product text;
    ``parse()`` reverses it.
    """

    venue_ref: str
    category: str
    brand: str
    name: str
    mixer: str
    size_label: str
    ml: Optional[int]

    def serialize(self) -> str:
        return json.dumps(list(self), ensure_ascii=False, separators=(',', ':'))

    @classmethod
    def parse(cls, raw: str) -> "GroupingKey":
        try:
            fields = json.loads(raw)
        except (TypeError, ValueError):
            raise InvalidGroupingKeyError("Grouping key is not valid JSON")
        if not isinstance(fields, list) or len(fields) != len(cls._fields):
            raise InvalidGroupingKeyError("Grouping key has the wrong shape")
        key = build_grouping_key(*fields)
        if key is None:
            raise InvalidGroupingKeyError("Grouping key has no venue")
        return key

    @classmethod
    def from_report(cls, report) -> Optional["GroupingKey"]:
        """Key of a stored report (venue and product size must be loaded)."""
        size = report.product_size
        product = size.product
        return build_grouping_key(
            venue_ref=report.venue.google_place_id,
            category=product.category,
            brand=product.brand,
            name=product.name,
            mixer=product.mixer,
            size_label=size.size_label,
            ml=size.ml,
        )

    def report_lookup(self, prefix: str = '') -> Dict[str, Any]:
        """ORM filter kwargs selecting PriceReports in this group."""
        lookup = {
            f'{prefix}venue__google_place_id': self.venue_ref,
            f'{prefix}product_size__product__category': self.category,
            f'{prefix}product_size__product__brand': self.brand,
            f'{prefix}product_size__product__name': self.name,
            f'{prefix}product_size__product__mixer': self.mixer,
            f'{prefix}product_size__size_label': self.size_label,
        }
        if self.ml is None:
            lookup[f'{prefix}product_size__ml__isnull'] = True
        else:
            lookup[f'{prefix}product_size__ml'] = self.ml
        return lookup

    def to_dict(self) -> Dict[str, Any]:
        return {
            'place_id': self.venue_ref,
            'category': self.category,
            'brand': self.brand,
            'name': self.name,
            'mixer': self.mixer,
            'size_label': self.size_label,
            'ml': self.ml,
        }


def build_grouping_key(
    venue_ref: Optional[str],
    category: Optional[str] = None,
    brand: Optional[str] = None,
    name: Optional[str] = None,
    mixer: Optional[str] = None,
    size_label: Optional[str] = None,
    ml: Any = None,
) -> Optional[GroupingKey]:
    """
    Build the grouping key for a report's fields.

    Returns None when there is no venue reference; such reports can't be
    aggregated.

    Raises:
        InvalidGroupingKeyError: If ml is not a whole number
    """
    if not venue_ref:
        return None
    return GroupingKey(
        venue_ref=_text(venue_ref),
        category=_text(category),
        brand=_text(brand),
        name=_text(name),
        mixer=_text(mixer),
        size_label=_text(size_label),
        ml=_ml(ml),
    )
