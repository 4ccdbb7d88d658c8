import re
from functools import lru_cache
from typing import Optional

from .schemas import BundleOffer, ComboOffer, ParsedOffer, PercentOffer, UnrecognizedOffer
from .settings import PARSE_CACHE_SIZE

# Leading currency marker merchandisers put in front of prices
_CURRENCY = r"(?:₹|rs\.?|inr)?\s*"

BUNDLE_RE = re.compile(rf"^{_CURRENCY}([0-9]{{1,9}})\s*for\s*([0-9]{{1,9}})$", re.IGNORECASE)
PERCENT_RE = re.compile(r"^([0-9]{1,9})\s*%(?:\s*off)?$", re.IGNORECASE)
COMBO_RE = re.compile(rf"^{_CURRENCY}([0-9]{{1,9}})\s*combo$", re.IGNORECASE)


@lru_cache(maxsize=PARSE_CACHE_SIZE)
def _parse(offer_string: str) -> ParsedOffer:
    text = offer_string.strip()

    m = BUNDLE_RE.match(text)
    if m and int(m.group(2)) >= 1:
        return BundleOffer(
            group_price=int(m.group(1)),
            group_size=int(m.group(2)),
            original=offer_string,
        )

    m = PERCENT_RE.match(text)
    if m:
        return PercentOffer(percent=int(m.group(1)), original=offer_string)

    m = COMBO_RE.match(text)
    if m:
        return ComboOffer(unit_price=int(m.group(1)), original=offer_string)

    return UnrecognizedOffer(original=offer_string)


def parse_offer(offer_string: Optional[str]) -> ParsedOffer:
    """
    Parse a merchandising offer string such as "180 for 2", "50% off"
    or "399 combo". Never raises: anything else is an UnrecognizedOffer.
    """
    return _parse(offer_string or "")
