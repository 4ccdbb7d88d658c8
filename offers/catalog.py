import logging
from typing import Dict, List, Optional

import httpx

from .calculator import check_preconditions
from .errors import CatalogUnavailable, InvalidPrecondition
from .parser import parse_offer
from .schemas import BundleOffer, ComboOffer, InventoryOffer, UnrecognizedOffer
from .settings import CATALOG_API_URL, CATALOG_TIMEOUT

logger = logging.getLogger(__name__)

INVENTORY_ENDPOINT = "/offers/inventory"


def build_query(category: Optional[str]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if category and category.lower() != "all":
        params["category"] = category
    return params


def _log_offer_quality(record_id: str, offer_text: str, mrp: float) -> None:
    offer = parse_offer(offer_text)
    if isinstance(offer, UnrecognizedOffer):
        if offer_text.strip():
            logger.warning(f"Unrecognized offer '{offer_text}' on inventory {record_id}, priced without offer")
        return
    if isinstance(offer, BundleOffer) and offer.group_price == 0:
        logger.warning(f"Bundle offer '{offer_text}' on inventory {record_id} is priced at 0")
    if isinstance(offer, ComboOffer) and offer.unit_price == 0:
        logger.warning(f"Combo offer '{offer_text}' on inventory {record_id} is priced at 0")
    if isinstance(offer, BundleOffer) and offer.group_price > offer.group_size * mrp:
        logger.warning(
            f"Bundle offer '{offer_text}' on inventory {record_id} costs more than "
            f"{offer.group_size} units at {mrp}, not applied"
        )
    if isinstance(offer, ComboOffer) and offer.unit_price > mrp:
        logger.warning(f"Combo offer '{offer_text}' on inventory {record_id} is above the mrp {mrp}, not applied")
    try:
        check_preconditions(0, mrp, offer)
    except InvalidPrecondition as e:
        logger.warning(f"Invalid offer on inventory {record_id}: {e.message}")


def parse_inventory_records(json_data: List[dict]) -> List[InventoryOffer]:
    records = []
    for row in json_data:
        record_id = str(row.get("_id") or row.get("id") or "")
        if not record_id:
            logger.warning(f"Skipping inventory row without id: {row}")
            continue
        if not row.get("isActive", True):
            continue

        try:
            mrp = float(row.get("mrp"))
            quantity = int(row.get("quantity") or 0)
        except (TypeError, ValueError):
            logger.warning(f"Skipping inventory {record_id}: non-numeric mrp/quantity")
            continue
        if mrp < 0 or quantity < 0:
            logger.warning(f"Skipping inventory {record_id}: negative mrp/quantity")
            continue

        offer_text = (row.get("offer") or "").strip()
        _log_offer_quality(record_id, offer_text, mrp)

        records.append(InventoryOffer(
            id=record_id,
            category=(row.get("category") or "").strip(),
            item=(row.get("item") or "").strip(),
            size=(row.get("size") or "").strip(),
            quantity=quantity,
            mrp=mrp,
            offer=offer_text,
        ))
    return records


def fetch_inventory_offers(
    category: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> List[InventoryOffer]:
    """
    Load the active inventory offers (price, offer text, stock) from the
    catalog service.
    """
    params = build_query(category)
    try:
        with httpx.Client(
            base_url=CATALOG_API_URL,
            timeout=CATALOG_TIMEOUT,
            transport=transport,
        ) as client:
            resp = client.get(INVENTORY_ENDPOINT, params=params)
            resp.raise_for_status()
            payload = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise CatalogUnavailable(str(e), {"url": CATALOG_API_URL + INVENTORY_ENDPOINT}) from e

    data = payload.get("data", []) if isinstance(payload, dict) else payload
    records = parse_inventory_records(data)
    logger.info(f"Loaded {len(records)} inventory offers from catalog")
    return records
