"""Supabase client for the salon backend."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Return the process-wide Supabase client, or None when credentials are missing.

    Creating the client does not contact the backend; connectivity problems
    surface on the first query.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured (SALON_SUPABASE_URL / SALON_SUPABASE_KEY)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as exc:
        logger.error(f"Failed to create Supabase client for {settings.supabase_url}: {exc}")
        return None


# Tables and RPCs used by this service:
#
#   salons_within_radius_filtered(p_lat, p_lon, p_radius, p_min_rating,
#       p_min_price, p_max_price, p_categories, p_start, p_end)
#   has_free_slot(p_salon_id, p_start, p_end)
#   appointments, services, extra_charge_reasons, transactions, transaction_items
#
#   functions: create-invoice {transactionId, salonId, invoiceType}
