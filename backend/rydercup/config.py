import logging
import os

from .scoring.match_play import DEFAULT_TOTAL_HOLES
from .services.validation import ValidationError, validate_total_holes

logger = logging.getLogger(__name__)


def _canon_prefix(val):
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _total_holes(raw):
    if raw is None or not raw.strip():
        return DEFAULT_TOTAL_HOLES
    try:
        return validate_total_holes(raw.strip())
    except ValidationError as exc:
        logger.warning(
            "MATCH_TOTAL_HOLES is invalid (got %r: %s); defaulting to %d",
            raw,
            exc.detail,
            DEFAULT_TOTAL_HOLES,
        )
        return DEFAULT_TOTAL_HOLES


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

MATCH_TOTAL_HOLES = _total_holes(os.getenv("MATCH_TOTAL_HOLES"))
