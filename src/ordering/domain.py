"""Ordering bounded context - Shopping Cart and Orders.

The cart lives in the buyer's signed session cookie and is never persisted
server-side. Orders are persisted snapshots of a cart, created once per
successful checkout and then moved through their status lifecycle by
administrators.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="agrostore")

ordering = Domain(name="ordering")

logger = get_logger(__name__)
