from __future__ import annotations

import logging

from .connection import transaction

logger = logging.getLogger(__name__)

COLLECTIONS_DDL = """
CREATE TABLE IF NOT EXISTS collections (
    name VARCHAR(64) NOT NULL PRIMARY KEY,
    payload LONGTEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
"""


def ensure_schema(conn_factory) -> None:
    # Idempotent: CREATE IF NOT EXISTS
    with transaction(conn_factory) as cur:
        cur.execute(COLLECTIONS_DDL)
    logger.info("collections table ready")
