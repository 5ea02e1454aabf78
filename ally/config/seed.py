"""
Seed data loading for the externally managed collections (Places, Products).

Seed files map collection -> document id -> document data:

    {"Places": {"place_1": {"name": "...", "accessibilityFeatures": ["wheelchair"]}}}
"""

import json
import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


def load_seed(path: str) -> Dict[str, Dict[str, Dict[str, Any]]]:
    with open(path, "r", encoding="utf-8") as f:
        seed = json.load(f)

    if not isinstance(seed, dict) or not all(isinstance(docs, dict) for docs in seed.values()):
        raise ValueError(f"Seed file {path} must map collection names to {{docId: data}} objects")
    return seed


def write_seed(db: Any, seed: Dict[str, Dict[str, Dict[str, Any]]], apply: bool = False) -> List[str]:
    """
    Write every seed document to the store.

    Returns the list of "collection/docId" paths that were (or would be, on a
    dry run) written. A failed write is logged and does not stop the others.
    """
    written = []
    for collection, docs in seed.items():
        for doc_id, data in docs.items():
            path = f"{collection}/{doc_id}"
            if not apply:
                logger.info(f"Preparing: {path}")
                written.append(path)
                continue
            try:
                db.collection(collection).document(doc_id).set(data)
                logger.info(f"Wrote: {path}")
                written.append(path)
            except Exception as e:
                logger.error(f"Failed to write {path}: {e}")
    return written
