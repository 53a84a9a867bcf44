"""
Seed script for the demo curriculum.
This will:
1. Optionally wipe every curriculum table (--reset)
2. Insert the "Product Discovery" demo track if no tracks exist
3. Print the resulting gaps and recommendations
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path to import pmos modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from pmos.services.curriculum_store import CurriculumStore
from pmos.services.insights import detect_gaps, recommend_resources

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def seed(reset: bool = False):
    """Seed the demo curriculum and log what the insights view would show."""
    store = CurriculumStore()

    if reset:
        deleted = store.reset_all()
        logger.info(f"Wiped {sum(deleted.values())} row(s)")

    if store.seed_demo_data():
        logger.info("✅ Demo curriculum inserted")
    else:
        logger.info("Tracks already present. Nothing to seed.")

    resources = store.load_resources()
    logger.info(f"\n{'=' * 60}")
    logger.info("KNOWLEDGE GAPS")
    for gap in detect_gaps(resources):
        logger.info(
            f"  {gap.topic}: required by {gap.required_count}, covered by {gap.available_count}"
        )
    logger.info("RECOMMENDED")
    for item in recommend_resources(resources):
        logger.info(f"  [{item.score:+d}] {item.resource.title} ({item.reason})")
    logger.info(f"{'=' * 60}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="delete all data before seeding")
    args = parser.parse_args()
    try:
        seed(reset=args.reset)
    except Exception as e:
        logger.error(f"❌ Fatal error during seeding: {e}", exc_info=True)
        sys.exit(1)
