"""Re-apply the version retention limit to every blog.

Inline pruning after a capture is best effort, so a blog can end up holding more
than the configured number of versions. This script restores the bound offline.

Usage:
  python scripts/enforce_retention.py              # dry-run
  python scripts/enforce_retention.py --apply      # delete excess versions
  python scripts/enforce_retention.py --keep 20 --apply
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func

from blog_history.config import settings
from blog_history.database import SessionLocal, atomic
from blog_history.models.blog_version import BlogVersion
from blog_history.services import version_service


def find_over_retained(db, keep: int) -> list[tuple[int, int]]:
    rows = (
        db.query(BlogVersion.blog_id, func.count(BlogVersion.version_id))
        .group_by(BlogVersion.blog_id)
        .having(func.count(BlogVersion.version_id) > keep)
        .order_by(BlogVersion.blog_id.asc())
        .all()
    )
    return [(int(blog_id), int(count)) for blog_id, count in rows]


def enforce_retention(db, keep: int, dry_run: bool = True) -> dict:
    targets = find_over_retained(db, keep)
    removed_total = 0
    if not dry_run:
        for blog_id, _count in targets:
            with atomic(db):
                removed_total += version_service.prune_versions(db, blog_id, keep)
    return {
        "dry_run": dry_run,
        "keep": keep,
        "blogs": targets,
        "removed_count": removed_total,
    }


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--keep", type=int, default=settings.VERSION_RETENTION_LIMIT, help="Versions to keep per blog")
    parser.add_argument("--apply", action="store_true", help="Actually delete excess versions")
    args = parser.parse_args()
    if args.keep < 1:
        parser.error("--keep must be at least 1")

    db = SessionLocal()
    try:
        result = enforce_retention(db, args.keep, dry_run=not args.apply)
    finally:
        db.close()

    print("Version retention result")
    print(f"  dry_run: {result['dry_run']}")
    print(f"  keep: {result['keep']}")
    print(f"  over_retained_blogs: {len(result['blogs'])}")
    for blog_id, count in result["blogs"]:
        print(f"    - blog {blog_id}: {count} versions")
    print(f"  removed_count: {result['removed_count']}")


if __name__ == "__main__":
    main()
