import argparse
import asyncio
import logging

from spacetraveling.db.prismic import create_prismic_client
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.services.pagination import PaginationTracker
from spacetraveling.services.post_mapper import map_post_page

logger = logging.getLogger(__name__)


async def export_posts(ref: str | None = None) -> int:
    client = create_prismic_client()
    try:
        repo = PrismicPostsRepo(client)
        ref = await repo.resolve_ref(ref)
        tracker = PaginationTracker(repo, map_post_page(await repo.list_posts(ref)))
        state = await tracker.load_all()
        for post in state.results:
            print(post.model_dump_json())
        return len(state.results)
    finally:
        await client.aclose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="Print every post summary as JSON")
    parser.add_argument("--ref", help="Prismic ref (defaults to the master ref)")
    args = parser.parse_args()

    try:
        count = asyncio.run(export_posts(args.ref))
        logger.info(f"Exported {count} posts.")
    except Exception as e:
        logger.error(f"Export failed: {e}", exc_info=True)
        raise SystemExit(1)
