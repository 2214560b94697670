"""CLI to fill a plan's disciplines with AI-suggested topics."""
import argparse
import logging
import sys

from dotenv import load_dotenv
from tqdm import tqdm

from concurseiro import config
from concurseiro.errors import PlanNotFoundError
from concurseiro.tools.ai_suggest import generate_topics_for_discipline
from concurseiro.tools.discipline_editor import DisciplineDraft
from concurseiro.tools.local_storage import default_storage
from concurseiro.tools.plan_store import PlanStore

logger = logging.getLogger(__name__)


def main(argv=None):
    """Suggest topics for every discipline that has none (or all with --all)."""
    load_dotenv()
    logging.basicConfig(level=logging.WARNING, format=config.LOG_FORMAT)

    parser = argparse.ArgumentParser(description="Fill disciplines with AI-suggested topics.")
    parser.add_argument("plan", help="Plan id, id prefix or name.")
    parser.add_argument("--all", action="store_true", help="Also append to disciplines that already have topics.")
    args = parser.parse_args(argv)

    if not config.api_key():
        print("Error: GOOGLE_API_KEY not set")
        sys.exit(1)

    store = PlanStore(default_storage())
    try:
        plan = store.resolve(args.plan)
    except PlanNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)

    targets = [d for d in plan.disciplines if args.all or not d.topics]
    if not targets:
        print("All disciplines already have topics.")
        return

    print(f"Suggesting topics for {len(targets)} discipline(s) of {plan.name}...\n")

    stats = {"filled": 0, "failed": 0, "topics": 0}
    pbar = tqdm(targets, desc="Suggesting topics", unit="discipline")
    for discipline in pbar:
        pbar.set_postfix_str(discipline.name[:40])
        draft = DisciplineDraft.from_discipline(discipline)
        added = draft.suggest_topics(plan.name, generate=generate_topics_for_discipline)
        if not added:
            stats["failed"] += 1
            continue
        try:
            store.save_discipline(plan.id, draft, discipline.id)
        except OSError as e:
            logger.error("Failed to save topics for %s: %s", discipline.name, e)
            stats["failed"] += 1
            continue
        stats["filled"] += 1
        stats["topics"] += added
    pbar.close()

    print("\n=== Suggestion Summary ===")
    print(f"Disciplines filled: {stats['filled']}")
    print(f"Failed:             {stats['failed']}")
    print(f"Topics added:       {stats['topics']}")


if __name__ == "__main__":
    main()
