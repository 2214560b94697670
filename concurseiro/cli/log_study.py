"""CLI to record a study session in a plan."""
import argparse
from datetime import date
import logging
import sys

from dotenv import load_dotenv

from concurseiro import config
from concurseiro.cli.plans import ask_confirmation
from concurseiro.errors import DisciplineNotFoundError, DraftError, PlanNotFoundError, TopicNotFoundError
from concurseiro.models.plan import PageRange, QuestionRecord, VideoRecord
from concurseiro.tools.local_storage import default_storage
from concurseiro.tools.plan_store import PlanStore, resolve_discipline, resolve_topic
from concurseiro.tools.study_log import CATEGORIES
from concurseiro.tools.session import AppSession


def record(session: AppSession, args: argparse.Namespace) -> None:
    plan = session.open_plan(session.store.resolve(args.plan).id)
    draft = session.start_study_log()

    if args.discipline:
        discipline = resolve_discipline(plan, args.discipline)
        draft.select_discipline(plan, discipline.id)
    if args.topic:
        topic = resolve_topic(plan.find_discipline(draft.discipline_id), args.topic)
        if topic is None:
            raise DraftError(f"Topic {args.topic} not found")
        draft.topic_id = topic.id

    if args.date:
        draft.date_choice = "other"
        draft.other_date = date.fromisoformat(args.date)
    elif args.yesterday:
        draft.date_choice = "yesterday"

    draft.category = args.category
    draft.duration = args.duration
    draft.material = args.material
    draft.is_theory_finished = args.theory_finished
    draft.count_in_planning = args.count_in_planning
    draft.schedule_revision = args.schedule_revision
    draft.comments = args.comments
    try:
        draft.questions = QuestionRecord(correct=args.correct, wrong=args.wrong)
        draft.pages = PageRange(start=args.page_start, end=args.page_end)
        draft.video = VideoRecord(title=args.video_title, start=args.video_start, end=args.video_end)
    except ValueError as e:
        raise DraftError(str(e)) from e

    session.submit_study_log()
    log = session.store.get_plan(plan.id).logs[0]
    print(f"Estudo registrado: {log.category} {log.duration} [{log.id[:8]}]")
    if log.count_in_planning and log.topic_id:
        print("Tópico marcado como concluído no planejamento.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Record a study session.")
    parser.add_argument("plan", help="Plan id, id prefix or name.")
    parser.add_argument("--discipline", help="Discipline id prefix or name (defaults to the first).")
    parser.add_argument("--topic", help="Topic id prefix or name (defaults to the first).")
    when = parser.add_mutually_exclusive_group()
    when.add_argument("--yesterday", action="store_true", help="Session happened yesterday.")
    when.add_argument("--date", help="Session date (YYYY-MM-DD).")
    parser.add_argument("--category", choices=CATEGORIES, default=CATEGORIES[0])
    parser.add_argument("--duration", default="00:00:00", help="HH:MM:SS")
    parser.add_argument("--material", default="", help="Ex.: Aula 01")
    parser.add_argument("--theory-finished", action="store_true")
    parser.add_argument("--count-in-planning", action=argparse.BooleanOptionalAction, default=True,
                        help="Mark the topic as completed.")
    parser.add_argument("--schedule-revision", action="store_true")
    parser.add_argument("--correct", type=int, default=0, help="Questions answered correctly.")
    parser.add_argument("--wrong", type=int, default=0, help="Questions answered wrong.")
    parser.add_argument("--page-start", type=int, default=0)
    parser.add_argument("--page-end", type=int, default=0)
    parser.add_argument("--video-title", default="")
    parser.add_argument("--video-start", default="00:00:00")
    parser.add_argument("--video-end", default="00:00:00")
    parser.add_argument("--comments", default="")
    return parser


def main(argv=None):
    load_dotenv()
    logging.basicConfig(level=logging.WARNING, format=config.LOG_FORMAT)

    args = build_parser().parse_args(argv)
    session = AppSession(PlanStore(default_storage()), confirm=ask_confirmation)

    try:
        record(session, args)
    except (DraftError, PlanNotFoundError, DisciplineNotFoundError, TopicNotFoundError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
