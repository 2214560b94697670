"""CLI to add, edit, delete disciplines and toggle their topics."""
import argparse
import logging
import sys

from dotenv import load_dotenv

from concurseiro import config
from concurseiro.cli.plans import ask_confirmation
from concurseiro.errors import DisciplineNotFoundError, DraftError, PlanNotFoundError, TopicNotFoundError
from concurseiro.tools.discipline_editor import COLORS
from concurseiro.tools.local_storage import default_storage
from concurseiro.tools.plan_store import PlanStore, resolve_discipline, resolve_topic
from concurseiro.tools.session import AppSession


def _fill_draft(session: AppSession, draft, args: argparse.Namespace) -> None:
    if args.name is not None:
        draft.name = args.name
    if args.color is not None:
        draft.set_color(args.color)
    for ref in args.remove_topic or []:
        topic = resolve_topic(draft, ref)
        if topic is None:
            raise DraftError(f"Topic {ref} not found")
        draft.remove_topic(topic.id)
    for name in args.topic or []:
        draft.add_topic(name)
    if args.suggest:
        added = draft.suggest_topics(session.active_plan.name)
        if added:
            print(f"{added} tópico(s) sugerido(s) pela IA.")
        else:
            print("Houve um erro ao gerar tópicos. Tente novamente.")


def add_discipline(session: AppSession, args: argparse.Namespace) -> None:
    session.open_plan(session.store.resolve(args.plan).id)
    draft = session.start_new_discipline()
    _fill_draft(session, draft, args)
    session.submit_discipline()
    print(f"Disciplina criada: {draft.name.strip()} ({len(draft.topics)} tópicos)")


def edit_discipline(session: AppSession, args: argparse.Namespace) -> None:
    plan = session.open_plan(session.store.resolve(args.plan).id)
    discipline = resolve_discipline(plan, args.discipline)
    draft = session.start_edit_discipline(discipline.id)
    _fill_draft(session, draft, args)
    session.submit_discipline()
    print(f"Disciplina atualizada: {draft.name.strip()} ({len(draft.topics)} tópicos)")


def delete_discipline(session: AppSession, args: argparse.Namespace) -> None:
    plan = session.open_plan(session.store.resolve(args.plan).id)
    discipline = resolve_discipline(plan, args.discipline)
    if args.yes:
        session.confirm = lambda prompt: True
    if session.request_delete_discipline(discipline.id):
        print(f"Disciplina excluída: {discipline.name}")
    else:
        print("Exclusão cancelada.")


def toggle_topic(session: AppSession, args: argparse.Namespace) -> None:
    plan = session.open_plan(session.store.resolve(args.plan).id)
    discipline = resolve_discipline(plan, args.discipline)
    topic = resolve_topic(discipline, args.topic_ref)
    if topic is None:
        raise TopicNotFoundError(args.topic_ref)
    session.toggle_topic(discipline.id, topic.id)
    state = "concluído" if not topic.is_completed else "pendente"
    print(f"{topic.name}: {state}")


def _add_draft_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--name", help="Discipline name.")
    p.add_argument("--color", help=f"One of: {' '.join(COLORS)}")
    p.add_argument("--topic", action="append", help="Topic to add (repeatable).")
    p.add_argument("--remove-topic", action="append", help="Topic id prefix or name to remove (repeatable).")
    p.add_argument("--suggest", action="store_true", help="Append AI-suggested topics.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the disciplines of a study plan.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_add = sub.add_parser("add", help="Add a discipline.")
    p_add.add_argument("plan", help="Plan id, id prefix or name.")
    _add_draft_args(p_add)
    p_add.set_defaults(func=add_discipline)

    p_edit = sub.add_parser("edit", help="Edit a discipline.")
    p_edit.add_argument("plan", help="Plan id, id prefix or name.")
    p_edit.add_argument("discipline", help="Discipline id, id prefix or name.")
    _add_draft_args(p_edit)
    p_edit.set_defaults(func=edit_discipline)

    p_delete = sub.add_parser("delete", help="Delete a discipline.")
    p_delete.add_argument("plan", help="Plan id, id prefix or name.")
    p_delete.add_argument("discipline", help="Discipline id, id prefix or name.")
    p_delete.add_argument("--yes", action="store_true", help="Skip confirmation.")
    p_delete.set_defaults(func=delete_discipline)

    p_toggle = sub.add_parser("toggle", help="Flip a topic's completion.")
    p_toggle.add_argument("plan", help="Plan id, id prefix or name.")
    p_toggle.add_argument("discipline", help="Discipline id, id prefix or name.")
    p_toggle.add_argument("topic_ref", metavar="topic", help="Topic id prefix or name.")
    p_toggle.set_defaults(func=toggle_topic)

    return parser


def main(argv=None):
    load_dotenv()
    logging.basicConfig(level=logging.WARNING, format=config.LOG_FORMAT)

    args = build_parser().parse_args(argv)
    session = AppSession(PlanStore(default_storage()), confirm=ask_confirmation)

    try:
        args.func(session, args)
    except (DraftError, PlanNotFoundError, DisciplineNotFoundError, TopicNotFoundError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
