"""CLI to list, show, create, edit and delete study plans."""
import argparse
import logging
from datetime import datetime
from pathlib import Path
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from concurseiro import config
from concurseiro.errors import DraftError, PlanNotFoundError
from concurseiro.tools.ai_suggest import suggest_disciplines
from concurseiro.tools.discipline_editor import COLORS
from concurseiro.tools.local_storage import default_storage
from concurseiro.tools.plan_form import find_option
from concurseiro.tools.plan_store import PlanStore
from concurseiro.tools.progress import discipline_progress, plan_summary, recent_logs
from concurseiro.tools.session import AppSession

console = Console()


def ask_confirmation(prompt: str) -> bool:
    return input(f"{prompt} [s/N] ").strip().lower() in ("s", "sim", "y", "yes")


def _swatch(color: str) -> str:
    """Colored square for a palette color; plain square otherwise."""
    return f"[{color}]■[/]" if color in COLORS else "■"


def _apply_form_args(draft, args: argparse.Namespace) -> None:
    if args.name is not None:
        draft.name = args.name
    if args.observation is not None:
        draft.observation = args.observation
    if args.category is not None:
        draft.change_category(args.category)
    if args.value is not None:
        draft.selected_value = find_option(args.value, draft.options())
    if args.general is not None:
        draft.set_general(args.general)
    if args.image is not None:
        draft.load_image(Path(args.image))


def list_plans(session: AppSession, args: argparse.Namespace) -> None:
    plans = session.store.plans
    if not plans:
        console.print("Nenhum plano cadastrado. Crie um com: python -m concurseiro.cli.plans create --name ...")
        return

    table = Table(title="Planos de Estudo")
    table.add_column("ID", style="dim")
    table.add_column("Plano", style="cyan")
    table.add_column("Edital / Cargo")
    table.add_column("Progresso", style="magenta", justify="right")
    table.add_column("Disciplinas", justify="right")
    table.add_column("Tópicos", justify="right")
    for plan in plans:
        summary = plan_summary(plan)
        table.add_row(
            escape(plan.id[:8]),
            escape(summary.name),
            escape(summary.label),
            f"{summary.progress}%",
            str(summary.discipline_count),
            str(summary.completed_topics),
        )
    console.print(table)


def show_plan(session: AppSession, args: argparse.Namespace) -> None:
    plan = session.open_plan(session.store.resolve(args.plan).id)
    summary = plan_summary(plan)

    console.print(f"\n[bold cyan]{escape(plan.name)}[/bold cyan]")
    if summary.label:
        console.print(escape(summary.label))
    if plan.observation:
        console.print(f"[dim]{escape(plan.observation)}[/dim]")
    console.print(f"Progresso: [magenta]{summary.progress}%[/magenta]\n")

    if not plan.disciplines:
        console.print("Nenhuma disciplina. Adicione com: python -m concurseiro.cli.disciplines add")
    else:
        table = Table(title="Disciplinas")
        table.add_column("ID", style="dim")
        table.add_column("Disciplina")
        table.add_column("Tópicos Estudados", justify="right")
        table.add_column("Tópicos Totais", justify="right")
        table.add_column("Questões Resolvidas", justify="right")
        table.add_column("Progresso", style="magenta", justify="right")
        for stats in discipline_progress(plan):
            table.add_row(
                escape(stats.discipline_id[:8]),
                f"{_swatch(stats.color)} {escape(stats.name)}",
                str(stats.completed_topics),
                str(stats.total_topics),
                str(stats.questions_resolved),
                f"{stats.percentage}%",
            )
        console.print(table)

    if args.topics:
        for discipline in plan.disciplines:
            console.print(f"\n  • [yellow]{escape(discipline.name)}[/yellow]")
            for topic in discipline.topics:
                mark = "[green]✓[/green]" if topic.is_completed else " "
                console.print(f"    \\[{mark}] {escape(topic.name)} [dim]({escape(topic.id[:8])})[/dim]")

    entries = recent_logs(plan, limit=args.history)
    if not entries:
        console.print("\nNenhum registro de estudo.")
        return

    history = Table(title="Histórico")
    history.add_column("Data")
    history.add_column("Categoria", style="cyan")
    history.add_column("Disciplina / Tópico")
    history.add_column("Duração", justify="right")
    history.add_column("Questões", justify="right")
    for entry in entries:
        log = entry.log
        when = datetime.fromtimestamp(log.date / 1000).strftime("%d/%m/%Y")
        discipline = entry.discipline_name or "(disciplina removida)"
        topic = entry.topic_name or "-"
        questions = f"{log.questions.correct}/{log.questions.total}" if log.questions.total else ""
        history.add_row(when, log.category, escape(f"{discipline} / {topic}"), log.duration, questions)
    console.print(history)


def create_plan(session: AppSession, args: argparse.Namespace) -> None:
    draft = session.start_new_plan()
    _apply_form_args(draft, args)
    plans = session.submit_plan()
    print(f"Plano criado: {plans[0].name} [{plans[0].id[:8]}]")


def edit_plan(session: AppSession, args: argparse.Namespace) -> None:
    plan = session.store.resolve(args.plan)
    draft = session.start_edit_plan(plan.id)
    _apply_form_args(draft, args)
    session.submit_plan()
    print(f"Plano atualizado: {session.store.get_plan(plan.id).name}")


def delete_plan(session: AppSession, args: argparse.Namespace) -> None:
    plan = session.store.resolve(args.plan)
    if args.yes:
        session.confirm = lambda prompt: True
    if session.request_delete_plan(plan.id):
        print(f"Plano excluído: {plan.name}")
    else:
        print("Exclusão cancelada.")


def suggest_plan_disciplines(session: AppSession, args: argparse.Namespace) -> None:
    plan = session.store.resolve(args.plan)
    print(f"Sugerindo disciplinas para {plan.name}...")
    suggestions = suggest_disciplines(plan.name, plan.cargos or None)
    if not suggestions:
        print("Houve um erro ao sugerir disciplinas. Tente novamente.")
        return
    before = len(plan.disciplines)
    session.store.add_suggested_disciplines(plan.id, suggestions)
    added = len(session.store.get_plan(plan.id).disciplines) - before
    print(f"{added} disciplina(s) adicionada(s).")


def _add_form_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--name", help="Plan name.")
    p.add_argument("--observation", help="Free-text observation.")
    p.add_argument("--category", choices=["concurso", "personalizado"], help="Plan category.")
    p.add_argument("--value", help="Exam or study type within the category.")
    p.add_argument("--general", action=argparse.BooleanOptionalAction, default=None,
                   help="General plan, not tied to a specific exam.")
    p.add_argument("--image", help="Cover image file (max 2MB).")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage study plans.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List plans with progress.")
    p_list.set_defaults(func=list_plans)

    p_show = sub.add_parser("show", help="Show a plan's disciplines and history.")
    p_show.add_argument("plan", help="Plan id, id prefix or name.")
    p_show.add_argument("--topics", action="store_true", help="List topics too.")
    p_show.add_argument("--history", type=int, default=6, help="Recent logs to show.")
    p_show.set_defaults(func=show_plan)

    p_create = sub.add_parser("create", help="Create a plan.")
    _add_form_args(p_create)
    p_create.set_defaults(func=create_plan)

    p_edit = sub.add_parser("edit", help="Edit a plan.")
    p_edit.add_argument("plan", help="Plan id, id prefix or name.")
    _add_form_args(p_edit)
    p_edit.set_defaults(func=edit_plan)

    p_delete = sub.add_parser("delete", help="Delete a plan.")
    p_delete.add_argument("plan", help="Plan id, id prefix or name.")
    p_delete.add_argument("--yes", action="store_true", help="Skip confirmation.")
    p_delete.set_defaults(func=delete_plan)

    p_suggest = sub.add_parser("suggest-disciplines", help="Add AI-suggested disciplines.")
    p_suggest.add_argument("plan", help="Plan id, id prefix or name.")
    p_suggest.set_defaults(func=suggest_plan_disciplines)

    return parser


def main(argv=None):
    load_dotenv()
    logging.basicConfig(level=logging.WARNING, format=config.LOG_FORMAT)

    args = build_parser().parse_args(argv)
    session = AppSession(PlanStore(default_storage()), confirm=ask_confirmation)

    try:
        args.func(session, args)
    except (DraftError, PlanNotFoundError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
