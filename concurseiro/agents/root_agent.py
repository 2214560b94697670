"""Root agent: ADK entrypoint for managing study plans conversationally."""
from google.adk.agents.llm_agent import Agent

from concurseiro import config
from concurseiro.agents.tools import (
    add_discipline,
    create_plan,
    delete_plan,
    get_current_date,
    get_plan_progress,
    list_plans,
    record_study_session,
    suggest_plan_disciplines,
    toggle_topic,
)

root_agent = Agent(
    model=config.model_name(),
    name="root_agent",
    description="Organizes exam preparation: study plans, disciplines, topics and study sessions.",
    instruction=(
        "You help a student preparing for a competitive exam (concurso). "
        "Use list_plans and get_plan_progress to answer questions about plans and progress. "
        "Use create_plan, add_discipline, suggest_plan_disciplines and toggle_topic to edit plans, "
        "and record_study_session to log what the student studied. "
        "Never call delete_plan with confirmed=True unless the user explicitly confirmed the deletion. "
        "Reply in the user's language."
    ),
    tools=[
        list_plans,
        get_plan_progress,
        create_plan,
        delete_plan,
        suggest_plan_disciplines,
        add_discipline,
        toggle_topic,
        record_study_session,
        get_current_date,
    ],
)
