"""Plan form buffer: name, category selection, general flag and cover image."""
import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from concurseiro.errors import DraftError
from concurseiro.models.plan import StudyPlan


CONCURSOS = [
    "Receita Federal - Auditor Fiscal",
    "Polícia Federal - Agente",
    "Polícia Rodoviária Federal",
    "INSS - Técnico do Seguro Social",
    "Tribunal de Justiça (TJ)",
    "Ministério Público (MPU)",
    "Carreiras Bancárias",
    "Carreiras Legislativas",
]

ESTUDOS_PERSONALIZADOS = [
    "Exame da OAB",
    "Residência Médica",
    "Vestibular / ENEM",
    "Certificação Profissional (TI/Finanças)",
    "Pós-Graduação / Mestrado",
    "Idiomas",
]

MAX_IMAGE_BYTES = 2 * 1024 * 1024

CategoryType = Literal["concurso", "personalizado"]


@dataclass
class PlanDraft:
    """Editing buffer behind the plan form."""
    name: str = ""
    observation: str = ""
    category_type: CategoryType = "concurso"
    selected_value: str = ""
    is_general: bool = False
    image_url: str = ""

    @classmethod
    def from_plan(cls, plan: StudyPlan) -> "PlanDraft":
        """Restore the form from a stored plan."""
        draft = cls(
            name=plan.name,
            observation=plan.observation,
            is_general=plan.is_general,
            image_url=plan.image_url,
        )
        if plan.editais:
            draft.category_type = "concurso"
            draft.selected_value = plan.editais
        elif plan.cargos:
            draft.category_type = "personalizado"
            draft.selected_value = plan.cargos
        return draft

    def options(self) -> list[str]:
        """Choices for the current category."""
        return CONCURSOS if self.category_type == "concurso" else ESTUDOS_PERSONALIZADOS

    def change_category(self, category_type: CategoryType) -> None:
        self.category_type = category_type
        self.selected_value = ""
        self.is_general = False

    def set_general(self, is_general: bool) -> None:
        self.is_general = is_general
        if is_general:
            self.selected_value = ""

    @property
    def editais(self) -> str:
        if self.category_type == "concurso" and not self.is_general:
            return self.selected_value
        return ""

    @property
    def cargos(self) -> str:
        if self.category_type == "personalizado" and not self.is_general:
            return self.selected_value
        return ""

    def load_image(self, image_path: Path) -> None:
        """Embed a local image as a data URL."""
        data = image_path.read_bytes()
        if len(data) > MAX_IMAGE_BYTES:
            raise DraftError("A imagem é muito grande. Por favor, escolha uma imagem com menos de 2MB.")
        mime, _ = mimetypes.guess_type(image_path.name)
        if not mime or not mime.startswith("image/"):
            raise DraftError(f"Not an image file: {image_path.name}")
        encoded = base64.b64encode(data).decode("ascii")
        self.image_url = f"data:{mime};base64,{encoded}"

    def validate(self) -> None:
        if not self.name.strip():
            raise DraftError("Plan name is required")

    def to_fields(self) -> dict:
        """Fields merged into a StudyPlan on save."""
        self.validate()
        return {
            "name": self.name.strip(),
            "observation": self.observation,
            "editais": self.editais,
            "cargos": self.cargos,
            "is_general": self.is_general,
            "image_url": self.image_url,
        }


def find_option(value: str, options: Optional[list[str]] = None) -> str:
    """Match a user-typed value against the catalogues (case-insensitive).

    Unknown values are kept as typed.
    """
    options = options if options is not None else CONCURSOS + ESTUDOS_PERSONALIZADOS
    lowered = value.strip().lower()
    for option in options:
        if option.lower() == lowered:
            return option
    return value.strip()
