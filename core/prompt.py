from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from core.contracts.models import ChangeReport, ChatMessage
from utils.errors import GenerationError

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class PromptBuilder:
    """Renders the system and user messages sent to the completion service."""

    def __init__(
        self,
        template_dir: Optional[str] = None,
        system_template: str = "system.j2",
        user_template: str = "user.j2",
    ):
        if template_dir is None:
            template_dir = str(DEFAULT_TEMPLATE_DIR)

        self.template_dir = template_dir
        self.system_template = system_template
        self.user_template = user_template
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

    def _render(self, template_name: str, **kwargs) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(**kwargs).strip()
        except TemplateError as e:
            raise GenerationError(f"Failed to render prompt template {template_name}: {e}") from e

    def build(self, report: ChangeReport) -> List[ChatMessage]:
        """Returns the system instruction followed by the user message embedding the report."""
        return [
            ChatMessage(role="system", content=self._render(self.system_template)),
            ChatMessage(role="user", content=self._render(self.user_template, change_report=report.text)),
        ]
