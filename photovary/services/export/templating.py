import datetime
from typing import Any, Dict, List, Optional
from jinja2 import Environment, BaseLoader, TemplateError, meta
from photovary.domain.models import AdjustmentParams, DEFAULT_FILENAME_PATTERN
from photovary.kernel.system.logging import get_logger

logger = get_logger(__name__)


class FilenameTemplater:
    """
    Handles generation of filenames using Jinja2 templates.
    """

    def __init__(self) -> None:
        # Using a minimal environment for performance and safety
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, pattern: str, context: Dict[str, Any]) -> str:
        """
        Renders the filename pattern with the provided context.
        Raises ValueError if the result is empty.
        """
        template = self.env.from_string(pattern)
        # Add common defaults to context
        render_context = {"date": datetime.date.today().isoformat(), **context}
        rendered = template.render(render_context).strip()
        if not rendered:
            raise ValueError("Template rendered to empty string")
        return rendered.replace("/", "_").replace("\\", "_")

    def missing_fields(self, pattern: str) -> List[str]:
        """
        Parameter fields the pattern never references.
        """
        referenced = meta.find_undeclared_variables(self.env.parse(pattern))
        return [name for name in AdjustmentParams.field_names() if name not in referenced]

    def render_variant(
        self,
        pattern: Optional[str],
        original_name: str,
        params: AdjustmentParams,
        variant: int = 0,
    ) -> str:
        """
        Label for one variant. Every parameter value must appear in it so
        the file can be traced back; patterns that fail or drop a value fall
        back to the default label.
        """
        context = {"original_name": original_name, "variant": variant, **params.to_dict()}
        if pattern and pattern != DEFAULT_FILENAME_PATTERN:
            try:
                missing = self.missing_fields(pattern)
                if not missing:
                    return self.render(pattern, context)
                logger.warning(f"Filename pattern omits {', '.join(missing)}; using default label")
            except (TemplateError, ValueError) as e:
                logger.warning(f"Filename pattern failed ({e}); using default label")
        return self.render(DEFAULT_FILENAME_PATTERN, context)
