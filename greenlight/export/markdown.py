"""Markdown report exporter for concept analyses."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from ..analysis import AnalysisResult
from ..analysis.rules import DIMENSION_MAXIMUMS
from ..utils.logging import get_logger

logger = get_logger('export.markdown')

TEMPLATE_NAME = 'analysis_report.md.j2'


class MarkdownExporter:
    """
    Render an AnalysisResult as a Markdown document.

    Usage:
        exporter = MarkdownExporter()
        text = exporter.render(result)
        exporter.export(result, Path('report.md'))
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize markdown exporter.

        Args:
            templates_dir: Directory holding the report template
                (defaults to greenlight/export/templates/)
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / 'templates'

        self.templates_dir = Path(templates_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True
        )

    def render(self, result: AnalysisResult) -> str:
        """
        Render the report text.

        Raises:
            jinja2.TemplateError: If the template is missing or fails to render
        """
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(
            result=result,
            concept=result.concept,
            breakdown=result.logline_breakdown,
            market=result.market_analysis,
            insights=result.market_insights,
            maximums=DIMENSION_MAXIMUMS,
            generated=datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC'),
        )

    def export(self, result: AnalysisResult, output_path: Path) -> Path:
        """
        Write the report to a file.

        Args:
            result: Analysis to export
            output_path: Destination .md file (parent directories are created)

        Returns:
            Path to the written file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(result), encoding='utf-8')
        logger.info(f"Exported analysis report to {output_path}")
        return output_path
