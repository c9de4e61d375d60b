"""Tests for the Markdown report exporter."""

import pytest
from jinja2 import TemplateNotFound

from greenlight.export import MarkdownExporter


class TestMarkdownExporter:
    """Test MarkdownExporter."""

    def test_render_header(self, analyzer, thriller_concept):
        """Test the report opens with title, score and verdict."""
        result = analyzer.analyze(thriller_concept, seed=2)
        text = MarkdownExporter().render(result)

        lines = text.splitlines()
        assert lines[0] == "# Disgraced Agent"
        assert lines[2] == f"**GreenlightIQ Score: {result.greenlight_score}/100**"
        assert f"**Verdict:** {result.verdict.value}" in text

    def test_render_breakdown(self, analyzer, thriller_concept):
        """Test the logline table lists every dimension and the total."""
        text = MarkdownExporter().render(analyzer.analyze(thriller_concept, seed=2))

        assert "| Protagonist | 10 | 15 |" in text
        assert "| Unique Hook | 0 | 20 |" in text
        assert "| **Total** | **22** | **100** |" in text

    def test_render_optional_sections(self, analyzer, thriller_concept, full_concept):
        """Test concept details appear only when declared."""
        bare = MarkdownExporter().render(analyzer.analyze(thriller_concept, seed=2))
        full = MarkdownExporter().render(analyzer.analyze(full_concept, seed=2))

        assert "### Synopsis" not in bare
        assert "**Tone:**" not in bare
        assert "### Synopsis" in full
        assert "- **Tone:** Dark and tense" in full
        assert "- **Comparables:** Mare of Easttown meets True Detective meets Zodiac" in full

    def test_seed_in_footer(self, analyzer, thriller_concept):
        """Test the seed is noted for reproducibility."""
        text = MarkdownExporter().render(analyzer.analyze(thriller_concept, seed=2))

        assert "(seed 2)" in text

    def test_export_creates_parents(self, analyzer, thriller_concept, temp_dir):
        """Test export writes the file under new directories."""
        output = temp_dir / "reports" / "nested" / "report.md"

        path = MarkdownExporter().export(analyzer.analyze(thriller_concept, seed=2), output)

        assert path == output
        assert output.read_text(encoding='utf-8').startswith("# Disgraced Agent")

    def test_missing_template(self, analyzer, thriller_concept, temp_dir):
        """Test a templates directory without the report template raises."""
        exporter = MarkdownExporter(templates_dir=temp_dir)

        with pytest.raises(TemplateNotFound):
            exporter.render(analyzer.analyze(thriller_concept, seed=2))
