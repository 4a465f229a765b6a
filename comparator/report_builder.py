"""
Report Builder Module
Renders diff results into the plain-text blocks handed to the AI summarizer.
"""

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from pathlib import Path
from typing import Any
import json

from core.structure_comparator import DiffResult

TEMPLATE_DIR = Path(__file__).parent / 'templates'


def _tojson_pretty(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


class ReportBuilder:
    def __init__(self, template_dir: Path = TEMPLATE_DIR):
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )
        self.env.filters['tojson_pretty'] = _tojson_pretty

    def format_diff_for_ai(self, diff_result: DiffResult) -> str:
        """Flatten a diff into count, summary and raw records."""
        data = diff_result.to_dict()
        template = self.env.get_template('diff_for_ai.txt.j2')
        return template.render(count=data['count'], summary=data['summary'], diffs=data['diffs']).strip()

    def build_evaluation_prompt(self, diff_text: str) -> str:
        """Wrap the diff text in the instructions sent to the summarizer."""
        template = self.env.get_template('evaluation_prompt.txt.j2')
        return template.render(diff_text=diff_text).strip()


_default_builder = None


def _builder() -> ReportBuilder:
    global _default_builder
    if _default_builder is None:
        _default_builder = ReportBuilder()
    return _default_builder


def format_diff_for_ai(diff_result: DiffResult) -> str:
    return _builder().format_diff_for_ai(diff_result)


def build_evaluation_prompt(diff_text: str) -> str:
    return _builder().build_evaluation_prompt(diff_text)
