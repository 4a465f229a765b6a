"""
Main Diff Analyzer Interface
Coordinates fetching, parsing, diffing and AI evaluation of two HTML sources.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import asyncio
import logging

from comparator.report_builder import format_diff_for_ai
from comparator.structure_diff import compare_trees
from .ai_evaluator import DiffEvaluator, EvaluationResult
from .dom_node import Node
from .errors import ComparisonError
from .html_parser import HTMLParser
from .source_fetcher import FetchResult, Source, fetch_html
from .structure_comparator import DiffResult

logger = logging.getLogger(__name__)


@dataclass
class ComparisonResult:
    source1: str
    source2: str
    diff: DiffResult
    ai_evaluation: Optional[EvaluationResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source1': self.source1,
            'source2': self.source2,
            'diff': self.diff.to_dict(),
            'aiEvaluation': self.ai_evaluation.to_dict() if self.ai_evaluation else None,
        }


class DomDiffAnalyzer:
    def __init__(self,
                 evaluator: Optional[DiffEvaluator] = None,
                 parser: Optional[HTMLParser] = None,
                 fetch: Callable[..., FetchResult] = fetch_html,
                 fetch_timeout: Optional[float] = None):
        self.evaluator = evaluator
        self.parser = parser or HTMLParser()
        self.fetch = fetch
        self.fetch_timeout = fetch_timeout
        self.last_result: Optional[ComparisonResult] = None

    def compare_html(self, html1: str, html2: str) -> DiffResult:
        """Diff two raw HTML strings."""
        tree1 = self._parse(html1, side=1)
        tree2 = self._parse(html2, side=2)
        return compare_trees(tree1, tree2)

    async def compare_sources(self,
                              source1: Source,
                              source2: Source,
                              model: Optional[str] = None,
                              evaluate: bool = True,
                              render: bool = False) -> ComparisonResult:
        """Fetch both sources, diff them and optionally evaluate the diff."""
        result1, result2 = await asyncio.gather(
            self._fetch(source1, side=1, render=render),
            self._fetch(source2, side=2, render=render),
        )

        diff = self.compare_html(result1.html, result2.html)
        logger.info(f"Found {diff.count} difference(s)")

        evaluation = None
        if evaluate:
            evaluation = await self.evaluate(diff, model=model)

        self.last_result = ComparisonResult(
            source1=result1.source,
            source2=result2.source,
            diff=diff,
            ai_evaluation=evaluation,
        )
        return self.last_result

    async def evaluate(self, diff: DiffResult, model: Optional[str] = None) -> EvaluationResult:
        if self.evaluator is None:
            raise ComparisonError('evaluate', 'no evaluator configured')
        try:
            return await self.evaluator.evaluate(format_diff_for_ai(diff), model)
        except Exception as e:
            logger.warning(f"Error evaluating differences: {str(e)}")
            raise ComparisonError('evaluate', str(e)) from e

    async def _fetch(self, source: Source, side: int, render: bool) -> FetchResult:
        try:
            return await asyncio.to_thread(
                self.fetch, source.location, source.is_file, render, self.fetch_timeout
            )
        except Exception as e:
            logger.warning(f"Error fetching source {side} ({source.location}): {str(e)}")
            raise ComparisonError('fetch', str(e), side=side) from e

    def _parse(self, html: str, side: int) -> Node:
        try:
            return self.parser.parse(html)
        except Exception as e:
            raise ComparisonError('parse', str(e), side=side) from e
