"""
AI Evaluator Module
Asks a chat model to explain a DOM diff: what changed, where, and why.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Protocol
import json
import logging

import openai

from comparator.report_builder import build_evaluation_prompt
from .config import Settings
from .errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert at analysing changes to web pages. "
    "Read the DOM differences and summarize the intent of the change."
)


@dataclass
class EvaluationResult:
    summary: str = ''
    change_types: List[str] = field(default_factory=list)
    impacted_sections: List[str] = field(default_factory=list)
    likely_intent: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'EvaluationResult':
        if not isinstance(data, dict):
            raise UpstreamError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(
            summary=str(data.get('summary') or ''),
            change_types=_string_list(data.get('change_types')),
            impacted_sections=_string_list(data.get('impacted_sections')),
            likely_intent=str(data.get('likely_intent') or ''),
        )

    @classmethod
    def from_json(cls, content: str) -> 'EvaluationResult':
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise UpstreamError(f"Evaluation response is not valid JSON: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value]
    return [str(value)]


class DiffEvaluator(Protocol):
    async def evaluate(self, diff_text: str, model: Optional[str] = None) -> EvaluationResult:
        ...


class AzureOpenAIEvaluator:
    """Evaluates diffs with an Azure OpenAI chat deployment."""

    def __init__(self, settings: Optional[Settings] = None, client: Any = None):
        self.settings = settings or Settings.from_env()
        self._client = client

    @property
    def client(self):
        if self._client is None:
            missing = self.settings.missing_azure_settings()
            if missing:
                raise ConfigurationError(
                    "Missing Azure OpenAI configuration. Please set " + ", ".join(missing)
                )
            self._client = openai.AsyncAzureOpenAI(
                azure_endpoint=self.settings.azure_endpoint,
                api_key=self.settings.azure_api_key,
                api_version=self.settings.azure_api_version,
            )
        return self._client

    async def evaluate(self, diff_text: str, model: Optional[str] = None) -> EvaluationResult:
        client = self.client
        deployment = model or self.settings.azure_deployment or 'gpt-4o'
        logger.info(f"Requesting evaluation from deployment {deployment}")

        try:
            response = await client.chat.completions.create(
                model=deployment,
                messages=[
                    {'role': 'system', 'content': SYSTEM_PROMPT},
                    {'role': 'user', 'content': build_evaluation_prompt(diff_text)},
                ],
                temperature=0.3,
                response_format={'type': 'json_object'},
            )
        except openai.OpenAIError as e:
            logger.warning(f"Azure OpenAI API error: {str(e)}")
            raise UpstreamError(f"Failed to evaluate differences: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamError("No response from Azure OpenAI")
        return EvaluationResult.from_json(content)
