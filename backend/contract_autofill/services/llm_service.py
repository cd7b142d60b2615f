"""
LLM Service
Contract field extraction through the OpenAI or Anthropic chat APIs.
"""

import json
import re
from typing import Any, Dict, List, Optional

import anthropic
import openai
from pydantic import BaseModel

from contract_autofill.config import Settings, get_settings
from contract_autofill.core.exceptions import ProviderError
from contract_autofill.core.field_catalog import FIELD_CATALOG
from contract_autofill.core.logger import get_logger
from contract_autofill.schemas.contract import LLMProvider


LOGGER = get_logger(__name__)


SYSTEM_PROMPT = (
    "You are a precise real estate contract analyzer. "
    "Return only valid JSON following the provided schema."
)

ANALYSIS_PROMPT = """Analyze the following real estate contract document and extract all relevant fields.

CONTEXT:
Document Text:
{document_text}
{property_section}{images_section}
Please extract all contract fields and provide confidence scores for each extraction. Focus on:
- Property details (address, price, dimensions)
- Parties involved (buyer, seller, agents)
- Important dates (closing, possession, contingencies)
- Financial terms (price, deposits, financing)
- Legal clauses and requirements

Return your response as a JSON object following the exact schema provided. Include confidence scores (0-1) for each field and provide reasoning when uncertain.

Schema:
{schema}"""


class AnalysisResult(BaseModel):
    """Parsed provider output."""
    fields: Dict[str, Any] = {}
    confidence: Dict[str, Any] = {}
    reasoning: Optional[str] = None
    raw: Dict[str, Any] = {}


def get_contract_schema() -> Dict[str, Any]:
    """JSON schema describing the expected provider response."""
    return {
        "type": "object",
        "properties": {
            "fields": {
                "type": "object",
                "properties": {
                    name: {"type": spec.type.value, "description": spec.description}
                    for name, spec in FIELD_CATALOG.items()
                },
            },
            "confidence": {
                "type": "object",
                "description": "Confidence scores (0-1) for each field",
                "properties": {
                    name: {"type": "number", "minimum": 0, "maximum": 1}
                    for name in FIELD_CATALOG
                },
            },
            "reasoning": {"type": "string", "description": "Overall reasoning and any uncertainties"},
        },
        "required": ["fields", "confidence"],
    }


def build_prompt(
    document_text: str,
    property_record: Optional[Dict[str, Any]] = None,
    key_images: Optional[List[str]] = None,
) -> str:
    property_section = ""
    if property_record:
        property_section = f"\nProperty Data:\n{json.dumps(property_record, indent=2, default=str)}\n"

    images_section = ""
    if key_images:
        images_section = f"\nKey Images/Sections:\n{', '.join(key_images)}\n"

    return ANALYSIS_PROMPT.format(
        document_text=document_text or "",
        property_section=property_section,
        images_section=images_section,
        schema=json.dumps(get_contract_schema(), indent=2),
    )


def parse_json_response(response_text: str) -> Dict[str, Any]:
    """Extract the JSON object from a model response, tolerating code fences."""
    content = (response_text or "").strip()

    if "```json" in content:
        match = re.search(r'```json\s*(.*?)\s*```', content, re.DOTALL)
        if match:
            content = match.group(1)
    elif "```" in content:
        match = re.search(r'```\s*(.*?)\s*```', content, re.DOTALL)
        if match:
            content = match.group(1)

    if not content.startswith("{"):
        start = content.find("{")
        end = content.rfind("}")
        if start == -1 or end == -1:
            raise ProviderError("No JSON object found in provider response")
        content = content[start:end + 1]

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ProviderError("Invalid JSON response from provider", original_error=e)

    if not isinstance(data, dict):
        raise ProviderError("Provider response is not a JSON object")
    return data


def to_analysis_result(data: Dict[str, Any]) -> AnalysisResult:
    fields = data.get("fields")
    if not isinstance(fields, dict):
        raise ProviderError("Provider response has no 'fields' object")

    confidence = data.get("confidence")
    if not isinstance(confidence, dict):
        confidence = {}

    reasoning = data.get("reasoning")
    return AnalysisResult(
        fields=fields,
        confidence=confidence,
        reasoning=reasoning if isinstance(reasoning, str) else None,
        raw=data,
    )


class LLMService:
    """Calls the configured chat completion provider for contract analysis."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.openai_client = None
        self.anthropic_client = None

        if self.settings.openai_api_key:
            self.openai_client = openai.OpenAI(api_key=self.settings.openai_api_key)

        if self.settings.anthropic_api_key:
            self.anthropic_client = anthropic.Anthropic(api_key=self.settings.anthropic_api_key)

    def available_providers(self) -> List[LLMProvider]:
        providers = []
        if self.openai_client is not None:
            providers.append(LLMProvider.OPENAI)
        if self.anthropic_client is not None:
            providers.append(LLMProvider.ANTHROPIC)
        return providers

    def analyze_contract(
        self,
        document_text: str,
        property_record: Optional[Dict[str, Any]] = None,
        provider: Optional[LLMProvider] = None,
        key_images: Optional[List[str]] = None,
    ) -> AnalysisResult:
        """
        Ask the provider to extract contract fields with confidence scores.

        Raises:
            ProviderError: provider unavailable, API failure, or unusable response
        """
        provider = LLMProvider(provider or self.settings.default_llm_provider)
        prompt = build_prompt(document_text, property_record, key_images)

        if provider not in self.available_providers():
            raise ProviderError(f"Provider {provider.value} not available")

        if provider is LLMProvider.OPENAI:
            response_text = self._call_openai(prompt)
        else:
            response_text = self._call_anthropic(prompt)

        try:
            return to_analysis_result(parse_json_response(response_text))
        except ProviderError:
            LOGGER.error(f"Failed to parse {provider.value} response: {response_text[:500]}")
            raise

    def _call_openai(self, prompt: str) -> str:
        try:
            completion = self.openai_client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.settings.llm_temperature,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            LOGGER.error(f"OpenAI analysis failed: {e}")
            raise ProviderError(f"OpenAI request failed: {e}", original_error=e)

        if not completion.choices:
            return "{}"
        return completion.choices[0].message.content or "{}"

    def _call_anthropic(self, prompt: str) -> str:
        try:
            response = self.anthropic_client.messages.create(
                model=self.settings.anthropic_model,
                max_tokens=self.settings.llm_max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.settings.llm_temperature,
            )
        except anthropic.AnthropicError as e:
            LOGGER.error(f"Anthropic analysis failed: {e}")
            raise ProviderError(f"Anthropic request failed: {e}", original_error=e)

        response_text = ""
        for block in response.content:
            if block.type == "text":
                response_text += block.text
        return response_text or "{}"
