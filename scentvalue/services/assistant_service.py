"""
Assistant Service

Fragrance Q&A and image reading backed by an AI text/vision model.

Three capabilities, each independently fallible:
- ask: free-form question -> advisory text
- read_scale_image: photo of a scale display -> gram value
- read_batch_document: photo of a handwritten/printed list -> (name, weight) items

Failures never propagate; each degrades to a safe default (apology text, 0, []).
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from openai import AsyncOpenAI
from pydantic import ValidationError

from scentvalue.models.assistant import BatchDocument, BatchItem
from scentvalue.models.common import PricingConfig
from scentvalue.services.formatting import format_number

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"

NO_ANSWER_TEXT = "I'm sorry, I couldn't process that request."
CONNECTION_ERROR_TEXT = "Error: Could not connect to the fragrance assistant."

SCALE_PROMPT = (
    "Read the weight displayed on this scale. Return only the numeric value in grams. "
    "If the display shows something like '1.234 kg', return '1234'. "
    "If no scale is visible, say '0'."
)

BATCH_PROMPT = (
    "Extract all items from this document. Each item usually has a perfume name and a weight. "
    "Pay close attention to lab notation like '1kg136' (1136g). "
    "Return a JSON object with an 'items' array of objects with 'name' and 'weight' (in grams). "
    'Example: {"items": [{"name": "Sauvage Dior", "weight": 1050}, '
    '{"name": "Blue de Chanel", "weight": 1136}]}. '
    "If no name is found, use 'Item #'. If no weights found, return {\"items\": []}."
)

FIRST_NUMBER_PATTERN = re.compile(r"\d+(\.\d+)?")


def build_system_instruction(config: PricingConfig) -> str:
    """Domain context sent with every text question."""
    return (
        "You are an expert perfume consultant and pricing assistant.\n"
        "The user uses a calculator with these parameters:\n"
        f"- Gross Weight Deduction: {format_number(config.tare_grams)}g (standard bottle weight).\n"
        f"- Price per net gram/ml: {format_number(config.rate_per_gram)} {config.currency}.\n"
        "Provide brief, helpful answers about perfume measurements, densities, and pricing logic "
        "in Tanzania.\nKeep responses concise and elegant."
    )


def extract_first_number(text: str) -> float:
    """First number in the model's answer, or 0 when there is none."""
    match = FIRST_NUMBER_PATTERN.search(text or "")
    return float(match.group(0)) if match else 0.0


def parse_batch_items(raw: str) -> List[BatchItem]:
    """
    Validate the model's structured batch output.

    Accepts either {"items": [...]} or a bare array. Returns [] if the output
    is malformed.
    """
    try:
        data = json.loads(raw or "[]")
        if isinstance(data, list):
            data = {"items": data}
        items = BatchDocument.model_validate(data).items
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        logger.warning(f"Malformed batch document output: {e}")
        return []

    return [
        item if item.name.strip() else BatchItem(name="Item #", weight=item.weight)
        for item in items
    ]


class AssistantBackend(ABC):
    """Interface for AI-backed assistance."""

    @abstractmethod
    async def ask(self, query: str) -> str:
        """Answer a free-form question."""

    @abstractmethod
    async def read_scale_image(self, image_base64: str) -> float:
        """Read a gram value off a scale photo. 0 when nothing is found."""

    @abstractmethod
    async def read_batch_document(self, image_base64: str) -> List[BatchItem]:
        """Read (name, weight) lines off a document photo. [] when nothing is found."""


class OpenAIAssistant(AssistantBackend):
    """Assistant backed by the OpenAI chat completions API (async client)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        config: Optional[PricingConfig] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.config = config or PricingConfig()
        self.client = client or AsyncOpenAI(api_key=api_key)

    @staticmethod
    def _image_message(image_base64: str, prompt: str) -> Dict:
        return {
            "role": "user",
            "content": [
                {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"}},
                {"type": "text", "text": prompt},
            ],
        }

    async def ask(self, query: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": build_system_instruction(self.config)},
                    {"role": "user", "content": query},
                ],
            )
            return response.choices[0].message.content or NO_ANSWER_TEXT
        except Exception as e:
            logger.error(f"Assistant request failed: {e}")
            return CONNECTION_ERROR_TEXT

    async def read_scale_image(self, image_base64: str) -> float:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                temperature=0,
                messages=[self._image_message(image_base64, SCALE_PROMPT)],
            )
            text = response.choices[0].message.content or "0"
        except Exception as e:
            logger.error(f"Scale image reading failed: {e}")
            return 0.0
        return extract_first_number(text)

    async def read_batch_document(self, image_base64: str) -> List[BatchItem]:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                temperature=0,
                response_format={"type": "json_object"},
                messages=[self._image_message(image_base64, BATCH_PROMPT)],
            )
            raw = response.choices[0].message.content
        except Exception as e:
            logger.error(f"Batch document reading failed: {e}")
            return []
        return parse_batch_items(raw)


class StubAssistant(AssistantBackend):
    """
    Deterministic assistant for tests and offline use.

    Returns whatever it was constructed with and records every call.
    """

    def __init__(
        self,
        answer: str = "Weigh the full bottle, the tare is deducted automatically.",
        scale_weight: float = 0.0,
        batch_items: Optional[List[BatchItem]] = None,
    ):
        self.answer = answer
        self.scale_weight = scale_weight
        self.batch_items = batch_items or []
        self.calls: List[str] = []

    async def ask(self, query: str) -> str:
        self.calls.append("ask")
        return self.answer

    async def read_scale_image(self, image_base64: str) -> float:
        self.calls.append("read_scale_image")
        return self.scale_weight

    async def read_batch_document(self, image_base64: str) -> List[BatchItem]:
        self.calls.append("read_batch_document")
        return list(self.batch_items)
