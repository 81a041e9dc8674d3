"""
AI-powered lesson plan extractor using the Claude API.

This module turns a teacher's free lesson text into a partial lesson
plan. The model is forced to answer through a tool whose input schema
is the lesson plan schema; the reply is validated, objective ids are
assigned locally and the weekday is derived from the date.
"""

import json
import logging
from typing import Any, Dict, Optional

import anthropic
from anthropic import Anthropic, AnthropicVertex

from .schema import (
    EXTRACTABLE_FIELDS,
    TOOL_NAME,
    build_tool,
    create_extraction_prompt,
)
from .. import messages
from ..errors import DateParseWarning, ExtractionError
from ..interfaces import StructuredExtractor
from ..models.catalog import DAYS, ObjectiveDomain
from ..models.lesson_plan import PartialLessonPlan
from ..planning.editor import new_objective_id
from ..planning.emptiness import is_empty
from ..planning.weekday import parse_lesson_date, weekday_label
from ..utils.config import Config, config
from ..validation.plan_validator import ExtractedPlanValidator


logger = logging.getLogger(__name__)


def parse_json_reply(response_text: str) -> Any:
    """
    Parse a JSON reply, tolerating a surrounding markdown code fence.

    Args:
        response_text: Raw text returned by the model

    Returns:
        Decoded JSON value

    Raises:
        ExtractionError: If the text is not valid JSON
    """
    json_text = response_text.strip()
    if json_text.startswith("```json"):
        json_text = json_text[7:]  # Remove ```json
    if json_text.startswith("```"):
        json_text = json_text[3:]  # Remove ```
    if json_text.endswith("```"):
        json_text = json_text[:-3]  # Remove trailing ```

    try:
        return json.loads(json_text.strip())
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response: {e}")
        logger.debug(f"Response text: {response_text[:500]}")
        raise ExtractionError(messages.UNEXPECTED_RESPONSE, f"invalid JSON: {e}") from e


class LessonPlanExtractor(StructuredExtractor):
    """
    Extracts a partial lesson plan from free text with Claude.

    Uses the Anthropic API when ANTHROPIC_API_KEY is set, otherwise
    Claude on Vertex AI when ANTHROPIC_VERTEX_PROJECT_ID is set. The
    client is created on first use, so a missing credential surfaces as
    an ExtractionError from extract() rather than at construction.

    Examples:
        >>> extractor = LessonPlanExtractor()
        >>> partial = extractor.extract("عنوان الدرس: الفاعل. المادة: لغة عربية")
        >>> partial["subject"]
        'اللغة العربية'
    """

    def __init__(self, client: Optional[Any] = None, settings: Optional[Config] = None):
        """
        Initialize LessonPlanExtractor.

        Args:
            client: Preconfigured Anthropic client (optional, for tests)
            settings: Configuration (default: module-level config)
        """
        self.settings = settings or config
        self.model = self.settings.model
        self.max_tokens = self.settings.extraction_max_tokens
        self.validator = ExtractedPlanValidator()
        self._client = client

    @property
    def client(self):
        """Anthropic client, created on first access."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """
        Create the API client from configuration.

        Raises:
            ExtractionError: If no credentials are configured or the
                client cannot be created
        """
        api_key = self.settings.anthropic_api_key
        project_id = self.settings.vertex_project_id

        if not api_key and not project_id:
            raise ExtractionError(
                messages.MISSING_CREDENTIALS,
                "ANTHROPIC_API_KEY or ANTHROPIC_VERTEX_PROJECT_ID is required"
            )

        try:
            if api_key:
                client = Anthropic(api_key=api_key.get_value())
                logger.info(f"LessonPlanExtractor using Anthropic API, model={self.model}")
            else:
                client = AnthropicVertex(
                    project_id=project_id,
                    region=self.settings.vertex_region
                )
                logger.info(
                    f"LessonPlanExtractor using Vertex AI project={project_id}, "
                    f"region={self.settings.vertex_region}, model={self.model}"
                )
            return client

        except Exception as e:
            logger.error(f"Failed to initialize AI client: {e}")
            raise ExtractionError(messages.ANALYSIS_FAILED, f"client init failed: {e}") from e

    def extract(self, free_text: str) -> PartialLessonPlan:
        """
        Extract a partial lesson plan from free text.

        Args:
            free_text: Lesson plan text pasted by the teacher

        Returns:
            Partial plan with validated fields and fresh objective ids

        Raises:
            ExtractionError: If the input is blank, the service fails,
                or the reply does not fit the lesson plan schema
        """
        if not isinstance(free_text, str) or is_empty(free_text):
            raise ExtractionError(messages.EMPTY_ANALYSIS_INPUT, "empty input")

        client = self.client
        prompt = create_extraction_prompt(free_text.strip())

        try:
            message = client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                tools=[build_tool()],
                tool_choice={"type": "tool", "name": TOOL_NAME},
                messages=[
                    {
                        "role": "user",
                        "content": prompt
                    }
                ]
            )

        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            logger.error(f"AI service rejected credentials: {e}")
            raise ExtractionError(messages.INVALID_CREDENTIALS, str(e)) from e

        except anthropic.APIConnectionError as e:
            logger.error(f"AI service unreachable: {e}")
            raise ExtractionError(messages.SERVICE_UNREACHABLE, str(e)) from e

        except anthropic.APIError as e:
            logger.error(f"AI service error: {e}")
            raise ExtractionError(messages.ANALYSIS_FAILED, str(e)) from e

        except Exception as e:
            logger.error(f"AI extraction failed: {e}", exc_info=True)
            raise ExtractionError(messages.ANALYSIS_FAILED, str(e)) from e

        payload = self._payload_from_message(message)
        partial = self._normalize(payload)

        logger.info(f"Extracted {len(partial)} fields: {sorted(partial)}")
        return partial

    def _payload_from_message(self, message: Any) -> Any:
        """
        Get the extracted object from a Messages API reply.

        Prefers the forced tool call; falls back to JSON in a text block.
        """
        content = getattr(message, "content", None) or []

        for block in content:
            if getattr(block, "type", None) == "tool_use":
                return block.input

        response_text = "".join(
            block.text for block in content if getattr(block, "type", None) == "text"
        )
        if not response_text.strip():
            logger.error(f"Reply has no tool call and no text (stop_reason={getattr(message, 'stop_reason', None)})")
            raise ExtractionError(messages.UNEXPECTED_RESPONSE, "empty reply")

        logger.debug("No tool call in reply, parsing text as JSON")
        return parse_json_reply(response_text)

    def _normalize(self, payload: Any) -> PartialLessonPlan:
        """
        Validate the raw payload and shape it into a partial plan.

        Raises:
            ExtractionError: If the payload fails validation
        """
        validation = self.validator.validate(payload)

        for warning in validation.warnings:
            logger.warning(f"Extraction reply: {warning}")

        if not validation.is_valid:
            logger.error(f"Extraction reply rejected:\n{validation.get_summary()}")
            raise ExtractionError(messages.UNEXPECTED_RESPONSE, "; ".join(validation.errors))

        ignored = sorted(set(payload) - set(EXTRACTABLE_FIELDS))
        if ignored:
            logger.debug(f"Ignoring unknown extracted fields: {ignored}")

        partial: Dict[str, Any] = {
            name: payload[name]
            for name in EXTRACTABLE_FIELDS
            if payload.get(name) is not None
        }

        # Identifiers from the provider are never trusted
        for domain in ObjectiveDomain:
            objectives = partial.get(domain.field_name)
            if objectives is None:
                continue

            assigned = []
            for objective in objectives:
                assigned.append({
                    "id": new_objective_id(domain.id_prefix, (o["id"] for o in assigned)),
                    "level": objective["level"],
                    "formulation": objective["formulation"],
                    "evaluation": objective["evaluation"],
                })
            partial[domain.field_name] = assigned

        self._apply_date(partial)
        return partial

    def _apply_date(self, partial: Dict[str, Any]):
        """
        Normalize `date` and derive `day` from it.

        A date that does not parse is dropped. Without a usable date, a
        provider-supplied day is kept only if it is a known label.
        """
        date_text = partial.get("date")

        if not is_empty(date_text):
            try:
                lesson_date = parse_lesson_date(date_text)
                partial["date"] = lesson_date.isoformat()
                partial["day"] = weekday_label(lesson_date)
                return
            except DateParseWarning as e:
                logger.warning(f"Dropping extracted date: {e}")
                del partial["date"]

        day = partial.get("day")
        if day is not None and day not in DAYS:
            logger.warning(f"Dropping unknown extracted weekday: {day!r}")
            del partial["day"]
