"""
Response schema and prompt for lesson plan extraction.

The schema is sent to the model as the input_schema of a forced tool
call, so the reply arrives as a JSON object with these fields.
"""

from typing import Any, Dict

from ..models.catalog import ObjectiveDomain


TOOL_NAME = "record_lesson_plan"

TEXT_FIELD_DESCRIPTIONS: Dict[str, str] = {
    "lesson_title": "The main title of the lesson.",
    "subject": "The subject matter (e.g., 'اللغة العربية').",
    "grade": "The target grade level (e.g., 'الصف الخامس الابتدائي').",
    "education_area": "The educational area or district (e.g., 'مكتب التربية بأمانة العاصمة').",
    "school_name": "The name of the school.",
    "teacher_name": "The name of the teacher.",
    "section": "The class section (e.g., 'أ', 'ب', '1').",
    "period": "The class period (e.g., 'الأولى', 'الثانية').",
    "date": "The date of the lesson in YYYY-MM-DD format.",
    "lesson_intro": "A summary of the lesson's introduction or warm-up activity.",
    "intro_type": "The type of introduction (e.g., 'سؤال', 'قصة').",
    "teacher_role": "A summary of the teacher's role during the lesson.",
    "student_role": "A summary of the student's role during the lesson.",
    "lesson_content": "A detailed summary of the core content and activities of the lesson.",
    "lesson_closure": "A summary of the lesson's closing activity.",
    "homework": "The homework assignment given to students.",
}

LIST_FIELD_DESCRIPTIONS: Dict[str, str] = {
    "teaching_methods": "List of teaching methods and strategies used.",
    "teaching_aids": "List of teaching aids or materials mentioned.",
}

OBJECTIVE_FIELD_DESCRIPTIONS: Dict[str, str] = {
    "cognitive_objectives": "List of cognitive objectives from the lesson plan.",
    "psychomotor_objectives": "List of psychomotor (skill-based) objectives.",
    "affective_objectives": "List of affective (emotional/value-based) objectives.",
}

OBJECTIVE_REQUIRED_KEYS = ("level", "formulation", "evaluation")

# Accepted from the provider only as a fallback when no usable date is given
ADVISORY_FIELDS = ("day",)

EXTRACTABLE_FIELDS = (
    tuple(TEXT_FIELD_DESCRIPTIONS)
    + tuple(LIST_FIELD_DESCRIPTIONS)
    + tuple(OBJECTIVE_FIELD_DESCRIPTIONS)
    + ADVISORY_FIELDS
)


def build_objective_schema(domain: ObjectiveDomain) -> Dict[str, Any]:
    """Objective schema whose level description lists the domain's taxonomy."""
    levels = "، ".join(domain.level_values())
    return {
        "type": "object",
        "properties": {
            "level": {
                "type": "string",
                "description": f"The taxonomy level of the objective, one of: {levels}.",
            },
            "formulation": {"type": "string", "description": "The exact wording of the behavioral objective."},
            "evaluation": {"type": "string", "description": "The method or question to evaluate if the objective was met."},
        },
        "required": list(OBJECTIVE_REQUIRED_KEYS),
    }


def build_response_schema() -> Dict[str, Any]:
    """
    Build the JSON schema of an extracted lesson plan.

    Returns:
        JSON schema dictionary (object with optional properties)
    """
    properties: Dict[str, Any] = {}

    for name, description in TEXT_FIELD_DESCRIPTIONS.items():
        properties[name] = {"type": "string", "description": description}

    for name, description in LIST_FIELD_DESCRIPTIONS.items():
        properties[name] = {
            "type": "array",
            "items": {"type": "string"},
            "description": description,
        }

    for domain in ObjectiveDomain:
        properties[domain.field_name] = {
            "type": "array",
            "items": build_objective_schema(domain),
            "description": OBJECTIVE_FIELD_DESCRIPTIONS[domain.field_name],
        }

    return {"type": "object", "properties": properties}


def build_tool() -> Dict[str, Any]:
    """Tool definition that carries the response schema."""
    return {
        "name": TOOL_NAME,
        "description": "Record the structured lesson plan extracted from the teacher's text.",
        "input_schema": build_response_schema(),
    }


def create_extraction_prompt(lesson_text: str) -> str:
    """
    Create the prompt for extracting a lesson plan from free text.

    Args:
        lesson_text: Lesson plan text pasted by the teacher

    Returns:
        Formatted prompt string
    """
    return f"""You are an expert educational assistant specializing in analyzing and structuring lesson plans for Yemeni teachers.
Your task is to analyze the following lesson plan text and extract the required information by calling the `{TOOL_NAME}` tool.

You must fill in all fields of the tool's schema. If a specific detail is missing from the text, infer and generate appropriate, logical content based on the lesson's subject, grade level, and topic. For example, for a 5th-grade Arabic lesson about poetry, you might suggest 'السبورة، الأقلام الملونة، ديوان شعري' as teaching aids. Provide logical and relevant suggestions for every field, and make sure the objectives are well-formed and appropriate for the lesson. Write all content in Arabic.

Rules:
- The 'date' field must use YYYY-MM-DD format.
- Do not include a 'day' field; it is calculated automatically from the date.
- Every objective must have 'level', 'formulation' and 'evaluation'.

The lesson plan is:
---
{lesson_text}
---
"""
