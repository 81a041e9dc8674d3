"""
CSV export of saved lesson plans.

One row per plan: scalar fields as-is, choice lists joined with the
Arabic comma, objective lists reported as counts.
"""

import logging
from pathlib import Path
from typing import List

import pandas as pd

from .. import messages
from ..errors import ExportError
from ..models.catalog import ObjectiveDomain
from ..models.lesson_plan import LessonPlan
from ..utils.file_utils import save_csv


logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "id",
    "date",
    "day",
    "period",
    "subject",
    "lesson_title",
    "grade",
    "section",
    "school_name",
    "education_area",
    "teacher_name",
    "teaching_methods",
    "teaching_aids",
    "cognitive_objectives",
    "psychomotor_objectives",
    "affective_objectives",
    "homework",
]


def plans_to_dataframe(plans: List[LessonPlan]) -> pd.DataFrame:
    """
    Flatten lesson plans into a DataFrame.

    Args:
        plans: Saved lesson plans

    Returns:
        DataFrame with CSV_COLUMNS, one row per plan
    """
    rows = []
    for plan in plans:
        row = {column: plan.get(column, "") for column in CSV_COLUMNS}
        row["teaching_methods"] = "، ".join(plan.get("teaching_methods") or [])
        row["teaching_aids"] = "، ".join(plan.get("teaching_aids") or [])
        for domain in ObjectiveDomain:
            row[domain.field_name] = len(plan.get(domain.field_name) or [])
        rows.append(row)

    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_plans_csv(plans: List[LessonPlan], filepath: Path) -> Path:
    """
    Write saved lesson plans to a CSV file.

    Raises:
        ExportError: If the file cannot be written
    """
    df = plans_to_dataframe(plans)

    if not save_csv(df, Path(filepath)):
        raise ExportError(messages.CSV_EXPORT_FAILED)

    logger.info(f"Exported {len(df)} plans to {filepath}")
    return Path(filepath)
