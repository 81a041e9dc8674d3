"""
Printable HTML rendering of a lesson plan.

The document is right-to-left Arabic with inline styles only, so it
prints the same from a file:// URL as from a browser tab. All user text
is escaped; emblems are accepted only as image data URLs.
"""

import html
from typing import Iterable, List, Optional

from .. import messages
from ..models.catalog import ObjectiveDomain
from ..models.lesson_plan import LessonPlan, Objective


_STYLE = """
  body { font-family: 'Changa', 'Tahoma', sans-serif; color: #000; margin: 0; }
  .page { padding: 8px; }
  header { display: grid; grid-template-columns: 1fr 1fr 1fr; align-items: center;
           border-bottom: 2px solid #475569; padding-bottom: 8px; font-weight: 700; }
  header .official { font-size: 12px; text-align: right; }
  header .official .state { color: #991b1b; }
  .emblems { display: flex; justify-content: center; gap: 16px; }
  .emblems img { width: 80px; height: 80px; object-fit: cover; border-radius: 50%; }
  h1 { text-align: center; color: #1e3a8a; font-size: 28px; margin: 8px 0; }
  section { border: 1px solid #cbd5e1; border-radius: 8px; padding: 8px; margin-bottom: 8px; }
  h2 { color: #991b1b; font-size: 16px; border-bottom: 1px solid #e2e8f0; margin: 0 0 6px 0; }
  h3 { color: #991b1b; font-size: 14px; margin: 6px 0 4px 0; }
  .meta { display: grid; grid-template-columns: repeat(4, 1fr); gap: 4px 8px; font-size: 12px; }
  .meta .label { color: #991b1b; font-weight: 700; }
  table { width: 100%; border-collapse: collapse; font-size: 12px; }
  th, td { border: 1px solid #cbd5e1; padding: 4px; text-align: right; vertical-align: top; }
  th { background: #f1f5f9; }
  .text { white-space: pre-wrap; background: #f8fafc; border: 1px solid #e2e8f0;
          border-radius: 6px; padding: 6px; font-size: 12px; font-weight: 700; min-height: 1em; }
  footer { font-size: 12px; font-weight: 700; text-align: left; padding-top: 8px; }
"""

_OBJECTIVE_HEADINGS = {
    ObjectiveDomain.COGNITIVE: "الأهداف المعرفية (العقلية)",
    ObjectiveDomain.PSYCHOMOTOR: "الأهداف المهارية (النفس حركية)",
    ObjectiveDomain.AFFECTIVE: "الأهداف الوجدانية (الانفعالية)",
}

_META_FIELDS = [
    ("subject", "المادة"),
    ("lesson_title", "عنوان الدرس"),
    ("grade", "الصف"),
    ("section", "الشعبة"),
    ("day", "اليوم"),
    ("date", "التاريخ"),
    ("period", "الحصة"),
]


def _e(value: Optional[str]) -> str:
    return html.escape(value or "")


def _or_placeholder(value: Optional[str]) -> str:
    return _e(value) if value and value.strip() else messages.PLACEHOLDER


def _emblem(image: Optional[str]) -> str:
    if not image or not image.startswith("data:image/"):
        return ""
    return f'<img src="{html.escape(image, quote=True)}" alt="شعار">'


def _text_block(label: str, value: Optional[str]) -> str:
    return f'<h3>{label}</h3><div class="text">{_e(value)}</div>'


def _joined(values: Iterable[str]) -> str:
    return _e("، ".join(values or []))


def _objective_rows(objectives: List[Objective]) -> str:
    if not objectives:
        return '<tr><td colspan="3">-</td></tr>'

    rows = []
    for objective in objectives:
        rows.append(
            "<tr>"
            f"<td>{_e(objective.get('level')) or '-'}</td>"
            f"<td>{_e(objective.get('formulation')) or '-'}</td>"
            f"<td>{_e(objective.get('evaluation')) or '-'}</td>"
            "</tr>"
        )
    return "".join(rows)


def render_lesson_plan_html(plan: LessonPlan) -> str:
    """
    Render a lesson plan as a standalone printable HTML document.

    Args:
        plan: Lesson plan to render

    Returns:
        Complete HTML document (UTF-8, dir="rtl")
    """
    meta = "".join(
        f'<div><span class="label">{label}:</span> {_e(plan.get(field))}</div>'
        for field, label in _META_FIELDS
    )

    objectives = "".join(
        f"<h3>{heading}</h3>"
        "<table><thead><tr><th>المستوى</th><th>صياغة الهدف</th><th>أسلوب التقييم</th></tr></thead>"
        f"<tbody>{_objective_rows(plan.get(domain.field_name) or [])}</tbody></table>"
        for domain, heading in _OBJECTIVE_HEADINGS.items()
    )

    return f"""<!DOCTYPE html>
<html lang="ar" dir="rtl">
<head>
<meta charset="utf-8">
<title>{_e(plan.get("lesson_title")) or messages.DOCUMENT_TITLE}</title>
<style>{_STYLE}</style>
</head>
<body>
<div class="page">
<header>
  <div class="official">
    <p class="state">{_e(plan.get("republic_name"))}</p>
    <p class="state">{_e(plan.get("ministry"))}</p>
    <p>المنطقة التعليمية: {_or_placeholder(plan.get("education_area"))}</p>
    <p>المــــدرســـــــــــــة: {_or_placeholder(plan.get("school_name"))}</p>
  </div>
  <div class="emblems">{_emblem(plan.get("emblem1"))}{_emblem(plan.get("emblem2"))}</div>
  <div></div>
</header>
<h1>{messages.DOCUMENT_TITLE}</h1>
<section><div class="meta">{meta}</div></section>
<section>
  <h2>الأهداف السلوكية</h2>
  {objectives}
</section>
<section>
  <h2>الوسائل والاستراتيجيات</h2>
  <h3>طرق التدريس</h3><div class="text">{_joined(plan.get("teaching_methods"))}</div>
  <h3>الوسائل التعليمية</h3><div class="text">{_joined(plan.get("teaching_aids"))}</div>
</section>
<section>
  <h2>سير الدرس</h2>
  {_text_block("التمهيد", plan.get("lesson_intro"))}
  {_text_block("نوع التمهيد", plan.get("intro_type"))}
  {_text_block("محتوى الدرس والأنشطة", plan.get("lesson_content"))}
  {_text_block("أدوار المعلم", plan.get("teacher_role"))}
  {_text_block("أدوار الطالب", plan.get("student_role"))}
</section>
<section>
  <h2>التقويم والخاتمة</h2>
  {_text_block("الخاتمة", plan.get("lesson_closure"))}
  {_text_block("الواجب المنزلي", plan.get("homework"))}
</section>
<footer>المعلم/ة: {_or_placeholder(plan.get("teacher_name"))}</footer>
</div>
</body>
</html>
"""
