"""
Fixed catalogs used by lesson plan fields.

Weekday labels, select-field options, taxonomy levels per objective
domain, and the teaching method / teaching aid catalogs.
"""

from enum import Enum
from typing import Dict, List, Tuple, Type


# Index 0 is Sunday, matching the (weekday + 1) % 7 mapping in planning.weekday
DAYS: Tuple[str, ...] = (
    "الأحد",
    "الاثنين",
    "الثلاثاء",
    "الأربعاء",
    "الخميس",
    "الجمعة",
    "السبت",
)

SUBJECTS: List[str] = [
    "القرآن الكريم",
    "التربية الإسلامية",
    "اللغة العربية",
    "اللغة الإنجليزية",
    "الرياضيات",
    "العلوم",
    "الفيزياء",
    "الكيمياء",
    "الأحياء",
    "الاجتماعيات",
    "التاريخ",
    "الجغرافيا",
    "التربية الوطنية",
    "الحاسوب",
]

GRADES: List[str] = [
    "الصف الأول الابتدائي",
    "الصف الثاني الابتدائي",
    "الصف الثالث الابتدائي",
    "الصف الرابع الابتدائي",
    "الصف الخامس الابتدائي",
    "الصف السادس الابتدائي",
    "الصف السابع الأساسي",
    "الصف الثامن الأساسي",
    "الصف التاسع الأساسي",
    "الصف الأول الثانوي",
    "الصف الثاني الثانوي",
    "الصف الثالث الثانوي",
]

SECTIONS: List[str] = ["أ", "ب", "ج", "د", "هـ", "و"]

PERIODS: List[str] = [
    "الأولى",
    "الثانية",
    "الثالثة",
    "الرابعة",
    "الخامسة",
    "السادسة",
    "السابعة",
]

INTRO_TYPES: List[str] = [
    "سؤال",
    "قصة",
    "مراجعة الدرس السابق",
    "موقف حياتي",
    "وسيلة تعليمية",
    "نشاط تمهيدي",
]

TEACHING_METHODS: List[str] = [
    "الإلقاء",
    "الحوار والمناقشة",
    "العصف الذهني",
    "التعلم التعاوني",
    "حل المشكلات",
    "الاستقصاء",
    "لعب الأدوار",
    "القصة",
    "التعلم باللعب",
    "الخرائط الذهنية",
    "العرض العملي",
    "التعلم الذاتي",
]

TEACHING_AIDS: Dict[str, List[str]] = {
    "وسائل تقليدية": [
        "السبورة",
        "الطباشير الملون",
        "الكتاب المدرسي",
        "البطاقات",
        "اللوحات الجدارية",
    ],
    "وسائل تقنية": [
        "جهاز العرض",
        "الحاسوب",
        "مقاطع الفيديو",
        "التسجيلات الصوتية",
    ],
    "وسائل حسية": [
        "المجسمات",
        "العينات الحقيقية",
        "الصور",
        "الخرائط",
    ],
}


class BloomLevelCognitive(Enum):
    """Cognitive domain levels (Bloom)."""
    REMEMBER = "تذكر"
    UNDERSTAND = "فهم"
    APPLY = "تطبيق"
    ANALYZE = "تحليل"
    SYNTHESIZE = "تركيب"
    EVALUATE = "تقويم"


class BloomLevelPsychomotor(Enum):
    """Psychomotor domain levels (Simpson)."""
    PERCEPTION = "الإدراك الحسي"
    SET = "الاستعداد"
    GUIDED_RESPONSE = "الاستجابة الموجهة"
    MECHANISM = "الآلية"
    COMPLEX_RESPONSE = "الاستجابة المعقدة"
    ADAPTATION = "التكيف"
    ORIGINATION = "الإبداع"


class BloomLevelAffective(Enum):
    """Affective domain levels (Krathwohl)."""
    RECEIVING = "الاستقبال"
    RESPONDING = "الاستجابة"
    VALUING = "التقييم"
    ORGANIZATION = "التنظيم"
    CHARACTERIZATION = "التمييز بالقيمة"


class ObjectiveDomain(Enum):
    """
    Pedagogical domain of a behavioral objective.

    The value is the prefix of the plan field holding that domain's
    objectives (e.g. "cognitive" -> "cognitive_objectives").
    """

    COGNITIVE = "cognitive"
    PSYCHOMOTOR = "psychomotor"
    AFFECTIVE = "affective"

    @property
    def field_name(self) -> str:
        """Plan field holding this domain's objectives."""
        return f"{self.value}_objectives"

    @property
    def id_prefix(self) -> str:
        """Short prefix used for objective identifiers."""
        return _ID_PREFIXES[self]

    @property
    def levels(self) -> Type[Enum]:
        """Taxonomy level enum for this domain."""
        return _LEVELS[self]

    def level_values(self) -> List[str]:
        """All level labels for this domain, in taxonomy order."""
        return [level.value for level in self.levels]


_ID_PREFIXES = {
    ObjectiveDomain.COGNITIVE: "cog",
    ObjectiveDomain.PSYCHOMOTOR: "psy",
    ObjectiveDomain.AFFECTIVE: "aff",
}

_LEVELS = {
    ObjectiveDomain.COGNITIVE: BloomLevelCognitive,
    ObjectiveDomain.PSYCHOMOTOR: BloomLevelPsychomotor,
    ObjectiveDomain.AFFECTIVE: BloomLevelAffective,
}


def all_teaching_aids() -> List[str]:
    """Flatten the teaching aid catalog in display order."""
    return [aid for aids in TEACHING_AIDS.values() for aid in aids]


# Single-choice fields and the options offered for them
SELECT_FIELDS: Dict[str, List[str]] = {
    "subject": SUBJECTS,
    "grade": GRADES,
    "section": SECTIONS,
    "period": PERIODS,
    "intro_type": INTRO_TYPES,
}

# Multi-choice fields; entries are toggled on and off from these catalogs
MULTI_CHOICE_FIELDS: Dict[str, List[str]] = {
    "teaching_methods": TEACHING_METHODS,
    "teaching_aids": all_teaching_aids(),
}
