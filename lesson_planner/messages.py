"""
Localized (Arabic) messages shown to the end user.

Log messages stay in English; only text that reaches the user lives here.
"""

# Extraction
EMPTY_ANALYSIS_INPUT = "الرجاء إدخال نص خطة الدرس للتحليل."
MISSING_CREDENTIALS = (
    "لم يتم تكوين مفتاح API للذكاء الاصطناعي. "
    "يرجى التأكد من إعداده في متغيرات البيئة."
)
INVALID_CREDENTIALS = "مفتاح API غير صالح. يرجى التحقق من المفتاح في إعدادات البيئة الخاصة بك."
SERVICE_UNREACHABLE = "تعذر الاتصال بخدمة الذكاء الاصطناعي. يرجى التحقق من الاتصال والمحاولة مرة أخرى."
SERVICE_UNAVAILABLE = "خدمة التحليل غير متاحة مؤقتًا بسبب أخطاء متكررة. يرجى المحاولة بعد قليل."
ANALYSIS_FAILED = "فشل تحليل خطة الدرس. يرجى المحاولة مرة أخرى أو التحقق من مفتاح API."
UNEXPECTED_RESPONSE = "تعذر فهم استجابة الذكاء الاصطناعي. يرجى المحاولة مرة أخرى."
ANALYSIS_IN_PROGRESS = "جاري التحليل... يرجى الانتظار حتى يكتمل الطلب الحالي."
ANALYSIS_DONE = "تم تحليل النص وتعبئة الحقول الفارغة."
TEXT_FILE_UNREADABLE = "تعذر قراءة ملف نص الدرس. يرجى التحقق من المسار وترميز الملف (UTF-8)."

# Persistence
SAVE_SUCCEEDED = "تم حفظ الخطة بنجاح!"
SAVE_FAILED = "حدث خطأ أثناء حفظ الخطة."
LOAD_FAILED = "تعذر تحميل الخطط المحفوظة."
PLAN_NOT_FOUND = "لم يتم العثور على الخطة المطلوبة."
PLAN_INVALID = "لا يمكن حفظ الخطة لأنها غير مكتملة."

# Export
PDF_EXPORT_FAILED = "حدث خطأ أثناء إنشاء ملف PDF."
PDF_LIBRARIES_MISSING = "خطأ: تعذر تشغيل المتصفح اللازم لتصدير PDF."
CSV_EXPORT_FAILED = "حدث خطأ أثناء تصدير الخطط إلى CSV."
EXPORT_SUCCEEDED = "تم التصدير بنجاح."

# Rendering
DEFAULT_FILE_TITLE = "خطة-درس"
DOCUMENT_TITLE = "خطة الدرس اليومي"
PLACEHOLDER = "........................."
