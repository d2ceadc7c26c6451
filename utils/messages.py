"""Localized user-facing text for person-list imports.

The import core only hands back structured errors and warnings; this module
is the display side that turns them into English, Hebrew or Russian text.
Unknown languages fall back to English.
"""

from __future__ import annotations

from domain.models.import_result import RowValidationWarning
from domain.models.record_shape import RecordShape
from middleware.errors import (
    BaseAppError,
    EmptyFileError,
    InvalidUploadError,
    StrictModeViolationError,
    UnreadableFormatError,
    UnrecognizedFormatError,
    UnsupportedLanguageError,
)

DEFAULT_LANGUAGE = "en"

FORMAT_NAMES: dict[str, dict[RecordShape, str]] = {
    "en": {
        RecordShape.COMPLETE_EMPLOYEE: "Complete Employee Data",
        RecordShape.BASIC_NAME: "Basic Name Information",
        RecordShape.EMPLOYEE_ID_ONLY: "Worker ID List",
        RecordShape.PERSON_ID_ONLY: "Person ID Numbers",
    },
    "he": {
        RecordShape.COMPLETE_EMPLOYEE: "נתוני עובד מלאים",
        RecordShape.BASIC_NAME: "פרטי שם בסיסיים",
        RecordShape.EMPLOYEE_ID_ONLY: "רשימת מזהי עובדים",
        RecordShape.PERSON_ID_ONLY: "מספרי תעודות זהות",
    },
    "ru": {
        RecordShape.COMPLETE_EMPLOYEE: "Полные данные сотрудника",
        RecordShape.BASIC_NAME: "Основные данные имени",
        RecordShape.EMPLOYEE_ID_ONLY: "Список ID работников",
        RecordShape.PERSON_ID_ONLY: "Номера удостоверений личности",
    },
}

ERROR_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "empty_file": "Excel file is empty or invalid",
        "unreadable_format": "Invalid file format. Please upload an .xls or .xlsx file",
        "unrecognized_format": "Unrecognized Excel format. Available headers: {headers}",
        "missing_required_fields": "Row {row}: Missing required fields ({fields})",
        "strict_mode": "Import rejected: {count} row(s) have missing required fields",
        "unsupported_language": "Unsupported header language: {language}",
        "invalid_upload": "Please choose an .xls or .xlsx file to upload",
        "processing_error": "Import failed: {error}",
    },
    "he": {
        "empty_file": "קובץ אקסל ריק או לא תקין",
        "unreadable_format": "פורמט קובץ לא תקין. יש להעלות קובץ xls או xlsx",
        "unrecognized_format": "פורמט אקסל לא מזוהה. כותרות זמינות: {headers}",
        "missing_required_fields": "שורה {row}: חסרים שדות חובה ({fields})",
        "strict_mode": "הייבוא נדחה: ב-{count} שורות חסרים שדות חובה",
        "unsupported_language": "שפת כותרות לא נתמכת: {language}",
        "invalid_upload": "יש לבחור קובץ xls או xlsx להעלאה",
        "processing_error": "הייבוא נכשל: {error}",
    },
    "ru": {
        "empty_file": "Файл Excel пуст или недействителен",
        "unreadable_format": "Недопустимый формат файла. Загрузите файл .xls или .xlsx",
        "unrecognized_format": "Нераспознанный формат Excel. Доступные заголовки: {headers}",
        "missing_required_fields": "Строка {row}: отсутствуют обязательные поля ({fields})",
        "strict_mode": "Импорт отклонён: в {count} строках отсутствуют обязательные поля",
        "unsupported_language": "Неподдерживаемый язык заголовков: {language}",
        "invalid_upload": "Выберите файл .xls или .xlsx для загрузки",
        "processing_error": "Ошибка импорта: {error}",
    },
}

SUPPORTED_LANGUAGES = tuple(ERROR_MESSAGES)


def _catalog(language: str | None) -> dict[str, str]:
    return ERROR_MESSAGES.get((language or "").lower(), ERROR_MESSAGES[DEFAULT_LANGUAGE])


def get_format_display_name(shape: RecordShape, language: str = DEFAULT_LANGUAGE) -> str:
    names = FORMAT_NAMES.get((language or "").lower(), FORMAT_NAMES[DEFAULT_LANGUAGE])
    shape = RecordShape(shape)
    return names.get(shape) or FORMAT_NAMES[DEFAULT_LANGUAGE].get(shape, str(shape))


def describe_warning(warning: RowValidationWarning, language: str = DEFAULT_LANGUAGE) -> str:
    fields = ", ".join(warning.missing_fields or [warning.field])
    return _catalog(language)["missing_required_fields"].format(row=warning.row, fields=fields)


def describe_error(error: BaseException, language: str = DEFAULT_LANGUAGE) -> str:
    """Localized one-line message for an import or upload error."""
    catalog = _catalog(language)
    if isinstance(error, UnrecognizedFormatError):
        return catalog["unrecognized_format"].format(headers=", ".join(error.headers))
    if isinstance(error, EmptyFileError):
        return catalog["empty_file"]
    if isinstance(error, UnreadableFormatError):
        return catalog["unreadable_format"]
    if isinstance(error, StrictModeViolationError):
        return catalog["strict_mode"].format(count=len(error.warnings))
    if isinstance(error, UnsupportedLanguageError):
        return catalog["unsupported_language"].format(language=error.language)
    if isinstance(error, InvalidUploadError):
        return catalog["invalid_upload"]
    message = error.message if isinstance(error, BaseAppError) else (str(error) or "Unknown error")
    return catalog["processing_error"].format(error=message)


__all__ = [
    "SUPPORTED_LANGUAGES",
    "get_format_display_name",
    "describe_warning",
    "describe_error",
]
