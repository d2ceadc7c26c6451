"""
Centralized custom exception definitions for the person-list importer.

Each exception inherits from BaseAppError, which itself extends Werkzeug's
HTTPException, allowing clean integration with Flask's error system and
JSON-formatted API responses.

Domain Groups:
--------------
1. Upload Errors (400)
2. Import Errors (422)
3. System Errors (500)

Messages here are developer-facing descriptions; localized user-facing text is
composed by utils.messages from ``details``.
"""

from werkzeug.exceptions import HTTPException


class BaseAppError(HTTPException):
    """Root application error, base for all custom exceptions."""
    code = 500
    description = "Application error"

    def __init__(self, message=None, details=None, code=None):
        super().__init__(description=message or self.description)
        self.message = message or self.description
        self.details = details or {}
        if code:
            self.code = code

    def to_dict(self):
        """Serialize error info into a JSON-safe dictionary."""
        return {
            "status": "error",
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# ==============================================================================
# 1. UPLOAD ERRORS (HTTP 400)
# ==============================================================================

class InvalidUploadError(BaseAppError):
    code = 400
    description = "Missing or unsupported upload"


# ==============================================================================
# 2. IMPORT ERRORS (HTTP 422)
# ==============================================================================

class PersonListImportError(BaseAppError):
    code = 422
    description = "Failed to import person list"


class EmptyFileError(PersonListImportError):
    description = "Spreadsheet has no sheets or no data rows"


class UnreadableFormatError(PersonListImportError):
    description = "File is not a readable .xls/.xlsx spreadsheet"

    def __init__(self, reason=None, details=None):
        details = dict(details or {})
        if reason:
            details.setdefault("reason", str(reason))
        super().__init__(self.description, details)
        self.reason = details.get("reason")


class UnrecognizedFormatError(PersonListImportError):
    description = "Header row does not match any known person-list format"

    def __init__(self, headers, details=None):
        self.headers = list(headers)
        details = dict(details or {})
        details["headers"] = self.headers
        super().__init__(self.description, details)


class StrictModeViolationError(PersonListImportError):
    description = "Rows with missing required fields are not allowed in strict mode"

    def __init__(self, warnings, details=None):
        self.warnings = list(warnings)
        details = dict(details or {})
        details["rows"] = [
            {"row": w.row, "field": w.field, "missing_fields": list(w.missing_fields)}
            for w in self.warnings
        ]
        super().__init__(self.description, details)


class UnsupportedLanguageError(PersonListImportError):
    description = "Requested header language is not configured"

    def __init__(self, language, available, details=None):
        self.language = language
        self.available = list(available)
        details = dict(details or {})
        details.update({"language": language, "available": self.available})
        super().__init__(self.description, details)


# ==============================================================================
# 3. SYSTEM ERRORS (HTTP 500)
# ==============================================================================

class ConfigurationError(BaseAppError):
    code = 500
    description = "Configuration missing or invalid"
