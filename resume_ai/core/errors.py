from __future__ import annotations


class ResumeAIError(RuntimeError):
    """Request failure that is reported to the caller with a stable code."""

    status_code = 400
    code = "INVALID_REQUEST"

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class MissingFieldsError(ResumeAIError):
    code = "MISSING_FIELDS"


class NoResumeError(ResumeAIError):
    code = "NO_RESUME"


class UploadRejectedError(ResumeAIError):
    code = "UPLOAD_FAILED"


class UnsupportedFileTypeError(ResumeAIError):
    code = "UNSUPPORTED_FILE_TYPE"


class FileTooLargeError(ResumeAIError):
    status_code = 413
    code = "FILE_TOO_LARGE"


class ResumeParseError(ResumeAIError):
    status_code = 422
    code = "RESUME_PARSE_FAILED"


class UnauthorizedError(ResumeAIError):
    status_code = 401
    code = "UNAUTHORIZED"
