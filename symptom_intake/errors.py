"""Error kinds surfaced by the symptom intake core and their public shape."""


class SymptomIntakeError(Exception):
    code = "internal_error"
    status_code = 500
    public_message = "Unexpected server error."


class UpstreamError(SymptomIntakeError):
    code = "upstream_error"
    status_code = 502
    public_message = "The diagnostic service is temporarily unavailable."


class ParseError(SymptomIntakeError):
    code = "analysis_error"
    status_code = 502
    public_message = "The diagnostic service returned an answer that could not be analyzed."


class ConfigError(SymptomIntakeError):
    code = "config_error"
    status_code = 503
    public_message = "The diagnostic service is not configured."


def error_payload(exc: SymptomIntakeError) -> dict:
    """Stable client-facing error body. Never includes the exception text."""
    return {"error": exc.code, "message": exc.public_message}
