"""Shared JSON extraction helper for model responses."""


def extract_json_object(text: str) -> str | None:
    """Slice from the first '{' to the last '}'.

    Drops any prose or markdown fence around the object. Returns None when
    the text holds no such pair.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return text[start : end + 1]
