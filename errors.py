from __future__ import annotations


class SvgError(Exception):
    pass


class MalformedPath(SvgError):
    def __init__(self, letter: str, count: int, reason: str = None):
        self.letter = letter
        self.count = count
        self.reason = reason
        message = f"malformed '{letter}' command with {count} argument(s)"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidColor(SvgError, ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid hex color: '{value}'")


class DocumentError(SvgError):
    pass


class MissingAttribute(DocumentError):
    def __init__(self, tag: str, attribute: str):
        self.tag = tag
        self.attribute = attribute
        super().__init__(f"<{tag}> is missing required attribute '{attribute}'")


class InvalidAttribute(DocumentError):
    def __init__(self, tag: str, attribute: str, value: str):
        self.tag = tag
        self.attribute = attribute
        self.value = value
        super().__init__(f"<{tag}> has invalid {attribute} value: {value}")
