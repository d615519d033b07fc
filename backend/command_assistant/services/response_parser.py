"""
Extract a single shell command line from a free-form model completion.

Models do not always follow the "command only" instruction: they wrap the
answer in markdown fences, echo the few-shot "User:"/"Response:" labels from
the system prompt, or continue over several lines. parse_command_response()
applies the checks below in a fixed order and always returns one line.
"""

import re
from typing import Optional

NO_COMMAND_GENERATED = "echo 'No command generated'"
COMMAND_NOT_GENERATED = "echo 'Command not properly generated'"

_FENCE_OPEN = re.compile(r"```(?:bash|shell|sh)?\n?")
_RESPONSE_LABEL = re.compile(r"response:\s*(\S.*)", re.IGNORECASE)


def _is_role_label(line: str) -> bool:
    lowered = line.lower()
    return lowered.startswith("user:") or lowered.startswith("response:")


def _first_line(text: str) -> str:
    """Text up to the first line boundary of any kind (\\r, \\u2028, \\x0c ...)."""
    lines = text.splitlines()
    return lines[0].strip() if lines else ""


def strip_code_fences(text: str) -> str:
    """Remove ``` fences (with an optional bash/sh/shell tag)."""
    return _FENCE_OPEN.sub("", text).replace("```", "")


def parse_command_response(response: Optional[str]) -> str:
    """
    Normalize raw completion text into one command line.

    Order of checks:
      1. nothing to parse -> NO_COMMAND_GENERATED
      2. code fences are removed
      3. "Response: <cmd>" anywhere in the text -> <cmd>, up to the line end
      4. text starting with "User:" (echoed prompt) -> COMMAND_NOT_GENERATED
      5. several lines -> first line that is not a User:/Response: label
      6. text starting with "Response:" and nothing usable -> COMMAND_NOT_GENERATED
      7. otherwise the trimmed text, or NO_COMMAND_GENERATED if it is blank
    """
    if not response:
        return NO_COMMAND_GENERATED

    clean = strip_code_fences(response)

    match = _RESPONSE_LABEL.search(clean)
    if match:
        return _first_line(match.group(1))

    if clean.lower().startswith("user:"):
        return COMMAND_NOT_GENERATED

    lines = [line.strip() for line in clean.splitlines() if line.strip()]
    if len(lines) > 1:
        for line in lines:
            if not _is_role_label(line):
                return line

    if clean.lower().startswith("response:"):
        return COMMAND_NOT_GENERATED

    # One line, or nothing but label lines
    return " ".join(lines) or NO_COMMAND_GENERATED
