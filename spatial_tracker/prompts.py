"""Handlebars prompt rendering for the spatial tracking instruction."""

from collections.abc import Callable
from typing import Any

import pybars

SPATIAL_TAG_OPEN = "<spatial_system>"
SPATIAL_TAG_CLOSE = "</spatial_system>"

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class PromptError(Exception):
    """Raised when a Handlebars template fails to compile or render."""


# Triple-stash everywhere: the tags must not be HTML-escaped.
INSTRUCTION_TEMPLATE = """
[SYSTEM: SPATIAL TRACKING ACTIVE]
You must maintain a spatial tracking system for this scene.
{{{user}}} is at coordinates (0,0).
Analyze the scene and determine the coordinates (X, Y) and a short "Status" for every other character present relative to {{{user}}}.
- X: Horizontal distance (negative = left, positive = right).
- Y: Forward distance (negative = behind, positive = in front).

Output the result strictly as a valid JSON object wrapped in {{{open_tag}}} tags at the very end of your response.
Format:
{{{open_tag}}}
{
  "characters": [
    { "name": "{{{char}}}", "x": 5, "y": 10, "status": "Walking towards user" }
  ]
}
{{{close_tag}}}
Ensure valid JSON. Do not output this text outside the tags.
"""


def render_prompt(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return str(compiled(context))
    except Exception as e:
        raise PromptError(f"Template error: {e}") from e


def build_instruction(user: str = "{{user}}", char: str = "{{char}}") -> str:
    """Build the system instruction asking the model for a spatial packet.

    The defaults leave the host's {{user}}/{{char}} macros in place so the
    chat frontend substitutes the real names.
    """
    return render_prompt(INSTRUCTION_TEMPLATE, {
        "user": user,
        "char": char,
        "open_tag": SPATIAL_TAG_OPEN,
        "close_tag": SPATIAL_TAG_CLOSE,
    })
