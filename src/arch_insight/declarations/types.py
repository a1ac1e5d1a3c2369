"""Type-text cleaning.

Declared types arrive as raw source text (``List<Order>?``,
``@Nullable String``, ``byte[]``, ``Item...``). Resolution works on the
bare type name, so the helpers here strip everything else.
"""

import re

_ANNOTATION = re.compile(r"@[\w.]+(\([^)]*\))?\s*")
_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")


def _strip_generics(text: str) -> str:
    depth = 0
    out = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth = max(depth - 1, 0)
        elif depth == 0:
            out.append(ch)
    return "".join(out)


def clean_type_name(type_text: str) -> str:
    """Reduce raw type text to a bare (possibly qualified) type name.

    Args:
        type_text: Type as written in source

    Returns:
        The bare name, or "" when nothing usable is left

    Example:
        >>> clean_type_name("@Nullable java.util.List<Map<String, Order>>[]?")
        'java.util.List'
    """
    if not type_text:
        return ""
    text = _ANNOTATION.sub("", type_text)
    text = _strip_generics(text)
    text = text.replace("?", "").replace("...", "").replace("[]", "")
    text = "".join(text.split())
    match = _IDENTIFIER.fullmatch(text)
    return match.group(0) if match else ""


def type_arguments(type_text: str) -> list[str]:
    """Return every generic argument name in ``type_text``, cleaned, in order.

    Nested arguments are included: ``Map<String, List<Order>>`` gives
    ``["String", "List", "Order"]``. Wildcard bounds (``? extends Item``)
    and Kotlin variance (``out Item``) yield the bound type.
    """
    if not type_text or "<" not in type_text:
        return []
    text = _ANNOTATION.sub("", type_text)
    start = text.find("<")
    inner = text[start + 1 : text.rfind(">")]
    names = []
    for token in re.split(r"[<>,\s]+", inner):
        token = token.strip().rstrip("?").replace("[]", "").replace("...", "")
        if not token or token in ("?", "extends", "super", "in", "out", "*"):
            continue
        if _IDENTIFIER.fullmatch(token):
            names.append(token)
    return names
