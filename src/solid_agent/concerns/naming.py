"""
Name mapping used when declaring contexts.

These functions cover the handful of suffix rules context names actually
use. They are not a general inflection library.
"""
import re
from typing import NamedTuple, Optional, Union

from solid_agent.config.settings import Settings

CANONICAL_CONTEXT_NAME = "context"


class ModelNames(NamedTuple):
    """Class names of the context, message and generation models."""
    context: str
    message: str
    generation: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelNames":
        return cls(settings.context_class, settings.message_class, settings.generation_class)


def singularize(word: str) -> str:
    """
    Singularize a snake_case name.

    Rules, first match wins:
        categories    -> category      (ies -> y)
        analysis      -> analysis      (sis, ss and us are kept)
        classes       -> class         (sses, xes, ches, shes drop "es")
        conversations -> conversation  (trailing s dropped)
    """
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith(("sis", "ss", "us")):
        return word
    if word.endswith(("sses", "xes", "ches", "shes")):
        return word[:-2]
    if word.endswith("s") and len(word) > 1:
        return word[:-1]
    return word


def pluralize(word: str) -> str:
    """
    Pluralize a snake_case name, the inverse of ``singularize``.

        category     -> categories
        analysis     -> analyses
        box          -> boxes
        conversation -> conversations
    """
    if word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou":
        return word[:-1] + "ies"
    if word.endswith("sis"):
        return word[:-2] + "es"
    if word.endswith(("s", "x", "ch", "sh")):
        return word + "es"
    return word + "s"


def camelize(name: str) -> str:
    """research_session -> ResearchSession"""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def underscore(name: str) -> str:
    """WritingAssistantAgent -> writing_assistant_agent"""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.replace("-", "_").lower()


def humanize(name: str) -> str:
    """extract_main_content -> Extract main content"""
    text = name.replace("_", " ").strip()
    return text[:1].upper() + text[1:].lower()


def strip_model_suffix(class_name: str) -> str:
    """Remove a trailing "Context", then a trailing "Session"."""
    for suffix in ("Context", "Session"):
        if class_name.endswith(suffix):
            class_name = class_name[: -len(suffix)]
    return class_name


def normalize_context_name(name: Optional[str]) -> str:
    if name is None or name in ("context", "contexts"):
        return CANONICAL_CONTEXT_NAME
    return singularize(str(name))


def infer_class_names(
    context_name: str,
    class_name: Union[str, type, None],
    defaults: ModelNames,
) -> ModelNames:
    """
    Infer model class names for a context.

    First rule wins:
        1. The canonical name uses ``defaults`` for message and generation
           (the context class is still overridden by ``class_name``)
        2. An explicit class name derives ``<Base>Message``/``<Base>Generation``
           after stripping "Context"/"Session"
        3. Otherwise the camelized name plus the same suffixes

    Example:
        >>> infer_class_names("conversation", None, defaults)
        ModelNames(context='Conversation', message='ConversationMessage', generation='ConversationGeneration')
        >>> infer_class_names("session", "ChatSession", defaults)
        ModelNames(context='ChatSession', message='ChatMessage', generation='ChatGeneration')
    """
    explicit = class_name.__name__ if isinstance(class_name, type) else class_name

    if context_name == CANONICAL_CONTEXT_NAME:
        return defaults
    if explicit:
        base = strip_model_suffix(str(explicit))
        return ModelNames(str(explicit), f"{base}Message", f"{base}Generation")

    base = camelize(context_name)
    return ModelNames(base, f"{base}Message", f"{base}Generation")
