"""
Database-backed prompt context for agents.

``HasContext`` lets an agent declare one or more named contexts. Each context
is a persisted record with ordered messages and recorded generations. The
first declared context is the *primary* one: the unqualified operations
(``load_context``, ``add_message``, ``context_result``...) delegate to it.

Example:
    >>> @has_context("conversation", contextable="user")
    ... class ChatAgent(HasContext, Agent):
    ...     def chat(self):
    ...         self.add_user_message(self.params["message"])
    ...         self.prompt(messages=self.context_messages())
    >>>
    >>> agent = ChatAgent(params={"user": user, "message": "Hi"})
    >>> agent.process("chat")          # conversation loaded from params["user"]
    >>> agent.contexts["conversation"].summary()

Multiple contexts:
    >>> @has_context("analysis", contextable="document")
    ... @has_context("conversation", contextable="user")
    ... class MultiModalAgent(HasContext, Agent):
    ...     ...
    >>> agent.context_for("analysis").add_user_message("Summarize")

Class decorators apply bottom-up, so the declaration closest to the class is
the primary context.
"""

from __future__ import annotations
import traceback
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Literal, Union

from solid_agent.concerns.naming import (
    CANONICAL_CONTEXT_NAME,
    ModelNames,
    infer_class_names,
    normalize_context_name,
)
from solid_agent.config.settings import get_settings
from solid_agent.domain.exceptions import (
    ContextConfigurationError,
    ContextNotConfigured,
    ContextNotLoaded,
)
from solid_agent.infrastructure.database.models import default_model_registry
from solid_agent.infrastructure.database.registry import ModelRegistry
from solid_agent.infrastructure.observability.logging import get_logger
from solid_agent.interfaces.generation import response_content

logger = get_logger(__name__)

ModelReference = Union[str, type]


@dataclass(frozen=True)
class ContextConfig:
    """
    Class-level configuration of one named context.

    Attributes:
        name: Normalized context name
        context_class: Context model class or class name
        message_class: Message model class or class name
        generation_class: Generation model class or class name
        auto_save: Persist prompts and generations automatically
        contextable: Param key holding the owner, None for anonymous
            contexts, False to disable automatic creation
    """
    name: str
    context_class: ModelReference
    message_class: ModelReference
    generation_class: ModelReference
    auto_save: bool = True
    contextable: Union[str, Literal[False], None] = None


class ContextSlot:
    """Instance attribute holding the loaded record of one named context."""

    def __init__(self, name: str):
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return _records(instance).get(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        _records(instance)[self.name] = value


def _records(agent: Any) -> dict[str, Any]:
    return agent.__dict__.setdefault("_context_records", {})


@dataclass(frozen=True)
class EnsureContextExists:
    """After-prompt hook loading or creating a named context when its slot is empty."""
    name: str

    def __call__(self, agent: "HasContext") -> None:
        agent.context_for(self.name).ensure_exists()


class NamedContext:
    """
    Operations of one named context, bound to an agent instance.

    Resolved model classes are memoized on the handle, so each agent
    instance resolves them at most once.
    """

    def __init__(self, agent: "HasContext", config: ContextConfig):
        self.agent = agent
        self.config = config
        self._classes: dict[str, type] = {}

    @property
    def name(self) -> str:
        return self.config.name

    def _resolve(self, kind: str) -> type:
        if kind not in self._classes:
            reference = getattr(self.config, f"{kind}_class")
            self._classes[kind] = type(self.agent).model_registry.resolve(reference)
        return self._classes[kind]

    @property
    def context_class(self) -> type:
        return self._resolve("context")

    @property
    def message_class(self) -> type:
        return self._resolve("message")

    @property
    def generation_class(self) -> type:
        return self._resolve("generation")

    @property
    def record(self) -> Any:
        return _records(self.agent).get(self.name)

    @record.setter
    def record(self, value: Any) -> None:
        _records(self.agent)[self.name] = value

    def load(self, contextable: Any = None, context_id: Any = None, **options: Any) -> Any:
        """
        Load a context into the slot.

        - ``context_id``: fetch that record (RecordNotFound propagates)
        - ``contextable``: find the record owned by it for this agent and
          action, creating it when missing
        - neither: create an anonymous record

        Args:
            contextable: Owning entity
            context_id: Identifier of an existing record
            **options: Stored as the record's options on creation

        Returns:
            The loaded record
        """
        model = self.context_class
        agent = self.agent

        if context_id is not None:
            record = model.find(context_id)
        elif contextable is not None:
            record = model.find_or_create_by(
                on_create=self._populate(options),
                contextable=contextable,
                agent_name=type(agent).__name__,
                action_name=agent.action_name,
            )
        else:
            record = model.create(**self._creation_attributes(options))

        self.record = record
        logger.debug("context_loaded", context=self.name, context_id=str(record.id))
        return record

    def create(self, contextable: Any = None, **options: Any) -> Any:
        """Create a new record (never reuses an existing one) and store it in the slot."""
        record = self.context_class.create(
            contextable=contextable,
            **self._creation_attributes(options),
        )
        self.record = record
        logger.info("context_created", context=self.name, context_id=str(record.id))
        return record

    def _creation_attributes(self, options: dict[str, Any]) -> dict[str, Any]:
        prompt_options = self.agent.prompt_options
        return {
            "agent_name": type(self.agent).__name__,
            "action_name": self.agent.action_name,
            "instructions": prompt_options.get("instructions"),
            "options": options,
            "trace_id": prompt_options.get("trace_id"),
        }

    def _populate(self, options: dict[str, Any]) -> Callable[[Any], None]:
        prompt_options = self.agent.prompt_options

        def populate(record: Any) -> None:
            if hasattr(record, "instructions"):
                record.instructions = prompt_options.get("instructions")
            if hasattr(record, "options"):
                record.options = options
            if hasattr(record, "trace_id"):
                record.trace_id = prompt_options.get("trace_id")

        return populate

    def messages(self) -> list[dict[str, Any]]:
        record = self.record
        if record is None:
            return []
        return [message.to_message_dict() for message in record.messages]

    def with_messages(self) -> None:
        """Feed the message history into the outgoing prompt, if there is any."""
        messages = self.messages()
        if messages:
            self.agent.prompt(messages=messages)

    def add_message(self, role: str, content: str, **attributes: Any) -> Any:
        """
        Append a message to the loaded context.

        Raises:
            ContextNotLoaded: If no record is loaded
        """
        record = self.record
        if record is None:
            raise ContextNotLoaded(
                f"No {self.name} loaded. Call load or create on the {self.name!r} context first.",
                details={"context_name": self.name},
            )
        return record.add_message(role, content, **attributes)

    def add_user_message(self, content: str, **attributes: Any) -> Any:
        return self.add_message("user", content, **attributes)

    def add_assistant_message(self, content: str, **attributes: Any) -> Any:
        return self.add_message("assistant", content, **attributes)

    def result(self) -> str | None:
        """Content of the last assistant message, or None."""
        record = self.record
        if record is None:
            return None
        for message in reversed(list(record.messages)):
            if message.role == "assistant":
                return message.content
        return None

    def last_generation(self) -> Any:
        record = self.record
        if record is None:
            return None
        generations = list(record.generations)
        return generations[-1] if generations else None

    def summary(self) -> dict[str, Any] | None:
        """Key facts about the loaded context, with None values left out."""
        record = self.record
        if record is None:
            return None
        summary = {
            "id": record.id,
            "result": self.result(),
            "message_count": len(record.messages),
            "total_tokens": getattr(record, "total_tokens", None),
            "created_at": getattr(record, "created_at", None),
            "agent_name": record.agent_name,
            "action_name": record.action_name,
        }
        return {key: value for key, value in summary.items() if value is not None}

    def ensure_exists(self) -> None:
        if self.record is not None:
            return
        key = self.config.contextable
        if isinstance(key, str):
            self.load(contextable=self.agent.params.get(key))
        else:
            self.create()

    def __repr__(self) -> str:
        return f"NamedContext(name={self.name!r}, record={self.record!r})"


class ContextHandles(Mapping):
    """Read-only mapping of context name to NamedContext for one agent."""

    def __init__(self, agent: "HasContext"):
        self._agent = agent

    def __getitem__(self, name: str) -> NamedContext:
        return self._agent.context_for(name)

    def __iter__(self) -> Iterator[str]:
        return iter(type(self._agent)._context_configs)

    def __len__(self) -> int:
        return len(type(self._agent)._context_configs)


class HasContext:
    """
    Mixin adding named, persisted contexts to an agent host.

    The host must provide ``params``, ``prompt_options``, ``action_name``,
    ``prompt(**options)`` and the ``after_prompt`` / ``around_generation``
    hook registration classmethods (see ``solid_agent.agent.Agent``).

    Class attributes:
        model_registry: Where configured class names are resolved
        model_names: Default model names for the canonical ``context`` name
            (``Settings`` values when None)
    """

    _context_configs: dict[str, ContextConfig] = {}
    model_registry: ModelRegistry = default_model_registry
    model_names: ModelNames | None = None

    # ---- Configuration ----

    @classmethod
    def declare_context(
        cls,
        name: str | None = None,
        class_name: ModelReference | None = None,
        message_class: ModelReference | None = None,
        generation_class: ModelReference | None = None,
        auto_save: bool = True,
        contextable: Union[str, Literal[False], None] = None,
        defaults: ModelNames | None = None,
    ) -> ContextConfig:
        """
        Declare a named context on this agent class.

        Args:
            name: Context name (None, "context" or "contexts" for the canonical one)
            class_name: Context model; also the base for inferred message/generation names
            message_class: Message model
            generation_class: Generation model
            auto_save: Persist prompts and generations (only honoured for the
                first context declared on the class)
            contextable: Param key holding the owner, None for an anonymous
                context, False to disable automatic creation
            defaults: Model names for the canonical context

        Returns:
            The stored configuration

        Raises:
            ContextConfigurationError: If the name collides with an existing attribute
        """
        context_name = normalize_context_name(name)
        defaults = defaults or cls.model_names or ModelNames.from_settings(get_settings())
        inferred = infer_class_names(context_name, class_name, defaults)

        config = ContextConfig(
            name=context_name,
            context_class=class_name or inferred.context,
            message_class=message_class or inferred.message,
            generation_class=generation_class or inferred.generation,
            auto_save=auto_save,
            contextable=contextable,
        )

        cls._install_context_slot(context_name)
        cls._context_configs = {**cls._context_configs, context_name: config}

        if auto_save and len(cls._context_configs) == 1:
            cls.after_prompt("persist_prompt_to_context")
            cls.around_generation("capture_and_persist_generation")

        if contextable is not False:
            cls.after_prompt(EnsureContextExists(context_name))

        logger.debug(
            "context_declared",
            agent=cls.__name__,
            context=context_name,
            context_class=str(config.context_class),
        )
        return config

    @classmethod
    def _install_context_slot(cls, context_name: str) -> None:
        if context_name == CANONICAL_CONTEXT_NAME:
            return
        for klass in cls.__mro__:
            if context_name in klass.__dict__:
                if isinstance(klass.__dict__[context_name], ContextSlot):
                    return
                raise ContextConfigurationError(
                    f"Context name {context_name!r} collides with {klass.__name__}.{context_name}",
                    details={"context_name": context_name, "agent": cls.__name__},
                )
        setattr(cls, context_name, ContextSlot(context_name))

    @classmethod
    def context_configs(cls) -> Mapping[str, ContextConfig]:
        return dict(cls._context_configs)

    @classmethod
    def primary_context_name(cls) -> str:
        return next(iter(cls._context_configs), CANONICAL_CONTEXT_NAME)

    # ---- Handles ----

    def context_for(self, name: str | None = None) -> NamedContext:
        """
        Get the handle of a named context (the primary one by default).

        Raises:
            ContextNotConfigured: If the name was never declared
        """
        context_name = normalize_context_name(name) if name else type(self).primary_context_name()
        config = type(self)._context_configs.get(context_name)
        if config is None:
            raise ContextNotConfigured(
                f"No context named {context_name!r} on {type(self).__name__}",
                details={"context_name": context_name, "agent": type(self).__name__},
            )
        handles = self.__dict__.setdefault("_context_handles", {})
        if context_name not in handles:
            handles[context_name] = NamedContext(self, config)
        return handles[context_name]

    @property
    def contexts(self) -> ContextHandles:
        return ContextHandles(self)

    # ---- Primary context ----

    @property
    def context(self) -> Any:
        return self.context_for().record

    @context.setter
    def context(self, value: Any) -> None:
        self.context_for().record = value

    @property
    def context_class(self) -> type:
        return self.context_for().context_class

    @property
    def message_class(self) -> type:
        return self.context_for().message_class

    @property
    def generation_class(self) -> type:
        return self.context_for().generation_class

    def load_context(self, contextable: Any = None, context_id: Any = None, **options: Any) -> Any:
        return self.context_for().load(contextable=contextable, context_id=context_id, **options)

    def create_context(self, contextable: Any = None, **options: Any) -> Any:
        return self.context_for().create(contextable=contextable, **options)

    def context_messages(self) -> list[dict[str, Any]]:
        return self.context_for().messages()

    def with_context_messages(self) -> None:
        self.context_for().with_messages()

    def add_message(self, role: str, content: str, **attributes: Any) -> Any:
        return self.context_for().add_message(role, content, **attributes)

    def add_user_message(self, content: str, **attributes: Any) -> Any:
        return self.add_message("user", content, **attributes)

    def add_assistant_message(self, content: str, **attributes: Any) -> Any:
        return self.add_message("assistant", content, **attributes)

    def context_result(self) -> str | None:
        return self.context_for().result()

    def last_generation(self) -> Any:
        return self.context_for().last_generation()

    def context_summary(self) -> dict[str, Any] | None:
        return self.context_for().summary()

    # ---- Persistence hooks ----

    def persist_prompt_to_context(self) -> None:
        """After-prompt hook: store the last outgoing prompt message as a user message."""
        if self.context is None:
            return

        messages = self.prompt_options.get("messages")
        if not messages:
            return

        last = messages[-1]
        content = last.get("content") if isinstance(last, Mapping) else str(last)
        if content and str(content).strip():
            self.add_user_message(content)

    def capture_and_persist_generation(self, proceed: Callable[[], Any]) -> Any:
        """Around-generation hook: run the generation, then record it on the context."""
        response = proceed()
        self.generation_response = response
        self._persist_generation_to_context(response)
        return response

    def _persist_generation_to_context(self, response: Any) -> None:
        record = self.context
        if record is None or response is None:
            return

        try:
            content = response_content(response)
            if content and str(content).strip():
                record.record_generation(response)
                logger.info("generation_persisted", context_id=str(record.id))
            else:
                logger.warning(
                    "generation_persistence_skipped",
                    context_id=str(record.id),
                    reason="no message content in response",
                )
        except Exception as e:
            logger.error(
                "generation_persistence_failed",
                context_id=str(getattr(record, "id", None)),
                error=str(e),
                error_type=type(e).__name__,
                backtrace=traceback.format_tb(e.__traceback__)[:5],
            )


def has_context(name: str | None = None, **options: Any) -> Callable[[type], type]:
    """
    Class decorator form of ``declare_context``.

    Example:
        >>> @has_context("research_session", contextable=False)
        ... class ResearchAgent(HasContext, Agent):
        ...     pass
    """

    def decorator(cls: type) -> type:
        cls.declare_context(name, **options)
        return cls

    return decorator
