"""
Reference agent host.

Provides the lifecycle the concerns plug into: request ``params``, a mutable
``prompt_options`` bag, the current ``action_name``, after-prompt and
around-generation hooks, and JSON template rendering for tool schemas.
It does not talk to a model; generation is delegated to an injected callable.
"""

from __future__ import annotations
from functools import partial
from pathlib import Path
from typing import Any, Callable, Mapping, Union

from solid_agent.concerns.naming import underscore
from solid_agent.config.settings import get_settings
from solid_agent.domain.exceptions import GeneratorNotConfigured
from solid_agent.infrastructure.broadcast.broadcaster import get_broadcaster
from solid_agent.infrastructure.observability.context import log_context
from solid_agent.infrastructure.observability.logging import get_logger
from solid_agent.interfaces.broadcast import IBroadcaster

logger = get_logger(__name__)

Generator = Callable[[dict[str, Any]], Any]
AfterPromptCallback = Union[str, Callable[["Agent"], Any]]
AroundGenerationCallback = Union[str, Callable[["Agent", Callable[[], Any]], Any]]


class Agent:
    """
    Base class for agents.

    Subclasses define actions as plain methods. ``process`` runs an action and
    then the after-prompt hooks; ``generate_now`` calls the generator inside
    the around-generation hooks.

    Hooks are registered with ``after_prompt`` / ``around_generation`` and are
    either the name of an agent method or a callable. After-prompt hooks run
    most recently registered first. The first registered around-generation
    hook is the outermost.

    Example:
        >>> class ChatAgent(HasContext, Agent):
        ...     def chat(self):
        ...         self.prompt(messages=[{"role": "user", "content": self.params["message"]}])
        >>>
        >>> agent = ChatAgent(params={"message": "Hi"}, generator=client.generate)
        >>> agent.process("chat")
        >>> response = agent.generate_now()
    """

    _after_prompt_callbacks: tuple[AfterPromptCallback, ...] = ()
    _around_generation_callbacks: tuple[AroundGenerationCallback, ...] = ()

    def __init__(
        self,
        params: Mapping[str, Any] | None = None,
        generator: Generator | None = None,
        broadcaster: IBroadcaster | None = None,
        templates_path: str | Path | None = None,
    ):
        """
        Initialize an agent for one request.

        Args:
            params: Request parameters
            generator: Callable receiving ``prompt_options`` and returning a response
            broadcaster: Broadcaster for live updates (process-wide one by default)
            templates_path: Root of JSON templates (``Settings.templates_path`` by default)
        """
        self.params: dict[str, Any] = dict(params or {})
        self.prompt_options: dict[str, Any] = {}
        self.action_name: str | None = None
        self.generator = generator
        self.generation_response: Any = None
        self._broadcaster = broadcaster
        self.templates_path = Path(templates_path) if templates_path else get_settings().templates_path

    @classmethod
    def with_params(cls, **params: Any) -> "Agent":
        return cls(params=params)

    # ---- Hook registration ----

    @classmethod
    def after_prompt(cls, callback: AfterPromptCallback) -> None:
        """Register an after-prompt hook. Registering an equal hook again is a no-op."""
        if callback not in cls._after_prompt_callbacks:
            cls._after_prompt_callbacks = cls._after_prompt_callbacks + (callback,)

    @classmethod
    def around_generation(cls, callback: AroundGenerationCallback) -> None:
        """Register an around-generation hook, called with a ``proceed`` callable."""
        if callback not in cls._around_generation_callbacks:
            cls._around_generation_callbacks = cls._around_generation_callbacks + (callback,)

    # ---- Lifecycle ----

    @property
    def agent_name(self) -> str:
        """Underscored class name used as the template directory."""
        return underscore(type(self).__name__)

    @property
    def broadcaster(self) -> IBroadcaster:
        if self._broadcaster is None:
            self._broadcaster = get_broadcaster()
        return self._broadcaster

    def prompt(self, **options: Any) -> dict[str, Any]:
        """Merge options into the outgoing prompt configuration."""
        self.prompt_options.update(options)
        return self.prompt_options

    def process(self, action: str, *args: Any, **kwargs: Any) -> Any:
        """
        Run an action method, then the after-prompt hooks.

        Returns:
            Whatever the action returned
        """
        self.action_name = action
        with log_context(agent=type(self).__name__, action=action):
            logger.debug("action_started")
            result = getattr(self, action)(*args, **kwargs)
            for callback in reversed(type(self)._after_prompt_callbacks):
                self._run_callback(callback)
        return result

    def generate_now(self) -> Any:
        """
        Call the generator with ``prompt_options`` through the around-generation hooks.

        Raises:
            GeneratorNotConfigured: If the agent has no generator
        """
        if self.generator is None:
            raise GeneratorNotConfigured(details={"agent": type(self).__name__})

        def generate() -> Any:
            return self.generator(self.prompt_options)

        chain: Callable[[], Any] = generate
        for callback in reversed(type(self)._around_generation_callbacks):
            chain = partial(self._run_callback, callback, chain)

        with log_context(agent=type(self).__name__, action=self.action_name):
            logger.debug("generation_started")
            return chain()

    def _run_callback(self, callback: Any, *args: Any) -> Any:
        if isinstance(callback, str):
            return getattr(self, callback)(*args)
        return callback(self, *args)

    # ---- Templates ----

    def render_to_string(self, template: str) -> str:
        """
        Read ``<templates_path>/<template>.json``.

        Raises:
            FileNotFoundError: If the template does not exist
        """
        path = self.templates_path / f"{template}.json"
        return path.read_text(encoding="utf-8")

    def list_templates(self, prefix: str) -> list[str]:
        """Names of the JSON templates directly under ``<templates_path>/<prefix>``."""
        directory = self.templates_path / prefix
        if not directory.is_dir():
            return []
        return sorted(path.stem for path in directory.glob("*.json"))
