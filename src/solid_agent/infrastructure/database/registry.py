"""
Model registry for resolving configured class names.

Context configurations store model class *names* so that they can be written
before the models are importable. Names are resolved to classes lazily, on
first use, through a registry the agent class points at.
"""
import importlib
from typing import Mapping, Optional, Union

from solid_agent.domain.exceptions import ModelResolutionError


class ModelRegistry:
    """
    Registry mapping model names to classes.

    Lookup order for ``resolve``:
    1. A class passed directly is returned as is
    2. A name registered here
    3. A dotted import path (``package.module.ClassName`` or ``package.module:ClassName``)

    Example:
        >>> registry = ModelRegistry()
        >>> registry.register(ChatSession)
        >>> registry.resolve("ChatSession")
        <class 'ChatSession'>
        >>> registry.resolve("myapp.models:ChatMessage")
        <class 'myapp.models.ChatMessage'>
    """

    def __init__(self, models: Optional[Mapping[str, type]] = None):
        self._models: dict[str, type] = dict(models or {})

    def register(self, model: type, name: Optional[str] = None) -> type:
        """
        Register a model class (usable as a class decorator).

        Args:
            model: Model class
            name: Registered name (defaults to the class name)
        """
        self._models[name or model.__name__] = model
        return model

    def unregister(self, name: str) -> None:
        self._models.pop(name, None)

    def get(self, name: str) -> Optional[type]:
        return self._models.get(name)

    def names(self) -> list[str]:
        return list(self._models.keys())

    def copy(self) -> "ModelRegistry":
        return ModelRegistry(self._models)

    def resolve(self, reference: Union[str, type]) -> type:
        """
        Resolve a class or class name.

        Raises:
            ModelResolutionError: If the name is neither registered nor importable
        """
        if isinstance(reference, type):
            return reference

        name = str(reference)
        model = self._models.get(name)
        if model is not None:
            return model

        if ":" in name or "." in name:
            return self._import(name)

        raise ModelResolutionError(
            f"Unknown model class {name!r}",
            details={"model": name, "registered": self.names()},
        )

    @staticmethod
    def _import(path: str) -> type:
        if ":" in path:
            module_path, _, attr = path.partition(":")
        else:
            module_path, _, attr = path.rpartition(".")

        try:
            module = importlib.import_module(module_path)
            return getattr(module, attr)
        except (ImportError, AttributeError) as e:
            raise ModelResolutionError(
                f"Cannot import model class {path!r}: {e}",
                details={"model": path},
            ) from e
