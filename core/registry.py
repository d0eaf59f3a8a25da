from typing import Any, Callable, Dict, Iterator, Type, TypeVar

T = TypeVar("T")


class Registry:
    """Maps provider names used in configuration to completion client classes."""

    def __init__(self, name: str):
        self._name = name
        self._components: Dict[str, Type[Any]] = {}

    def register(self, name: str) -> Callable[[Type[T]], Type[T]]:
        """
        Class decorator registering a completion client under ``name``.

        Raises:
            ValueError: If the name is already taken.
        """
        def decorator(cls: Type[T]) -> Type[T]:
            if name in self._components:
                raise ValueError(f"'{name}' is already registered in the {self._name} registry.")
            self._components[name] = cls
            return cls
        return decorator

    def get(self, name: str) -> Type[Any]:
        """
        Raises:
            KeyError: If nothing is registered under ``name``.
        """
        try:
            return self._components[name]
        except KeyError:
            raise KeyError(f"'{name}' is not registered in the {self._name} registry.") from None

    def create(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Instantiates the class registered under ``name`` with the given arguments."""
        return self.get(name)(*args, **kwargs)

    def __contains__(self, name: str) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    def keys(self):
        return self._components.keys()


provider_registry = Registry("provider")
