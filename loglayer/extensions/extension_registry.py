"""
Extension registry

Holds the extensions of one logger and resolves the extra methods they
contribute.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from loglayer.core.errors import ConfigurationError


class ExtensionRegistry:
    """
    Registry of extension methods for LogLayer and LogBuilder.

    Method names must not shadow an existing attribute of the target class
    and must be unique across extensions.
    """

    def __init__(
        self,
        extensions: Optional[Iterable[Any]] = None,
        reserved_logger_names: Iterable[str] = (),
        reserved_builder_names: Iterable[str] = (),
    ):
        self._extensions: Dict[str, Any] = {}
        self._logger_methods: Dict[str, Callable[..., Any]] = {}
        self._builder_methods: Dict[str, Callable[..., Any]] = {}
        self._reserved_logger = set(reserved_logger_names)
        self._reserved_builder = set(reserved_builder_names)

        for extension in extensions or []:
            self.register(extension)

    def register(self, extension: Any) -> None:
        """
        Register an extension.

        Args:
            extension: LogLayerExtension instance

        Raises:
            ConfigurationError: If the name or a method name is already taken
        """
        name = getattr(extension, "name", "") or type(extension).__name__
        if name in self._extensions:
            raise ConfigurationError(f"Extension '{name}' is already registered")

        logger_methods = extension.logger_methods()
        builder_methods = extension.builder_methods()

        self._check_names(name, logger_methods, self._logger_methods, self._reserved_logger, "LogLayer")
        self._check_names(name, builder_methods, self._builder_methods, self._reserved_builder, "LogBuilder")

        self._extensions[name] = extension
        self._logger_methods.update(logger_methods)
        self._builder_methods.update(builder_methods)

    @staticmethod
    def _check_names(
        extension_name: str,
        methods: Dict[str, Callable[..., Any]],
        registered: Dict[str, Callable[..., Any]],
        reserved: set,
        target: str,
    ) -> None:
        for method_name, fn in methods.items():
            if not callable(fn):
                raise ConfigurationError(
                    f"Extension '{extension_name}' method '{method_name}' is not callable"
                )
            if method_name.startswith("_") or method_name in reserved:
                raise ConfigurationError(
                    f"Extension '{extension_name}' cannot override {target}.{method_name}"
                )
            if method_name in registered:
                raise ConfigurationError(
                    f"Extension '{extension_name}' redefines {target}.{method_name}"
                )

    def get_logger_method(self, name: str) -> Optional[Callable[..., Any]]:
        return self._logger_methods.get(name)

    def get_builder_method(self, name: str) -> Optional[Callable[..., Any]]:
        return self._builder_methods.get(name)

    def get_extension(self, name: str) -> Optional[Any]:
        return self._extensions.get(name)

    def get_extensions(self) -> List[Any]:
        return list(self._extensions.values())

    def plugins(self) -> List[Any]:
        """Plugins contributed by all extensions, in registration order."""
        result: List[Any] = []
        for extension in self._extensions.values():
            result.extend(extension.plugins())
        return result

    def __repr__(self) -> str:
        return (
            f"ExtensionRegistry(extensions={list(self._extensions.keys())}, "
            f"logger_methods={list(self._logger_methods.keys())}, "
            f"builder_methods={list(self._builder_methods.keys())})"
        )
