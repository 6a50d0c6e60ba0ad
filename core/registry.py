"""
Module Registry - Dynamic module registration and event routing.
"""
from typing import Dict, List, Optional, Type
import importlib
import logging
from pathlib import Path

from core.interface import IAppModule
from core.app_context import AppContext


class ModuleRegistry:
    """
    Registry for managing application modules.
    Allows dynamic registration, lookup and event dispatch.
    """

    _instance: Optional["ModuleRegistry"] = None

    def __new__(cls) -> "ModuleRegistry":
        """Singleton pattern to ensure single registry instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self._modules: Dict[str, IAppModule] = {}
        self._logger = logging.getLogger(__name__)
        self._context: Optional[AppContext] = None
        self._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton instance (used by tests)."""
        cls._instance = None

    def set_context(self, context: AppContext) -> None:
        """Set the application context for module initialization."""
        self._context = context

    def register(self, module: IAppModule) -> bool:
        """
        Register a module with the registry.

        The module is started immediately when a context is set. A module
        whose ``on_entry`` fails stays registered and reports the failure
        through the event log.

        Returns:
            bool: True if registration successful, False on duplicate name
        """
        module_name = module.get_module_name()

        if module_name in self._modules:
            self._logger.warning(f"Module '{module_name}' already registered. Skipping.")
            return False

        self._modules[module_name] = module
        self._logger.info(f"Module '{module_name}' registered successfully.")

        if self._context:
            try:
                module.on_entry(self._context)
                self._context.log_event(f"Module '{module_name}' initialized", "SUCCESS")
            except Exception as e:
                self._logger.error(f"Failed to initialize module '{module_name}': {e}")
                self._context.log_event(f"Module '{module_name}' init failed: {e}", "ERROR")

        return True

    def register_class(self, module_class: Type[IAppModule]) -> bool:
        """Register a module by its class (instantiates automatically)."""
        try:
            module_instance = module_class()
        except Exception as e:
            self._logger.error(f"Failed to instantiate module class {module_class.__name__}: {e}")
            return False
        return self.register(module_instance)

    def unregister(self, module_name: str) -> bool:
        """
        Unregister a module, calling its ``on_shutdown`` hook first.

        Returns:
            bool: True if the module was registered
        """
        module = self._modules.pop(module_name, None)
        if module is None:
            self._logger.warning(f"Module '{module_name}' not found in registry.")
            return False

        try:
            module.on_shutdown()
        except Exception as e:
            self._logger.error(f"Error during module '{module_name}' shutdown: {e}")

        self._logger.info(f"Module '{module_name}' unregistered.")
        return True

    def get_module(self, module_name: str) -> Optional[IAppModule]:
        return self._modules.get(module_name)

    def get_all_modules(self) -> List[IAppModule]:
        return list(self._modules.values())

    def get_module_names(self) -> List[str]:
        return list(self._modules.keys())

    def get_menu_configs(self) -> List[dict]:
        """Get menu configurations from all modules."""
        configs = []
        for module in self._modules.values():
            try:
                config = module.get_menu_config()
            except Exception as e:
                self._logger.error(f"Error getting menu config from '{module.get_module_name()}': {e}")
                continue
            if config:
                configs.append(config)
        return configs

    def get_statuses(self) -> Dict[str, dict]:
        """Collect ``get_status`` from every module, keyed by module name."""
        statuses = {}
        for name, module in self._modules.items():
            try:
                statuses[name] = module.get_status()
            except Exception as e:
                self._logger.error(f"Error getting status from '{name}': {e}")
                statuses[name] = {"status": "error", "details": {"error": str(e)}}
        return statuses

    def dispatch(self, module_name: str, event: dict) -> Optional[dict]:
        """
        Route an action event to a registered module.

        Raises:
            KeyError: If no module is registered under ``module_name``.
            RuntimeError: If no context has been set.
        """
        module = self._modules.get(module_name)
        if module is None:
            raise KeyError(f"Module '{module_name}' is not registered")
        if self._context is None:
            raise RuntimeError("Registry context is not set")

        self._logger.debug(f"Dispatching '{event.get('action')}' to '{module_name}'")
        return module.handle_event(self._context, event)

    def shutdown_all(self) -> None:
        """Shutdown all registered modules."""
        for module_name in list(self._modules.keys()):
            self.unregister(module_name)
        self._logger.info("All modules shut down.")


class ModuleLoader:
    """
    Discovers package modules (``modules/<name>/__init__.py``) and
    registers every IAppModule subclass they export.
    """

    def __init__(self, registry: ModuleRegistry, package: str = "modules") -> None:
        self._registry = registry
        self._package = package
        self._logger = logging.getLogger(__name__)

    def load_from_directory(self, modules_path: str) -> int:
        """
        Load package modules from a directory.

        Returns:
            int: Number of modules loaded
        """
        path = Path(modules_path)
        if not path.exists():
            self._logger.warning(f"Modules directory '{modules_path}' does not exist.")
            return 0

        loaded_count = 0
        for subdir in sorted(path.iterdir()):
            if not subdir.is_dir() or subdir.name.startswith("_"):
                continue
            if not (subdir / "__init__.py").exists():
                continue

            try:
                package = importlib.import_module(f"{self._package}.{subdir.name}")
            except Exception as e:
                self._logger.error(f"Error loading package module '{subdir.name}': {e}")
                continue

            for attr_name in dir(package):
                attr = getattr(package, attr_name)
                if (isinstance(attr, type) and
                        issubclass(attr, IAppModule) and
                        attr is not IAppModule):
                    if self._registry.register_class(attr):
                        loaded_count += 1
                        self._logger.info(f"Loaded package module: {subdir.name}")

        return loaded_count
