# debug.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator

LOGGER_NAME = "ENIGMA"

COMPONENTS = (
    "keyboard",
    "plugboard",
    "rotor",
    "reflector",
    "stepping",
    "encipher",
    "config",
)


class Debug:
    """Per-component switchboard in front of the ``ENIGMA`` logger.

    Every module holds its own ``Debug()`` handle, but the toggles live on
    the class, so ``Debug().enable("stepping")`` in the CLI is seen by the
    rotor module too.
    """

    _root_configured: bool = False          # class-level guard
    _enabled: bool = True                   # global switch
    _components: Dict[str, bool] = {name: False for name in COMPONENTS}

    def __init__(self, *, log_to: str | None = None) -> None:
        if not Debug._root_configured:
            Debug.configure(log_to=log_to)
        self.logger = logging.getLogger(LOGGER_NAME)

    @classmethod
    def configure(cls, *, log_to: str | None = None, level: int = logging.DEBUG) -> None:
        """Install the shared root handlers (stderr, plus *log_to* if given)."""
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if log_to:
            handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

        logging.basicConfig(
            level=level,
            format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
            force=cls._root_configured,
        )
        cls._root_configured = True

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if Debug._enabled and Debug._components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    def warn(self, component: str, message: str) -> None:
        """Warnings bypass the component map; only the global switch mutes them."""
        self._require(component)
        if Debug._enabled:
            self.logger.warning("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components or COMPONENTS:
            self._require(c)
            Debug._components[c] = True

    def disable(self, *components: str) -> None:
        for c in components or COMPONENTS:
            self._require(c)
            Debug._components[c] = False

    def toggle_global(self, state: bool) -> None:
        Debug._enabled = state

    @contextmanager
    def tracing(self, *components: str) -> Iterator["Debug"]:
        """Temporarily enable *components* (all when none are named)."""
        before = self.status()
        self.enable(*components)
        try:
            yield self
        finally:
            Debug._components.update(before)

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._components.copy()

    # ── helpers ──────────────────────────────────────────────────
    @staticmethod
    def _require(component: str) -> None:
        if component not in Debug._components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in Debug._components.items() if v]
        return f"<Debug enabled={Debug._enabled} active={active}>"
