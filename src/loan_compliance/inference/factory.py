"""Analysis backend factory — resolves the backend from config."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

from loan_compliance.inference.protocols import IAnalysisBackend
from loan_compliance.inference.realtime import LiteLLMBackend

if TYPE_CHECKING:
    from loan_compliance.core.config import AppSettings

log = logging.getLogger(__name__)


def create_analysis_backend(settings: AppSettings) -> IAnalysisBackend:
    """Create an analysis backend based on settings.

    ``settings.llm.inference_backend == "litellm"`` returns the built-in
    :class:`LiteLLMBackend`.  A dotted path such as
    ``mypackage.backends:GatewayBackend`` is imported and instantiated with
    ``settings``.

    Raises:
        ImportError: If the dotted-path class cannot be found.
        TypeError: If the resolved object is not callable.
    """
    backend_spec = settings.llm.inference_backend

    if backend_spec == "litellm":
        log.info("Using built-in LiteLLMBackend (%s)", settings.llm.model)
        return LiteLLMBackend(settings.llm)

    log.info("Loading external analysis backend: %s", backend_spec)
    cls = _import_dotted_path(backend_spec)

    if not callable(cls):
        raise TypeError(
            f"Analysis backend {backend_spec!r} resolved to {cls!r}, "
            "which is not callable"
        )

    return cls(settings)


def _import_dotted_path(dotted: str) -> Any:
    """Import ``module.path:ClassName`` or ``module.path.attr``."""
    if ":" in dotted:
        module_path, obj_name = dotted.rsplit(":", 1)
    elif "." in dotted:
        module_path, obj_name = dotted.rsplit(".", 1)
    else:
        return importlib.import_module(dotted)

    mod = importlib.import_module(module_path)
    return getattr(mod, obj_name)
