from __future__ import annotations

import importlib
import logging
import pkgutil
from types import ModuleType
from typing import Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _should_skip_module(module_name: str) -> bool:
    # private/dunder final segment
    return module_name.split(".")[-1].startswith("_")


def register_all_routers(
        app: FastAPI,
        *,
        base_package: Optional[str] = None,
        prefix: str = "",
) -> None:
    """
    Recursively discover and register all FastAPI routers under a routers package.

    Behavior:
        - Any module under the package with a top-level `router` variable is included.
        - Files/packages whose final segment starts with '_' are skipped.
        - If a module defines ROUTER_PREFIX, ROUTER_TAG or INCLUDE_ROUTER_IN_SCHEMA,
          they are used for that router.
        - Import errors are logged and re-raised; a partially routed app is never served.
    """
    if base_package is None:
        if __package__ is None:
            raise RuntimeError("Cannot derive base_package; please pass base_package explicitly.")
        base_package = __package__

    package_module: ModuleType = importlib.import_module(base_package)
    if not hasattr(package_module, "__path__"):
        raise RuntimeError(f"Provided base_package '{base_package}' is not a package (no __path__).")

    for _, module_name, _ in pkgutil.walk_packages(
            package_module.__path__, prefix=f"{base_package}."
    ):
        if _should_skip_module(module_name):
            logger.debug("Skipping private router module: %s", module_name)
            continue
        try:
            module = importlib.import_module(module_name)
        except Exception:
            logger.exception("Failed to import router module %s", module_name)
            raise
        router = getattr(module, "router", None)
        if router is None:
            continue
        router_prefix = getattr(module, "ROUTER_PREFIX", None)
        router_tag = getattr(module, "ROUTER_TAG", None)
        include_kwargs: dict = {
            "prefix": prefix.rstrip("/") + router_prefix if router_prefix else prefix,
            "include_in_schema": getattr(module, "INCLUDE_ROUTER_IN_SCHEMA", True),
        }
        if router_tag:
            include_kwargs["tags"] = [router_tag]
        app.include_router(router, **include_kwargs)
        logger.debug(
            "Included router from module: %s (prefix=%s, tag=%s)",
            module_name, include_kwargs["prefix"], router_tag,
        )
