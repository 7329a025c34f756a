from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache


class Env(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


_ALIASES: dict[str, Env] = {
    "development": Env.DEV,
    "testing": Env.TEST,
    "production": Env.PROD,
}


def parse_env(raw: str | None) -> Env | None:
    if not raw:
        return None
    val = raw.strip().lower()
    try:
        return Env(val)
    except ValueError:
        return _ALIASES.get(val)


@cache
def get_env() -> Env:
    """
    Resolve the deployment environment once.

    APP_ENV wins; on Render (which sets RENDER) an unset APP_ENV means prod.
    Anything else is LOCAL, with a warning for unrecognized values.
    """
    raw = os.getenv("APP_ENV")
    if not raw and os.getenv("RENDER"):
        return Env.PROD
    env = parse_env(raw)
    if env is None:
        if raw:
            warnings.warn(
                f"Unrecognized APP_ENV '{raw}', defaulting to 'local'.",
                RuntimeWarning,
                stacklevel=2,
            )
        return Env.LOCAL
    return env


ENV: Env = get_env()
IS_LOCAL = ENV is Env.LOCAL
IS_DEV = ENV is Env.DEV
IS_TEST = ENV is Env.TEST
IS_PROD = ENV is Env.PROD
