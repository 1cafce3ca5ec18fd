"""Variable resolver — expands ``${name}`` references against a variable scope.

Scope construction order:
  1. system variables (``home``, ``config``)
  2. user variables from ``[[var]]``, top to bottom

Each user value is expanded against everything inserted before it, so a
variable can only refer to system variables and to variables defined
above it.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Iterable, Mapping
from pathlib import Path

from loguru import logger

from cartridge.errors import (
    CircularVariableReference,
    ConfigMalformed,
    ReservedVariableName,
    UndefinedVariable,
)
from cartridge.models.config import Variable

RESERVED_NAMES = ("home", "config")
MAX_PASSES = 10

_OPEN = "${"
_CLOSE = "}"


def _get_config_dir(home: Path) -> Path:
    """Return the per-user configuration directory for this platform."""
    system = platform.system()
    if system == "Windows":
        return Path(os.environ.get("APPDATA", str(home / "AppData" / "Roaming")))
    if system == "Darwin":
        return home / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".config"


def system_variables() -> dict[str, str]:
    """Build the built-in variables. Names that cannot be determined are left out."""
    variables: dict[str, str] = {}
    try:
        home = Path.home()
    except RuntimeError as e:
        logger.warning(f"Could not determine home directory: {e}")
        return variables

    variables["home"] = str(home)
    logger.debug(f"Added system variable 'home': {home}")

    config_dir = _get_config_dir(home)
    variables["config"] = str(config_dir)
    logger.debug(f"Added system variable 'config': {config_dir}")
    return variables


def _expand_pass(value: str, scope: Mapping[str, str]) -> tuple[str, bool]:
    """Replace every ``${name}`` token in *value* once."""
    out: list[str] = []
    changed = False
    pos = 0
    while True:
        start = value.find(_OPEN, pos)
        if start < 0:
            out.append(value[pos:])
            break
        out.append(value[pos:start])
        name_start = start + len(_OPEN)
        end = value.find(_CLOSE, name_start)
        if end < 0:
            # Unterminated reference swallows the rest of the string
            name = value[name_start:]
            pos = len(value)
        else:
            name = value[name_start:end]
            pos = end + len(_CLOSE)
        if name not in scope:
            raise UndefinedVariable(name)
        out.append(scope[name])
        changed = True
        if end < 0:
            break
    return "".join(out), changed


def expand_variables(value: str, scope: Mapping[str, str]) -> str:
    """Expand all ``${name}`` references in *value*.

    Passes repeat while the result still contains ``${`` so that values
    which introduce new references are expanded too. At most
    ``MAX_PASSES`` passes are made.

    Raises:
        UndefinedVariable: a referenced name is not in *scope*.
        CircularVariableReference: references remain after the last pass.
    """
    result = value
    for _ in range(MAX_PASSES):
        if _OPEN not in result:
            return result
        result, changed = _expand_pass(result, scope)
        if not changed:
            return result
    if _OPEN in result:
        raise CircularVariableReference(value, MAX_PASSES)
    return result


def _references(value: str) -> list[str]:
    names: list[str] = []
    pos = 0
    while (start := value.find(_OPEN, pos)) >= 0:
        end = value.find(_CLOSE, start + len(_OPEN))
        if end < 0:
            names.append(value[start + len(_OPEN) :])
            break
        names.append(value[start + len(_OPEN) : end])
        pos = end + len(_CLOSE)
    return names


def _leads_back(origin: str, name: str, pending: Mapping[str, str]) -> bool:
    """Follow not-yet-resolved definitions from *name*; True if one reaches *origin*."""
    frontier = [name]
    seen: set[str] = set()
    for _ in range(MAX_PASSES):
        following: list[str] = []
        for current in frontier:
            if current == origin:
                return True
            if current in seen or current not in pending:
                continue
            seen.add(current)
            following.extend(_references(pending[current]))
        if not following:
            return False
        frontier = following
    return False


def resolve_variables(
    variables: Iterable[Variable],
    system: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build the resolved scope from system variables plus *variables* in order."""
    variables = list(variables)
    logger.info("Resolving variables")

    for var in variables:
        if var.name in RESERVED_NAMES:
            raise ReservedVariableName(var.name)
        if not var.name:
            raise ConfigMalformed("Variable name must not be empty")

    scope: dict[str, str] = dict(system_variables() if system is None else system)

    for index, var in enumerate(variables):
        logger.debug(f"Resolving variable: {var.name} = {var.value}")
        try:
            resolved = expand_variables(var.value, scope)
        except UndefinedVariable as e:
            # Forward reference into a definition that cycles back here
            pending = {v.name: v.value for v in variables[index:]}
            if _leads_back(var.name, e.name, pending):
                raise CircularVariableReference(var.value, MAX_PASSES) from e
            raise
        scope[var.name] = resolved
        logger.debug(f"Variable '{var.name}' resolved to: {resolved}")

    logger.info(f"Successfully resolved {len(scope)} variables")
    return scope
