"""Replay script parsing.

This module loads and validates YAML replay scripts. A script is a
``version: 1`` mapping with a ``steps`` list; each step names an
operation (put, remove, get, stats), a key, and optionally the version
index it starts from.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence, cast

import yaml

from core.constants import REPLAY_SCRIPT_VERSION
from core.errors import ReplayScriptError
from core.types import TrieKey
from replay.replay_types import (
    REPLAY_VALUE_TYPES,
    SUPPORTED_REPLAY_OPERATIONS,
    ReplayOperation,
    ReplayScript,
    ReplayStep,
)

_ROOT_KEYS = ("version", "steps")
_STEP_KEYS: Mapping[str, tuple[str, ...]] = {
    "put": ("op", "key", "value", "type", "base"),
    "remove": ("op", "key", "base"),
    "get": ("op", "key", "type", "base"),
    "stats": ("op", "base"),
}


def load_replay_script(script_path: str) -> ReplayScript:
    """Load and validate a YAML replay script from disk.

    Args:
        script_path: File path to YAML replay script.

    Returns:
        Fully validated replay script.

    Raises:
        ReplayScriptError: If file is invalid or schema checks fail.
    """
    payload = _load_yaml_payload(script_path)
    return parse_replay_script(payload)


def parse_replay_script(payload: object) -> ReplayScript:
    """Validate an already-decoded replay payload.

    Args:
        payload: Decoded YAML or JSON document.

    Returns:
        Validated replay script.

    Raises:
        ReplayScriptError: If schema checks fail.
    """
    root_mapping = _expect_mapping(payload, "replay script root")
    _validate_keys(root_mapping, _ROOT_KEYS, "replay script root")
    version = _parse_version(root_mapping)
    raw_steps = _expect_sequence(root_mapping.get("steps"), "replay script steps")
    steps = tuple(_parse_step(raw_step, index) for index, raw_step in enumerate(raw_steps))
    return ReplayScript(version=version, steps=steps)


def _load_yaml_payload(script_path: str) -> object:
    script_file = Path(script_path).expanduser().resolve()
    if not script_file.exists():
        raise ReplayScriptError(
            f"Replay script does not exist at {script_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(script_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise ReplayScriptError(
            f"Failed to read replay script at {script_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise ReplayScriptError(
            f"Failed to parse YAML replay script at {script_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise ReplayScriptError(
            f"Replay script at {script_file} is empty. Define 'version' and 'steps'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise ReplayScriptError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise ReplayScriptError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise ReplayScriptError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _validate_keys(mapping: Mapping[str, object], allowed: tuple[str, ...], context: str) -> None:
    unknown = sorted(set(mapping) - set(allowed))
    if unknown:
        raise ReplayScriptError(
            f"Unknown field(s) {', '.join(unknown)} in {context}. "
            f"Allowed fields: {', '.join(allowed)}."
        )


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise ReplayScriptError(
            f"Replay script field 'version' must be an integer. Set version: {REPLAY_SCRIPT_VERSION}."
        )
    if raw_version != REPLAY_SCRIPT_VERSION:
        raise ReplayScriptError(
            f"Unsupported replay script version {raw_version}. Use version: {REPLAY_SCRIPT_VERSION}."
        )
    return raw_version


def _parse_step(raw_step: object, index: int) -> ReplayStep:
    context = f"replay step {index}"
    step_mapping = _expect_mapping(raw_step, context)
    op = _parse_operation(step_mapping.get("op"), context)
    _validate_keys(step_mapping, _STEP_KEYS[op], context)
    base = _parse_base(step_mapping.get("base"), context)
    if op == "stats":
        return ReplayStep(op=op, base=base)
    key = _parse_key(step_mapping.get("key"), context)
    if op == "remove":
        return ReplayStep(op=op, key=key, base=base)
    if op == "get":
        if "type" not in step_mapping:
            raise ReplayScriptError(
                f"Invalid {context}: get requires 'type'. "
                f"Use one of {', '.join(REPLAY_VALUE_TYPES)}."
            )
        value_type = _parse_value_type(step_mapping.get("type"), context)
        return ReplayStep(op=op, key=key, value_type=value_type, base=base)
    if "value" not in step_mapping:
        raise ReplayScriptError(f"Invalid {context}: put requires 'value'.")
    value_type = None
    if "type" in step_mapping:
        value_type = _parse_value_type(step_mapping.get("type"), context)
    return ReplayStep(
        op=op,
        key=key,
        value=step_mapping["value"],
        value_type=value_type,
        base=base,
    )


def _parse_operation(raw_op: object, context: str) -> ReplayOperation:
    if raw_op in SUPPORTED_REPLAY_OPERATIONS:
        return cast(ReplayOperation, raw_op)
    raise ReplayScriptError(
        f"Invalid {context}: unsupported op {raw_op!r}. "
        f"Use one of {', '.join(SUPPORTED_REPLAY_OPERATIONS)}."
    )


def _parse_key(raw_key: object, context: str) -> TrieKey:
    if isinstance(raw_key, (str, bytes)):
        return raw_key
    raise ReplayScriptError(
        f"Invalid {context}: 'key' must be a string or !!binary value, got {type(raw_key).__name__}."
    )


def _parse_value_type(raw_type: object, context: str) -> type:
    if isinstance(raw_type, str) and raw_type in REPLAY_VALUE_TYPES:
        return REPLAY_VALUE_TYPES[raw_type]
    raise ReplayScriptError(
        f"Invalid {context}: unsupported type {raw_type!r}. "
        f"Use one of {', '.join(REPLAY_VALUE_TYPES)}."
    )


def _parse_base(raw_base: object, context: str) -> int | None:
    if raw_base is None:
        return None
    if isinstance(raw_base, int) and not isinstance(raw_base, bool) and raw_base >= 0:
        return raw_base
    raise ReplayScriptError(
        f"Invalid {context}: 'base' must be a non-negative version index, got {raw_base!r}."
    )
