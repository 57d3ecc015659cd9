"""Conversion of LorentzVectors to and from plain Python sequences and JSON.

These adapters only use the public constructor and accessors of LorentzVector. Malformed
external data is reported with ConversionError / DeserializationError and never produces
a partial vector.
"""
from __future__ import annotations
import json
from collections.abc import Sequence
from typing import Any, Callable

import numpy as np

from .fields import ops_for, cast_scalar
from .utils import CastError, ConversionError, DeserializationError
from .vectors import LorentzVector

COMPONENT_NAMES: tuple[str, ...] = ('t', 'x', 'y', 'z')


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, complex, np.number)) and not isinstance(value, bool)


def _to_scalar(item: Any) -> Any:
    if _is_number(item):
        return item
    if isinstance(item, (tuple, list)):
        if len(item) != 2 or not all(_is_number(part) and not isinstance(part, complex) for part in item):
            raise ConversionError(
                f'A complex component must be a (re, im) pair of real numbers, got {item!r}.')
        return complex(item[0], item[1])
    raise ConversionError(f'Cannot convert {item!r} to a LorentzVector component.')


def from_sequence(values: Any) -> LorentzVector:
    """Build a vector from 3 (spatial, t = 0) or 4 (t, x, y, z) components."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence | np.ndarray):
        raise ConversionError(f'Expected a sequence of components, got {type(values).__name__}.')
    items = [_to_scalar(item) for item in values]
    match len(items):
        case 3:
            t = ops_for(*items).zero(items[0])
            return LorentzVector(t, *items)
        case 4:
            return LorentzVector(*items)
        case _:
            raise ConversionError(
                f'Invalid list length for LorentzVector conversion: {len(items)}.')


def to_sequence(v: LorentzVector) -> list[Any]:
    """Components in t, x, y, z order; complex components become (re, im) tuples."""
    if any(isinstance(c, complex) or np.iscomplexobj(c) for c in v):
        return [(float(np.real(c)), float(np.imag(c))) for c in v]
    return [float(c) for c in v]


def _encode_element(value: Any) -> Any:
    if isinstance(value, complex) or np.iscomplexobj(value):
        return [float(np.real(value)), float(np.imag(value))]
    if isinstance(value, np.generic):
        return value.item()
    return value


def encode(v: LorentzVector) -> list[Any]:
    return [_encode_element(c) for c in v]


def _decode_element(item: Any, element: Callable[..., Any]) -> Any:
    if element is complex or (isinstance(element, type) and issubclass(element, np.complexfloating)):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise DeserializationError(f'Expected a [re, im] pair, got {item!r}.')
        item = complex(*_decode_pair(item))
    elif not _is_number(item):
        raise DeserializationError(f'Expected a number, got {item!r}.')
    elif _is_integer_type(element) and not isinstance(item, (int, np.integer)):
        raise DeserializationError(f'Expected an integer, got {item!r}.')
    try:
        return cast_scalar(item, element)
    except CastError as e:
        raise DeserializationError(f'Cannot decode {item!r} as {getattr(element, "__name__", element)}: {e}') from e


def _is_integer_type(element: Callable[..., Any]) -> bool:
    return element is int or (isinstance(element, type) and issubclass(element, np.integer))


def _decode_pair(item: Sequence[Any]) -> tuple[Any, Any]:
    if not all(_is_number(part) and not isinstance(part, complex) for part in item):
        raise DeserializationError(f'Expected a [re, im] pair of numbers, got {item!r}.')
    return item[0], item[1]


def decode(data: Any, element: Callable[..., Any] = float) -> LorentzVector:
    """Read exactly four components (t, x, y, z), each decoded with `element`."""
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise DeserializationError(f'Invalid type {type(data).__name__}, expected four floats.')
    components = []
    for index, name in enumerate(COMPONENT_NAMES):
        if index >= len(data):
            raise DeserializationError(f'Cannot read {name}-component')
        components.append(_decode_element(data[index], element))
    if len(data) > len(COMPONENT_NAMES):
        raise DeserializationError(f'Invalid length {len(data)}, expected four floats.')
    return LorentzVector(*components)


def to_json(v: LorentzVector, **opts) -> str:
    return json.dumps(encode(v), **opts)


def from_json(text: str | bytes, element: Callable[..., Any] = float) -> LorentzVector:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DeserializationError(f'Invalid JSON for a LorentzVector: {e}') from e
    return decode(data, element)
