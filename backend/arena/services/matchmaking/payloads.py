"""Shape checks for inbound client payloads.

The relay trusts what clients report, so these only make sure a payload
has the fields a handler reads, with usable types. Plausibility (speed,
bounds, line of sight) is not checked.
"""

import math
from numbers import Real


class PayloadError(ValueError):
    """Raised when an inbound payload is missing fields or has bad types."""


def _is_number(value):
    # bool is a Real subclass; a flag is never a coordinate.
    # NaN and infinity decode from JSON but poison arithmetic
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def _number(data, key):
    value = data.get(key)
    if not _is_number(value):
        raise PayloadError(f'{key} must be a finite number')
    return value


def _vector(data, key):
    value = data.get(key)
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise PayloadError(f'{key} must be a list of 3 numbers')
    if not all(_is_number(v) for v in value):
        raise PayloadError(f'{key} must be a list of 3 finite numbers')
    return list(value)


def _require_dict(data):
    if not isinstance(data, dict):
        raise PayloadError('payload must be an object')
    return data


def parse_state(data):
    """Return ``(position, rotation)`` from a playerJoin/playerMove payload."""
    data = _require_dict(data)
    return _vector(data, 'position'), _number(data, 'rotation')


def parse_shot(data):
    data = _require_dict(data)
    return {
        'position': _vector(data, 'position'),
        'direction': _vector(data, 'direction'),
        'velocity': _number(data, 'velocity'),
    }


def parse_hit(data):
    """Return ``(target_id, damage)``.

    Health is a whole number, so damage must be a non-negative integer;
    ``30.0`` is accepted as 30, ``0.5`` is rejected.
    """
    data = _require_dict(data)
    target_id = data.get('targetId')
    if not isinstance(target_id, str) or not target_id:
        raise PayloadError('targetId must be a connection id')
    damage = _number(data, 'damage')
    if isinstance(damage, float):
        if not damage.is_integer():
            raise PayloadError('damage must be a whole number')
        damage = int(damage)
    if damage < 0:
        raise PayloadError('damage must not be negative')
    return target_id, damage
