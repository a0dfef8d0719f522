DEFAULT_LIMIT = 50
MAX_LIMIT = 200


def _as_int(raw, name, default):
    if raw is None or str(raw).strip() == '':
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f'{name} must be int')


def normalize_pagination(limit_raw, offset_raw):
    """Clamp limit to [1, MAX_LIMIT]; offset must be non-negative."""
    limit = _as_int(limit_raw, 'limit', DEFAULT_LIMIT)
    offset = _as_int(offset_raw, 'offset', 0)
    if offset < 0:
        raise ValueError('offset must be >= 0')
    return max(1, min(limit, MAX_LIMIT)), offset
