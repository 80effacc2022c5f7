from cruisemaps.shared.constants import API_KEY_VISIBLE_PREFIX_LEN


def mask_key(key: str | None) -> str:
    """Маскирует ключ для логов: видны только первые символы."""
    if not key:
        return '<empty>'
    if len(key) <= API_KEY_VISIBLE_PREFIX_LEN:
        return '*' * len(key)
    return key[:API_KEY_VISIBLE_PREFIX_LEN] + '*' * (len(key) - API_KEY_VISIBLE_PREFIX_LEN)
