import logging
from pathlib import Path

import tomlkit

from cruisemaps.domain.models import Config
from cruisemaps.shared.masking import mask_key

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> Config:
    """
    Загрузка и валидация конфигурации TOML -> Config.

    Принимаются как snake_case ключи, так и camelCase ключи исходной
    JS-конфигурации (mapDefaults, availableMapStyles, ...).
    """
    path = Path(path)
    if not path.exists():
        msg = f'Config file not found: {path}'
        raise FileNotFoundError(msg)
    text = path.read_text(encoding='utf-8')
    data = tomlkit.parse(text).unwrap()
    config = Config.model_validate(data)
    logger.info(
        'Config loaded from %s: mapbox_key=%s, styles=%d',
        path,
        mask_key(config.auth.mapbox_key),
        len(config.available_map_styles),
    )
    return config


def save_config(path: str | Path, config: Config) -> Path:
    """Сохранение конфигурации в TOML (без атомарности и бэкапов)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # TOML не умеет None
    data = config.model_dump(mode='json', exclude_none=True)
    path.write_text(tomlkit.dumps(data), encoding='utf-8')
    return path
