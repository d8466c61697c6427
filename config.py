import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from exceptions import ConfigError

logger = logging.getLogger(__name__)

TRUE_VALUES = {'1', 'true', 'yes', 'y', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'n', 'off', ''}


@dataclass
class Settings:
    corpus_path: str = ''
    window_length: int = 3
    seed: Optional[int] = None
    generate_length: int = 200
    initial_text: str = ''
    normalize_text: bool = False
    log_level: str = 'INFO'
    plot_path: str = 'markov_analysis.png'


def _get_int(name, default):
    value = os.getenv(name, '').strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name}: ожидается целое число, получено {value!r}") from None


def _get_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigError(f"{name}: ожидается true/false, получено {value!r}")


def _get_log_level(name, default):
    value = os.getenv(name, '').strip().upper() or default
    # getLevelName возвращает число только для известных уровней
    if not isinstance(logging.getLevelName(value), int):
        raise ConfigError(f"{name}: неизвестный уровень логирования {value!r}")
    return value


def load_settings(dotenv_path=None):
    """
    Загрузка настроек из переменных окружения и файла .env

    Args:
        dotenv_path: путь к файлу .env (по умолчанию ищется от рабочей директории вверх)

    Returns:
        Settings: настройки приложения
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))

    settings = Settings(
        corpus_path=os.getenv('CORPUS_PATH', '').strip(),
        window_length=_get_int('WINDOW_LENGTH', 3),
        seed=_get_int('SEED', None),
        generate_length=_get_int('GENERATE_LENGTH', 200),
        initial_text=os.getenv('INITIAL_TEXT', ''),
        normalize_text=_get_bool('NORMALIZE_TEXT', False),
        log_level=_get_log_level('LOG_LEVEL', 'INFO'),
        plot_path=os.getenv('PLOT_PATH', 'markov_analysis.png').strip() or 'markov_analysis.png',
    )
    logger.debug(f"Настройки: {settings}")
    return settings
