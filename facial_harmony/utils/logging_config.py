"""
Logging configuration module for facial harmony analysis.

핸들러는 패키지 루트 로거('facial_harmony')에 한 번만 붙이고,
각 모듈은 get_logger(__name__)로 받은 자식 로거를 통해 전파(propagate)한다.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import List

from .config_loader import Config, get_config

PACKAGE_LOGGER = 'facial_harmony'


def _level(name: str, default: int) -> int:
    return getattr(logging, str(name).upper(), default)


# logging 섹션이 없는 설정 파일(방법론 전용 등)에서 사용하는 기본값
DEFAULTS = {
    'level': 'INFO',
    'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    'date_format': '%Y-%m-%d %H:%M:%S',
    'console.enabled': True,
    'console.level': 'INFO',
    'file.enabled': False,
    'file.level': 'DEBUG',
    'file.directory': 'logs',
    'file.filename': 'facial_harmony.log',
    'file.max_bytes': 10485760,
    'file.backup_count': 5,
}


def _setting(config: Config, key: str):
    return config.get(f'logging.{key}', DEFAULTS[key])


def _build_handlers(config: Config, formatter: logging.Formatter) -> List[logging.Handler]:
    """logging 설정에 따라 콘솔/파일 핸들러 생성 (누락된 키는 DEFAULTS)"""
    handlers: List[logging.Handler] = []

    if _setting(config, 'console.enabled'):
        stream = logging.StreamHandler()
        stream.setLevel(_level(_setting(config, 'console.level'), logging.INFO))
        stream.setFormatter(formatter)
        handlers.append(stream)

    if _setting(config, 'file.enabled'):
        log_dir = Path(_setting(config, 'file.directory'))
        log_dir.mkdir(parents=True, exist_ok=True)

        rotating = logging.handlers.RotatingFileHandler(
            log_dir / _setting(config, 'file.filename'),
            maxBytes=_setting(config, 'file.max_bytes'),
            backupCount=_setting(config, 'file.backup_count'),
            encoding='utf-8'
        )
        rotating.setLevel(_level(_setting(config, 'file.level'), logging.DEBUG))
        rotating.setFormatter(formatter)
        handlers.append(rotating)

    return handlers


def setup_logging(force: bool = False, config: Config = None) -> logging.Logger:
    """
    패키지 루트 로거 설정

    Args:
        force: True면 기존 핸들러를 제거하고 현재 설정으로 다시 구성
        config: 사용할 Config (None이면 전역 설정)

    Returns:
        logging.Logger: 'facial_harmony' 로거
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    if root.handlers and not force:
        return root

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if config is None:
        config = get_config()
    root.setLevel(_level(_setting(config, 'level'), logging.INFO))

    formatter = logging.Formatter(_setting(config, 'format'), datefmt=_setting(config, 'date_format'))
    for handler in _build_handlers(config, formatter):
        root.addHandler(handler)

    return root


def get_logger(name: str = None) -> logging.Logger:
    """
    모듈 로거 가져오기

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용, 패키지 밖 이름이면 하위로 붙임)

    Returns:
        logging.Logger: 패키지 루트 로거로 전파되는 로거
    """
    setup_logging()

    if not name or name == PACKAGE_LOGGER:
        return logging.getLogger(PACKAGE_LOGGER)
    if not name.startswith(PACKAGE_LOGGER + '.'):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
