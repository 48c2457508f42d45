"""
로깅 설정 모듈

핸들러는 패키지 루트 로거(jewelry_tryon)에만 붙이고,
모듈 로거(jewelry_tryon.processing.* 등)는 전파로 같은 핸들러를 사용함.
설정 파일이 바뀌면 setup_logging(config)로 핸들러를 다시 구성
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config_loader import Config, get_config

PACKAGE_LOGGER = 'jewelry_tryon'

DEFAULT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DEFAULT_MAX_BYTES = 10 * 1024 * 1024

_configured = False


def _level(name: Any, default: int) -> int:
    return getattr(logging, str(name).upper(), default)


def _build_handlers(log_section: Dict[str, Any]) -> List[logging.Handler]:
    """logging 섹션으로 콘솔 / 회전 파일 핸들러 생성"""
    formatter = logging.Formatter(
        log_section.get('format', DEFAULT_FORMAT),
        datefmt=log_section.get('date_format')
    )
    handlers: List[logging.Handler] = []

    console = log_section.get('console') or {}
    if console.get('enabled', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(console.get('level', 'INFO'), logging.INFO))
        handlers.append(console_handler)

    file_section = log_section.get('file') or {}
    if file_section.get('enabled', False):
        log_dir = Path(file_section.get('directory', 'logs'))
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / file_section.get('filename', 'jewelry_tryon.log'),
            maxBytes=int(file_section.get('max_bytes', DEFAULT_MAX_BYTES)),
            backupCount=int(file_section.get('backup_count', 5)),
            encoding='utf-8'
        )
        file_handler.setLevel(_level(file_section.get('level', 'DEBUG'), logging.DEBUG))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: Optional[Config] = None) -> logging.Logger:
    """
    패키지 로거에 핸들러 구성 (기존 핸들러는 닫고 교체)

    Args:
        config: 사용할 Config (None이면 전역 설정)

    Returns:
        logging.Logger: 패키지 루트 로거
    """
    global _configured

    if config is None:
        config = get_config()
    log_section = config.section('logging')

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(_level(log_section.get('level', 'INFO'), logging.INFO))
    for handler in _build_handlers(log_section):
        logger.addHandler(handler)

    _configured = True
    return logger


def get_logger(name: str = None) -> logging.Logger:
    """
    모듈 로거 가져오기 (패키지 로거가 아직 구성되지 않았으면 전역 설정으로 구성)

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용)
    """
    if not _configured:
        setup_logging()
    return logging.getLogger(name or PACKAGE_LOGGER)
