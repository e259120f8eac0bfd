"""
Configuration Loader Module
패키지 설정 파일(config.yaml)을 읽어 섹션 단위로 접근하게 해주는 모듈

방법론 상수는 여기서 직접 읽지 않고 MethodologyConfig.from_config()를 거쳐
불변 객체로 전달된다. 전역 인스턴스(get_config)는 로깅 설정에만 사용한다.
"""
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_ENV_VAR = 'FACIAL_HARMONY_CONFIG_PATH'
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def resolve_config_path(config_path: Optional[str] = None) -> Path:
    """명시 경로 > 환경 변수 > 패키지 기본 config.yaml 순으로 결정"""
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


class ConfigSection:
    """
    중첩 딕셔너리 래퍼

    section.get('a.b.c') 점 경로 조회와 section.a.b.c 속성 조회를 모두 지원한다.
    하위 딕셔너리는 접근할 때마다 ConfigSection으로 감싼다.
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        점(.) 구분 경로로 원시 값 조회

        Example:
            >>> section.get('uncertainty.repeats')
            40
        """
        node: Any = self._data
        for key in key_path.split('.'):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'")

        try:
            value = self._data[name]
        except KeyError:
            raise AttributeError(f"{self.__class__.__name__} has no key '{name}'")
        return ConfigSection(value) if isinstance(value, dict) else value

    def __contains__(self, name: str) -> bool:
        return name in self._data

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def __repr__(self):
        return f"{self.__class__.__name__}({sorted(self._data)})"


class Config(ConfigSection):
    """
    config.yaml 전체를 나타내는 최상위 섹션

    Usage:
        config = Config()
        sigma = config.get('methodology.uncertainty.jitter_sigma')
        level = config.logging.level
    """

    def __init__(self, config_path: str = None):
        """
        Args:
            config_path: 설정 파일 경로 (None이면 환경 변수 또는 패키지 기본값)

        Raises:
            FileNotFoundError: 파일이 없는 경우
            ValueError: YAML 파싱 실패 또는 최상위가 매핑이 아닌 경우
        """
        self.config_path = resolve_config_path(config_path)
        super().__init__(self._read())

    def _read(self) -> Dict[str, Any]:
        if not self.config_path.is_file():
            raise FileNotFoundError(
                f"Config file not found: {self.config_path} "
                f"(pass a path or set {CONFIG_ENV_VAR})"
            )

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in {self.config_path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Top level of {self.config_path} must be a mapping")
        return data

    def reload(self):
        """설정 파일 다시 읽기"""
        self._data = self._read()

    def __repr__(self):
        return f"Config(path={self.config_path})"


_global_config: Optional[Config] = None


def get_config() -> Config:
    """전역 Config 인스턴스 (최초 호출 시 로드)"""
    global _global_config

    if _global_config is None:
        _global_config = Config()
    return _global_config


def reload_config():
    """전역 설정 다시 로드"""
    if _global_config is not None:
        _global_config.reload()
