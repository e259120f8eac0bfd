"""설정 로드 테스트"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from facial_harmony.config.settings import (
    EyeSpacingBands,
    MethodologyConfig,
    QualityThresholds,
    UncertaintySettings,
    load_methodology,
)
from facial_harmony.utils.config_loader import Config, get_config
from facial_harmony.utils.exceptions import ConfigurationError


def test_packaged_config_matches_defaults():
    """기본 config.yaml 값 == dataclass 기본값"""
    assert load_methodology() == MethodologyConfig()


def test_config_access():
    config = get_config()
    assert config.get('methodology.uncertainty.repeats') == 40
    assert config.methodology.quality.channel == 'red'
    assert config.get('methodology.missing.key', 'fallback') == 'fallback'
    assert config.logging.level == 'INFO'


def test_custom_yaml(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text(
        "methodology:\n"
        "  version: 2.0\n"
        "  uncertainty:\n"
        "    repeats: 10\n"
        "    jitter_sigma: 0.01\n",
        encoding='utf-8'
    )
    methodology = load_methodology(str(path))
    assert methodology.version == "2.0"
    assert methodology.uncertainty.repeats == 10
    assert methodology.uncertainty.workers == 1
    assert methodology.golden == MethodologyConfig().golden


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / "nope.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("methodology: [unclosed\n", encoding='utf-8')
    with pytest.raises(ValueError):
        Config(str(path))


def test_unknown_keys_rejected():
    with pytest.raises(ConfigurationError):
        MethodologyConfig.from_dict({'beauty_bonus': 1})
    with pytest.raises(ConfigurationError):
        MethodologyConfig.from_dict({'golden': {'decay': 5.0, 'speed': 2}})
    with pytest.raises(ConfigurationError):
        MethodologyConfig.from_dict({'golden': 5.0})


def test_invalid_values_rejected():
    with pytest.raises(ConfigurationError):
        EyeSpacingBands(low=0.30, ideal_min=0.28)
    with pytest.raises(ConfigurationError):
        QualityThresholds(channel='green')
    with pytest.raises(ConfigurationError):
        QualityThresholds(luminance_min=210.0)
    with pytest.raises(ConfigurationError):
        UncertaintySettings(repeats=0)
    with pytest.raises(ConfigurationError):
        UncertaintySettings(jitter_sigma=-0.1)


def test_to_dict_round_trip():
    config = MethodologyConfig()
    assert MethodologyConfig.from_dict(config.to_dict()) == config


def test_methodology_is_immutable():
    config = MethodologyConfig()
    with pytest.raises(AttributeError):
        config.version = "9"


def test_module_loggers_share_package_handlers():
    """모듈 로거는 패키지 루트 로거로 전파"""
    from facial_harmony.utils.logging_config import PACKAGE_LOGGER, get_logger

    logger = get_logger('facial_harmony.processing.scoring')
    root = get_logger()
    assert root.name == PACKAGE_LOGGER
    assert logger.name.startswith(PACKAGE_LOGGER + '.')
    assert root.handlers
    assert not logger.handlers
    assert get_logger('external').name == 'facial_harmony.external'


METHODOLOGY_ONLY_YAML = (
    "methodology:\n"
    "  uncertainty:\n"
    "    repeats: 12\n"
)


def test_logging_defaults_without_logging_section(tmp_path):
    """logging 섹션이 없는 설정으로도 로깅 구성 가능 (기본값 사용)"""
    from facial_harmony.utils.logging_config import setup_logging

    path = tmp_path / "methodology_only.yaml"
    path.write_text(METHODOLOGY_ONLY_YAML, encoding='utf-8')

    try:
        root = setup_logging(force=True, config=Config(str(path)))
        assert root.handlers
        assert root.level == 20  # INFO
    finally:
        setup_logging(force=True)


def test_import_with_methodology_only_config_env(tmp_path):
    """FACIAL_HARMONY_CONFIG_PATH가 방법론 전용 YAML을 가리켜도 패키지 import 성공"""
    path = tmp_path / "methodology_only.yaml"
    path.write_text(METHODOLOGY_ONLY_YAML, encoding='utf-8')

    repo_root = str(Path(__file__).resolve().parent)
    env = dict(os.environ)
    env['FACIAL_HARMONY_CONFIG_PATH'] = str(path)
    env['PYTHONPATH'] = os.pathsep.join(p for p in (repo_root, env.get('PYTHONPATH')) if p)

    code = (
        "import facial_harmony\n"
        "from facial_harmony import load_methodology\n"
        "print(load_methodology().uncertainty.repeats)\n"
    )
    result = subprocess.run(
        [sys.executable, "-c", code],
        cwd=str(tmp_path), env=env, capture_output=True, text=True, timeout=120
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().splitlines()[-1] == "12"
