"""
분석 보고서를 JSON으로 변환/저장
"""
import json
import os
from datetime import datetime, timezone

from .logging_config import get_logger

logger = get_logger(__name__)


def to_report_json(report, image_path=""):
    """
    AnalysisReport를 JSON 직렬화 가능한 딕셔너리로 변환

    Args:
        report: HarmonyAnalyzer.analyze()의 결과
        image_path: 원본 이미지 경로 (선택)

    Returns:
        dict: 보고서 + 메타데이터
    """
    output = report.to_dict()

    # 메타데이터
    output['metadata'] = {
        "methodology_version": report.methodology_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "image_path": image_path,
    }
    return output


def save_report_json(report, output_path, image_path=""):
    """
    보고서를 JSON 파일로 저장 (상위 폴더가 없으면 생성)

    Returns:
        dict: 저장된 JSON 데이터
    """
    dir_path = os.path.dirname(output_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    json_data = to_report_json(report, image_path)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(json_data, f, indent=2, ensure_ascii=False)

    logger.info(f"Report saved to: {output_path}")
    return json_data


def to_json_string(report, image_path=""):
    """보고서를 JSON 문자열로 변환"""
    return json.dumps(to_report_json(report, image_path), indent=2, ensure_ascii=False)
