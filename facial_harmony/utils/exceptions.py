"""커스텀 예외 클래스 정의"""


class HarmonyAnalysisError(Exception):
    """기본 예외 클래스"""
    pass


class DetectionFailure(HarmonyAnalysisError):
    """얼굴 검출 실패 예외 (원본 프레임 또는 정렬 프레임)"""
    pass


class InvalidImageError(HarmonyAnalysisError):
    """잘못된 이미지 입력 예외"""
    pass


class ConfigurationError(HarmonyAnalysisError):
    """설정 오류 예외"""
    pass


class LandmarkTopologyError(HarmonyAnalysisError):
    """랜드마크 개수/인덱스 불일치 (호출 계약 위반)"""
    pass


class AlignmentError(HarmonyAnalysisError):
    """정렬 및 크롭 실패 예외"""
    pass


class QualityGateError(HarmonyAnalysisError):
    """품질 게이트 강제 모드에서 블러/노출 실패"""

    def __init__(self, message: str, record=None):
        super().__init__(message)
        self.record = record


class UncertaintyEstimationError(HarmonyAnalysisError):
    """부트스트랩 반복 중 하나라도 실패하면 전체 불확실성 계산 중단"""
    pass


class AnalysisCancelled(HarmonyAnalysisError):
    """호출자가 진행 중인 분석을 취소함"""
    pass
