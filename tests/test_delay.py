import pytest

from navproxy.models.domain import Severity
from navproxy.services.routing.delay import classify_delay


@pytest.mark.parametrize(
    ("alternative", "original", "expected"),
    [
        (1040, 1000, Severity.MODERATE),  # under both thresholds
        (1099, 1000, Severity.MODERATE),  # 99 s extra
        (1100, 1000, Severity.HEAVY),  # exactly 100 s extra, ratio 1.1
        (4199, 4000, Severity.MODERATE),  # 199 s extra but ratio under 1.05
        (4200, 4000, Severity.HEAVY),  # ratio exactly 1.05
        (3000, 1000, Severity.HEAVY),
        (900, 1000, Severity.MODERATE),  # faster than the primary route
    ],
)
def test_classify_delay(alternative, original, expected):
    assert classify_delay(alternative, original) is expected


def test_classify_delay_custom_thresholds():
    assert classify_delay(1040, 1000, extra_seconds=30, ratio=1.01) is Severity.HEAVY
    assert classify_delay(1040, 1000, extra_seconds=30, ratio=1.05) is Severity.MODERATE


def test_classify_delay_with_zero_original_duration():
    assert classify_delay(50, 0) is Severity.MODERATE
    assert classify_delay(500, 0) is Severity.HEAVY


def test_severity_serializes_as_label():
    assert Severity.MODERATE.value == "moderate"
    assert Severity.HEAVY.value == "heavy"
