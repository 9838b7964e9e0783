import unittest

from src.engine.comparator import OpaqueComparator
from src.host.sandbox import DurationHandle, SandboxHost
from src.models import Comparison


class _CountingHost(SandboxHost):
    def __init__(self, fail: bool = False):
        super().__init__()
        self.curve_calls = 0
        self._fail = fail

    def create_curve(self, points):
        self.curve_calls += 1
        if self._fail:
            raise RuntimeError("curve creation unavailable")
        return super().create_curve(points)


class _NoCurveHost(SandboxHost):
    create_curve = None


class _BrokenEvaluateHost(SandboxHost):
    def evaluate_duration(self, handle, curve):
        raise RuntimeError("boom")


class OpaqueComparatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.host = SandboxHost()

    def test_gcd_threshold_splits_above_and_below(self) -> None:
        cmp = OpaqueComparator(self.host, 2.0)
        self.assertEqual(cmp.compare(DurationHandle(1.5)), Comparison.AT_OR_BELOW)
        self.assertEqual(cmp.compare(DurationHandle(2.0)), Comparison.AT_OR_BELOW)
        self.assertEqual(cmp.compare(DurationHandle(2.5)), Comparison.ABOVE)
        self.assertEqual(cmp.compare(DurationHandle(120.0)), Comparison.ABOVE)

    def test_step_sits_exactly_at_threshold(self) -> None:
        cmp = OpaqueComparator(self.host, 2.0)
        self.assertEqual(cmp.compare(DurationHandle(1.9999)), Comparison.AT_OR_BELOW)
        self.assertEqual(cmp.compare(DurationHandle(2.0005)), Comparison.ABOVE)
        self.assertEqual(cmp.compare(DurationHandle(2.00001)), Comparison.ABOVE)

    def test_near_zero_threshold(self) -> None:
        cmp = OpaqueComparator(self.host, 0.1)
        self.assertEqual(cmp.compare(DurationHandle(0.0)), Comparison.AT_OR_BELOW)
        self.assertEqual(cmp.compare(DurationHandle(0.05)), Comparison.AT_OR_BELOW)
        self.assertEqual(cmp.compare(DurationHandle(3.0)), Comparison.ABOVE)

    def test_missing_handle_is_indeterminate(self) -> None:
        cmp = OpaqueComparator(self.host, 2.0)
        self.assertEqual(cmp.compare(None), Comparison.INDETERMINATE)

    def test_missing_curve_primitive_is_indeterminate(self) -> None:
        cmp = OpaqueComparator(_NoCurveHost(), 2.0)
        self.assertEqual(cmp.compare(DurationHandle(1.0)), Comparison.INDETERMINATE)
        self.assertFalse(cmp.available)

    def test_host_without_primitives_is_indeterminate(self) -> None:
        cmp = OpaqueComparator(object(), 2.0)
        self.assertEqual(cmp.compare(DurationHandle(1.0)), Comparison.INDETERMINATE)

    def test_curve_is_built_once(self) -> None:
        host = _CountingHost()
        cmp = OpaqueComparator(host, 2.0)
        cmp.compare(DurationHandle(1.0))
        cmp.compare(DurationHandle(5.0))
        cmp.compare(DurationHandle(0.5))
        self.assertEqual(host.curve_calls, 1)

    def test_failed_curve_build_is_not_retried(self) -> None:
        host = _CountingHost(fail=True)
        cmp = OpaqueComparator(host, 2.0)
        self.assertEqual(cmp.compare(DurationHandle(1.0)), Comparison.INDETERMINATE)
        self.assertEqual(cmp.compare(DurationHandle(1.0)), Comparison.INDETERMINATE)
        self.assertEqual(host.curve_calls, 1)

    def test_failed_evaluation_is_indeterminate(self) -> None:
        cmp = OpaqueComparator(_BrokenEvaluateHost(), 2.0)
        self.assertEqual(cmp.compare(DurationHandle(1.0)), Comparison.INDETERMINATE)

    def test_works_while_restricted(self) -> None:
        self.host.enter_restricted()
        cmp = OpaqueComparator(self.host, 2.0)
        self.assertEqual(cmp.compare(DurationHandle(1.2)), Comparison.AT_OR_BELOW)
        self.assertEqual(cmp.compare(DurationHandle(30.0)), Comparison.ABOVE)


if __name__ == "__main__":
    unittest.main()
