"""Opaque comparator: answers "is this duration above a threshold?" without reading it.

A step curve maps seconds to {0, 1} with the step at the threshold. The host
evaluates the (possibly redacted) duration handle against that curve, and the
result is pushed through the host's secret-when-nonzero transform: a zero
comes back as a plain empty value, anything else comes back secret. The
opacity test on that final value is the answer.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from src.host.api import call_host, capability
from src.models import Comparison

logger = logging.getLogger(__name__)


class OpaqueComparator:
    """Tri-state threshold test on a host duration handle.

    The curve is built on first use and cached for the lifetime of the
    instance. A failed build is cached too: the comparator then answers
    INDETERMINATE without retrying.
    """

    def __init__(self, host: object, threshold: float):
        self._host = host
        self.threshold = float(threshold)
        self._curve: Optional[Any] = None
        self._build_attempted = False

    def _step_points(self) -> list[tuple[float, float]]:
        # f(x) takes the y of the last point strictly left of x, so x == threshold stays 0
        return [(0.0, 0.0), (self.threshold, 1.0)]

    def _get_curve(self) -> Optional[Any]:
        if not self._build_attempted:
            self._build_attempted = True
            self._curve = call_host(self._host, "create_curve", self._step_points())
            if self._curve is None:
                logger.debug("Step curve at %.3fs unavailable; comparator disabled", self.threshold)
        return self._curve

    @property
    def available(self) -> bool:
        return self._get_curve() is not None

    def compare(self, handle: Any) -> Comparison:
        if handle is None:
            return Comparison.INDETERMINATE
        evaluate = capability(self._host, "evaluate_duration")
        collapse = capability(self._host, "secret_when_nonzero")
        is_secret = capability(self._host, "is_secret")
        if evaluate is None or collapse is None or is_secret is None:
            return Comparison.INDETERMINATE
        curve = self._get_curve()
        if curve is None:
            return Comparison.INDETERMINATE

        try:
            marker = evaluate(handle, curve)
            if marker is None:
                return Comparison.INDETERMINATE
            collapsed = collapse(marker)
            if collapsed is None:
                # plain empty: marker was zero
                return Comparison.AT_OR_BELOW
            secret = bool(is_secret(collapsed))
        except Exception as e:
            logger.debug("Opaque comparison at %.3fs failed: %s", self.threshold, e)
            return Comparison.INDETERMINATE
        return Comparison.ABOVE if secret else Comparison.AT_OR_BELOW
