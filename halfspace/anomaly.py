import threading
from typing import Dict, Optional, Tuple

import structlog
from prometheus_client import Counter, Gauge
from river import stats

from .detector import HalfSpaceTrees
from .quality import range_checks

log = structlog.get_logger()

# Prometheus metrics
scored_records_total = Counter(
    "hst_scored_records_total", "Total records scored by the streaming detector"
)
anomalies_total = Counter(
    "hst_anomalies_total", "Total anomalies detected"
)
dq_issues_total = Counter(
    "hst_dq_issues_total", "Feature values failing data quality checks",
    labelnames=("check",)
)
last_anomaly_score = Gauge(
    "hst_last_anomaly_score", "Last anomaly score (streaming)"
)
threshold_gauge = Gauge(
    "hst_anomaly_threshold", "Dynamic anomaly threshold (quantile)"
)

class StreamingAnomalyDetector:
    """
    Half-Space Trees online anomaly detection with dynamic threshold
    using streaming quantile of scores.
    """
    def __init__(self, n_trees: int, height: int, window_size: int, quantile_p: float,
                 limits: Optional[Dict[str, Tuple[float, float]]] = None, seed: Optional[int] = 42):
        self.model = HalfSpaceTrees(
            n_trees=n_trees,
            height=height,
            window_size=window_size,
            limits=limits,
            seed=seed,
        )
        self.threshold = stats.Quantile(quantile_p)
        self.last_score: float = 0.0
        self._lock = threading.Lock()

    def score_and_update(self, x: Dict[str, float]) -> Tuple[float, float, bool]:
        with self._lock:
            issues = range_checks(x, self.model.limits)
            for check, msg in issues:
                dq_issues_total.labels(check).inc()
                log.warning("feature_out_of_range", check=check, detail=msg)

            # Score before learning to avoid leakage
            score = float(self.model.score(x))
            self.last_score = score
            # Update model
            self.model.learn(x)
            # Update quantile
            thr = float(self.threshold.get() or 0.0)
            self.threshold.update(score)
            is_anomaly = score > max(thr, 1e-9)
            new_thr = float(self.threshold.get() or thr)

        scored_records_total.inc()
        last_anomaly_score.set(score)
        threshold_gauge.set(new_thr)
        if is_anomaly:
            anomalies_total.inc()
        return score, new_thr, is_anomaly
