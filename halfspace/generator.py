import random
from typing import Dict, Optional

import structlog

from .anomaly import StreamingAnomalyDetector
from .config import settings

log = structlog.get_logger()

FEATURES = ("value", "temperature", "load")

def make_observation(rng: random.Random, i: int) -> Dict[str, float]:
    # Slow drift of the cluster centre inside [0.3, 0.5]
    centre = 0.4 + 0.1 * ((i % 1000) / 1000.0 - 0.5) * 2
    x = {f: min(max(centre + rng.gauss(0.0, 0.03), 0.0), 1.0) for f in FEATURES}

    # Inject anomalies randomly
    if rng.random() < 0.02:
        f = rng.choice(FEATURES)
        x[f] = rng.choice([0.02, 0.98])

    # Occasionally drop a feature
    if rng.random() < 0.01:
        x.pop(rng.choice(FEATURES))

    return x

def run_stream(n_events: Optional[int] = None, seed: int = 0) -> int:
    n_events = settings.demo_events if n_events is None else n_events
    rng = random.Random(seed)
    det = StreamingAnomalyDetector(
        n_trees=settings.hst_n_trees,
        height=settings.hst_height,
        window_size=settings.hst_window_size,
        quantile_p=settings.quantile_p,
        seed=settings.hst_seed,
    )
    log.info("stream_started", events=n_events, window_size=settings.hst_window_size)

    anomalies = 0
    score = thr = 0.0
    for i in range(n_events):
        x = make_observation(rng, i)
        score, thr, is_anom = det.score_and_update(x)
        if is_anom:
            anomalies += 1
            log.info("anomaly", index=i, score=score, threshold=thr, features=x)

        if (i + 1) % 100 == 0:
            log.info("progress", processed=i + 1, anomalies=anomalies,
                     last_score=score, threshold=thr)

    log.info("stream_finished", processed=n_events, anomalies=anomalies)
    return anomalies

def main():
    run_stream()

if __name__ == "__main__":
    main()
