import os
from dataclasses import dataclass

@dataclass
class Settings:
    # Anomaly detection
    quantile_p: float = float(os.getenv("QUANTILE_P", "0.995"))  # dynamic threshold at 99.5th percentile of scores
    hst_n_trees: int = int(os.getenv("HST_N_TREES", "25"))
    hst_height: int = int(os.getenv("HST_HEIGHT", "15"))
    hst_window_size: int = int(os.getenv("HST_WINDOW_SIZE", "250"))
    hst_seed: int = int(os.getenv("HST_SEED", "42"))

    # Data Quality
    value_range = (0.0, 1.0)

    # Synthetic stream
    demo_events: int = int(os.getenv("DEMO_EVENTS", "2000"))

settings = Settings()
