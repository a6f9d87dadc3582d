NEEDLE_SWEEP_DEG = 120.0


def format_stopwatch(seconds: float) -> str:
    """Format elapsed seconds as MM:SS.d (tenths, truncated)."""
    ms = int(round(max(seconds, 0.0) * 1000))
    s = ms // 1000
    m = s // 60
    tenths = (ms % 1000) // 100
    return f"{m:02d}:{s % 60:02d}.{tenths}"


def needle_angle(value: float, max_value: float) -> float:
    """Galvanometer needle angle in degrees, -60 (zero) to +60 (full scale)."""
    if max_value <= 0:
        return -NEEDLE_SWEEP_DEG / 2
    normalized = min(max(value / max_value, 0.0), 1.0)
    return -NEEDLE_SWEEP_DEG / 2 + normalized * NEEDLE_SWEEP_DEG
