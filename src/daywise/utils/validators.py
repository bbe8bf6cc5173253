def safe_float(x) -> float:
    try:
        return float(x)
    except Exception:
        return 0.0


def non_negative(x) -> float:
    return max(0.0, safe_float(x))
