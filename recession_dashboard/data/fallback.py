"""Static datasets served when FRED cannot be reached."""

from datetime import date, timedelta


def _weekly(start: str, values: list[float]) -> list[dict]:
    first = date.fromisoformat(start)
    return [
        {"date": (first + timedelta(weeks=i)).isoformat(), "value": v}
        for i, v in enumerate(values)
    ]


def _monthly(start_year: int, values: list[float]) -> list[dict]:
    return [
        {"date": date(start_year + i // 12, i % 12 + 1, 1).isoformat(), "value": v}
        for i, v in enumerate(values)
    ]


FALLBACK_DATA: dict[str, list[dict]] = {
    "T10Y2Y": _weekly("2023-01-01", [
        0.21, 0.18, 0.15, 0.12, 0.08, 0.05, 0.02, -0.01, -0.05, -0.08,
        -0.12, -0.15, -0.18, -0.21, -0.23, -0.25, -0.27, -0.28, -0.26, -0.24,
    ]),
    "T10Y3M": _weekly("2023-01-01", [
        0.45, 0.42, 0.38, 0.35, 0.31, 0.28, 0.25, 0.20, 0.15, 0.10,
        0.05, 0.00, -0.05, -0.10, -0.15, -0.20, -0.25, -0.30, -0.28, -0.25,
    ]),
    "UMCSENT": _monthly(2023, [
        64.9, 67.0, 62.0, 63.5, 59.2, 64.4, 71.6, 69.5,
        68.1, 63.8, 61.3, 69.7, 79.0, 76.9, 79.4, 77.2,
    ]),
    "PERMIT": _monthly(2023, [
        1339, 1371, 1413, 1425, 1447, 1466, 1443, 1541,
        1471, 1495, 1460, 1493, 1410, 1425, 1437, 1453,
    ]),
    "ICSA": _weekly("2023-01-01", [
        claims * 1000
        for claims in [
            215, 220, 225, 218, 223, 230, 235, 240, 245, 250,
            255, 260, 265, 270, 275, 280, 285, 290, 295, 300,
        ]
    ]),
    "GDPNOW": _weekly("2023-01-01", [
        2.1, 2.0, 1.9, 1.8, 1.7, 1.6, 1.5, 1.4, 1.3, 1.2,
        1.1, 1.0, 0.9, 0.8, 0.7, 0.6, 0.5, 0.4, 0.3, 0.2,
    ]),
    "USALOLITONOSTSAM": _weekly("2023-01-01", [
        101.5, 101.3, 101.1, 100.9, 100.7, 100.5, 100.3, 100.1, 99.9, 99.7,
        99.5, 99.3, 99.1, 98.9, 98.7, 98.5, 98.3, 98.1, 97.9, 97.7,
    ]),
    "SP500": _monthly(2023, [
        3824.14, 4119.58, 4109.31, 4169.48, 4179.83, 4450.38, 4588.96, 4328.41,
        4288.05, 4193.80, 4567.80, 4769.83, 4845.65, 5069.76, 5254.35, 5127.79,
    ]),
}


def get_fallback(series_id: str) -> list[dict]:
    """Copy of the static records for a series (empty if none exist)."""
    return [dict(record) for record in FALLBACK_DATA.get(series_id, [])]
