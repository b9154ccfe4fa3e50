"""Configuration settings for the dashboard."""

from dataclasses import dataclass, field
from pathlib import Path
import os

from dotenv import load_dotenv


load_dotenv()


# FRED series used by the dashboard charts
FRED_SERIES: dict[str, str] = {
    "T10Y2Y": "10Y-2Y Treasury Spread",
    "T10Y3M": "10Y-3M Treasury Spread",
    "UNEMPLOY": "Unemployment Level",
    "U1RATE": "Unemployed 15 Weeks and Over (U-1)",
    "EMRATIO": "Employment-Population Ratio",
    "UMCSENT": "University of Michigan Consumer Sentiment",
    "PERMIT": "New Private Housing Units Authorized by Permits",
    "ICSA": "Initial Jobless Claims",
    "GDPNOW": "Atlanta Fed GDPNow",
    "USALOLITONOSTSAM": "OECD Composite Leading Indicator (US)",
}

# Overlay series - market indices drawn on a secondary axis
FRED_OVERLAY_SERIES: dict[str, str] = {
    "SP500": "S&P 500 Index",
    "NASDAQCOM": "NASDAQ Composite Index",
}

ALL_FRED_SERIES: dict[str, str] = {**FRED_SERIES, **FRED_OVERLAY_SERIES}

# Earliest observation requested per series
SERIES_START_DATES: dict[str, str] = {
    "T10Y2Y": "1990-01-01",
    "T10Y3M": "1990-01-01",
    "UNEMPLOY": "1990-01-01",
    "U1RATE": "1990-01-01",
    "EMRATIO": "1990-01-01",
    "UMCSENT": "1978-01-01",
    "PERMIT": "1990-01-01",
    "ICSA": "1990-01-01",
    "GDPNOW": "2011-01-01",
    "USALOLITONOSTSAM": "1990-01-01",
    "SP500": "1990-01-01",
    "NASDAQCOM": "1990-01-01",
}

DEFAULT_START_DATE = "1990-01-01"


@dataclass
class Settings:
    """Application settings."""

    fred_api_key: str = field(default_factory=lambda: os.getenv("FRED_API_KEY", ""))
    cache_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv(
                "RECESSION_DASHBOARD_CACHE_DIR",
                str(Path(__file__).parent.parent.parent / "cache"),
            )
        )
    )
    request_timeout: float = 30.0
    default_range_years: int = 5
    db_path: Path = field(init=False)

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.cache_dir / "observations.db"

    def validate(self) -> None:
        """Validate required settings."""
        if not self.fred_api_key:
            raise ValueError(
                "FRED_API_KEY not set. Get one at: "
                "https://fred.stlouisfed.org/docs/api/api_key.html"
            )

    def has_fred_key(self) -> bool:
        """Check if a FRED API key is configured."""
        return bool(self.fred_api_key)
