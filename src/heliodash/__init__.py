"""
heliodash is a space-weather dashboard backend: feed parsers, a normalized time-series model, NOAA severity classifiers and a proxy relay.
"""

from .config import (
    get_proxy_url,
    set_proxy_url,
    get_request_timeout,
    set_request_timeout,
)

from .series import (
    Series,
    MergedSeries,
    TimeSeriesPoint,
    ImageFrame,
    ImageFrameSet,
    merge_series,
    window_filter,
    downsample,
)

from .classify import (
    Scale,
    SeverityBand,
    SeverityScale,
    FlareClass,
    classify,
    flare_class,
    kp_status,
)

from .cache import TtlCache

from .refresh import (
    FetchResult,
    PeriodicRefresh,
    gather_all,
    gather_best_effort,
)

from .client import Feed, HelioClient

from .dashboard import (
    TIMEFRAMES,
    SolarActivityView,
    SpaceWeatherView,
)
