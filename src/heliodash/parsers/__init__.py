"""Parsers for upstream space-weather feeds.

Every parser accepts the raw payload (text, or already-decoded JSON) of one
feed shape and returns a :class:`~heliodash.series.Series` or a list of
structured records. Parsers never raise on bad records: malformed records
are skipped, and an unparseable payload gives an empty result.

Typical usage::

    from heliodash.parsers import parse_plasma
    plasma = parse_plasma(response.text)
    plasma.latest("speed")
"""

from heliodash.parsers._aurora import parse_hemispheric_power, parse_ovation
from heliodash.parsers._common import (
    parse_finite,
    parse_float_or_zero,
    parse_leading_int,
    parse_timestamp,
)
from heliodash.parsers._enlil import ENLIL_FRAME_BUDGET, parse_enlil_listing
from heliodash.parsers._events import (
    FLARE_EVENT_TYPE,
    date_from_filename,
    is_reportable_flare,
    parse_flare_events,
)
from heliodash.parsers._forecast import parse_flare_probabilities
from heliodash.parsers._goes import parse_goes_magnetometer, parse_goes_xrays
from heliodash.parsers._hek import parse_active_regions
from heliodash.parsers._imagery import (
    AIA_304_SOURCE_ID,
    SOLAR_FRAME_COUNT,
    SOLAR_FRAME_INTERVAL,
    image_url,
    parse_closest_image,
    solar_frame_times,
)
from heliodash.parsers._news import parse_news
from heliodash.parsers._tables import (
    parse_kp_index,
    parse_magnetic_field,
    parse_plasma,
    parse_proton_flux,
    parse_row_table,
)
from heliodash.parsers._types import (
    ActiveRegion,
    AuroraGrid,
    AuroraPoint,
    FlareEvent,
    FlareProbabilities,
    GoesSeries,
    NewsArticle,
)

__all__ = [
    # Records
    "ActiveRegion",
    "AuroraGrid",
    "AuroraPoint",
    "FlareEvent",
    "FlareProbabilities",
    "GoesSeries",
    "NewsArticle",
    # Constants
    "AIA_304_SOURCE_ID",
    "ENLIL_FRAME_BUDGET",
    "SOLAR_FRAME_COUNT",
    "SOLAR_FRAME_INTERVAL",
    "FLARE_EVENT_TYPE",
    # Field helpers
    "parse_finite",
    "parse_float_or_zero",
    "parse_leading_int",
    "parse_timestamp",
    # Feed parsers
    "date_from_filename",
    "image_url",
    "is_reportable_flare",
    "parse_active_regions",
    "parse_closest_image",
    "parse_enlil_listing",
    "parse_flare_events",
    "parse_flare_probabilities",
    "parse_goes_magnetometer",
    "parse_goes_xrays",
    "parse_hemispheric_power",
    "parse_kp_index",
    "parse_magnetic_field",
    "parse_news",
    "parse_ovation",
    "parse_plasma",
    "parse_proton_flux",
    "parse_row_table",
    "solar_frame_times",
]
