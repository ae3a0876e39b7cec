# /// script
# requires-python = ">=3.10"
# dependencies = ["typer>=0.9.0", "heliodash"]
#
# [tool.uv.sources]
# heliodash = { path = ".." }
# ///
"""Print a one-shot snapshot of both dashboard panels.

Fetches every feed once through the proxy relay, then prints the current
solar-wind values, NOAA scale levels, flare activity and aurora coverage.
Optionally writes the windowed solar-wind series to Parquet.

Requires a running proxy (``uvicorn --factory heliodash.proxy:create_app
--port 8787``) or ``--proxy-url`` pointing at one.

Usage:
    uv run examples/dashboard_snapshot.py [OPTIONS]

Examples:
    # Default proxy, 12-hour window
    uv run examples/dashboard_snapshot.py

    # Three-hour window, export plasma to Parquet
    uv run examples/dashboard_snapshot.py --timeframe "3 hours" --parquet plasma.parquet
"""

import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import Annotated

import typer

from heliodash import set_proxy_url
from heliodash.classify import Scale, classify
from heliodash.client import HelioClient
from heliodash.dashboard import SolarActivityView, SpaceWeatherView, get_timeframe


async def _snapshot(timeframe: str) -> tuple[SpaceWeatherView, SolarActivityView]:
    async with HelioClient() as client:
        weather = SpaceWeatherView(client)
        weather.set_timeframe(timeframe)
        solar = SolarActivityView(client)
        await asyncio.gather(weather.refresh(), solar.refresh())
    return weather, solar


def main(
    proxy_url: Annotated[
        str | None, typer.Option(help="Proxy base URL (or set HELIODASH_PROXY_URL env var)")
    ] = None,
    timeframe: Annotated[str, typer.Option(help="Chart window label")] = "12 hours",
    parquet: Annotated[
        Path | None, typer.Option(help="Write the windowed plasma series to this Parquet file")
    ] = None,
    verbose: Annotated[bool, typer.Option(help="Log feed failures")] = False,
) -> None:
    """Fetch every feed once and print the dashboard state."""
    logging.basicConfig(level=logging.INFO if verbose else logging.ERROR)
    if proxy_url:
        set_proxy_url(proxy_url)
    try:
        get_timeframe(timeframe)
    except ValueError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    t0 = time.perf_counter()
    weather, solar = asyncio.run(_snapshot(timeframe))
    print(f"Fetched feeds in {time.perf_counter() - t0:.1f}s\n")

    # ── Space weather ────────────────────────────────────────────────────
    print("── Space weather ──")
    if weather.error:
        print(f"  Charts unavailable: {weather.error}")
    else:
        g = classify(Scale.GEOMAGNETIC, weather.current_kp)
        print(f"  Bz:      {weather.current_bz:.1f} nT")
        print(f"  Speed:   {weather.current_speed:.1f} km/s")
        print(f"  Density: {weather.current_density:.1f} p/cm³")
        print(f"  Kp:      {weather.current_kp:.2f} ({weather.kp_status.label}, {g.level} {g.label})")
        plasma = weather.plasma_window()
        print(f"  Plasma samples in '{weather.timeframe.label}': {len(plasma)}")
        if parquet is not None:
            plasma.to_polars().write_parquet(parquet)
            print(f"  Wrote {parquet}")
    if weather.ovation is not None:
        print(f"  Aurora: {len(weather.ovation)} visible cells")
    if weather.hemispheric_power:
        print(
            f"  Hemispheric power: N {weather.hemispheric_power.latest('north'):.0f} GW, "
            f"S {weather.hemispheric_power.latest('south'):.0f} GW"
        )

    # ── Solar activity ───────────────────────────────────────────────────
    print("\n── Solar activity ──")
    probs = solar.flare_probabilities
    print(f"  Flare probabilities: C {probs.c}%  M {probs.m}%  X {probs.x}%")
    flare = solar.current_flare_class
    print(f"  X-ray: {flare or 'n/a'} ({solar.radio_blackout.level} {solar.radio_blackout.label})")
    print(f"  Protons: {solar.current_proton_flux:.2f} pfu ({solar.solar_radiation.level})")
    for event in solar.flare_events[:5]:
        region = f" AR{event.region}" if event.region else ""
        print(f"  {event.timestamp:%Y-%m-%d %H:%M} {event.flare_class}{region}")
    print(f"  Active regions on disk: {len(solar.active_regions)}")
    print(f"  ENLIL run: {solar.enlil.run or 'n/a'} ({len(solar.enlil)} frames)")
    for name, message in solar.errors.items():
        print(f"  [{name}] unavailable: {message}")

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
