"""
Output writers: series CSV, run JSON, and interactive Folium HTML map.

These sit outside the core.  They consume the plain dicts produced by the
entry points in ``main.py`` (each station result carries ``id``, ``lat``,
``lon``, ``series``, ``thresholds`` and ``risk``).
"""

from __future__ import annotations

import json

import pandas as pd

from hazardcore.series_synth import SEGMENTS, SeriesPoint

LEVEL_COLORS = {
    "Low": "#2e7d32",
    "Medium": "#f9a825",
    "High": "#ef6c00",
    "Extreme": "#c62828",
}

_LEVEL_ORDER = ("Low", "Medium", "High", "Extreme")


# ============================================================================
# DataFrame views
# ============================================================================

def series_frame(points: list) -> pd.DataFrame:
    """One row per point; accepts ``SeriesPoint`` objects or their dicts."""
    rows = [p.to_dict() if isinstance(p, SeriesPoint) else p for p in points]
    frame = pd.DataFrame(rows, columns=["day", "discharge_value", "segment", "label"])
    frame["segment"] = pd.Categorical(frame["segment"], categories=SEGMENTS, ordered=True)
    return frame


def summarize_series(points: list) -> pd.DataFrame:
    """Per-segment count / min / max / mean of the discharge values."""
    frame = series_frame(points)
    return (
        frame.groupby("segment", observed=False)["discharge_value"]
        .agg(["count", "min", "max", "mean"])
    )


# ============================================================================
# CSV
# ============================================================================

def write_series_csv(stations: list[dict], path: str) -> None:
    """Write every station's series as one long table."""
    frames = []
    for s in stations:
        frame = series_frame(s["series"])
        frame.insert(0, "station_id", s["id"])
        frames.append(frame)
    if frames:
        table = pd.concat(frames, ignore_index=True)
    else:
        table = series_frame([]).assign(station_id=[])
    table.to_csv(path, index=False)
    print(f"Wrote CSV: {path}  ({len(table)} rows)")


# ============================================================================
# JSON
# ============================================================================

def write_json(payload: dict, path: str) -> None:
    with open(path, "w") as f:
        json.dump(payload, f, indent=2)
    print(f"Wrote JSON: {path}")


# ============================================================================
# Interactive Folium HTML map
# ============================================================================

def headline_level(risk: dict) -> str:
    """The higher of the fire and flood levels."""
    fire = _LEVEL_ORDER.index(risk["fire"]["level"])
    flood = _LEVEL_ORDER.index(risk["flood"]["level"])
    return _LEVEL_ORDER[max(fire, flood)]


def write_html_map(stations: list[dict], path: str,
                   title: str = "Station Risk Map") -> None:
    """Write a Leaflet map with one marker per station, coloured by risk."""
    import folium

    if stations:
        center_lat = sum(s["lat"] for s in stations) / len(stations)
        center_lon = sum(s["lon"] for s in stations) / len(stations)
    else:
        center_lat, center_lon = 0.0, 0.0
    m = folium.Map(location=[center_lat, center_lon], zoom_start=6,
                   tiles="CartoDB positron")

    for s in stations:
        risk = s["risk"]
        level = headline_level(risk)
        popup_html = (
            f"<b>{s.get('name', s['id'])}</b><br>"
            f"Fire: {risk['fire']['level']} "
            f"({risk['fire']['probability_percent']:.0f}%)<br>"
            f"Flood: {risk['flood']['level']} "
            f"({risk['flood']['probability_percent']:.0f}%)<br>"
            f"Confidence: {risk['confidence']}%"
        )
        folium.CircleMarker(
            location=[s["lat"], s["lon"]],
            radius=8,
            color=LEVEL_COLORS[level],
            fill=True,
            fill_color=LEVEL_COLORS[level],
            fill_opacity=0.8,
            popup=folium.Popup(popup_html, max_width=260),
            tooltip=f"{s['id']}: {level}",
        ).add_to(m)

    swatches = " &nbsp; ".join(
        f'<span style="color:{LEVEL_COLORS[lvl]};">&#9679;</span> {lvl}'
        for lvl in _LEVEL_ORDER
    )
    legend_html = f"""
    <div style="position:fixed; bottom:30px; left:30px; z-index:1000;
                background:white; padding:10px 14px; border:2px solid grey;
                border-radius:5px; font-size:13px; line-height:1.6;">
        <b>{title}</b><br>
        {swatches}
    </div>
    """
    m.get_root().html.add_child(folium.Element(legend_html))
    m.save(path)
    print(f"Wrote HTML map: {path}")
