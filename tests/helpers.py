"""
Shared test helpers: fake library results built from SimpleNamespace.
"""

from datetime import datetime
from types import SimpleNamespace


CONDITIONS = ["sunny", "cloudy", "rain", "snow", "fog"]


def make_forecast(count):
    """`count` forecast entries, condition names cycling through CONDITIONS."""
    return [
        SimpleNamespace(
            date=f"2026-10-{20 + i:02d}",
            high=15.0 + i,
            low=5.0 + i,
            pop=10 * i,
            condition=CONDITIONS[i % len(CONDITIONS)],
        )
        for i in range(count)
    ]


def make_response(source="open_meteo", forecast_count=2, success=True):
    return SimpleNamespace(
        source=source,
        success=success,
        location=SimpleNamespace(name="Paris", country="France",
                                 latitude=48.8566, longitude=2.3522),
        station=SimpleNamespace(id="LFPG", name="Charles de Gaulle"),
        timezone=SimpleNamespace(code="CEST", name="Europe/Paris"),
        current=SimpleNamespace(
            temperature=14.5,
            humidity=72,
            wind=11.2,
            condition="partly cloudy",
            sun=SimpleNamespace(rise="07:58", set="18:50"),
        ),
        forecast=make_forecast(forecast_count),
        start_at=datetime(2026, 10, 19, 12, 0, 0),
        end_at=datetime(2026, 10, 19, 12, 0, 1),
    )


def make_result(query="Paris, France", forecast_count=2, sources=("open_meteo",), success=True):
    """A result shaped the way the weather library returns one."""
    return SimpleNamespace(
        success=success,
        query=SimpleNamespace(q=query, format="geocode",
                              geo=SimpleNamespace(latitude=48.8566, longitude=2.3522)),
        current=SimpleNamespace(temperature=14.0, humidity=70, condition="partly cloudy"),
        responses=[make_response(source, forecast_count) for source in sources],
        start_at=datetime(2026, 10, 19, 12, 0, 0),
        end_at=datetime(2026, 10, 19, 12, 0, 1, 500000),
    )


def fake_measure(query, configuration):
    """Stands in for a weather library's measure function."""
    return make_result(query=query, sources=configuration.sources)
