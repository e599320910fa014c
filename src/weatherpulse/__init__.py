"""WeatherPulse: station weather cleaning, sampling and yearly aggregation."""

__version__ = "0.1.0"
