from .logger import TelemetryLogger, load_records

__all__ = ["TelemetryLogger", "load_records"]
