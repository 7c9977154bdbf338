"""Error wrappers, cause chains, a report-handler hook and rendering options."""

__version__ = "0.1.0"

__all__ = ["handler_options", "hook", "wrappers"]