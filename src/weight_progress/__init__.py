"""Weight progress tracking core: profiles, measurements, derived trends and the visibility gate."""

__version__ = "0.1.0"
