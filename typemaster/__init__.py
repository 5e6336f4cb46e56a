"""TypeMaster: lesson-based typing practice."""

__version__ = "0.1.0"
