"""Badge eligibility and progress engine for classroom baseball games."""

__version__ = "0.1.0"
