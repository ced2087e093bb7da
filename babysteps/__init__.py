"""BabySteps - payment schedules and monthly budget calculations."""

__version__ = "0.3.0"
