"""Command line interface for BabySteps."""
