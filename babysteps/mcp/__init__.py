"""MCP server exposing BabySteps calculators as tools."""
