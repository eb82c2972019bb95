"""Core MoMo client logic: API services and input validation."""
