"""Core building blocks — config, routing, channel identifiers and directories."""
