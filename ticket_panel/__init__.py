"""Discord bot that runs a support ticket panel for each guild."""
