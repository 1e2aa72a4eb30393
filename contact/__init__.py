"""Kontaktní zprávy, zpětná vazba a jejich moderace."""
