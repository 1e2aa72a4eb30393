#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Použití:
    python manage.py runserver          # Spustí vývojový server
    python manage.py migrate            # Spustí migrace databáze
    python manage.py seed_categories    # Vytvoří výchozí kategorie kvízů
    python manage.py test               # Spustí testy (testovací nastavení)
"""
import os
import sys


def main():
    """
    Spustí administrativní úlohy.

    Vybere modul nastavení (pro ``manage.py test`` testovací, jinak
    vývojové) a předá příkaz Djangu.
    """
    default_settings = "quizhub.settings.test" if sys.argv[1:2] == ["test"] else "quizhub.settings.dev"
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", default_settings)
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
