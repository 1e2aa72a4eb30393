"""
Balíček nastavení Djanga.

Obsahuje:
- base.py: nastavení společné pro všechna prostředí
- dev.py: vývojové nastavení (DEBUG=True)
- production.py: produkční nastavení (DEBUG=False, zabezpečené)
- test.py: nastavení pro spouštění testů
- local.py: volitelné lokální přepsání (není v repozitáři)
"""
