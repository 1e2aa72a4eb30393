"""
Uživatelské účty: profily, napojení na OAuth registraci a kontrola rolí.

Samotné přihlášení obstarává django-allauth; tato aplikace jen přidává to,
co kvízový web potřebuje nad rámec ``auth.User``.
"""
